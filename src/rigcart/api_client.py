"""
带认证的 HTTP 客户端 - Authenticated HTTP Client

凭据通过构造时传入的 credentials 回调获取，不读取任何全局状态。
Credentials come from the provider passed in at construction time.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

import httpx

CredentialProvider = Callable[[], Optional[str]]


def static_token(token: Optional[str]) -> CredentialProvider:
    return lambda: token


class ApiClient:
    def __init__(
        self,
        base_url: str,
        credentials: CredentialProvider | None = None,
        *,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.credentials = credentials or static_token(None)
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        token = self.credentials()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Dict[str, Any] | None = None,
        json_data: Any = None,
    ) -> httpx.Response:
        url = f"{self.base_url}/{path.lstrip('/')}"
        with httpx.Client(transport=self._transport, timeout=self.timeout) as client:
            return client.request(
                method, url, headers=self._headers(), params=params, json=json_data
            )

    def get(self, path: str, params: Dict[str, Any] | None = None) -> httpx.Response:
        return self.request("GET", path, params=params)

    def delete(self, path: str) -> httpx.Response:
        return self.request("DELETE", path)
