"""Bearer 令牌校验与管理员权限判断"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Protocol

from .schemas import User

logger = logging.getLogger(__name__)

ADMIN_ROLES = frozenset({"admin"})


def can_access_admin(role: Optional[str]) -> bool:
    return role in ADMIN_ROLES


class TokenVerifier(Protocol):
    def verify(self, token: str) -> Optional[User]: ...


class StaticTokenVerifier:
    """从配置读取的固定令牌表，令牌签发由外部系统负责"""

    def __init__(self, tokens: Mapping[str, User]):
        self._tokens: Dict[str, User] = dict(tokens)

    @classmethod
    def from_config(cls, raw: str) -> "StaticTokenVerifier":
        """解析 "token:role:name,token2:role2" 格式，name 可省略"""
        tokens: Dict[str, User] = {}
        for entry in (raw or "").split(","):
            entry = entry.strip()
            if not entry:
                continue
            parts = [p.strip() for p in entry.split(":", 2)]
            if len(parts) < 2 or not parts[0] or not parts[1]:
                logger.warning("Ignoring malformed token entry")
                continue
            token, role = parts[0], parts[1]
            name = parts[2] if len(parts) == 3 else ""
            tokens[token] = User(id=f"user-{len(tokens) + 1}", name=name, role=role)
        return cls(tokens)

    def verify(self, token: str) -> Optional[User]:
        return self._tokens.get(token)


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    token = authorization.replace("Bearer ", "", 1).strip()
    return token or None


def check_admin_access(authorization: Optional[str], verifier: TokenVerifier) -> bool:
    token = bearer_token(authorization)
    if not token:
        return False
    user = verifier.verify(token)
    return user is not None and can_access_admin(user.role)
