"""集中配置：全部来自环境变量，.env 由 main 在导入时加载"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
DEFAULT_PRODUCTS_FILE = ROOT / "database" / "products.json"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    products_file: Path = DEFAULT_PRODUCTS_FILE
    # 设置后构建器通过 HTTP 拉取目录，否则直接读本地商品文件
    catalog_url: str = ""
    api_token: str = ""
    api_tokens: str = ""
    http_timeout_seconds: int = 10
    log_level: str = "INFO"
    log_json: bool = False


def load_settings() -> Settings:
    products_file = os.getenv("RIGCART_PRODUCTS_FILE", "").strip()
    return Settings(
        products_file=Path(products_file) if products_file else DEFAULT_PRODUCTS_FILE,
        catalog_url=os.getenv("RIGCART_CATALOG_URL", "").strip(),
        api_token=os.getenv("RIGCART_API_TOKEN", "").strip(),
        api_tokens=os.getenv("RIGCART_API_TOKENS", "").strip(),
        http_timeout_seconds=max(1, _env_int("RIGCART_HTTP_TIMEOUT_SECONDS", 10)),
        log_level=os.getenv("RIGCART_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        log_json=_env_bool("RIGCART_LOG_JSON", False),
    )
