"""商品目录访问"""

from __future__ import annotations

import logging
import time
from typing import List

import httpx

from .api_client import ApiClient
from .db import parse_products
from .schemas import Product

logger = logging.getLogger(__name__)


class CatalogAccessor:
    """通过认证请求一次性拉取全部商品，不做任何转换"""

    def __init__(self, client: ApiClient, path: str = "/api/products"):
        self.client = client
        self.path = path

    def fetch(self) -> List[Product]:
        """拉取失败时记录错误并返回空列表；单条无效记录跳过，与本地商品文件一致"""
        try:
            # 时间戳参数绕过中间缓存
            response = self.client.get(self.path, params={"t": int(time.time() * 1000)})
            response.raise_for_status()
            raw = response.json()
            if not isinstance(raw, list):
                raise ValueError(f"expected a product list, got {type(raw).__name__}")
            products = parse_products(raw)
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Failed to fetch products: %s", exc)
            return []
        logger.info("Fetched %d products from %s", len(products), self.path)
        return products
