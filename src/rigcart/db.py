from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .errors import ProductNotFoundError, ProductsNotFoundError
from .schemas import Product

logger = logging.getLogger(__name__)


def parse_products(records: List[Any]) -> List[Product]:
    """逐条校验商品记录，无效记录记录警告后跳过"""
    products: List[Product] = []
    for record in records:
        try:
            products.append(Product.model_validate(record))
        except ValidationError as exc:
            logger.warning(
                "Skipping invalid product record %r: %s",
                record.get("id") if isinstance(record, dict) else record,
                exc.errors()[0]["msg"] if exc.errors() else exc,
            )
    return products


class ProductStore:
    """
    商品仓库类 - Product Store Class

    以 JSON 文件保存商品记录。读取时校验为 Product，写回时保留原始记录的全部字段。
    Persists product records in a JSON file. Records are validated as Product
    on read; rewrites keep every field of the raw records.
    """

    def __init__(self, data_path: Path):
        """
        初始化商品仓库 - Initialize product store

        参数 Parameters:
            data_path: products.json 路径
                       Path to products.json
        """
        self.data_path = Path(data_path)
        self._lock = threading.Lock()

    def _read_raw(self) -> List[Dict[str, Any]]:
        try:
            with self.data_path.open("r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as exc:
            raise ProductsNotFoundError(f"cannot read {self.data_path}: {exc}") from exc
        if not isinstance(raw, list):
            raise ProductsNotFoundError(f"{self.data_path} does not contain a product list")
        return raw

    def _write_raw(self, records: List[Dict[str, Any]]) -> None:
        """先写临时文件再替换，避免写到一半的文件被读到"""
        self.data_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.data_path.parent, prefix=".products-", suffix=".json"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.data_path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def all_products(self) -> List[Product]:
        """读取全部商品；文件缺失时返回空列表，无效记录跳过"""
        try:
            raw = self._read_raw()
        except ProductsNotFoundError as exc:
            logger.warning("Product store unavailable: %s", exc)
            return []
        return parse_products(raw)

    def find_by_id(self, product_id: str) -> Optional[Product]:
        for product in self.all_products():
            if product.key == str(product_id):
                return product
        return None

    def delete(self, product_id: str) -> None:
        """删除第一条 id 匹配的记录，然后整体重写文件

        Raises:
            ProductsNotFoundError: 数据文件不存在或无法解析
            ProductNotFoundError: 没有匹配的记录
        """
        with self._lock:
            records = self._read_raw()
            index = next(
                (
                    i
                    for i, record in enumerate(records)
                    if isinstance(record, dict) and str(record.get("id")) == product_id
                ),
                None,
            )
            if index is None:
                raise ProductNotFoundError(product_id)
            records.pop(index)
            self._write_raw(records)
