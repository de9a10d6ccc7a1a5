"""异常定义"""

from __future__ import annotations


class RigCartError(Exception):
    """所有业务异常的基类"""


class BuildError(RigCartError):
    """装机配置操作失败"""


class UnknownCategoryError(BuildError):
    def __init__(self, category_id: str):
        super().__init__(f"Unknown component category: {category_id}")
        self.category_id = category_id


class CategoryMismatchError(BuildError):
    def __init__(self, category_id: str, product_id: str, actual: str):
        super().__init__(
            f"Product {product_id} belongs to {actual}, not {category_id}"
        )
        self.category_id = category_id
        self.product_id = product_id
        self.actual = actual


class CartError(RigCartError):
    """购物车写入失败"""


class ProductStoreError(RigCartError):
    """商品存储读写失败"""


class ProductsNotFoundError(ProductStoreError):
    """商品数据文件不存在或无法解析"""


class ProductNotFoundError(ProductStoreError):
    def __init__(self, product_id: str):
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id
