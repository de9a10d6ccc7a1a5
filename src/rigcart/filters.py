"""
商品筛选 - Product Filters

品牌、价格区间（闭区间）与仅显示有货。
Brand set, inclusive price range and in-stock-only filtering.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from .schemas import BrandOption, Product


def _norm(value: str) -> str:
    return value.strip().lower()


class ProductFilter(BaseModel):
    brands: List[str] = Field(default_factory=list)
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    in_stock_only: bool = False

    def matches(self, product: Product) -> bool:
        brands = {_norm(b) for b in self.brands if b and b.strip()}
        if brands and _norm(product.brand) not in brands:
            return False
        if self.min_price is not None and product.price < self.min_price:
            return False
        if self.max_price is not None and product.price > self.max_price:
            return False
        if self.in_stock_only and product.stock <= 0:
            return False
        return True


def filter_products(products: Iterable[Product], criteria: ProductFilter) -> List[Product]:
    return [p for p in products if criteria.matches(p)]


def brand_options(products: Iterable[Product]) -> List[BrandOption]:
    """按品牌聚合计数，label 取首次出现的写法"""
    options: Dict[str, BrandOption] = {}
    for product in products:
        value = _norm(product.brand)
        if not value:
            continue
        option = options.get(value)
        if option is None:
            option = options[value] = BrandOption(label=product.brand.strip(), value=value)
        option.count += 1
    return sorted(options.values(), key=lambda o: o.label.casefold())
