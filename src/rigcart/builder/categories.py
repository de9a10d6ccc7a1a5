"""
配件分类模块 - Component Category Module

把平铺的商品列表按 (category, subcategory) 归入固定的配件类别。
Group the flat product list into the fixed set of component categories.
"""

from __future__ import annotations

import locale
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List

from ..schemas import ComponentCategory, Product


@dataclass(frozen=True)
class CategoryDefinition:
    """
    类别定义 - Category Definition

    字段说明 Field Descriptions:
    - name: 展示名称
    - icon: 图标角色，由前端映射为具体图标
    - required: 是否为必选配件
    """
    name: str
    icon: str
    required: bool


CPU = "parts-cpus"
MOTHERBOARD = "parts-motherboards"
GPU = "parts-gpus"
RAM = "parts-ram"
STORAGE = "parts-storage"
PSU = "parts-psu"
COOLER = "parts-cooling"
DISPLAYS = "displays"
PERIPHERALS = "peripherals"

CATEGORY_DEFINITIONS: Dict[str, CategoryDefinition] = {
    DISPLAYS: CategoryDefinition("Display", "circuit-board", False),
    PERIPHERALS: CategoryDefinition("Peripherals", "circuit-board", False),
    CPU: CategoryDefinition("CPU", "cpu", True),
    MOTHERBOARD: CategoryDefinition("Motherboard", "circuit-board", True),
    GPU: CategoryDefinition("Graphics Card", "gpu", True),
    RAM: CategoryDefinition("Memory", "memory-stick", True),
    STORAGE: CategoryDefinition("Storage", "hard-drive", True),
    PSU: CategoryDefinition("Power Supply", "power", True),
    COOLER: CategoryDefinition("CPU Cooler", "fan", False),
}
"""
类别定义表 - Category Definition Table

不在表中的类别在分类时直接丢弃。
Categories missing from this table are dropped during classification.
"""

_WHITESPACE_RE = re.compile(r"\s+")


def category_key(product: Product) -> str:
    """parts 类商品按子类拆分，如 ("parts", "Power Supply") -> "parts-powersupply" """
    if product.category == "parts" and product.subcategory:
        return "parts-" + _WHITESPACE_RE.sub("", product.subcategory.lower())
    return product.category


def _name_sort_key(name: str) -> str:
    return locale.strxfrm(name.casefold())


def classify(products: Iterable[Product]) -> List[ComponentCategory]:
    """
    商品分类 - Classify Products

    分组保持商品在目录中的顺序；输出先必选后可选，同层按名称排序。
    Groups keep catalog order; output is required-first, then by name.

    参数 Parameters:
        products: 平铺的商品列表
                  Flat product list

    返回 Returns:
        配件类别列表，空输入返回空列表
        Component categories; empty input yields an empty list
    """
    groups: Dict[str, List[Product]] = {}
    for product in products:
        groups.setdefault(category_key(product), []).append(product)

    categories: List[ComponentCategory] = []
    for key, items in groups.items():
        definition = CATEGORY_DEFINITIONS.get(key)
        if definition is None:
            continue
        categories.append(
            ComponentCategory(
                id=key,
                name=definition.name,
                icon=definition.icon,
                required=definition.required,
                items=items,
            )
        )

    categories.sort(key=lambda c: (not c.required, _name_sort_key(c.name)))
    return categories
