"""
装机状态模块 - Build State Module

维护当前的配件选择，并在每次变更后同步重算总价、完成度与兼容性问题。
Holds the current selection and synchronously recomputes total price,
completion and compatibility issues after every change.
"""

from __future__ import annotations

import math
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping

from ..errors import CategoryMismatchError, UnknownCategoryError
from ..schemas import BuildSummary, CategorySlot, ComponentCategory, Product
from .categories import category_key
from .compatibility import check_compatibility


class BuildState:
    """
    装机配置状态 - Build Configuration State

    每个类别最多选择一个商品；select / remove / reset 之后派生值立即更新。
    At most one product per category; derived values are refreshed before
    the next read after select / remove / reset.
    """

    def __init__(self, categories: Iterable[ComponentCategory] = ()):
        self._categories: List[ComponentCategory] = list(categories)
        self._selection: Dict[str, Product] = {}
        self._recompute()

    @property
    def categories(self) -> List[ComponentCategory]:
        return list(self._categories)

    @property
    def selection(self) -> Mapping[str, Product]:
        return MappingProxyType(self._selection)

    def set_categories(self, categories: Iterable[ComponentCategory]) -> None:
        """目录刷新后替换类别列表，已消失类别下的选择一并清除"""
        self._categories = list(categories)
        known = {c.id for c in self._categories}
        for category_id in [k for k in self._selection if k not in known]:
            del self._selection[category_id]
        self._recompute()

    def select(self, category_id: str, product: Product) -> None:
        if category_id not in {c.id for c in self._categories}:
            raise UnknownCategoryError(category_id)
        actual = category_key(product)
        if actual != category_id:
            raise CategoryMismatchError(category_id, product.key, actual)
        self._selection[category_id] = product
        self._recompute()

    def remove(self, category_id: str) -> None:
        if self._selection.pop(category_id, None) is not None:
            self._recompute()

    def reset(self) -> None:
        self._selection.clear()
        self._recompute()

    def _recompute(self) -> None:
        required_ids = [c.id for c in self._categories if c.required]
        self.selected_count = len(self._selection)
        self.total_price = sum(p.price for p in self._selection.values())
        self.required_total = len(required_ids)
        self.required_selected = sum(1 for cid in required_ids if cid in self._selection)
        if self.required_total:
            self.completion_ratio = self.required_selected / self.required_total
        else:
            self.completion_ratio = 0.0
        self.is_complete = self.required_selected == self.required_total
        self.compatibility_issues = check_compatibility(self._selection)

    @property
    def completion_percent(self) -> int:
        # 四舍五入，0.5 进位
        return int(math.floor(self.completion_ratio * 100 + 0.5))

    @property
    def can_commit(self) -> bool:
        return self.is_complete and not self.compatibility_issues

    def summary(self) -> BuildSummary:
        slots = [
            CategorySlot(
                id=c.id,
                name=c.name,
                icon=c.icon,
                required=c.required,
                selected=self._selection.get(c.id),
            )
            for c in self._categories
        ]
        return BuildSummary(
            slots=slots,
            selected_count=self.selected_count,
            total_price=self.total_price,
            required_total=self.required_total,
            required_selected=self.required_selected,
            completion_ratio=self.completion_ratio,
            completion_percent=self.completion_percent,
            is_complete=self.is_complete,
            compatibility_issues=list(self.compatibility_issues),
            can_commit=self.can_commit,
        )
