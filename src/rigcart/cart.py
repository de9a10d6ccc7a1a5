"""内存购物车，按会话隔离"""

from __future__ import annotations

import threading
from typing import Dict, List

from .schemas import CartItem


class InMemoryCart:
    def __init__(self):
        self._items: Dict[str, CartItem] = {}
        self._lock = threading.Lock()

    def add_item(self, item: CartItem) -> None:
        """同一商品重复加入时累加数量"""
        with self._lock:
            existing = self._items.get(item.id)
            if existing is not None:
                existing.quantity += item.quantity
                return
            self._items[item.id] = item.model_copy()

    def items(self) -> List[CartItem]:
        with self._lock:
            return [item.model_copy() for item in self._items.values()]

    def total(self) -> float:
        with self._lock:
            return sum(item.price * item.quantity for item in self._items.values())

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
