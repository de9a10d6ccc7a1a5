"""
购物车交接模块 - Cart Hand-off Module

把已完成且兼容的配置逐件写入购物车，然后交给结算页。
Transfer a complete, compatible build into the cart one item at a time.
"""

from __future__ import annotations

import logging
from typing import List, Protocol

from ..errors import CartError
from ..schemas import CartItem, HandoffResult, Product
from .state import BuildState

logger = logging.getLogger(__name__)

CHECKOUT_PATH = "/checkout"


class CartProtocol(Protocol):
    def add_item(self, item: CartItem) -> None: ...


def to_cart_item(product: Product) -> CartItem:
    return CartItem(
        id=product.key,
        name=product.name,
        brand=product.brand,
        price=product.price,
        image=product.image_url,
    )


def commit_build(state: BuildState, cart: CartProtocol) -> HandoffResult:
    """
    提交配置到购物车 - Commit Build to Cart

    前置条件：必选配件齐全且没有兼容性问题，否则直接拒绝，不写入任何商品。
    写入严格串行：上一件写入完成后才开始下一件，购物车不能承受并发写入。
    第一次写入失败即中止，已写入的商品保留在购物车中，不做回滚。
    Preconditions: all required parts selected and no compatibility issues.
    Transfers are strictly sequential; the first failure aborts the rest and
    already-committed items stay in the cart.

    参数 Parameters:
        state: 当前装机状态
               Current build state
        cart: 购物车协作者
              Cart collaborator

    返回 Returns:
        completed / rejected / failed 三种结果之一
        One of completed / rejected / failed
    """
    issues = list(state.compatibility_issues)
    if not state.is_complete:
        logger.info(
            "Build commit rejected: %d/%d required parts selected",
            state.required_selected,
            state.required_total,
        )
        return HandoffResult(
            status="rejected", issues=issues, error="Select All Required Parts"
        )
    if issues:
        logger.info("Build commit rejected: %d compatibility issue(s)", len(issues))
        return HandoffResult(
            status="rejected", issues=issues, error="Fix Compatibility Issues"
        )

    committed: List[str] = []
    for product in list(state.selection.values()):
        item = to_cart_item(product)
        try:
            cart.add_item(item)
        except CartError as exc:
            logger.error(
                "Cart transfer failed for %s after %d item(s): %s",
                item.id,
                len(committed),
                exc,
            )
            return HandoffResult(
                status="failed",
                committed=committed,
                failed_item=item.id,
                error=str(exc),
            )
        committed.append(item.id)

    logger.info("Build committed to cart: %s", ", ".join(committed))
    return HandoffResult(status="completed", committed=committed, redirect=CHECKOUT_PATH)
