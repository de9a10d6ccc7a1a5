from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List

from .builder import CATEGORY_DEFINITIONS, BuildState, classify, commit_build
from .cart import InMemoryCart
from .errors import ProductNotFoundError, UnknownCategoryError
from .schemas import BuildSummary, CartItem, ComponentCategory, HandoffResult, Product

logger = logging.getLogger(__name__)

CatalogLoader = Callable[[], List[Product]]


@dataclass
class SessionState:
    state: BuildState
    cart: InMemoryCart = field(default_factory=InMemoryCart)
    # 锁跟随会话对象，会话被清理后仍持有引用的请求继续使用同一把锁
    lock: threading.Lock = field(default_factory=threading.Lock)
    last_seen: float = field(default_factory=time.monotonic)


class BuilderService:
    """按会话维护装机状态与购物车；同一会话的操作串行执行"""

    def __init__(
        self,
        catalog_loader: CatalogLoader,
        session_ttl_seconds: int | None = 24 * 3600,
    ):
        self._catalog_loader = catalog_loader
        self.products: List[Product] = []
        self.categories: List[ComponentCategory] = []
        self.sessions: Dict[str, SessionState] = {}
        self._sessions_lock = threading.Lock()
        self._cleanup_lock = threading.Lock()
        self.session_ttl_seconds = max(0, int(session_ttl_seconds or 0))
        self.refresh()

    def refresh(self) -> List[ComponentCategory]:
        """重新拉取目录并重建类别，已有会话同步更新"""
        products = list(self._catalog_loader())
        categories = classify(products)
        with self._sessions_lock:
            self.products = products
            self.categories = categories
            sessions = list(self.sessions.values())
        for session in sessions:
            with session.lock:
                session.state.set_categories(categories)
        logger.info(
            "Catalog loaded: %d categories, %d products",
            len(categories),
            sum(len(c.items) for c in categories),
        )
        return categories

    def _session(self, session_id: str) -> SessionState:
        self._cleanup_idle_sessions()
        with self._sessions_lock:
            session = self.sessions.get(session_id)
            if session is None:
                session = SessionState(state=BuildState(self.categories))
                self.sessions[session_id] = session
            session.last_seen = time.monotonic()
            return session

    def _cleanup_idle_sessions(self) -> None:
        if not self.session_ttl_seconds:
            return
        # 非阻塞：已有线程在清理时直接跳过
        if not self._cleanup_lock.acquire(blocking=False):
            return
        try:
            expire_before = time.monotonic() - self.session_ttl_seconds
            with self._sessions_lock:
                stale = [
                    sid
                    for sid, s in self.sessions.items()
                    if s.last_seen < expire_before and not s.lock.locked()
                ]
                for sid in stale:
                    self.sessions.pop(sid, None)
        finally:
            self._cleanup_lock.release()
        if stale:
            logger.debug("Dropped %d idle session(s)", len(stale))

    def find_product(self, category_id: str, product_id: str) -> Product:
        """类别必须在定义表中；商品在整个目录中按 id 查找"""
        if category_id not in CATEGORY_DEFINITIONS:
            raise UnknownCategoryError(category_id)
        for product in self.products:
            if product.key == str(product_id):
                return product
        raise ProductNotFoundError(str(product_id))

    def summary(self, session_id: str) -> BuildSummary:
        session = self._session(session_id)
        with session.lock:
            return session.state.summary()

    def select(self, session_id: str, category_id: str, product_id: str) -> BuildSummary:
        session = self._session(session_id)
        product = self.find_product(category_id, product_id)
        with session.lock:
            session.state.select(category_id, product)
            return session.state.summary()

    def remove(self, session_id: str, category_id: str) -> BuildSummary:
        session = self._session(session_id)
        with session.lock:
            session.state.remove(category_id)
            return session.state.summary()

    def reset(self, session_id: str) -> BuildSummary:
        session = self._session(session_id)
        with session.lock:
            session.state.reset()
            return session.state.summary()

    def commit(self, session_id: str) -> HandoffResult:
        session = self._session(session_id)
        with session.lock:
            return commit_build(session.state, session.cart)

    def cart_items(self, session_id: str) -> List[CartItem]:
        return self._session(session_id).cart.items()
