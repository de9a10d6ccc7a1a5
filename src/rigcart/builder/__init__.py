"""Builder 模块：配件分类、兼容性检查、装机状态与购物车交接"""

from .categories import CATEGORY_DEFINITIONS, CategoryDefinition, category_key, classify
from .compatibility import check_compatibility, estimate_system_power
from .handoff import CartProtocol, commit_build, to_cart_item
from .specs import resolve_number, resolve_spec, resolve_text
from .state import BuildState

__all__ = [
    "CATEGORY_DEFINITIONS",
    "CategoryDefinition",
    "category_key",
    "classify",
    "check_compatibility",
    "estimate_system_power",
    "CartProtocol",
    "commit_build",
    "to_cart_item",
    "resolve_number",
    "resolve_spec",
    "resolve_text",
    "BuildState",
]
