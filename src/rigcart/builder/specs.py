"""
规格参数解析 - Spec Attribute Resolution

商品的 specs 是开放的键值映射，同一物理属性可能出现在不同的键名下
（如 tdp / power_consumption）。所有规则统一通过这里按
"主键 -> 备用键 -> 默认值" 的顺序取值。
A product's specs is an open mapping; the same attribute may live under
synonymous keys. Every rule resolves values here with the
"primary -> fallback -> default" policy.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional, Union

Number = Union[int, float]

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


def resolve_spec(
    specs: Optional[Mapping[str, Any]],
    primary: str,
    fallback: Optional[str] = None,
    default: Any = None,
) -> Any:
    """
    按键名顺序取第一个存在的值 - Resolve First Present Value

    0 视为存在；None 与空字符串视为缺失。
    0 counts as present; None and blank strings count as absent.

    参数 Parameters:
        specs: 商品规格映射，可以为 None
               Product spec mapping, may be None
        primary: 主键名
                 Primary key
        fallback: 备用键名
                  Fallback (synonym) key
        default: 两个键都缺失时的默认值
                 Value returned when both keys are absent

    返回 Returns:
        解析出的原始值或默认值
        The raw resolved value or the default
    """
    if not specs:
        return default
    for key in (primary, fallback):
        if key is None:
            continue
        value = specs.get(key)
        if _is_present(value):
            return value
    return default


def to_number(value: Any) -> Optional[Number]:
    """把 65 / "65" / "650W" / "1,000 W" 转为数字，无法解析时返回 None"""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number: Number = value
    elif isinstance(value, str):
        match = _NUMBER_RE.search(value.replace(",", ""))
        if not match:
            return None
        number = float(match.group())
    else:
        return None
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def resolve_number(
    specs: Optional[Mapping[str, Any]],
    primary: str,
    fallback: Optional[str],
    default: Number,
) -> Number:
    """数值版本：无法解析的值按缺失处理，继续尝试备用键"""
    if not specs:
        return default
    for key in (primary, fallback):
        if key is None:
            continue
        number = to_number(specs.get(key))
        if number is not None:
            return number
    return default


def resolve_text(
    specs: Optional[Mapping[str, Any]],
    primary: str,
    fallback: Optional[str] = None,
) -> Optional[str]:
    value = resolve_spec(specs, primary, fallback)
    if value is None:
        return None
    return str(value)
