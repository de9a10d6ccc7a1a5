"""兼容性检查模块"""

from __future__ import annotations

import re
from typing import List, Mapping, TYPE_CHECKING

from .categories import COOLER, CPU, GPU, MOTHERBOARD, PSU, RAM
from .specs import Number, resolve_number, resolve_spec, resolve_text

if TYPE_CHECKING:
    from ..schemas import Product


DEFAULT_CPU_DRAW = 65
DEFAULT_GPU_DRAW = 150
DEFAULT_PSU_WATTAGE = 500
DEFAULT_COOLER_CAPACITY = 150
# 主板、内存、硬盘、风扇等其他配件的估算功耗
OTHER_COMPONENTS_HEADROOM = 100
# 电源负载不超过额定功率的 80%
PSU_LOAD_LIMIT = 0.8

_DDR_RE = re.compile("ddr", re.IGNORECASE)


def cpu_draw(cpu: "Product") -> Number:
    return resolve_number(cpu.specs, "tdp", "power_consumption", DEFAULT_CPU_DRAW)


def gpu_draw(gpu: "Product") -> Number:
    return resolve_number(gpu.specs, "tdp", "power_consumption", DEFAULT_GPU_DRAW)


def estimate_system_power(cpu_watt: Number, gpu_watt: Number) -> Number:
    """估算整机功耗：CPU + 显卡 + 其他配件"""
    return cpu_watt + gpu_watt + OTHER_COMPONENTS_HEADROOM


def check_compatibility(selection: Mapping[str, "Product"]) -> List[str]:
    """检查已选配件的兼容性

    每条规则独立执行，缺少配件或规格参数时跳过该规则，不会抛出异常。

    Args:
        selection: 类别 id -> 已选商品

    Returns:
        兼容性问题列表，按规则顺序排列，空列表表示无问题
    """
    issues: List[str] = []

    cpu = selection.get(CPU)
    motherboard = selection.get(MOTHERBOARD)
    gpu = selection.get(GPU)
    ram = selection.get(RAM)
    psu = selection.get(PSU)
    cooler = selection.get(COOLER)

    # 1. CPU 与主板插槽
    if cpu and motherboard:
        # 原始值比较，区分大小写，不做类型或空白归一
        cpu_socket = resolve_spec(cpu.specs, "socket", "cpu_socket")
        mb_socket = resolve_spec(motherboard.specs, "socket", "cpu_socket")
        if cpu_socket is not None and mb_socket is not None and cpu_socket != mb_socket:
            issues.append(
                f"CPU socket ({cpu_socket}) incompatible with motherboard ({mb_socket})"
            )

    # 2. 内存类型：去掉 "ddr" 后做子串匹配，如 DDR4 -> "4"
    if ram and motherboard:
        ram_type = resolve_text(ram.specs, "type", "memory_type")
        mb_ram_type = resolve_text(motherboard.specs, "memory_type", "ram_type")
        if ram_type and mb_ram_type:
            generation = _DDR_RE.sub("", ram_type, count=1).lower()
            if generation not in mb_ram_type.lower():
                issues.append(
                    f"RAM type ({ram_type}) may not be compatible with motherboard"
                )

    # 3. 电源功率
    if cpu and gpu and psu:
        total_draw = estimate_system_power(cpu_draw(cpu), gpu_draw(gpu))
        psu_wattage = resolve_number(psu.specs, "wattage", "power", DEFAULT_PSU_WATTAGE)
        if total_draw > psu_wattage * PSU_LOAD_LIMIT:
            issues.append(
                f"PSU may be underpowered. Estimated TDP: {total_draw}W, PSU: {psu_wattage}W"
            )

    # 4. 散热器压制能力
    if cpu and cooler:
        cpu_tdp = cpu_draw(cpu)
        cooler_tdp = resolve_number(
            cooler.specs, "tdp", "cooling_power", DEFAULT_COOLER_CAPACITY
        )
        if cpu_tdp > cooler_tdp:
            issues.append(
                f"CPU cooler may not handle CPU TDP ({cpu_tdp}W vs {cooler_tdp}W)"
            )

    return issues
