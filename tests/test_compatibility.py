from rigcart.builder import check_compatibility, resolve_number, resolve_spec

from conftest import make_product


def _cpu(**specs):
    return make_product("cpu", "CPUs", specs=specs)


def _mb(**specs):
    return make_product("mb", "Motherboards", specs=specs)


def test_compatibility_detects_socket_mismatch():
    issues = check_compatibility(
        {"parts-cpus": _cpu(socket="AM5"), "parts-motherboards": _mb(socket="LGA1700")}
    )
    assert len(issues) == 1
    assert "AM5" in issues[0] and "LGA1700" in issues[0]


def test_matching_socket_has_no_issue():
    issues = check_compatibility(
        {"parts-cpus": _cpu(socket="AM5"), "parts-motherboards": _mb(cpu_socket="AM5")}
    )
    assert issues == []


def test_socket_comparison_is_case_sensitive():
    issues = check_compatibility(
        {"parts-cpus": _cpu(socket="am5"), "parts-motherboards": _mb(socket="AM5")}
    )
    assert len(issues) == 1


def test_socket_rule_skipped_when_spec_missing():
    issues = check_compatibility(
        {"parts-cpus": _cpu(), "parts-motherboards": _mb(socket="AM5")}
    )
    assert issues == []


def test_memory_type_substring_heuristic():
    ram = make_product("ram", "RAM", specs={"type": "DDR4"})
    assert check_compatibility(
        {"parts-ram": ram, "parts-motherboards": _mb(memory_type="DDR4")}
    ) == []
    # 只比较去掉 ddr 后的代数
    assert check_compatibility(
        {"parts-ram": ram, "parts-motherboards": _mb(ram_type="supports 4 slots")}
    ) == []
    issues = check_compatibility(
        {"parts-ram": ram, "parts-motherboards": _mb(memory_type="DDR5")}
    )
    assert issues == ["RAM type (DDR4) may not be compatible with motherboard"]


def test_memory_type_uses_fallback_keys():
    ram = make_product("ram", "RAM", specs={"memory_type": "ddr5"})
    issues = check_compatibility({"parts-ram": ram, "parts-motherboards": _mb(ram_type="DDR4")})
    assert len(issues) == 1


def test_psu_rule_fires_above_eighty_percent():
    selection = {
        "parts-cpus": _cpu(tdp=65),
        "parts-gpus": make_product("gpu", "GPUs", specs={"tdp": 220}),
        "parts-psu": make_product("psu", "PSU", specs={"wattage": 400}),
    }
    issues = check_compatibility(selection)
    assert issues == ["PSU may be underpowered. Estimated TDP: 385W, PSU: 400W"]

    # 385 <= 500 * 0.8
    selection["parts-psu"] = make_product("psu", "PSU", specs={"wattage": 500})
    assert check_compatibility(selection) == []

    selection["parts-psu"] = make_product("psu", "PSU", specs={"wattage": 750})
    assert check_compatibility(selection) == []


def test_psu_rule_uses_defaults():
    # 65 + 150 + 100 = 315 <= 500 * 0.8
    selection = {
        "parts-cpus": _cpu(),
        "parts-gpus": make_product("gpu", "GPUs"),
        "parts-psu": make_product("psu", "PSU"),
    }
    assert check_compatibility(selection) == []

    selection["parts-gpus"] = make_product("gpu", "GPUs", specs={"power_consumption": "250W"})
    issues = check_compatibility(selection)
    assert issues == ["PSU may be underpowered. Estimated TDP: 415W, PSU: 500W"]


def test_cooler_rule():
    cooler = make_product("cooler", "Cooling", specs={"cooling_power": 120})
    issues = check_compatibility({"parts-cpus": _cpu(tdp=125), "parts-cooling": cooler})
    assert issues == ["CPU cooler may not handle CPU TDP (125W vs 120W)"]
    assert check_compatibility({"parts-cpus": _cpu(tdp=120), "parts-cooling": cooler}) == []


def test_rules_are_independent_and_ordered():
    selection = {
        "parts-cpus": _cpu(socket="AM5", tdp=170),
        "parts-motherboards": _mb(socket="LGA1700", memory_type="DDR4"),
        "parts-ram": make_product("ram", "RAM", specs={"type": "DDR5"}),
        "parts-gpus": make_product("gpu", "GPUs", specs={"tdp": 320}),
        "parts-psu": make_product("psu", "PSU", specs={"wattage": 650}),
        "parts-cooling": make_product("cooler", "Cooling", specs={"tdp": 150}),
    }
    issues = check_compatibility(selection)
    assert len(issues) == 4
    assert issues[0].startswith("CPU socket")
    assert issues[1].startswith("RAM type")
    assert issues[2].startswith("PSU may be underpowered")
    assert issues[3].startswith("CPU cooler")


def test_no_issues_without_complete_pairs():
    selection = {
        "parts-cpus": _cpu(socket="AM5", tdp=500),
        "parts-ram": make_product("ram", "RAM", specs={"type": "DDR5"}),
        "parts-gpus": make_product("gpu", "GPUs", specs={"tdp": 900}),
        "parts-storage": make_product("ssd", "Storage"),
    }
    assert check_compatibility(selection) == []
    assert check_compatibility({}) == []


def test_resolve_spec_fallback_policy():
    assert resolve_spec({"tdp": 0, "power_consumption": 90}, "tdp", "power_consumption", 65) == 0
    assert resolve_spec({"tdp": None, "power_consumption": 90}, "tdp", "power_consumption", 65) == 90
    assert resolve_spec({"tdp": ""}, "tdp", "power_consumption", 65) == 65
    assert resolve_spec(None, "tdp", None, 65) == 65


def test_resolve_number_skips_unparseable_values():
    assert resolve_number({"wattage": "n/a", "power": "650 W"}, "wattage", "power", 500) == 650
    assert resolve_number({"wattage": "1,000W"}, "wattage", "power", 500) == 1000
    assert resolve_number({"wattage": True}, "wattage", "power", 500) == 500
    assert resolve_number({"tdp": 0}, "tdp", "power_consumption", 65) == 0


def test_socket_values_compared_without_normalization():
    issues = check_compatibility(
        {"parts-cpus": _cpu(socket=" AM5"), "parts-motherboards": _mb(socket="AM5")}
    )
    assert issues == ["CPU socket ( AM5) incompatible with motherboard (AM5)"]

    issues = check_compatibility(
        {"parts-cpus": _cpu(socket=1700), "parts-motherboards": _mb(socket="1700")}
    )
    assert len(issues) == 1

    # 0 视为存在的值
    issues = check_compatibility(
        {"parts-cpus": _cpu(socket=0), "parts-motherboards": _mb(socket="AM5")}
    )
    assert issues == ["CPU socket (0) incompatible with motherboard (AM5)"]
