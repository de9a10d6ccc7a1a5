import json
from pathlib import Path

import pytest

from rigcart.builder import BuildState, classify
from rigcart.schemas import Product


ROOT = Path(__file__).resolve().parents[1]


def make_product(pid, subcategory=None, price=100, category="parts", specs=None, **extra):
    return Product(
        id=pid,
        name=extra.pop("name", f"Product {pid}"),
        brand=extra.pop("brand", "Generic"),
        price=price,
        category=category,
        subcategory=subcategory,
        specs=specs or {},
        **extra,
    )


@pytest.fixture
def catalog():
    """每个必选类别至少一件，附带散热器与显示器"""
    return [
        make_product("cpu-am5", "CPUs", 229, specs={"socket": "AM5", "tdp": 65}),
        make_product("cpu-1700", "CPUs", 319, specs={"cpu_socket": "LGA1700", "tdp": 125}),
        make_product("mb-am5", "Motherboards", 219, specs={"socket": "AM5", "memory_type": "DDR5"}),
        make_product("mb-1700", "Motherboards", 259, specs={"socket": "LGA1700", "ram_type": "DDR4"}),
        make_product("gpu-4070", "GPUs", 599, specs={"tdp": 220}),
        make_product("ram-ddr5", "RAM", 109, specs={"type": "DDR5"}),
        make_product("ssd-2tb", "Storage", 169),
        make_product("psu-750", "PSU", 99, specs={"wattage": 750}),
        make_product("psu-500", "PSU", 49, specs={"wattage": 500}),
        make_product("cooler-260", "Cooling", 65, specs={"tdp": 260}),
        make_product("mon-27", category="displays", price=799),
    ]


@pytest.fixture
def state(catalog):
    return BuildState(classify(catalog))


@pytest.fixture
def by_id(catalog):
    return {p.key: p for p in catalog}


@pytest.fixture
def products_file(tmp_path, catalog):
    path = tmp_path / "products.json"
    records = [p.model_dump(exclude_none=True) for p in catalog]
    path.write_text(json.dumps(records, indent=2), encoding="utf-8")
    return path
