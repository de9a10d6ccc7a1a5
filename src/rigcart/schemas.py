from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Product(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Union[str, int]
    name: str
    brand: str = ""
    price: float = Field(ge=0)
    category: str
    subcategory: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    stock: int = 0
    specs: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("specs", mode="before")
    @classmethod
    def _specs_default(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def key(self) -> str:
        """商品 id 一律按字符串比较"""
        return str(self.id)


class ComponentCategory(BaseModel):
    id: str
    name: str
    icon: str
    required: bool
    items: List[Product] = Field(default_factory=list)


class CategorySlot(BaseModel):
    id: str
    name: str
    icon: str
    required: bool
    selected: Optional[Product] = None


class BuildSummary(BaseModel):
    slots: List[CategorySlot] = Field(default_factory=list)
    selected_count: int = 0
    total_price: float = 0
    required_total: int = 0
    required_selected: int = 0
    completion_ratio: float = 0.0
    completion_percent: int = 0
    is_complete: bool = False
    compatibility_issues: List[str] = Field(default_factory=list)
    can_commit: bool = False


class CartItem(BaseModel):
    id: str
    name: str
    brand: str = ""
    price: float = 0
    image: Optional[str] = None
    quantity: int = Field(default=1, ge=1)


class HandoffResult(BaseModel):
    status: Literal["completed", "rejected", "failed"]
    committed: List[str] = Field(default_factory=list)
    issues: List[str] = Field(default_factory=list)
    failed_item: Optional[str] = None
    error: Optional[str] = None
    redirect: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "completed"


class User(BaseModel):
    id: str
    name: str = ""
    role: str = "customer"


class BrandOption(BaseModel):
    label: str
    value: str
    count: int = 0


class SelectRequest(BaseModel):
    category_id: str
    product_id: Union[str, int]
