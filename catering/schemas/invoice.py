# catering/schemas/invoice.py
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

LineItemCategory = Literal[
    "package",
    "appetizers",
    "sides",
    "desserts",
    "dietary",
    "service",
    "service_addon",
    "supplies",
    "custom",
]


class LineItem(BaseModel):
    """
    Unit of billing. Prices are integer cents.
    """

    model_config = ConfigDict(extra="forbid")

    id: str
    title: str
    description: str = ""
    quantity: int = Field(..., ge=0)
    unit_price: int = 0
    total_price: int = 0
    category: LineItemCategory
    metadata: Optional[Dict[str, Any]] = None


class LineItemOut(LineItem):
    sort_order: int = 0
    override_reason: Optional[str] = None


class LineItemCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    quantity: int = Field(1, ge=0)
    unit_price: int = Field(0, ge=0)
    category: LineItemCategory = "custom"


class LineItemUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    quantity: Optional[int] = Field(None, ge=0)
    unit_price: Optional[int] = Field(None, ge=0)
    override_reason: Optional[str] = None


class PricingRequest(BaseModel):
    """Either a named pricing tier or an explicit per-guest rate in cents."""

    model_config = ConfigDict(extra="forbid")

    tier_id: Optional[str] = None
    per_guest_rate: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def _exactly_one(self) -> "PricingRequest":
        if (self.tier_id is None) == (self.per_guest_rate is None):
            raise ValueError("provide exactly one of tier_id or per_guest_rate")
        return self


class TaxSettingsUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tax_rate: Optional[Decimal] = Field(None, ge=0, le=100)
    is_government_contract: Optional[bool] = None


class StatusUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: str
    role: Literal["admin", "customer", "system"] = "admin"
    reason: Optional[str] = None


class SendEstimateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    recipient: Optional[str] = None
    message: Optional[str] = Field(None, max_length=2000)


class InvoiceOut(BaseModel):
    id: int
    quote_request_id: int
    invoice_number: Optional[str] = None
    status: str
    is_draft: bool
    subtotal: int
    tax_rate: Decimal
    tax_amount: int
    total_amount: int
    is_government_contract: bool
    due_date: Optional[date] = None
    sent_at: Optional[datetime] = None
    line_items: List[LineItemOut] = Field(default_factory=list)


class PricingTierOut(BaseModel):
    id: str
    label: str
    per_guest_rate: int
    description: Optional[str] = None


class FunctionResultOut(BaseModel):
    success: bool
    function: str
    data: Dict[str, Any] = Field(default_factory=dict)
    dev: bool = False
