# catering/schemas/quote_request.py
from __future__ import annotations

import json
from datetime import date, datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

MENU_FIELDS = ("proteins", "sides", "appetizers", "desserts", "drinks")


class ServiceType(str, Enum):
    FULL_SERVICE = "full-service"
    DELIVERY_SETUP = "delivery-setup"
    DELIVERY_ONLY = "delivery-only"
    DROP_OFF = "drop-off"


def parse_selection(value: Any) -> List[str]:
    """
    Normalise a stored menu selection to a list of ids.

    Accepts a list, JSON-encoded list text, comma separated text or None.
    Anything else is rejected here, once, instead of downstream.
    """
    if value is None:
        return []
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        if text.startswith("["):
            try:
                value = json.loads(text)
            except json.JSONDecodeError as e:
                raise ValueError(f"malformed menu selection: {e.msg}") from e
        else:
            return [part.strip() for part in text.split(",") if part.strip()]
    if isinstance(value, (list, tuple)):
        items: List[str] = []
        for v in value:
            if isinstance(v, dict):
                # {"id": "...", "name": "..."} rows from the older menu picker
                v = v.get("id") or v.get("name")
            if v is None:
                continue
            if not isinstance(v, str):
                raise ValueError(f"menu selection items must be strings, got {type(v).__name__}")
            if v.strip():
                items.append(v.strip())
        return items
    raise ValueError(f"unsupported menu selection type: {type(value).__name__}")


class QuoteRequest(BaseModel):
    """
    Read model of a quote_requests row. The generator only ever sees this.
    """

    model_config = ConfigDict(from_attributes=True, extra="ignore", frozen=True)

    id: Optional[int] = None

    # contact
    contact_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    # event
    event_name: Optional[str] = None
    event_type: Optional[str] = None
    event_date: Optional[date] = None
    start_time: Optional[str] = None
    serving_start_time: Optional[str] = None
    end_time: Optional[str] = None
    location: Optional[str] = None
    guest_count: int = Field(0, ge=0)
    service_type: Optional[str] = None

    # menu
    proteins: List[str] = Field(default_factory=list)
    sides: List[str] = Field(default_factory=list)
    appetizers: List[str] = Field(default_factory=list)
    desserts: List[str] = Field(default_factory=list)
    drinks: List[str] = Field(default_factory=list)

    # equipment / add-ons
    chafers_requested: bool = False
    linens_requested: bool = False
    wait_staff_requested: bool = False
    bussing_tables_needed: bool = False
    serving_utensils_requested: bool = False
    plates_requested: bool = False
    cups_requested: bool = False
    napkins_requested: bool = False
    ice_requested: bool = False

    # dietary
    guest_count_with_restrictions: Optional[str] = None
    dietary_restrictions: List[str] = Field(default_factory=list)
    vegetarian_entrees: List[str] = Field(default_factory=list)

    # event-type specific
    ceremony_included: bool = False
    cocktail_hour: bool = False
    compliance_level: Optional[str] = None
    po_number: Optional[str] = None

    special_requests: Optional[str] = None
    status: str = "pending"
    created_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def _fold_legacy_proteins(cls, data: Any) -> Any:
        # Older rows carry primary_protein / secondary_protein instead of proteins
        if not isinstance(data, dict):
            return data
        if parse_selection(data.get("proteins")):
            return data
        legacy: List[str] = []
        for key in ("primary_protein", "secondary_protein"):
            legacy.extend(parse_selection(data.get(key)))
        if legacy:
            data = {**data, "proteins": legacy}
        return data

    @field_validator(*MENU_FIELDS, "dietary_restrictions", "vegetarian_entrees", mode="before")
    @classmethod
    def _parse_selection(cls, v: Any) -> List[str]:
        return parse_selection(v)

    @field_validator("guest_count", mode="before")
    @classmethod
    def _guest_count_default(cls, v: Any) -> Any:
        return 0 if v is None else v

    @property
    def is_government(self) -> bool:
        return (
            (self.event_type or "").lower() == "government"
            or bool(self.compliance_level)
            or bool(self.po_number)
        )


class QuoteRequestCreate(BaseModel):
    """Public intake payload."""

    model_config = ConfigDict(extra="forbid")

    contact_name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: str = Field(..., min_length=7, max_length=50)

    event_name: str = Field(..., min_length=1, max_length=200)
    event_type: Optional[str] = Field(None, max_length=64)
    event_date: date
    start_time: Optional[str] = None
    serving_start_time: Optional[str] = None
    end_time: Optional[str] = None
    location: str = Field(..., min_length=1, max_length=300)
    guest_count: int = Field(..., ge=1, le=5000)
    service_type: ServiceType

    proteins: List[str] = Field(default_factory=list)
    sides: List[str] = Field(default_factory=list)
    appetizers: List[str] = Field(default_factory=list)
    desserts: List[str] = Field(default_factory=list)
    drinks: List[str] = Field(default_factory=list)

    chafers_requested: bool = False
    linens_requested: bool = False
    wait_staff_requested: bool = False
    bussing_tables_needed: bool = False
    serving_utensils_requested: bool = False
    plates_requested: bool = False
    cups_requested: bool = False
    napkins_requested: bool = False
    ice_requested: bool = False

    guest_count_with_restrictions: Optional[str] = None
    dietary_restrictions: List[str] = Field(default_factory=list)
    vegetarian_entrees: List[str] = Field(default_factory=list)

    ceremony_included: bool = False
    cocktail_hour: bool = False
    compliance_level: Optional[str] = None
    po_number: Optional[str] = None

    special_requests: Optional[str] = Field(None, max_length=2000)

    @field_validator(*MENU_FIELDS, "dietary_restrictions", "vegetarian_entrees", mode="before")
    @classmethod
    def _parse_selection(cls, v: Any) -> List[str]:
        return parse_selection(v)


class QuoteRequestCreated(BaseModel):
    id: int
    status: str


class QuoteSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    contact_name: str
    email: str
    event_name: str
    event_type: Optional[str] = None
    event_date: Optional[date] = None
    guest_count: int
    service_type: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
