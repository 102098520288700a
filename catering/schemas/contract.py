# catering/schemas/contract.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ContractOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_id: int
    contract_type: str
    status: str
    document_url: Optional[str] = None
    signed_by: Optional[str] = None
    signed_at: Optional[datetime] = None
    sent_at: Optional[datetime] = None


class ContractSignature(BaseModel):
    model_config = ConfigDict(extra="forbid")

    signed_by: str = Field(..., min_length=1, max_length=200)
    role: str = Field("admin", pattern="^(admin|customer)$")
