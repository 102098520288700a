# catering/schemas/report.py
from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, Field


class ReportSummary(BaseModel):
    quotes_by_status: Dict[str, int] = Field(default_factory=dict)
    invoices_by_status: Dict[str, int] = Field(default_factory=dict)
    quotes_by_event_type: Dict[str, int] = Field(default_factory=dict)
    average_guest_count: float = 0.0

    # cents
    pipeline_value: int = 0
    collected_revenue: int = 0
    outstanding_balance: int = 0

    conversion_rate: float = 0.0
    signed_contracts: int = 0
