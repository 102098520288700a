# catering/routers/estimates.py
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from catering.dependencies import get_estimate_service
from catering.estimates.pricing_tiers import load_pricing_tiers
from catering.repositories.invoices import invoice_to_out
from catering.schemas.invoice import (
    FunctionResultOut,
    InvoiceOut,
    LineItemCreate,
    LineItemUpdate,
    PricingRequest,
    PricingTierOut,
    SendEstimateRequest,
    StatusUpdate,
    TaxSettingsUpdate,
)
from catering.services.estimate_service import EstimateService

router = APIRouter(prefix="/admin", tags=["estimates"])


class CreateEstimateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tax_rate: Optional[Decimal] = Field(None, ge=0, le=100)
    regenerate: bool = False


class ApproveRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    role: str = Field("admin", pattern="^(admin|customer)$")


@router.post("/quotes/{quote_id}/estimate", response_model=InvoiceOut)
def create_estimate(
    quote_id: int,
    body: Optional[CreateEstimateRequest] = None,
    svc: EstimateService = Depends(get_estimate_service),
):
    body = body or CreateEstimateRequest()
    invoice = svc.create_estimate(quote_id, tax_rate=body.tax_rate, regenerate=body.regenerate)
    return invoice_to_out(invoice)


@router.get("/estimates/{invoice_id}", response_model=InvoiceOut)
def get_estimate(invoice_id: int, svc: EstimateService = Depends(get_estimate_service)):
    return invoice_to_out(svc.get_invoice(invoice_id))


@router.post("/estimates/{invoice_id}/pricing", response_model=InvoiceOut)
def apply_pricing(
    invoice_id: int,
    body: PricingRequest,
    svc: EstimateService = Depends(get_estimate_service),
):
    invoice = svc.apply_pricing(invoice_id, tier_id=body.tier_id, per_guest_rate=body.per_guest_rate)
    return invoice_to_out(invoice)


@router.post("/estimates/{invoice_id}/line-items", response_model=InvoiceOut, status_code=201)
def add_line_item(
    invoice_id: int,
    body: LineItemCreate,
    svc: EstimateService = Depends(get_estimate_service),
):
    return invoice_to_out(svc.add_line_item(invoice_id, body))


@router.patch("/estimates/{invoice_id}/line-items/{item_id}", response_model=InvoiceOut)
def update_line_item(
    invoice_id: int,
    item_id: str,
    body: LineItemUpdate,
    svc: EstimateService = Depends(get_estimate_service),
):
    return invoice_to_out(svc.update_line_item(invoice_id, item_id, body))


@router.delete("/estimates/{invoice_id}/line-items/{item_id}", response_model=InvoiceOut)
def remove_line_item(
    invoice_id: int,
    item_id: str,
    svc: EstimateService = Depends(get_estimate_service),
):
    return invoice_to_out(svc.remove_line_item(invoice_id, item_id))


@router.patch("/estimates/{invoice_id}/tax", response_model=InvoiceOut)
def update_tax_settings(
    invoice_id: int,
    body: TaxSettingsUpdate,
    svc: EstimateService = Depends(get_estimate_service),
):
    invoice = svc.update_tax_settings(
        invoice_id,
        tax_rate=body.tax_rate,
        is_government_contract=body.is_government_contract,
    )
    return invoice_to_out(invoice)


@router.post("/estimates/{invoice_id}/send", response_model=InvoiceOut)
def send_estimate(
    invoice_id: int,
    body: Optional[SendEstimateRequest] = None,
    svc: EstimateService = Depends(get_estimate_service),
):
    body = body or SendEstimateRequest()
    invoice = svc.send_estimate(invoice_id, recipient=body.recipient, message=body.message)
    return invoice_to_out(invoice)


@router.post("/estimates/{invoice_id}/pdf", response_model=FunctionResultOut)
def request_pdf(invoice_id: int, svc: EstimateService = Depends(get_estimate_service)):
    result = svc.request_pdf(invoice_id)
    return FunctionResultOut(success=result.success, function=result.function, data=result.data, dev=result.dev)


@router.post("/estimates/{invoice_id}/approve", response_model=InvoiceOut)
def approve_estimate(
    invoice_id: int,
    body: Optional[ApproveRequest] = None,
    svc: EstimateService = Depends(get_estimate_service),
):
    body = body or ApproveRequest()
    return invoice_to_out(svc.approve_estimate(invoice_id, role=body.role))


@router.post("/estimates/{invoice_id}/status", response_model=InvoiceOut)
def set_estimate_status(
    invoice_id: int,
    body: StatusUpdate,
    svc: EstimateService = Depends(get_estimate_service),
):
    invoice = svc.set_invoice_status(invoice_id, body.status, role=body.role, reason=body.reason)
    return invoice_to_out(invoice)


@router.get("/pricing-tiers", response_model=List[PricingTierOut])
def list_pricing_tiers():
    return [
        PricingTierOut(
            id=t.id,
            label=t.label,
            per_guest_rate=t.per_guest_rate,
            description=t.description,
        )
        for t in load_pricing_tiers()
    ]
