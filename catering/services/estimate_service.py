# catering/services/estimate_service.py
from __future__ import annotations

import uuid
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import List, Optional

from catering.core.logging_config import logger
from catering.core.settings import settings
from catering.errors import (
    EstimateLockedError,
    InvalidTransitionError,
    NotFoundError,
    PricingError,
)
from catering.estimates.line_items import generate_line_items
from catering.estimates.pricing import apply_flat_rate, calculate_totals, reprice_item
from catering.estimates.pricing_tiers import get_tier
from catering.models.invoice import InvoiceLineItemORM, InvoiceORM
from catering.models.quote_request import QuoteRequestORM
from catering.observability.metrics import estimates_generated_total, pricing_applied_total
from catering.repositories.invoices import InvoiceRepository, line_item_from_orm
from catering.repositories.quotes import QuoteRepository, quote_from_orm
from catering.schemas.invoice import LineItem, LineItemCreate, LineItemUpdate
from catering.services.email_render import render_estimate_email
from catering.services.functions_client import (
    GENERATE_PDF,
    SEND_INVOICE_EMAIL,
    FunctionResult,
    FunctionsClient,
)
from catering.workflow.status import QUOTE_STATUSES, transition

# Forward path a quote walks while its estimate is prepared and accepted
QUOTE_FLOW = QUOTE_STATUSES[: QUOTE_STATUSES.index("approved") + 1]


def invoice_number(invoice_id: int, year: Optional[int] = None) -> str:
    year = year or datetime.now(timezone.utc).year
    return f"STE-{year}-{invoice_id:06d}"


def is_editable(invoice: InvoiceORM) -> bool:
    return invoice.is_draft and invoice.status == "draft"


class EstimateService:
    """
    Turns quote requests into priced draft estimates and walks them to approval.

    Both repositories must share one Session: quote and invoice changes are
    committed together by InvoiceRepository.save().
    """

    def __init__(
        self,
        quotes: QuoteRepository,
        invoices: InvoiceRepository,
        functions: FunctionsClient,
    ):
        self.quotes = quotes
        self.invoices = invoices
        self.functions = functions

    # ---------- lookups ----------

    def get_quote(self, quote_id: int) -> QuoteRequestORM:
        quote = self.quotes.get(quote_id)
        if not quote:
            raise NotFoundError("Quote request", quote_id)
        return quote

    def get_invoice(self, invoice_id: int) -> InvoiceORM:
        invoice = self.invoices.get(invoice_id)
        if not invoice:
            raise NotFoundError("Estimate", invoice_id)
        return invoice

    def _quote_for(self, invoice: InvoiceORM) -> QuoteRequestORM:
        return self.get_quote(invoice.quote_request_id)

    def _editable_invoice(self, invoice_id: int) -> InvoiceORM:
        invoice = self.get_invoice(invoice_id)
        if not is_editable(invoice):
            raise EstimateLockedError(
                f"Estimate {invoice.id} is {invoice.status} and can no longer be edited"
            )
        return invoice

    def _line(self, invoice: InvoiceORM, line_key: str) -> InvoiceLineItemORM:
        for row in invoice.line_items:
            if row.line_key == line_key:
                return row
        raise NotFoundError("Line item", line_key)

    # ---------- helpers ----------

    def _recompute_totals(self, invoice: InvoiceORM) -> None:
        totals = calculate_totals(
            [line_item_from_orm(li) for li in invoice.line_items],
            invoice.tax_rate,
            invoice.is_government_contract,
        )
        invoice.subtotal = totals.subtotal
        invoice.tax_amount = totals.tax_amount
        invoice.total_amount = totals.total

    def _advance_quote(self, quote: QuoteRequestORM, target: str, role: str = "admin") -> None:
        """Step the quote forward through QUOTE_FLOW until it reaches target."""
        if quote.status == "cancelled":
            raise InvalidTransitionError("quote", quote.status, target, role)
        if quote.status not in QUOTE_FLOW:
            # already past the estimate stage (paid, confirmed, ...)
            return
        current = QUOTE_FLOW.index(quote.status)
        goal = QUOTE_FLOW.index(target)
        for status in QUOTE_FLOW[current + 1 : goal + 1]:
            transition(quote, "quote", status, log=self.quotes, role=role)

    # ---------- operations ----------

    def preview_line_items(self, quote_id: int) -> List[LineItem]:
        return generate_line_items(quote_from_orm(self.get_quote(quote_id)))

    def create_estimate(
        self,
        quote_id: int,
        tax_rate: Optional[Decimal] = None,
        regenerate: bool = False,
    ) -> InvoiceORM:
        quote = self.get_quote(quote_id)
        existing = self.invoices.latest_for_quote(quote_id)

        if existing and not regenerate:
            estimates_generated_total.labels(result="existing").inc()
            logger.info("estimate_exists", quote_id=quote_id, invoice_id=existing.id)
            return existing

        request = quote_from_orm(quote)
        items = generate_line_items(request)

        if existing:
            if not is_editable(existing):
                raise EstimateLockedError(
                    f"Estimate {existing.id} is {existing.status} and cannot be regenerated"
                )
            invoice = existing
            if tax_rate is not None:
                invoice.tax_rate = tax_rate
            result = "regenerated"
        else:
            invoice = self.invoices.create(
                quote_id,
                status="draft",
                is_draft=True,
                tax_rate=settings.DEFAULT_TAX_RATE if tax_rate is None else tax_rate,
                is_government_contract=request.is_government,
                due_date=date.today() + timedelta(days=settings.INVOICE_DUE_DAYS),
            )
            invoice.invoice_number = invoice_number(invoice.id)
            result = "created"

        self.invoices.replace_line_items(invoice, items)
        self._recompute_totals(invoice)
        self._advance_quote(quote, "under_review", role="system")

        self.invoices.save(invoice)
        estimates_generated_total.labels(result=result).inc()
        logger.info(
            "estimate_generated",
            quote_id=quote_id,
            invoice_id=invoice.id,
            line_items=len(items),
            result=result,
        )
        return invoice

    def apply_pricing(
        self,
        invoice_id: int,
        tier_id: Optional[str] = None,
        per_guest_rate: Optional[int] = None,
    ) -> InvoiceORM:
        if (tier_id is None) == (per_guest_rate is None):
            raise PricingError("provide exactly one of tier_id or per_guest_rate")

        if tier_id is not None:
            try:
                per_guest_rate = get_tier(tier_id).per_guest_rate
            except KeyError as e:
                raise NotFoundError("Pricing tier", tier_id) from e
        if per_guest_rate < 0:
            raise PricingError("per_guest_rate must be >= 0")

        invoice = self._editable_invoice(invoice_id)
        quote = self._quote_for(invoice)

        rows = list(invoice.line_items)
        result = apply_flat_rate(
            [line_item_from_orm(li) for li in rows],
            per_guest_rate,
            quote.guest_count,
            invoice.tax_rate,
            invoice.is_government_contract,
        )
        for row, priced in zip(rows, result.line_items):
            row.unit_price = priced.unit_price
            row.total_price = priced.total_price
            row.override_reason = None

        invoice.subtotal = result.subtotal
        invoice.tax_amount = result.tax_amount
        invoice.total_amount = result.total

        self._advance_quote(quote, "quoted")
        self.invoices.save(invoice)

        pricing_applied_total.labels(source="tier" if tier_id else "custom").inc()
        logger.info(
            "pricing_applied",
            invoice_id=invoice.id,
            tier_id=tier_id,
            per_guest_rate=per_guest_rate,
            guest_count=quote.guest_count,
            total=invoice.total_amount,
        )
        return invoice

    def update_line_item(self, invoice_id: int, line_key: str, changes: LineItemUpdate) -> InvoiceORM:
        invoice = self._editable_invoice(invoice_id)
        row = self._line(invoice, line_key)

        priced = reprice_item(
            line_item_from_orm(row),
            unit_price=changes.unit_price,
            quantity=changes.quantity,
        )
        row.unit_price = priced.unit_price
        row.quantity = priced.quantity
        row.total_price = priced.total_price
        if changes.title is not None:
            row.title = changes.title
        if changes.description is not None:
            row.description = changes.description
        if changes.override_reason is not None:
            row.override_reason = changes.override_reason

        self._recompute_totals(invoice)
        self.invoices.save(invoice)
        logger.info("line_item_updated", invoice_id=invoice.id, line_key=line_key)
        return invoice

    def add_line_item(self, invoice_id: int, data: LineItemCreate) -> InvoiceORM:
        invoice = self._editable_invoice(invoice_id)
        item = LineItem(
            id=f"custom-{uuid.uuid4().hex[:8]}",
            title=data.title,
            description=data.description,
            quantity=data.quantity,
            unit_price=data.unit_price,
            total_price=data.unit_price * data.quantity,
            category=data.category,
            metadata={"source": "admin"},
        )
        self.invoices.append_line_item(invoice, item)
        self._recompute_totals(invoice)
        self.invoices.save(invoice)
        logger.info("line_item_added", invoice_id=invoice.id, line_key=item.id)
        return invoice

    def remove_line_item(self, invoice_id: int, line_key: str) -> InvoiceORM:
        invoice = self._editable_invoice(invoice_id)
        self.invoices.remove_line_item(invoice, self._line(invoice, line_key))
        self._recompute_totals(invoice)
        self.invoices.save(invoice)
        logger.info("line_item_removed", invoice_id=invoice.id, line_key=line_key)
        return invoice

    def update_tax_settings(
        self,
        invoice_id: int,
        tax_rate: Optional[Decimal] = None,
        is_government_contract: Optional[bool] = None,
    ) -> InvoiceORM:
        invoice = self._editable_invoice(invoice_id)
        if tax_rate is not None:
            if tax_rate < 0 or tax_rate > 100:
                raise PricingError("tax_rate must be between 0 and 100")
            invoice.tax_rate = tax_rate
        if is_government_contract is not None:
            invoice.is_government_contract = is_government_contract
        self._recompute_totals(invoice)
        self.invoices.save(invoice)
        return invoice

    def send_estimate(
        self,
        invoice_id: int,
        recipient: Optional[str] = None,
        message: Optional[str] = None,
    ) -> InvoiceORM:
        invoice = self.get_invoice(invoice_id)
        if invoice.status != "draft":
            raise InvalidTransitionError("invoice", invoice.status, "sent")
        if invoice.total_amount <= 0:
            raise PricingError("cannot send an estimate with a zero total")

        quote = self._quote_for(invoice)
        if quote.status == "cancelled":
            raise InvalidTransitionError("quote", quote.status, "estimated")
        to = recipient or quote.email
        html = render_estimate_email(
            customer_name=quote.contact_name,
            event_name=quote.event_name,
            event_date=quote.event_date.isoformat() if quote.event_date else None,
            invoice_number=invoice.invoice_number,
            line_items=[line_item_from_orm(li) for li in invoice.line_items],
            subtotal=invoice.subtotal,
            tax_amount=invoice.tax_amount,
            total=invoice.total_amount,
            company_name=settings.COMPANY_NAME,
            public_url=f"{settings.PUBLIC_BASE_URL}/estimates/{invoice.id}",
            message=message,
        )

        self.functions.invoke(
            SEND_INVOICE_EMAIL,
            {
                "invoiceId": invoice.id,
                "quoteId": quote.id,
                "to": to,
                "subject": f"Your estimate from {settings.COMPANY_NAME}: {quote.event_name}",
                "html": html,
            },
        )

        transition(invoice, "invoice", "sent", log=self.invoices, role="admin")
        invoice.sent_at = datetime.now(timezone.utc)
        self._advance_quote(quote, "estimated")
        self.invoices.save(invoice)

        logger.info("estimate_sent", invoice_id=invoice.id, quote_id=quote.id, to=to)
        return invoice

    def request_pdf(self, invoice_id: int) -> FunctionResult:
        invoice = self.get_invoice(invoice_id)
        return self.functions.invoke(
            GENERATE_PDF,
            {
                "type": "estimate" if invoice.is_draft else "invoice",
                "quoteId": invoice.quote_request_id,
                "invoiceId": invoice.id,
            },
        )

    def approve_estimate(self, invoice_id: int, role: str = "admin") -> InvoiceORM:
        invoice = self.get_invoice(invoice_id)
        quote = self._quote_for(invoice)

        transition(invoice, "invoice", "approved", log=self.invoices, role=role)
        invoice.is_draft = False
        self._advance_quote(quote, "approved", role=role)
        self.invoices.save(invoice)

        logger.info("estimate_approved", invoice_id=invoice.id, quote_id=quote.id, role=role)
        return invoice

    def set_invoice_status(
        self,
        invoice_id: int,
        status: str,
        role: str = "admin",
        reason: Optional[str] = None,
    ) -> InvoiceORM:
        invoice = self.get_invoice(invoice_id)
        if invoice.status == status:
            return invoice

        # sending and approval carry their own checks and side effects
        if status == "sent":
            if role != "admin":
                raise InvalidTransitionError("invoice", invoice.status, status, role)
            return self.send_estimate(invoice_id)
        if status == "approved":
            return self.approve_estimate(invoice_id, role=role)

        transition(invoice, "invoice", status, log=self.invoices, role=role, reason=reason)
        return self.invoices.save(invoice)

    def set_quote_status(
        self,
        quote_id: int,
        status: str,
        role: str = "admin",
        reason: Optional[str] = None,
    ) -> QuoteRequestORM:
        quote = self.get_quote(quote_id)
        transition(quote, "quote", status, log=self.quotes, role=role, reason=reason)
        return self.quotes.save(quote)
