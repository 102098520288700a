# catering/services/reporting.py
from __future__ import annotations

from typing import Dict, Iterable

from sqlalchemy import func
from sqlalchemy.orm import Session

from catering.models.contract import ContractORM
from catering.models.invoice import InvoiceORM
from catering.models.quote_request import QuoteRequestORM
from catering.schemas.report import ReportSummary

PIPELINE_STATUSES = ("sent", "viewed", "approved", "payment_pending")
OUTSTANDING_STATUSES = ("partially_paid", "overdue")
SENT_OR_LATER = ("sent", "viewed", "approved", "payment_pending", "partially_paid", "paid", "overdue")
APPROVED_OR_LATER = ("approved", "payment_pending", "partially_paid", "paid", "overdue")


def _sum_totals(db: Session, statuses: Iterable[str]) -> int:
    total = (
        db.query(func.coalesce(func.sum(InvoiceORM.total_amount), 0))
        .filter(InvoiceORM.status.in_(tuple(statuses)))
        .scalar()
    )
    return int(total or 0)


def _counts(rows) -> Dict[str, int]:
    return {str(key): int(n) for key, n in rows}


def build_summary(db: Session) -> ReportSummary:
    quotes_by_status = _counts(
        db.query(QuoteRequestORM.status, func.count(QuoteRequestORM.id))
        .group_by(QuoteRequestORM.status)
        .all()
    )
    invoices_by_status = _counts(
        db.query(InvoiceORM.status, func.count(InvoiceORM.id)).group_by(InvoiceORM.status).all()
    )
    quotes_by_event_type = _counts(
        db.query(
            func.coalesce(QuoteRequestORM.event_type, "unknown"),
            func.count(QuoteRequestORM.id),
        )
        .group_by(func.coalesce(QuoteRequestORM.event_type, "unknown"))
        .all()
    )
    avg_guests = db.query(func.avg(QuoteRequestORM.guest_count)).scalar()

    sent = sum(invoices_by_status.get(s, 0) for s in SENT_OR_LATER)
    approved = sum(invoices_by_status.get(s, 0) for s in APPROVED_OR_LATER)

    signed = (
        db.query(func.count(ContractORM.id)).filter(ContractORM.status == "signed").scalar() or 0
    )

    return ReportSummary(
        quotes_by_status=quotes_by_status,
        invoices_by_status=invoices_by_status,
        quotes_by_event_type=quotes_by_event_type,
        average_guest_count=round(float(avg_guests or 0), 1),
        pipeline_value=_sum_totals(db, PIPELINE_STATUSES),
        collected_revenue=_sum_totals(db, ("paid",)),
        outstanding_balance=_sum_totals(db, OUTSTANDING_STATUSES),
        conversion_rate=round(approved / sent, 4) if sent else 0.0,
        signed_contracts=int(signed),
    )
