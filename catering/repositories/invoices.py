# catering/repositories/invoices.py
from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from catering.models.invoice import InvoiceLineItemORM, InvoiceORM
from catering.repositories.base import SqlRepository, StatusLog
from catering.schemas.invoice import InvoiceOut, LineItem, LineItemOut


class InvoiceRepository(StatusLog, Protocol):
    def get(self, invoice_id: int) -> Optional[InvoiceORM]: ...

    def latest_for_quote(self, quote_id: int) -> Optional[InvoiceORM]: ...

    def create(self, quote_id: int, **fields: Any) -> InvoiceORM: ...

    def replace_line_items(self, invoice: InvoiceORM, items: Sequence[LineItem]) -> None: ...

    def append_line_item(self, invoice: InvoiceORM, item: LineItem) -> InvoiceLineItemORM: ...

    def remove_line_item(self, invoice: InvoiceORM, line: InvoiceLineItemORM) -> None: ...

    def save(self, invoice: InvoiceORM) -> InvoiceORM: ...


def _row(item: LineItem, sort_order: int) -> InvoiceLineItemORM:
    return InvoiceLineItemORM(
        line_key=item.id,
        title=item.title,
        description=item.description,
        quantity=item.quantity,
        unit_price=item.unit_price,
        total_price=item.total_price,
        category=item.category,
        sort_order=sort_order,
        item_metadata=item.metadata,
    )


class SqlInvoiceRepository(SqlRepository):
    def get(self, invoice_id: int) -> Optional[InvoiceORM]:
        return self.db.query(InvoiceORM).filter(InvoiceORM.id == invoice_id).first()

    def latest_for_quote(self, quote_id: int) -> Optional[InvoiceORM]:
        return (
            self.db.query(InvoiceORM)
            .filter(InvoiceORM.quote_request_id == quote_id)
            .order_by(InvoiceORM.id.desc())
            .first()
        )

    def create(self, quote_id: int, **fields: Any) -> InvoiceORM:
        invoice = InvoiceORM(quote_request_id=quote_id, **fields)
        self.db.add(invoice)
        self.db.flush()  # need the id for the invoice number
        return invoice

    def replace_line_items(self, invoice: InvoiceORM, items: Sequence[LineItem]) -> None:
        invoice.line_items.clear()
        # delete-orphan rows must be gone before keys are reused
        self.db.flush()
        for idx, item in enumerate(items):
            invoice.line_items.append(_row(item, idx))

    def append_line_item(self, invoice: InvoiceORM, item: LineItem) -> InvoiceLineItemORM:
        next_order = max((li.sort_order for li in invoice.line_items), default=-1) + 1
        row = _row(item, next_order)
        invoice.line_items.append(row)
        return row

    def remove_line_item(self, invoice: InvoiceORM, line: InvoiceLineItemORM) -> None:
        invoice.line_items.remove(line)


# --- ORM -> schema ---


def line_item_from_orm(row: InvoiceLineItemORM) -> LineItemOut:
    return LineItemOut(
        id=row.line_key,
        title=row.title,
        description=row.description or "",
        quantity=row.quantity,
        unit_price=row.unit_price,
        total_price=row.total_price,
        category=row.category,
        metadata=row.item_metadata,
        sort_order=row.sort_order,
        override_reason=row.override_reason,
    )


def invoice_to_out(invoice: InvoiceORM) -> InvoiceOut:
    return InvoiceOut(
        id=invoice.id,
        quote_request_id=invoice.quote_request_id,
        invoice_number=invoice.invoice_number,
        status=invoice.status,
        is_draft=invoice.is_draft,
        subtotal=invoice.subtotal,
        tax_rate=invoice.tax_rate,
        tax_amount=invoice.tax_amount,
        total_amount=invoice.total_amount,
        is_government_contract=invoice.is_government_contract,
        due_date=invoice.due_date,
        sent_at=invoice.sent_at,
        line_items=[line_item_from_orm(li) for li in invoice.line_items],
    )
