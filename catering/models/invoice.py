# catering/models/invoice.py
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catering.db import Base


class InvoiceORM(Base):
    __tablename__ = "invoices"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    quote_request_id: Mapped[int] = mapped_column(
        ForeignKey("quote_requests.id", ondelete="CASCADE"), index=True, nullable=False
    )
    invoice_number: Mapped[Optional[str]] = mapped_column(String(32), unique=True, nullable=True)

    # draft|pending_review|sent|viewed|approved|payment_pending|partially_paid|paid|overdue|cancelled
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="draft", index=True)
    # True while this is an estimate, False once it became the final invoice
    is_draft: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # amounts in cents
    subtotal: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    tax_amount: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_amount: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    tax_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False, default=Decimal("0.00"))
    is_government_contract: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    due_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    sent_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    quote_request: Mapped["QuoteRequestORM"] = relationship(
        "QuoteRequestORM", back_populates="invoices"
    )
    line_items: Mapped[List["InvoiceLineItemORM"]] = relationship(
        "InvoiceLineItemORM",
        back_populates="invoice",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="InvoiceLineItemORM.sort_order",
    )
    contracts: Mapped[List["ContractORM"]] = relationship(
        "ContractORM",
        back_populates="invoice",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("subtotal >= 0", name="ck_invoices_subtotal_positive"),
        CheckConstraint("tax_amount >= 0", name="ck_invoices_tax_positive"),
    )

    def __repr__(self) -> str:
        return (
            f"<Invoice id={self.id} quote={self.quote_request_id} "
            f"status={self.status} total={self.total_amount}>"
        )


class InvoiceLineItemORM(Base):
    __tablename__ = "invoice_line_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    invoice_id: Mapped[int] = mapped_column(
        ForeignKey("invoices.id", ondelete="CASCADE"), index=True, nullable=False
    )
    # stable id from the generator ("package", "addon-cocktail_hour") or "custom-<n>"
    line_key: Mapped[str] = mapped_column(String(64), nullable=False)

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    unit_price: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_price: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # "metadata" is reserved on declarative classes
    item_metadata: Mapped[Optional[dict]] = mapped_column("metadata", JSON, nullable=True)
    override_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    invoice: Mapped["InvoiceORM"] = relationship("InvoiceORM", back_populates="line_items")

    __table_args__ = (
        UniqueConstraint("invoice_id", "line_key", name="uix_invoice_line_key"),
        CheckConstraint("quantity >= 0", name="ck_line_items_quantity_positive"),
    )

    def __repr__(self) -> str:
        return f"<InvoiceLineItem invoice={self.invoice_id} key={self.line_key!r} total={self.total_price}>"
