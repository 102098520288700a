# catering/models/quote_request.py
from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import JSON, Boolean, Date, DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catering.db import Base


class QuoteRequestORM(Base):
    __tablename__ = "quote_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # contact
    contact_name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), index=True, nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # event
    event_name: Mapped[str] = mapped_column(String(200), nullable=False)
    event_type: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    event_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    start_time: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    serving_start_time: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    end_time: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(300), nullable=True)
    guest_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    service_type: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    # menu selections (lists of menu item ids)
    proteins: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    sides: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    appetizers: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    desserts: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    drinks: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)

    # equipment / add-ons
    chafers_requested: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    linens_requested: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    wait_staff_requested: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    bussing_tables_needed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    serving_utensils_requested: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    plates_requested: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    cups_requested: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    napkins_requested: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    ice_requested: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # dietary
    guest_count_with_restrictions: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    dietary_restrictions: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    vegetarian_entrees: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)

    # event-type specific
    ceremony_included: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    cocktail_hour: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    compliance_level: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    po_number: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    special_requests: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # pending|under_review|quoted|estimated|approved|awaiting_payment|paid|confirmed|in_progress|completed|cancelled
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="pending", index=True)

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

    invoices: Mapped[List["InvoiceORM"]] = relationship(
        "InvoiceORM",
        back_populates="quote_request",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<QuoteRequest id={self.id} event={self.event_name!r} status={self.status}>"
