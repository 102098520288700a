# catering/models/contract.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catering.db import Base


class ContractORM(Base):
    __tablename__ = "contracts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    invoice_id: Mapped[int] = mapped_column(
        ForeignKey("invoices.id", ondelete="CASCADE"), index=True, nullable=False
    )
    contract_type: Mapped[str] = mapped_column(String(32), nullable=False, default="standard")

    # generated|sent|signed|cancelled
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="generated")
    document_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    signed_by: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    signed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    sent_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    invoice: Mapped["InvoiceORM"] = relationship("InvoiceORM", back_populates="contracts")

    def __repr__(self) -> str:
        return f"<Contract id={self.id} invoice={self.invoice_id} status={self.status}>"
