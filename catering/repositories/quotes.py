# catering/repositories/quotes.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

from catering.models.quote_request import QuoteRequestORM
from catering.repositories.base import SqlRepository, StatusLog
from catering.schemas.quote_request import QuoteRequest


class QuoteRepository(StatusLog, Protocol):
    def get(self, quote_id: int) -> Optional[QuoteRequestORM]: ...

    def list(self, status: Optional[str] = None, limit: int = 100) -> List[QuoteRequestORM]: ...

    def create(self, data: Dict[str, Any]) -> QuoteRequestORM: ...

    def save(self, quote: QuoteRequestORM) -> QuoteRequestORM: ...


class SqlQuoteRepository(SqlRepository):
    def get(self, quote_id: int) -> Optional[QuoteRequestORM]:
        return self.db.query(QuoteRequestORM).filter(QuoteRequestORM.id == quote_id).first()

    def list(self, status: Optional[str] = None, limit: int = 100) -> List[QuoteRequestORM]:
        q = self.db.query(QuoteRequestORM)
        if status:
            q = q.filter(QuoteRequestORM.status == status)
        return q.order_by(QuoteRequestORM.id.desc()).limit(limit).all()

    def create(self, data: Dict[str, Any]) -> QuoteRequestORM:
        return self.save(QuoteRequestORM(**data))


def quote_from_orm(row: QuoteRequestORM) -> QuoteRequest:
    return QuoteRequest.model_validate(row)
