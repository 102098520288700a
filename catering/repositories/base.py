# catering/repositories/base.py
from __future__ import annotations

from typing import Optional, Protocol, TypeVar

from sqlalchemy.orm import Session

from catering.models.status_change import StatusChangeORM

T = TypeVar("T")


class StatusLog(Protocol):
    def record_status_change(
        self,
        entity_type: str,
        entity_id: int,
        previous_status: Optional[str],
        new_status: str,
        changed_by: str,
        reason: Optional[str] = None,
    ) -> None: ...


class SqlRepository:
    """Shared plumbing: one Session, commit + refresh on save."""

    def __init__(self, db: Session):
        self.db = db

    def save(self, obj: T) -> T:
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def record_status_change(
        self,
        entity_type: str,
        entity_id: int,
        previous_status: Optional[str],
        new_status: str,
        changed_by: str,
        reason: Optional[str] = None,
    ) -> None:
        # flushed together with the entity on the next save()
        self.db.add(
            StatusChangeORM(
                entity_type=entity_type,
                entity_id=entity_id,
                previous_status=previous_status,
                new_status=new_status,
                changed_by=changed_by,
                reason=reason,
            )
        )

    def status_history(self, entity_type: str, entity_id: int) -> list[StatusChangeORM]:
        return (
            self.db.query(StatusChangeORM)
            .filter(
                StatusChangeORM.entity_type == entity_type,
                StatusChangeORM.entity_id == entity_id,
            )
            .order_by(StatusChangeORM.id.asc())
            .all()
        )
