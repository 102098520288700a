# catering/workflow/status.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Literal, Optional, Protocol, Tuple

from catering.core.logging_config import logger
from catering.errors import InvalidTransitionError
from catering.repositories.base import StatusLog

Role = Literal["admin", "customer", "system"]
EntityType = Literal["quote", "invoice", "contract"]

ANY = "*"

QUOTE_STATUSES: Tuple[str, ...] = (
    "pending",
    "under_review",
    "quoted",
    "estimated",
    "approved",
    "awaiting_payment",
    "paid",
    "confirmed",
    "in_progress",
    "completed",
    "cancelled",
)

INVOICE_STATUSES: Tuple[str, ...] = (
    "draft",
    "pending_review",
    "sent",
    "viewed",
    "approved",
    "payment_pending",
    "partially_paid",
    "paid",
    "overdue",
    "cancelled",
)

CONTRACT_STATUSES: Tuple[str, ...] = ("generated", "sent", "signed", "cancelled")


@dataclass(frozen=True)
class Transition:
    source: str
    target: str
    roles: FrozenSet[str]


def _t(source: str, target: str, *roles: str) -> Transition:
    return Transition(source, target, frozenset(roles))


QUOTE_TRANSITIONS: Tuple[Transition, ...] = (
    _t("pending", "under_review", "admin", "system"),
    _t("under_review", "quoted", "admin"),
    _t("quoted", "estimated", "admin"),
    _t("estimated", "approved", "customer", "admin"),
    _t("approved", "awaiting_payment", "admin", "system"),
    _t("awaiting_payment", "paid", "system"),
    _t("paid", "confirmed", "admin", "system"),
    _t("confirmed", "in_progress", "admin", "system"),
    _t("confirmed", "completed", "admin", "system"),
    _t("in_progress", "completed", "admin", "system"),
    _t(ANY, "cancelled", "admin"),
)

INVOICE_TRANSITIONS: Tuple[Transition, ...] = (
    _t("draft", "sent", "admin"),
    _t("sent", "viewed", "customer", "system"),
    # approval straight from "sent" covers customers who never open the link
    _t("sent", "approved", "customer", "admin"),
    _t("viewed", "approved", "customer", "admin"),
    _t("approved", "payment_pending", "admin", "system"),
    _t("payment_pending", "partially_paid", "system"),
    _t("payment_pending", "paid", "system"),
    _t("partially_paid", "paid", "system"),
    _t("paid", "overdue", "system"),
    _t(ANY, "cancelled", "admin"),
)

CONTRACT_TRANSITIONS: Tuple[Transition, ...] = (
    _t("generated", "sent", "admin", "system"),
    _t("generated", "signed", "customer", "admin"),
    _t("sent", "signed", "customer", "admin"),
    _t(ANY, "cancelled", "admin"),
)

TRANSITIONS: Dict[str, Tuple[Transition, ...]] = {
    "quote": QUOTE_TRANSITIONS,
    "invoice": INVOICE_TRANSITIONS,
    "contract": CONTRACT_TRANSITIONS,
}

STATUSES: Dict[str, Tuple[str, ...]] = {
    "quote": QUOTE_STATUSES,
    "invoice": INVOICE_STATUSES,
    "contract": CONTRACT_STATUSES,
}


class HasStatus(Protocol):
    id: int
    status: str


def is_valid_transition(
    entity_type: str,
    current: str,
    new: str,
    role: str = "admin",
) -> bool:
    if entity_type not in TRANSITIONS:
        raise ValueError(f"unknown entity type: {entity_type}")
    if new not in STATUSES[entity_type]:
        return False
    return any(
        (t.source == current or t.source == ANY) and t.target == new and role in t.roles
        for t in TRANSITIONS[entity_type]
    )


def transition(
    entity: HasStatus,
    entity_type: EntityType,
    new_status: str,
    *,
    log: StatusLog,
    role: Role = "admin",
    reason: Optional[str] = None,
) -> bool:
    """
    Move entity to new_status and record it in the status log.

    Returns False (and records nothing) when the entity already has that
    status. The caller commits.
    """
    current = entity.status
    if current == new_status:
        return False

    if not is_valid_transition(entity_type, current, new_status, role):
        raise InvalidTransitionError(entity_type, current, new_status, role)

    entity.status = new_status
    log.record_status_change(
        entity_type=entity_type,
        entity_id=entity.id,
        previous_status=current,
        new_status=new_status,
        changed_by=role,
        reason=reason,
    )
    logger.info(
        "status_changed",
        entity_type=entity_type,
        entity_id=entity.id,
        previous_status=current,
        new_status=new_status,
        role=role,
    )
    return True
