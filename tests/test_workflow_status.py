import pytest

from catering.errors import InvalidTransitionError
from catering.workflow.status import is_valid_transition, transition


class _Entity:
    def __init__(self, status, id=1):
        self.id = id
        self.status = status


class _Log:
    def __init__(self):
        self.rows = []

    def record_status_change(self, **kw):
        self.rows.append(kw)


@pytest.mark.parametrize(
    "entity,current,new,role,expected",
    [
        ("quote", "pending", "under_review", "system", True),
        ("quote", "under_review", "quoted", "system", False),
        ("quote", "estimated", "approved", "customer", True),
        ("quote", "awaiting_payment", "paid", "admin", False),
        ("quote", "completed", "cancelled", "admin", True),
        ("quote", "pending", "cancelled", "customer", False),
        ("quote", "pending", "bogus", "admin", False),
        ("invoice", "draft", "sent", "admin", True),
        ("invoice", "draft", "approved", "admin", False),
        ("invoice", "sent", "approved", "customer", True),
        ("invoice", "payment_pending", "paid", "system", True),
        ("invoice", "paid", "overdue", "system", True),
        ("contract", "generated", "signed", "customer", True),
        ("contract", "signed", "sent", "admin", False),
    ],
)
def test_transition_table(entity, current, new, role, expected):
    assert is_valid_transition(entity, current, new, role) is expected


def test_unknown_entity_type():
    with pytest.raises(ValueError):
        is_valid_transition("lead", "new", "won")


def test_transition_updates_and_logs():
    entity, log = _Entity("draft", id=7), _Log()

    assert transition(entity, "invoice", "sent", log=log, reason="first send") is True
    assert entity.status == "sent"
    assert log.rows == [
        {
            "entity_type": "invoice",
            "entity_id": 7,
            "previous_status": "draft",
            "new_status": "sent",
            "changed_by": "admin",
            "reason": "first send",
        }
    ]


def test_same_status_is_a_noop():
    entity, log = _Entity("quoted"), _Log()
    assert transition(entity, "quote", "quoted", log=log) is False
    assert log.rows == []


def test_illegal_transition_raises_and_leaves_entity():
    entity, log = _Entity("pending"), _Log()
    with pytest.raises(InvalidTransitionError) as exc:
        transition(entity, "quote", "paid", log=log, role="admin")
    assert exc.value.current == "pending"
    assert entity.status == "pending"
    assert log.rows == []
