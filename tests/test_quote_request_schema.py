from datetime import date

import pytest
from pydantic import ValidationError

from catering.schemas.quote_request import QuoteRequest, QuoteRequestCreate, parse_selection


def test_parse_selection_accepts_common_shapes():
    assert parse_selection(None) == []
    assert parse_selection("") == []
    assert parse_selection('["ribs", "brisket"]') == ["ribs", "brisket"]
    assert parse_selection("ribs, brisket ,") == ["ribs", "brisket"]
    assert parse_selection([{"id": "ribs"}, {"name": "brisket"}, " "]) == ["ribs", "brisket"]


def test_parse_selection_rejects_garbage():
    with pytest.raises(ValueError):
        parse_selection("[not json")
    with pytest.raises(ValueError):
        parse_selection(42)
    with pytest.raises(ValueError):
        parse_selection([1, 2])


def test_legacy_protein_columns_are_folded():
    quote = QuoteRequest.model_validate(
        {"primary_protein": "brisket", "secondary_protein": "ribs", "guest_count": None}
    )
    assert quote.proteins == ["brisket", "ribs"]
    assert quote.guest_count == 0


def test_government_detection():
    assert QuoteRequest(event_type="government").is_government
    assert QuoteRequest(po_number="PO-7781").is_government
    assert QuoteRequest(compliance_level="federal").is_government
    assert not QuoteRequest(event_type="wedding").is_government


def _intake(**kw):
    payload = dict(
        contact_name="Ana Ruiz",
        email="ana@example.com",
        phone="843-555-0199",
        event_name="Ruiz Wedding",
        event_type="wedding",
        event_date=date(2026, 9, 12),
        location="Magnolia Hall",
        guest_count=120,
        service_type="full-service",
    )
    payload.update(kw)
    return payload


def test_intake_payload_validates():
    data = QuoteRequestCreate(**_intake(proteins="ribs,brisket"))
    assert data.proteins == ["ribs", "brisket"]
    assert data.service_type.value == "full-service"


@pytest.mark.parametrize(
    "override",
    [
        {"email": "not-an-email"},
        {"guest_count": 0},
        {"service_type": "catapult"},
        {"unexpected": True},
    ],
)
def test_intake_payload_rejects_bad_input(override):
    with pytest.raises(ValidationError):
        QuoteRequestCreate(**_intake(**override))
