from catering.services.reporting import build_summary


def test_empty_database(db):
    summary = build_summary(db)
    assert summary.quotes_by_status == {}
    assert summary.conversion_rate == 0.0
    assert summary.pipeline_value == 0
    assert summary.average_guest_count == 0.0


def test_summary_numbers(db, estimates, contract_service, make_quote):
    # one approved + signed, one sent, one untouched draft, one bare quote
    q1 = make_quote(guest_count=40, event_type="wedding")
    inv1 = estimates.create_estimate(q1.id)
    estimates.apply_pricing(inv1.id, per_guest_rate=1000)
    estimates.send_estimate(inv1.id)
    estimates.approve_estimate(inv1.id)
    contract = contract_service.create_contract(inv1.id)
    contract_service.mark_contract_signed(contract.id, signed_by="A. Client")

    q2 = make_quote(guest_count=60, event_type="wedding")
    inv2 = estimates.create_estimate(q2.id)
    estimates.apply_pricing(inv2.id, per_guest_rate=1000)
    estimates.send_estimate(inv2.id)

    q3 = make_quote(guest_count=20, event_type="corporate")
    estimates.create_estimate(q3.id)

    make_quote(guest_count=80, event_type=None)

    summary = build_summary(db)

    assert summary.quotes_by_status == {"approved": 1, "estimated": 1, "under_review": 1, "pending": 1}
    assert summary.invoices_by_status == {"approved": 1, "sent": 1, "draft": 1}
    assert summary.quotes_by_event_type == {"wedding": 2, "corporate": 1, "unknown": 1}
    assert summary.average_guest_count == 50.0
    assert summary.pipeline_value == inv1.total_amount + inv2.total_amount
    assert summary.collected_revenue == 0
    assert summary.outstanding_balance == 0
    assert summary.conversion_rate == 0.5
    assert summary.signed_contracts == 1
