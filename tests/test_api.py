from catering.services.functions_client import SEND_INVOICE_EMAIL, SEND_QUOTE_CONFIRMATION

INTAKE = {
    "contact_name": "Jordan Miles",
    "email": "jordan@example.com",
    "phone": "843-555-0100",
    "event_name": "Miles Family Reunion",
    "event_type": "private-party",
    "event_date": "2026-06-20",
    "location": "Riverfront Park, Charleston SC",
    "guest_count": 50,
    "service_type": "full-service",
    "proteins": ["fried-chicken"],
    "sides": ["mac-and-cheese", "collard-greens", "cornbread"],
    "chafers_requested": True,
}


def _submit(client):
    resp = client.post("/quotes", json=INTAKE)
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_metrics_endpoint(client):
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "catering_quotes_received_total" in resp.text


def test_intake_stores_quote_and_sends_confirmation(client, functions):
    resp = client.post("/quotes", json=INTAKE)
    assert resp.status_code == 201
    assert resp.json()["status"] == "pending"
    assert resp.headers["X-Request-ID"]

    name, payload = functions.calls[-1]
    assert name == SEND_QUOTE_CONFIRMATION
    assert payload["to"] == "jordan@example.com"
    assert "Fried Chicken" in payload["html"]


def test_intake_survives_confirmation_failure(client, functions):
    functions.fail_on.add(SEND_QUOTE_CONFIRMATION)
    quote_id = _submit(client)
    assert client.get(f"/admin/quotes/{quote_id}").status_code == 200


def test_intake_validation(client):
    resp = client.post("/quotes", json={**INTAKE, "guest_count": 0})
    assert resp.status_code == 422


def test_admin_quote_views(client):
    quote_id = _submit(client)

    listing = client.get("/admin/quotes").json()
    assert [q["id"] for q in listing] == [quote_id]

    detail = client.get(f"/admin/quotes/{quote_id}").json()
    assert detail["proteins"] == ["fried-chicken"]

    preview = client.get(f"/admin/quotes/{quote_id}/line-items/preview").json()
    assert [i["title"] for i in preview][0] == "Private Party Catering Package"

    assert client.get("/admin/quotes/999").status_code == 404


def test_estimate_flow(client, functions):
    quote_id = _submit(client)

    est = client.post(f"/admin/quotes/{quote_id}/estimate").json()
    invoice_id = est["id"]
    assert est["status"] == "draft"
    assert [li["id"] for li in est["line_items"]] == ["package", "sides-additional", "service", "supplies"]

    tiers = client.get("/admin/pricing-tiers").json()
    assert tiers[0]["id"] == "essential"

    priced = client.post(f"/admin/estimates/{invoice_id}/pricing", json={"tier_id": "essential"}).json()
    assert priced["subtotal"] > 0
    assert priced["total_amount"] == priced["subtotal"] + priced["tax_amount"]

    resp = client.patch(
        f"/admin/estimates/{invoice_id}/line-items/service",
        json={"unit_price": 20000, "override_reason": "staff minimum"},
    )
    assert resp.status_code == 200
    service = next(li for li in resp.json()["line_items"] if li["id"] == "service")
    assert service["total_price"] == 20000
    assert service["override_reason"] == "staff minimum"

    resp = client.post(
        f"/admin/estimates/{invoice_id}/line-items",
        json={"title": "Dessert table setup", "unit_price": 5000},
    )
    assert resp.status_code == 201
    custom_id = resp.json()["line_items"][-1]["id"]
    resp = client.delete(f"/admin/estimates/{invoice_id}/line-items/{custom_id}")
    assert custom_id not in [li["id"] for li in resp.json()["line_items"]]

    resp = client.patch(f"/admin/estimates/{invoice_id}/tax", json={"tax_rate": "6.5"})
    assert resp.json()["tax_rate"] in ("6.5", "6.50")

    pdf = client.post(f"/admin/estimates/{invoice_id}/pdf").json()
    assert pdf["function"] == "generate-pdf-document"

    sent = client.post(f"/admin/estimates/{invoice_id}/send", json={"message": "Thanks!"}).json()
    assert sent["status"] == "sent"
    assert SEND_INVOICE_EMAIL in functions.names()

    # locked once sent
    resp = client.post(f"/admin/estimates/{invoice_id}/pricing", json={"per_guest_rate": 100})
    assert resp.status_code == 409

    approved = client.post(f"/admin/estimates/{invoice_id}/approve", json={"role": "customer"}).json()
    assert approved["status"] == "approved"
    assert approved["is_draft"] is False

    contract = client.post(f"/admin/estimates/{invoice_id}/contract")
    assert contract.status_code == 201
    contract_id = contract.json()["id"]
    assert client.post(f"/admin/contracts/{contract_id}/sent").json()["status"] == "sent"
    signed = client.post(f"/admin/contracts/{contract_id}/signed", json={"signed_by": "Jordan Miles"})
    assert signed.json()["status"] == "signed"

    summary = client.get("/admin/reports/summary").json()
    assert summary["signed_contracts"] == 1
    assert summary["conversion_rate"] == 1.0


def test_pricing_request_needs_exactly_one_option(client):
    quote_id = _submit(client)
    invoice_id = client.post(f"/admin/quotes/{quote_id}/estimate").json()["id"]
    resp = client.post(f"/admin/estimates/{invoice_id}/pricing", json={})
    assert resp.status_code == 422


def test_zero_total_send_is_rejected(client):
    quote_id = _submit(client)
    invoice_id = client.post(f"/admin/quotes/{quote_id}/estimate").json()["id"]
    assert client.post(f"/admin/estimates/{invoice_id}/send").status_code == 422


def test_illegal_status_change(client):
    quote_id = _submit(client)
    invoice_id = client.post(f"/admin/quotes/{quote_id}/estimate").json()["id"]
    resp = client.post(f"/admin/estimates/{invoice_id}/status", json={"status": "paid"})
    assert resp.status_code == 409
    assert resp.json()["requested"] == "paid"


def test_function_failure_maps_to_502(client, functions):
    quote_id = _submit(client)
    invoice_id = client.post(f"/admin/quotes/{quote_id}/estimate").json()["id"]
    functions.fail_on.add("generate-pdf-document")
    resp = client.post(f"/admin/estimates/{invoice_id}/pdf")
    assert resp.status_code == 502
    assert resp.json()["function"] == "generate-pdf-document"


def test_status_endpoint_applies_send_and_approve_rules(client, functions):
    quote_id = _submit(client)
    invoice_id = client.post(f"/admin/quotes/{quote_id}/estimate").json()["id"]

    resp = client.post(f"/admin/estimates/{invoice_id}/status", json={"status": "sent"})
    assert resp.status_code == 422
    assert SEND_INVOICE_EMAIL not in functions.names()

    resp = client.post(f"/admin/estimates/{invoice_id}/status", json={"status": "approved"})
    assert resp.status_code == 409
    estimate = client.get(f"/admin/estimates/{invoice_id}").json()
    assert estimate["status"] == "draft"
    assert estimate["is_draft"] is True


def test_status_endpoint_sends_and_approves_like_dedicated_routes(client, functions):
    quote_id = _submit(client)
    invoice_id = client.post(f"/admin/quotes/{quote_id}/estimate").json()["id"]
    client.post(f"/admin/estimates/{invoice_id}/pricing", json={"tier_id": "classic"})

    sent = client.post(f"/admin/estimates/{invoice_id}/status", json={"status": "sent"}).json()
    assert sent["status"] == "sent"
    assert sent["sent_at"] is not None
    assert SEND_INVOICE_EMAIL in functions.names()

    approved = client.post(f"/admin/estimates/{invoice_id}/status", json={"status": "approved"}).json()
    assert approved["status"] == "approved"
    assert approved["is_draft"] is False
    assert client.get(f"/admin/quotes/{quote_id}").json()["status"] == "approved"


def test_intake_without_event_type_gets_plain_package_title(client):
    payload = {k: v for k, v in INTAKE.items() if k != "event_type"}
    quote_id = client.post("/quotes", json=payload).json()["id"]
    preview = client.get(f"/admin/quotes/{quote_id}/line-items/preview").json()
    assert preview[0]["title"] == "Catering Package"
