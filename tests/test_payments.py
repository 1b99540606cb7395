import json
import time
from decimal import Decimal
from types import SimpleNamespace

import pytest
import stripe

from influencerflow.config import settings
from influencerflow.services import payments as payment_service


@pytest.fixture()
def contract(api_client, auth_state, deal):
    auth_state.login(deal["brand_user"])
    body = api_client.post("/contracts", json={"offer_id": deal["offer"]["id"]}).json()
    payment = api_client.get("/payments").json()[0]
    return {**deal, "contract": body, "payment": payment}


def test_payment_listing(api_client, auth_state, contract):
    payment = contract["payment"]
    assert payment["status"] == "pending"
    assert payment["status_label"] == "Pending"
    assert Decimal(payment["amount"]) == Decimal("750")
    assert payment["contract"]["id"] == contract["contract"]["id"]
    assert payment["contract"]["offer"]["creator"]["id"] == contract["creator"].id

    auth_state.login(contract["creator_user"])
    listed = api_client.get("/payments").json()
    assert [item["id"] for item in listed] == [payment["id"]]
    assert api_client.get("/payments", params={"status": "paid"}).json() == []


def test_mark_paid_creates_report(api_client, auth_state, contract):
    resp = api_client.patch(f"/payments/{contract['payment']['id']}/mark-paid")
    assert resp.status_code == 200
    body = resp.json()
    assert body["payment"]["status"] == "paid"
    assert body["payment"]["status_label"] == "Paid"
    assert body["payment"]["paid_at"] is not None

    report = body["report"]
    assert report["contract_id"] == contract["contract"]["id"]
    assert 100000 <= report["reach"] < 150000
    assert 150000 <= report["impressions"] < 225000
    assert 5000 <= report["engagement"] < 10000
    assert 500 <= report["clicks"] < 1500
    assert Decimal("3") <= Decimal(report["engagement_rate"]) <= Decimal("6")
    assert Decimal("2") <= Decimal(report["roi"]) <= Decimal("5")

    assert api_client.get("/payments", params={"status": "paid"}).json()[0]["id"] == contract["payment"]["id"]


def test_mark_paid_twice_adds_second_report(api_client, contract):
    payment_id = contract["payment"]["id"]
    assert api_client.patch(f"/payments/{payment_id}/mark-paid").status_code == 200
    assert api_client.patch(f"/payments/{payment_id}/mark-paid").status_code == 200
    assert len(api_client.get(f"/reports/{contract['contract']['id']}").json()) == 2


def test_mark_paid_is_brand_owner_only(api_client, auth_state, contract, make_brand):
    payment_id = contract["payment"]["id"]

    auth_state.login(contract["creator_user"])
    assert api_client.patch(f"/payments/{payment_id}/mark-paid").status_code == 403

    rival, _ = make_brand("Rival Inc")
    auth_state.login(rival)
    assert api_client.patch(f"/payments/{payment_id}/mark-paid").status_code == 404
    assert api_client.patch("/payments/9999/mark-paid").status_code == 404


def test_payment_intent(api_client, contract, monkeypatch):
    calls = []

    def fake_create(**kwargs):
        calls.append(kwargs)
        return SimpleNamespace(id="pi_test_123", client_secret="pi_test_123_secret")

    monkeypatch.setattr(settings, "STRIPE_SECRET_KEY", "sk_test_123")
    monkeypatch.setattr(stripe.PaymentIntent, "create", fake_create)

    resp = api_client.post(f"/payments/{contract['payment']['id']}/intent")
    assert resp.status_code == 200
    assert resp.json() == {"client_secret": "pi_test_123_secret", "payment_intent_id": "pi_test_123"}
    assert calls[0]["amount"] == 75000
    assert calls[0]["currency"] == "usd"
    assert calls[0]["metadata"] == {
        "payment_id": str(contract["payment"]["id"]),
        "brand_id": str(contract["brand"].id),
    }

    listed = api_client.get("/payments").json()[0]
    assert listed["processor_reference"] == "pi_test_123"


def test_payment_intent_without_processor(api_client, contract, monkeypatch):
    monkeypatch.setattr(settings, "STRIPE_SECRET_KEY", None)
    resp = api_client.post(f"/payments/{contract['payment']['id']}/intent")
    assert resp.status_code == 500


def test_payment_intent_processor_failure(api_client, contract, monkeypatch):
    def failing_create(**_kwargs):
        raise stripe.APIConnectionError("network down")

    monkeypatch.setattr(settings, "STRIPE_SECRET_KEY", "sk_test_123")
    monkeypatch.setattr(stripe.PaymentIntent, "create", failing_create)
    resp = api_client.post(f"/payments/{contract['payment']['id']}/intent")
    assert resp.status_code == 502


def test_minor_units_rounding():
    assert payment_service.to_minor_units(Decimal("750")) == 75000
    assert payment_service.to_minor_units(Decimal("19.99")) == 1999
    assert payment_service.to_minor_units(Decimal("0.005")) == 1


def _webhook_event(event_type: str, intent_id: str, payment_id=None) -> dict:
    metadata = {"payment_id": str(payment_id)} if payment_id is not None else {}
    return {"type": event_type, "data": {"object": {"id": intent_id, "metadata": metadata}}}


@pytest.fixture()
def webhook(api_client, monkeypatch):
    monkeypatch.setattr(settings, "STRIPE_WEBHOOK_SECRET", "whsec_test")
    events = []
    monkeypatch.setattr(payment_service, "construct_webhook_event", lambda _payload, _sig: events.pop(0))

    def _send(event: dict):
        events.append(event)
        return api_client.post("/stripe/webhook", content=b"{}", headers={"stripe-signature": "t=1,v1=abc"})

    return _send


def test_webhook_succeeded_marks_paid_once(api_client, contract, webhook):
    payment_id = contract["payment"]["id"]
    event = _webhook_event("payment_intent.succeeded", "pi_hook_1", payment_id)

    assert webhook(event).json() == {"received": True}
    assert api_client.get("/payments").json()[0]["status"] == "paid"

    webhook(_webhook_event("payment_intent.succeeded", "pi_hook_1", payment_id))
    assert len(api_client.get(f"/reports/{contract['contract']['id']}").json()) == 1


def test_webhook_failure_marks_failed(api_client, contract, webhook):
    payment_id = contract["payment"]["id"]
    webhook(_webhook_event("payment_intent.payment_failed", "pi_hook_2", payment_id))
    payment = api_client.get("/payments").json()[0]
    assert payment["status"] == "failed"
    assert payment["status_label"] == "Failed"


def test_webhook_resolves_by_processor_reference(api_client, contract, webhook, monkeypatch):
    monkeypatch.setattr(settings, "STRIPE_SECRET_KEY", "sk_test_123")
    monkeypatch.setattr(
        stripe.PaymentIntent,
        "create",
        lambda **_kwargs: SimpleNamespace(id="pi_ref_1", client_secret="secret"),
    )
    api_client.post(f"/payments/{contract['payment']['id']}/intent")

    webhook(_webhook_event("payment_intent.succeeded", "pi_ref_1"))
    assert api_client.get("/payments").json()[0]["status"] == "paid"


def test_webhook_ignores_other_events(api_client, contract, webhook):
    resp = webhook({"type": "charge.refunded", "data": {"object": {"id": "ch_1"}}})
    assert resp.status_code == 200
    assert api_client.get("/payments").json()[0]["status"] == "pending"


def test_webhook_signature_checks(api_client, monkeypatch):
    monkeypatch.setattr(settings, "STRIPE_WEBHOOK_SECRET", None)
    assert api_client.post("/stripe/webhook", content=b"{}", headers={"stripe-signature": "x"}).status_code == 500

    monkeypatch.setattr(settings, "STRIPE_WEBHOOK_SECRET", "whsec_test")
    assert api_client.post("/stripe/webhook", content=b"{}").status_code == 400

    def bad_signature(_payload, _sig):
        raise stripe.SignatureVerificationError("bad signature", "x")

    monkeypatch.setattr(payment_service, "construct_webhook_event", bad_signature)
    assert api_client.post("/stripe/webhook", content=b"{}", headers={"stripe-signature": "x"}).status_code == 400


def _signed_delivery(event: dict, secret: str):
    payload = json.dumps(event)
    timestamp = int(time.time())
    signature = stripe.WebhookSignature._compute_signature(f"{timestamp}.{payload}", secret)
    return payload, f"t={timestamp},v1={signature}"


def _stripe_event(event_type: str, intent_id: str, payment_id: int) -> dict:
    return {
        "id": "evt_test_1",
        "object": "event",
        "type": event_type,
        "data": {
            "object": {
                "id": intent_id,
                "object": "payment_intent",
                "metadata": {"payment_id": str(payment_id)},
            }
        },
    }


def test_webhook_signed_delivery_marks_paid(api_client, contract, monkeypatch):
    monkeypatch.setattr(settings, "STRIPE_WEBHOOK_SECRET", "whsec_signed")
    event = _stripe_event("payment_intent.succeeded", "pi_signed_1", contract["payment"]["id"])
    payload, header = _signed_delivery(event, "whsec_signed")

    resp = api_client.post("/stripe/webhook", content=payload, headers={"stripe-signature": header})
    assert resp.status_code == 200
    assert resp.json() == {"received": True}
    assert api_client.get("/payments").json()[0]["status"] == "paid"
    assert len(api_client.get(f"/reports/{contract['contract']['id']}").json()) == 1


def test_webhook_signed_delivery_marks_failed(api_client, contract, monkeypatch):
    monkeypatch.setattr(settings, "STRIPE_WEBHOOK_SECRET", "whsec_signed")
    event = _stripe_event("payment_intent.payment_failed", "pi_signed_2", contract["payment"]["id"])
    payload, header = _signed_delivery(event, "whsec_signed")

    resp = api_client.post("/stripe/webhook", content=payload, headers={"stripe-signature": header})
    assert resp.status_code == 200
    assert api_client.get("/payments").json()[0]["status"] == "failed"


def test_webhook_rejects_wrong_secret(api_client, contract, monkeypatch):
    monkeypatch.setattr(settings, "STRIPE_WEBHOOK_SECRET", "whsec_signed")
    event = _stripe_event("payment_intent.succeeded", "pi_signed_3", contract["payment"]["id"])
    payload, header = _signed_delivery(event, "whsec_other")

    resp = api_client.post("/stripe/webhook", content=payload, headers={"stripe-signature": header})
    assert resp.status_code == 400
    assert api_client.get("/payments").json()[0]["status"] == "pending"
