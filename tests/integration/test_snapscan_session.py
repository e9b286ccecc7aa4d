from fastapi.testclient import TestClient

from storefront.payments import snapscan_client

CART = [{"price": 100, "quantity": 2}]


def test_missing_email_checked_first(client: TestClient, http):
    resp = client.post("/create-snapscan-session", json={"cart": []})
    assert resp.status_code == 400
    assert resp.json() == {"error": "email required"}
    assert http.calls == []

def test_empty_cart_returns_400_without_vendor_call(client: TestClient, http):
    for body in ({"email": "a@b.com"}, {"email": "a@b.com", "cart": []}):
        resp = client.post("/create-snapscan-session", json=body)
        assert resp.status_code == 400
        assert resp.json() == {"error": "cart empty"}
    assert http.calls == []

def test_success_uses_flat_shipping_and_return_url(client: TestClient, http, monkeypatch):
    monkeypatch.setattr(snapscan_client, "SNAPSCAN_MERCHANT_ID", "merchant-42")
    monkeypatch.setattr(snapscan_client, "SNAPSCAN_RETURN_URL", "http://localhost:3000/payment-success")
    http.queue(201, {"checkout_url": "https://pos.snapscan.test/qr/1"})

    resp = client.post("/create-snapscan-session", json={"cart": CART, "email": "a@b.com"})

    assert resp.status_code == 200
    assert resp.json() == {"checkout_url": "https://pos.snapscan.test/qr/1"}
    sent = http.calls[0]["json"]
    assert sent["merchant_id"] == "merchant-42"
    # S = 200 -> (200 * 1.15 + 60) * 100
    assert sent["amount"] == 29000
    assert sent["currency"] == "ZAR"
    assert sent["return_url"] == "http://localhost:3000/payment-success?email=a%40b.com"

def test_missing_checkout_url_returns_null(client: TestClient, http):
    http.queue(200, {"id": "chk_1"})
    resp = client.post("/create-snapscan-session", json={"cart": CART, "email": "a@b.com"})
    assert resp.status_code == 200
    assert resp.json() == {"checkout_url": None}

def test_vendor_error_status_is_propagated_with_details(client: TestClient, http):
    http.queue(403, {"message": "forbidden"})
    resp = client.post("/create-snapscan-session", json={"cart": CART, "email": "a@b.com"})
    assert resp.status_code == 403
    assert resp.json() == {"error": "snapscan error", "details": {"message": "forbidden"}}

def test_transport_failure_returns_500(client: TestClient, http):
    http.fail_transport()
    resp = client.post("/create-snapscan-session", json={"cart": CART, "email": "a@b.com"})
    assert resp.status_code == 500
    assert resp.json()["error"] == "snapscan error"
