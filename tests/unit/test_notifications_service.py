import pytest

from storefront.notifications import service as notifications
from storefront.payments.schemas import PaymentEvent


class RecordingMailer:
    def __init__(self, fail_first=False):
        self.calls = []
        self.fail_first = fail_first

    def send(self, to, subject, text):
        self.calls.append((to, subject, text))
        if self.fail_first and len(self.calls) == 1:
            raise OSError("smtp down")


def test_sends_payer_then_merchant(monkeypatch):
    monkeypatch.setattr(notifications, "MERCHANT_EMAIL", "owner@shop.test")
    raw = {"status": "paid", "amount": 10000, "customer": {"email": "a@b.com"}}
    m = RecordingMailer()
    notifications.send_payment_confirmations(PaymentEvent.model_validate(raw), raw, m)
    assert [c[0] for c in m.calls] == ["a@b.com", "owner@shop.test"]
    assert m.calls[0][1] == "Payment received"
    assert m.calls[1][1] == "New payment received"
    assert all("R100.00" in c[2] for c in m.calls)
    assert m.calls[0][2] == "Thank you \u2014 we received your payment of R100.00."
    assert m.calls[1][2].endswith('Details: {"status":"paid","amount":10000,"customer":{"email":"a@b.com"}}')

def test_payer_email_from_metadata():
    event = PaymentEvent.model_validate({"status": "paid", "amount": 1234, "metadata": {"email": "m@b.com"}})
    assert event.payer_email == "m@b.com"
    assert event.amount_major == "12.34"

def test_first_failure_aborts_second():
    raw = {"status": "paid", "amount": 500, "customer": {"email": "a@b.com"}}
    m = RecordingMailer(fail_first=True)
    with pytest.raises(OSError):
        notifications.send_payment_confirmations(PaymentEvent.model_validate(raw), raw, m)
    assert len(m.calls) == 1

def test_missing_payer_email_raises_before_sending():
    raw = {"status": "paid", "amount": 500}
    m = RecordingMailer()
    with pytest.raises(ValueError):
        notifications.send_payment_confirmations(PaymentEvent.model_validate(raw), raw, m)
    assert m.calls == []

def test_merchant_details_keep_non_ascii_characters():
    raw = {"status": "paid", "amount": 500, "customer": {"email": "a@b.com", "name": "Zoë"}}
    m = RecordingMailer()
    notifications.send_payment_confirmations(PaymentEvent.model_validate(raw), raw, m)
    assert '"name":"Zoë"' in m.calls[1][2]
