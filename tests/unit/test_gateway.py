import pytest

from storefront.payments import gateway
from storefront.payments.gateway import UpstreamError, client_status_for


@pytest.mark.parametrize("vendor_status, expected", [
    (400, 400),
    (402, 402),
    (503, 503),
    (None, 500),
    (302, 500),
    (200, 500),
])
def test_client_status_for(vendor_status, expected):
    assert client_status_for(vendor_status) == expected

def test_post_json_sends_bearer_and_payload(http):
    http.queue(200, {"ok": True})
    body = gateway.post_json("https://vendor.test/x", {"a": 1}, "sk_1", vendor="test")
    assert body == {"ok": True}
    call = http.calls[0]
    assert call["url"] == "https://vendor.test/x"
    assert call["json"] == {"a": 1}
    assert call["headers"]["Authorization"] == "Bearer sk_1"
    assert call["timeout"] == gateway.HTTP_TIMEOUT_SECONDS

def test_post_json_non_ok_raises_with_vendor_status(http):
    http.queue(402, {"message": "card declined"})
    with pytest.raises(UpstreamError) as exc:
        gateway.post_json("https://vendor.test/x", {}, "sk", vendor="test")
    assert exc.value.vendor_status == 402
    assert exc.value.client_status == 402
    assert exc.value.body == {"message": "card declined"}

def test_post_json_transport_error_has_no_vendor_status(http):
    http.fail_transport()
    with pytest.raises(UpstreamError) as exc:
        gateway.post_json("https://vendor.test/x", {}, "sk", vendor="test")
    assert exc.value.vendor_status is None
    assert exc.value.client_status == 500
    assert exc.value.body == {}

def test_post_json_non_json_body_is_empty_dict(http):
    http.queue(200, None)
    assert gateway.post_json("https://vendor.test/x", {}, "sk", vendor="test") == {}
