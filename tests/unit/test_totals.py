import pytest

from storefront.payments import totals
from storefront.payments.totals import FLAT, TIERED, total_cents, policy_for, get_policy


def _subtotal(cart):
    return sum(i["price"] * i["quantity"] for i in cart)

@pytest.mark.parametrize("cart", [
    [{"price": 100, "quantity": 2}],
    [{"price": 99.99, "quantity": 1}],
    [{"price": 17.5, "quantity": 2}, {"price": 0, "quantity": 3}],
    [{"price": 0, "quantity": 1}],
])
def test_flat_total_matches_formula(cart):
    s = _subtotal(cart)
    assert total_cents(cart, FLAT) == round((s * 1.15 + 60) * 100)

def test_flat_quantity_defaults_to_one():
    # quantité absente ou nulle => 1
    assert total_cents([{"price": 10}], FLAT) == 7150
    assert total_cents([{"price": 10, "quantity": 0}], FLAT) == 7150

@pytest.mark.parametrize("cart, shipping", [
    ([{"price": 10}], 0.0),                                          # Q = 0
    ([{"price": 100, "quantity": 1}], 6.0),                          # Q = 1
    ([{"price": 100, "quantity": 1}, {"price": 50, "quantity": 2}], 120.0),  # Q = 3
])
def test_tiered_total_by_quantity(cart, shipping):
    s = sum(i["price"] * i.get("quantity", 0) for i in cart)
    assert total_cents(cart, TIERED) == round((s * 1.15 + shipping) * 100)

def test_tiered_values():
    assert total_cents([{"price": 100, "quantity": 1}], TIERED) == 12100
    assert total_cents([{"price": 100, "quantity": 1}, {"price": 50, "quantity": 2}], TIERED) == 35000
    assert total_cents([], TIERED) == 0

def test_non_numeric_fields_coerce_to_zero():
    cart = [{"price": "abc", "quantity": 2}, {"price": "20", "quantity": "1"}, {"quantity": 1}, "junk"]
    # S = 20, Q = 2 + 1 + 1 = 4 -> port 120
    assert total_cents(cart, TIERED) == 14300

def test_default_policies_per_gateway():
    assert policy_for("yoco") is TIERED
    assert policy_for("snapscan") is FLAT

def test_policy_is_configurable(monkeypatch):
    monkeypatch.setattr(totals, "SHIPPING_POLICY_YOCO", "flat")
    assert policy_for("yoco") is FLAT

def test_unknown_policy_or_gateway():
    assert get_policy("FLAT") is FLAT
    with pytest.raises(ValueError):
        get_policy("free")
    with pytest.raises(ValueError):
        policy_for("paypal")
