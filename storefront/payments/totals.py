"""
Calcul des montants du panier (pur: pas de HTTP, pas de prestataire).

Montant payable = sous-total + TVA (15 %) + frais de port, arrondi au centime.
Les frais de port dépendent d'une politique choisie par passerelle:
- "flat": forfait de 60, quantité absente => 1
- "tiered": 0 si aucun article, 6.0 pour un seul article, 120.0 au-delà; quantité absente => 0
"""
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List

from storefront.config import SHIPPING_POLICY_SNAPSCAN, SHIPPING_POLICY_YOCO

VAT_RATE = 0.15
FLAT_SHIPPING_FEE = 60.0

# module storefront.payments.totals
@dataclass(frozen=True)
class ShippingPolicy:
    name: str
    default_quantity: int
    fee: Callable[[float], float]

def _tiered_fee(total_quantity: float) -> float:
    if total_quantity == 1:
        return 6.0
    if total_quantity > 1:
        return 120.0
    return 0.0

FLAT = ShippingPolicy(name="flat", default_quantity=1, fee=lambda _qty: FLAT_SHIPPING_FEE)
TIERED = ShippingPolicy(name="tiered", default_quantity=0, fee=_tiered_fee)

POLICIES: Dict[str, ShippingPolicy] = {p.name: p for p in (FLAT, TIERED)}

def _number(value: Any, default: float = 0.0) -> float:
    """
    Coercition numérique tolérante.
    - None, chaînes non numériques, NaN et 0 => default
    """
    try:
        n = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(n) or n == 0:
        return default
    return n

def _lines(cart: Iterable[Dict[str, Any]], default_quantity: int) -> List[tuple]:
    lines = []
    for item in cart or []:
        item = item if isinstance(item, dict) else {}
        price = _number(item.get("price"))
        qty = _number(item.get("quantity"), default=default_quantity)
        lines.append((price, qty))
    return lines

def subtotal(cart: Iterable[Dict[str, Any]], default_quantity: int = 0) -> float:
    return sum(price * qty for price, qty in _lines(cart, default_quantity))

def total_quantity(cart: Iterable[Dict[str, Any]], default_quantity: int = 0) -> float:
    return sum(qty for _, qty in _lines(cart, default_quantity))

def to_cents(amount: float) -> int:
    """Arrondi au centime le plus proche (demi-centime vers le haut)."""
    return int(math.floor(amount * 100 + 0.5))

def total_cents(cart: Iterable[Dict[str, Any]], policy: ShippingPolicy) -> int:
    """
    Montant payable en centimes pour un panier et une politique de port.
    - sous-total S = somme(prix x quantité), TVA = S x 0.15
    - total = round((S + TVA + port(Q)) x 100)
    """
    cart = list(cart or [])
    s = subtotal(cart, policy.default_quantity)
    q = total_quantity(cart, policy.default_quantity)
    vat = s * VAT_RATE
    return to_cents(s + vat + policy.fee(q))

def get_policy(name: str) -> ShippingPolicy:
    try:
        return POLICIES[(name or "").lower()]
    except KeyError:
        raise ValueError(f"Unknown shipping policy: {name!r}")

def policy_for(gateway: str) -> ShippingPolicy:
    """
    Politique de port configurée pour une passerelle ("yoco" | "snapscan").
    - SHIPPING_POLICY_YOCO (défaut tiered), SHIPPING_POLICY_SNAPSCAN (défaut flat)
    """
    configured = {
        "yoco": SHIPPING_POLICY_YOCO,
        "snapscan": SHIPPING_POLICY_SNAPSCAN,
    }
    if gateway not in configured:
        raise ValueError(f"Unknown gateway: {gateway!r}")
    return get_policy(configured[gateway])
