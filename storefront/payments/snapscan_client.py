"""
Adaptateur SnapScan: création de checkout.
"""
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

from storefront.config import (
    CURRENCY,
    SNAPSCAN_API_TOKEN,
    SNAPSCAN_API_URL,
    SNAPSCAN_MERCHANT_ID,
    SNAPSCAN_RETURN_URL,
)
from . import gateway

# module storefront.payments.snapscan_client
def return_url_for(email: str) -> str:
    sep = "&" if "?" in SNAPSCAN_RETURN_URL else "?"
    return f"{SNAPSCAN_RETURN_URL}{sep}{urlencode({'email': email})}"

def create_checkout(*, amount: int, email: str, cart: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Crée un checkout SnapScan.
    - return_url: page de succès du front, email du client en query
    Lève gateway.UpstreamError si SnapScan répond en erreur ou est injoignable.
    """
    payload = {
        "merchant_id": SNAPSCAN_MERCHANT_ID,
        "amount": amount,
        "currency": CURRENCY,
        "customer": {"email": email},
        "return_url": return_url_for(email),
        "metadata": {"cart": cart},
    }
    body = gateway.post_json(SNAPSCAN_API_URL, payload, SNAPSCAN_API_TOKEN, vendor="snapscan")
    return body if isinstance(body, dict) else {}

def extract_checkout_url(body: Dict[str, Any]) -> Optional[str]:
    body = body if isinstance(body, dict) else {}
    return body.get("checkout_url") or body.get("url") or None
