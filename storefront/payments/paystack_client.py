"""
Adaptateur Paystack: initialisation de transaction (corps relayé tel quel).
"""
from typing import Any

from storefront.config import PAYSTACK_API_URL, PAYSTACK_SECRET_KEY
from . import gateway

# module storefront.payments.paystack_client
def initialize_transaction(*, email: Any, amount: Any) -> Any:
    """
    POST {email, amount} vers Paystack et retourne la réponse JSON brute.
    Lève gateway.UpstreamError (vendor_status None si échec transport).
    """
    return gateway.post_json(
        PAYSTACK_API_URL,
        {"email": email, "amount": amount},
        PAYSTACK_SECRET_KEY,
        vendor="paystack",
    )
