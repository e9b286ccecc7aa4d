"""
Adaptateur Yoco Checkout: création de session et lecture de l'URL de redirection.
"""
from typing import Any, Dict, List, Optional

from storefront.config import CURRENCY, YOCO_API_URL, YOCO_CALLBACK_URL, YOCO_SECRET_KEY
from . import gateway

# module storefront.payments.yoco_client
def create_session(*, amount: int, email: str, cart: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Crée une session Checkout Yoco.
    - amount: montant en centimes
    - metadata.cart: panier tel que reçu du client
    Retour: corps JSON Yoco (dict, {} si non décodable)
    Lève gateway.UpstreamError si Yoco répond en erreur ou est injoignable.
    """
    payload = {
        "amount": amount,
        "currency": CURRENCY,
        "callback_url": YOCO_CALLBACK_URL,
        "customer": {"email": email},
        "metadata": {"cart": cart},
    }
    body = gateway.post_json(YOCO_API_URL, payload, YOCO_SECRET_KEY, vendor="yoco")
    return body if isinstance(body, dict) else {}

def extract_redirect_url(body: Dict[str, Any]) -> Optional[str]:
    """
    URL de paiement selon la forme de réponse, premier champ non vide:
    data.checkout_url > data.authorization_url > checkout_url > redirect_url > url
    """
    body = body if isinstance(body, dict) else {}
    data = body.get("data") if isinstance(body.get("data"), dict) else {}
    return (
        data.get("checkout_url")
        or data.get("authorization_url")
        or body.get("checkout_url")
        or body.get("redirect_url")
        or body.get("url")
        or None
    )

def error_message(body: Any) -> Any:
    """Message d'erreur Yoco (champ message si présent, sinon le corps brut)."""
    if isinstance(body, dict) and body.get("message"):
        return body["message"]
    return body
