"""
Cas d'usage 'payments': orchestre totals, adaptateurs prestataires et notifications.
Les erreurs client (400) et prestataire sont levées en CheckoutError.
"""
import logging
from typing import Any, Dict, List

from storefront.app_setup.exceptions import CheckoutError
from storefront.notifications import service as notifications
from storefront.notifications.mailer import Mailer

from . import paystack_client, snapscan_client, totals, yoco_client
from .gateway import UpstreamError
from .schemas import PaymentEvent

logger = logging.getLogger(__name__)

def create_yoco_session(cart: Any, email: Any) -> Dict[str, Any]:
    """
    Crée une session Yoco et renvoie {url, raw}.
    - 400 si panier vide/non-liste ou email manquant (aucun appel prestataire)
    - Erreur Yoco: statut Yoco propagé, {"error": message Yoco}
    - 500 si aucune URL de redirection n'est trouvée dans la réponse
    """
    if not isinstance(cart, list) or not cart:
        raise CheckoutError(400, "Cart is empty")
    if not email:
        raise CheckoutError(400, "Email required")

    amount = totals.total_cents(cart, totals.policy_for("yoco"))
    try:
        body = yoco_client.create_session(amount=amount, email=email, cart=cart)
    except UpstreamError as e:
        # Échec transport: pas de corps Yoco, message générique
        message = yoco_client.error_message(e.body) if e.vendor_status is not None else e.message
        raise CheckoutError(e.client_status, message)

    url = yoco_client.extract_redirect_url(body)
    if not url:
        logger.error("Yoco response missing redirect URL: %s", body)
        raise CheckoutError(500, "Missing checkout URL from Yoco")
    logger.info("payments.yoco_session amount=%s items=%s", amount, len(cart))
    return {"url": url, "raw": body}

def create_snapscan_session(cart: Any, email: Any) -> Dict[str, Any]:
    """
    Crée un checkout SnapScan et renvoie {checkout_url} (None si absent de la réponse).
    - 400 si email manquant, puis si panier vide
    - Erreur SnapScan: statut propagé, {"error": "snapscan error", "details": corps}
    """
    if not email:
        raise CheckoutError(400, "email required")
    if not isinstance(cart, list) or not cart:
        raise CheckoutError(400, "cart empty")

    amount = totals.total_cents(cart, totals.policy_for("snapscan"))
    try:
        body = snapscan_client.create_checkout(amount=amount, email=email, cart=cart)
    except UpstreamError as e:
        raise CheckoutError(e.client_status, "snapscan error", details=e.body)
    logger.info("payments.snapscan_session amount=%s items=%s", amount, len(cart))
    return {"checkout_url": snapscan_client.extract_checkout_url(body)}

def handle_snapscan_event(raw_event: Any, mailer: Mailer) -> bool:
    """
    Traite un événement SnapScan déjà authentifié.
    - status == "paid": envoie les deux emails de confirmation (séquentiels)
    Retour: True si des emails ont été envoyés.
    """
    if not isinstance(raw_event, dict):
        # Corps vide ou non-objet: traité comme un événement non payé
        logger.info("payments.snapscan_webhook ignored payload_type=%s", type(raw_event).__name__)
        return False
    event = PaymentEvent.model_validate(raw_event)
    if not event.is_paid:
        logger.info("payments.snapscan_webhook ignored status=%s", event.status)
        return False
    notifications.send_payment_confirmations(event, raw_event, mailer)
    return True

def initialize_transaction(email: Any, amount: Any) -> Any:
    """
    Relaie {email, amount} à Paystack et renvoie la réponse brute.
    - Erreur (prestataire ou transport): statut mappé, message générique
    """
    try:
        return paystack_client.initialize_transaction(email=email, amount=amount)
    except UpstreamError as e:
        logger.error("Payment initialization error: %s", e.body or e.message)
        raise CheckoutError(e.client_status, "Payment initialization failed")
