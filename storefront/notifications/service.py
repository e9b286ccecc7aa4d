"""
Emails de confirmation de paiement (client puis marchand, séquentiels).
"""
import json
import logging
from typing import TYPE_CHECKING, Any, Dict

from storefront.config import MERCHANT_EMAIL
from storefront.notifications.mailer import Mailer

if TYPE_CHECKING:
    from storefront.payments.schemas import PaymentEvent

logger = logging.getLogger(__name__)

def send_payment_confirmations(event: "PaymentEvent", raw_event: Dict[str, Any], mailer: Mailer) -> None:
    """
    Envoie l'accusé de paiement au client puis la notification au marchand.
    - Un échec sur le premier envoi interrompt la séquence (le second n'est pas tenté).
    - Détails marchand: JSON compact, non échappé (même rendu que côté front)
    """
    if not event.payer_email:
        raise ValueError("payer email missing from payment event")
    amount = event.amount_major
    mailer.send(
        event.payer_email,
        "Payment received",
        f"Thank you \u2014 we received your payment of R{amount}.",
    )
    details = json.dumps(raw_event, separators=(",", ":"), ensure_ascii=False)
    mailer.send(
        MERCHANT_EMAIL,
        "New payment received",
        f"A payment of R{amount} was received. Details: {details}",
    )
    logger.info("notifications.payment_confirmations sent payer=%s", event.payer_email)
