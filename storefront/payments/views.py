import json
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse

from storefront.app_setup.exceptions import CheckoutError
from storefront.notifications.mailer import SmtpMailer, get_mailer
from storefront.utils.rate_limit import optional_rate_limit
from . import service
from .webhook import InvalidSignature, read_verified_body

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Checkout"])

def _json_object(body: Any) -> Dict[str, Any]:
    return body if isinstance(body, dict) else {}

async def _read_json(request: Request) -> Dict[str, Any]:
    try:
        return _json_object(await request.json())
    except ValueError:
        return {}

# module storefront.payments.views
@router.post("/create-yoco-session", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def create_yoco_session(request: Request):
    """
    Crée une session Checkout Yoco pour le panier.
    - Entrée JSON: { "cart": [ { "price": <number>, "quantity": <number> }, ... ], "email": "..." }
    - Sortie: { "url": "<redirection>", "raw": <réponse Yoco> }
    - Erreurs: 400 panier vide / email manquant, statut Yoco ou 500 sinon
    """
    body = await _read_json(request)
    try:
        return await run_in_threadpool(service.create_yoco_session, body.get("cart"), body.get("email"))
    except CheckoutError:
        raise
    except Exception as e:
        logger.exception("create-yoco-session error")
        raise CheckoutError(500, str(e) or "Server error")

@router.post("/create-snapscan-session", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def create_snapscan_session(request: Request):
    """
    Crée un checkout SnapScan.
    - Entrée JSON: { "cart": [...], "email": "..." }
    - Sortie: { "checkout_url": "<url>" | null }
    """
    body = await _read_json(request)
    try:
        return await run_in_threadpool(service.create_snapscan_session, body.get("cart") or [], body.get("email"))
    except CheckoutError:
        raise
    except Exception as e:
        logger.exception("create-snapscan-session error")
        raise CheckoutError(500, str(e) or "server error")

@router.post("/snapscan-webhook", include_in_schema=False)
async def snapscan_webhook(request: Request, mailer: SmtpMailer = Depends(get_mailer)):
    """
    Webhook SnapScan (paiement terminé).
    - Signature: HMAC vérifiée avant tout effet de bord (401 si invalide)
    - status == "paid": email au client puis au marchand
    - Réponses texte: "ok" (200) ou "error" (500)
    """
    try:
        payload = await read_verified_body(request)
    except InvalidSignature as e:
        logger.warning("snapscan webhook rejected: %s", e)
        return PlainTextResponse("invalid signature", status_code=401)
    try:
        event = json.loads(payload or b"null")
        await run_in_threadpool(service.handle_snapscan_event, event, mailer)
        return PlainTextResponse("ok", status_code=200)
    except Exception:
        logger.exception("webhook error")
        return PlainTextResponse("error", status_code=500)

@router.post("/create-payment", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
@router.post("/initialize-transaction", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def initialize_transaction(request: Request):
    """
    Initialise une transaction Paystack (deux chemins, même traitement).
    - Entrée JSON: { "email": "...", "amount": <centimes> }
    - Sortie: réponse Paystack telle quelle
    """
    body = await _read_json(request)
    try:
        return await run_in_threadpool(service.initialize_transaction, body.get("email"), body.get("amount"))
    except CheckoutError:
        raise
    except Exception:
        logger.exception("initialize-transaction error")
        raise CheckoutError(500, "Payment initialization failed")
