"""
Vérification des webhooks SnapScan (HMAC-SHA256 sur le corps brut).
- En-tête attendu: X-Snapscan-Signature = hex(hmac_sha256(secret, body)), préfixe "sha256=" toléré
- Secret vide: vérification ignorée (dev uniquement, journalisé en warning)
"""
import hashlib
import hmac
import logging
from typing import Optional

from fastapi import Request

from storefront.config import SNAPSCAN_WEBHOOK_SECRET

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Snapscan-Signature"

class InvalidSignature(Exception):
    pass

def compute_signature(payload: bytes, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()

def verify_signature(payload: bytes, signature: Optional[str], secret: str) -> None:
    """
    Lève InvalidSignature si la signature est absente ou ne correspond pas.
    Comparaison en temps constant (hmac.compare_digest).
    """
    if not signature:
        raise InvalidSignature("missing signature")
    provided = signature.strip()
    if provided.startswith("sha256="):
        provided = provided[len("sha256="):]
    expected = compute_signature(payload, secret)
    if not hmac.compare_digest(provided.lower(), expected):
        raise InvalidSignature("signature mismatch")

async def read_verified_body(request: Request) -> bytes:
    """
    Lit le corps brut du webhook et valide sa signature avant tout effet de bord.
    """
    payload = await request.body()
    if not SNAPSCAN_WEBHOOK_SECRET:
        logger.warning("SNAPSCAN_WEBHOOK_SECRET vide: signature webhook non vérifiée")
        return payload
    verify_signature(payload, request.headers.get(SIGNATURE_HEADER), SNAPSCAN_WEBHOOK_SECRET)
    return payload
