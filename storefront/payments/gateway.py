"""
Socle commun des adaptateurs prestataires (Yoco, SnapScan, Paystack).
- Session HTTP `requests` partagée (pool de connexions), ouverte par le lifespan
- POST JSON authentifié par Bearer, corps de réponse toléré non-JSON ({})
- UpstreamError + client_status_for: statut prestataire -> statut client
"""
import logging
from typing import Any, Dict, Optional

import requests

from storefront.config import HTTP_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

_session: Optional[requests.Session] = None

class UpstreamError(Exception):
    """
    Échec d'un appel prestataire.
    - vendor_status: statut HTTP renvoyé par le prestataire (None si échec transport)
    - body: corps de réponse décodé ({} si absent ou non-JSON)
    """
    def __init__(self, message: str, vendor_status: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.message = message
        self.vendor_status = vendor_status
        self.body = body if body is not None else {}

    @property
    def client_status(self) -> int:
        return client_status_for(self.vendor_status)

def client_status_for(vendor_status: Optional[int]) -> int:
    """
    Statut renvoyé au client pour un échec prestataire.
    - 4xx/5xx: propagé tel quel
    - None (transport) ou statut hors plage d'erreur: 500
    """
    if isinstance(vendor_status, int) and 400 <= vendor_status <= 599:
        return vendor_status
    return 500

def open_session() -> requests.Session:
    global _session
    if _session is None:
        _session = requests.Session()
        _session.headers.update({"Content-Type": "application/json"})
    return _session

def close_session() -> None:
    global _session
    if _session is not None:
        _session.close()
        _session = None

def get_session() -> requests.Session:
    """Session partagée; ouverte à la demande si le lifespan n'a pas tourné (scripts)."""
    return open_session()

def _decode(resp: requests.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return {}

def post_json(url: str, payload: Dict[str, Any], secret: str, *, vendor: str) -> Any:
    """
    POST JSON vers un prestataire et retourne le corps décodé.
    - Lève UpstreamError(vendor_status=None) sur erreur transport (DNS, timeout, connexion)
    - Lève UpstreamError(vendor_status=<code>) si la réponse n'est pas 2xx
    """
    headers = {"Authorization": f"Bearer {secret}"}
    try:
        resp = get_session().post(url, json=payload, headers=headers, timeout=HTTP_TIMEOUT_SECONDS)
    except requests.RequestException as e:
        logger.error("%s transport error: %s", vendor, e)
        raise UpstreamError(f"{vendor} unreachable", vendor_status=None) from e

    body = _decode(resp)
    if not resp.ok:
        logger.error("%s error status=%s body=%s", vendor, resp.status_code, body)
        raise UpstreamError(f"{vendor} error", vendor_status=resp.status_code, body=body)
    return body
