"""
Module 'payments' (feature-first): point d'entrée public.
Réunit calcul des montants, adaptateurs prestataires, vérification webhook et services.
"""

from .totals import FLAT, TIERED, ShippingPolicy, get_policy, policy_for, total_cents
from .gateway import UpstreamError, client_status_for
from .webhook import InvalidSignature, verify_signature
from .service import (
    create_yoco_session,
    create_snapscan_session,
    handle_snapscan_event,
    initialize_transaction,
)

__all__ = [
    # totals
    "FLAT",
    "TIERED",
    "ShippingPolicy",
    "get_policy",
    "policy_for",
    "total_cents",
    # gateway
    "UpstreamError",
    "client_status_for",
    # webhook
    "InvalidSignature",
    "verify_signature",
    # services
    "create_yoco_session",
    "create_snapscan_session",
    "handle_snapscan_event",
    "initialize_transaction",
]
