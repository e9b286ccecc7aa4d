from fastapi import APIRouter, Request

from storefront import config
from storefront.payments import totals
from storefront.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    return {"ok": True}

@router.get("/config")
def health_config(request: Request):
    """
    Résumé de configuration (aucun secret exposé, uniquement des booléens/hôtes).
    """
    return {
        "vendors": {
            "yoco": {"configured": config.YOCO_SECRET_KEY != "sk_test_YOCO_SECRET_KEY", "url": config.YOCO_API_URL},
            "snapscan": {
                "configured": config.SNAPSCAN_API_TOKEN != "replace_with_key",
                "url": config.SNAPSCAN_API_URL,
                "webhook_signed": bool(config.SNAPSCAN_WEBHOOK_SECRET),
            },
            "paystack": {"configured": bool(config.PAYSTACK_SECRET_KEY), "url": config.PAYSTACK_API_URL},
        },
        "smtp": {"host": config.SMTP_HOST, "port": config.SMTP_PORT, "pool_size": config.SMTP_POOL_SIZE},
        "shipping": {
            "yoco": totals.policy_for("yoco").name,
            "snapscan": totals.policy_for("snapscan").name,
        },
        "currency": config.CURRENCY,
        "rate_limit": rate_limit_health_info(request),
    }
