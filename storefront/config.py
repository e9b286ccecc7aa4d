# storefront.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH)

"""
Configuration centrale du backend checkout.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Normalise et expose les secrets/URLs des prestataires (Yoco, SnapScan, Paystack)
- Paramètres SMTP (pool de connexions), politiques de frais de port, CORS/hosts
- Les valeurs par défaut sont des placeholders: réservées au développement local
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _env_int(name: str, default: int) -> int:
    try:
        return int(_clean_env(os.getenv(name)) or default)
    except ValueError:
        return default

def _env_bool(name: str, default: str = "false") -> bool:
    return (os.getenv(name, default).lower() in ("1", "true", "yes"))

# Yoco (passerelle principale)
YOCO_SECRET_KEY = _clean_env(os.getenv("YOCO_SECRET_KEY") or "sk_test_YOCO_SECRET_KEY")
YOCO_API_URL = _clean_env(os.getenv("YOCO_API_URL") or "https://online.yoco.com/v1/checkout/sessions")
YOCO_CALLBACK_URL = _clean_env(os.getenv("YOCO_CALLBACK_URL") or "http://localhost:5500/success.html")

# SnapScan (passerelle alternative + webhook)
SNAPSCAN_API_TOKEN = _clean_env(os.getenv("SNAPSCAN_API_TOKEN") or "replace_with_key")
SNAPSCAN_MERCHANT_ID = _clean_env(os.getenv("SNAPSCAN_MERCHANT_ID") or "your_merchant_id")
SNAPSCAN_API_URL = _clean_env(os.getenv("SNAPSCAN_API_URL") or "https://api.snapscan.io/v1/checkouts")
SNAPSCAN_RETURN_URL = _clean_env(os.getenv("SNAPSCAN_RETURN_URL") or "http://localhost:3000/payment-success")
# Vide => vérification de signature désactivée (dev uniquement)
SNAPSCAN_WEBHOOK_SECRET = _clean_env(os.getenv("SNAPSCAN_WEBHOOK_SECRET") or "")

# Paystack (initialisation de transaction)
PAYSTACK_SECRET_KEY = _clean_env(os.getenv("PAYSTACK_SECRET_KEY") or "")
PAYSTACK_API_URL = _clean_env(os.getenv("PAYSTACK_API_URL") or "https://api.paystack.co/transaction/initialize")

CURRENCY = _clean_env(os.getenv("CURRENCY") or "ZAR")
HTTP_TIMEOUT_SECONDS = _env_int("HTTP_TIMEOUT_SECONDS", 15)

# Frais de port: nom de politique par passerelle (voir storefront.payments.totals)
SHIPPING_POLICY_YOCO = _clean_env(os.getenv("SHIPPING_POLICY_YOCO") or "tiered").lower()
SHIPPING_POLICY_SNAPSCAN = _clean_env(os.getenv("SHIPPING_POLICY_SNAPSCAN") or "flat").lower()

# Emails de confirmation
MERCHANT_EMAIL = _clean_env(os.getenv("MERCHANT_EMAIL") or "merchant@example.com")
EMAIL_FROM = _clean_env(os.getenv("EMAIL_FROM") or "no-reply@example.com")

# SMTP: un pool de connexions est ouvert au démarrage (lifespan)
SMTP_HOST = _clean_env(os.getenv("SMTP_HOST") or "smtp.example.com")
SMTP_PORT = _env_int("SMTP_PORT", 587)
SMTP_USER = _clean_env(os.getenv("SMTP_USER") or "user")
SMTP_PASS = _clean_env(os.getenv("SMTP_PASS") or "pass")
SMTP_STARTTLS = _env_bool("SMTP_STARTTLS")
SMTP_TIMEOUT_SECONDS = _env_int("SMTP_TIMEOUT_SECONDS", 10)
SMTP_POOL_SIZE = max(1, _env_int("SMTP_POOL_SIZE", 2))

# Sécurité / CORS (dev)
COOKIE_SECURE = _env_bool("COOKIE_SECURE")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h.strip()]

PORT = _env_int("PORT", 4242)
