"""
Erreurs applicatives et gestionnaires d'exceptions.
- CheckoutError: erreur métier rendue en JSON {"error": ..., "details": ...}
- UpstreamError non interceptée: statut prestataire mappé (client_status_for)
- HTTPException: forme FastAPI standard {"detail": ...} (ex: 429 du rate limit)
"""
import logging
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

class CheckoutError(Exception):
    def __init__(self, status_code: int, message: Any, details: Optional[Any] = None):
        super().__init__(str(message))
        self.status_code = status_code
        self.message = message
        self.details = details

    def to_content(self) -> dict:
        content = {"error": self.message}
        if self.details is not None:
            content["details"] = self.details
        return content

def register_exception_handlers(app: FastAPI) -> None:
    """
    Enregistre les handlers JSON de l'API checkout.
    """
    from storefront.payments.gateway import UpstreamError

    @app.exception_handler(CheckoutError)
    async def checkout_error(request: Request, exc: CheckoutError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(UpstreamError)
    async def upstream_error(request: Request, exc: UpstreamError):
        logger.error("upstream error path=%s vendor_status=%s", request.url.path, exc.vendor_status)
        return JSONResponse(status_code=exc.client_status, content={"error": exc.message})

    @app.exception_handler(HTTPException)
    async def http_error(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=getattr(exc, "headers", None))
