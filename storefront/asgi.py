"""
ASGI entrypoint: expose `app` for process managers / deployments.

- En production, un process manager (ex: gunicorn/uvicorn-workers) importe `storefront.asgi:app`.
- Toute la configuration FastAPI est centralisée dans storefront.app_setup.factory.
"""

from storefront.app import app

if __name__ == "__main__":
    import uvicorn
    from storefront.config import PORT
    uvicorn.run(
        "storefront.asgi:app",
        host="0.0.0.0",
        port=PORT,
        reload=True,     # rechargement automatique en dev
    )
