"""
Registre central des routers (checkout/paiements, health).
"""
from fastapi import FastAPI
from storefront.payments import views as payments_views
from storefront.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    app.include_router(payments_views.router)
    app.include_router(health_router)
