from fastapi import APIRouter

from lootshop.api.v1 import admin
from lootshop.api.v1 import cart
from lootshop.api.v1 import catalog
from lootshop.api.v1 import checkout
from lootshop.core.metrics import snapshot as metrics_snapshot

api_router = APIRouter()

api_router.include_router(catalog.router)
api_router.include_router(cart.router)
api_router.include_router(checkout.router)
api_router.include_router(admin.router)


@api_router.get("/health", tags=["health"])
def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@api_router.get("/health/ready", tags=["health"])
def readiness() -> dict[str, str]:
    return {"status": "ready"}


@api_router.get("/metrics", tags=["metrics"])
def metrics() -> dict:
    return metrics_snapshot()
