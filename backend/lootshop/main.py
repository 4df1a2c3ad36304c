import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lootshop.api.v1 import api_router
from lootshop.core.config import Settings, settings as default_settings
from lootshop.core.logging_config import configure_logging
from lootshop.db.store import InMemoryStore
from lootshop.middleware import RequestLoggingMiddleware
from lootshop.schemas.error import ErrorResponse
from lootshop.seeds import seed_products
from lootshop.services.errors import ShopError
from lootshop.services.reward_rules import RewardConfig
from lootshop.services.rewards import RewardGenerator

logger = logging.getLogger(__name__)


def get_application(
    *,
    settings: Settings | None = None,
    store: InMemoryStore | None = None,
    reward_config: RewardConfig | None = None,
    reward_generator: RewardGenerator | None = None,
    seed: bool | None = None,
) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_json)
    # Raises InvalidConfiguration before any route is served.
    reward_config = reward_config or settings.reward_config()
    store = store if store is not None else InMemoryStore()
    if seed is None:
        seed = settings.seed_products
    if seed:
        seed_products(store)

    tags_metadata = [
        {"name": "catalog", "description": "Products"},
        {"name": "cart", "description": "Shared shopping cart"},
        {"name": "checkout", "description": "Checkout and Nth-order rewards"},
        {"name": "admin", "description": "Statistics and manual coupon generation"},
    ]
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        openapi_tags=tags_metadata,
        swagger_ui_parameters={"displayRequestDuration": True},
    )
    app.state.store = store
    app.state.reward_config = reward_config
    app.state.reward_generator = reward_generator or RewardGenerator(reward_config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.include_router(api_router, prefix="/api/v1")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        payload = ErrorResponse(detail=exc.detail, code=None)
        return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(payload.model_dump()))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = jsonable_encoder(exc.errors())
        payload = ErrorResponse(detail=errors, code="validation_error")
        return JSONResponse(status_code=422, content=payload.model_dump())

    @app.exception_handler(ShopError)
    async def shop_error_handler(request: Request, exc: ShopError):
        payload = ErrorResponse(detail=str(exc), code=exc.code)
        return JSONResponse(status_code=400, content=payload.model_dump())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("unhandled_error", extra={"path": request.url.path})
        payload = ErrorResponse(detail="Internal Server Error", code="internal_error")
        return JSONResponse(status_code=500, content=payload.model_dump())

    logger.info(
        "reward configuration: N=%s weights=%s",
        reward_config.order_interval,
        {tier.tier.value: tier.weight for tier in reward_config.tiers},
    )
    return app


app = get_application()
