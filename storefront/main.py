# storefront/main.py
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from storefront.core.config import get_settings
from storefront.database import create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from storefront.models import product as _product_models  # noqa: F401
from storefront.models import cart as _cart_models  # noqa: F401
from storefront.models import order as _order_models  # noqa: F401

# Routers
from storefront.routers.products import router as products_router
from storefront.routers.carts import router as carts_router
from storefront.routers.cart import router as cart_router
from storefront.routers.orders import router as orders_router

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("uvicorn")

CHECKOUT_FAILED_MESSAGE = "Failed to place order. Please try again."


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Verify DB connectivity and create tables.
    """
    logger.info("Startup: connecting to database...")
    try:
        create_db_and_tables()
        logger.info("Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"Startup: DB connection FAILED: {e}")
        raise
    yield


def _format_validation_error(err: dict) -> str:
    loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
    return f"{loc}: {err.get('msg')}" if loc else str(err.get("msg"))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Malformed request bodies are client errors: 400, not FastAPI's 422.
    """
    errors = exc.errors()
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "; ".join(_format_validation_error(e) for e in errors),
            "errors": jsonable_encoder(errors),
        },
    )


async def storage_exception_handler(request: Request, exc: SQLAlchemyError):
    """
    Storage failures that escaped a service. Checkout paths have already
    rolled back by the time they get here.
    """
    logger.error(
        f"Storage error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    detail = (
        CHECKOUT_FAILED_MESSAGE
        if request.url.path.endswith("/checkout")
        else "Internal server error"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": detail},
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, storage_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(products_router, prefix=settings.API_PREFIX)
    app.include_router(carts_router, prefix=settings.API_PREFIX)
    app.include_router(cart_router, prefix=settings.API_PREFIX)
    app.include_router(orders_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root():
        """Health check endpoint."""
        return {"status": "ok", "service": "storefront-cart"}

    return app


app = create_app()
