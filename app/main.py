# app/main.py
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import redis
from requests import RequestException
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import uvicorn

from app.api.routers import (
    analytics,
    carts,
    categories,
    health,
    notifications,
    orders,
    products,
    users,
    wishlist,
)
from app.data.database import init_db
from app.domain.errors import StoreError
from app.utils.settings import CORS_ORIGINS
from app.utils.logging import get_logger

logger = get_logger(__name__)


def register_error_handlers(app: FastAPI):
    @app.exception_handler(StoreError)
    def store_error_handler(request: Request, exc: StoreError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(RequestValidationError)
    def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    @app.exception_handler(IntegrityError)
    def integrity_error_handler(request: Request, exc: IntegrityError):
        logger.warning(f"Constraint violation on {request.method} {request.url.path}: {exc.orig}")
        return JSONResponse(status_code=400, content={"detail": "Request violates a data constraint"})

    @app.exception_handler(SQLAlchemyError)
    def store_failure_handler(request: Request, exc: SQLAlchemyError):
        # szczegoly bledu bazy tylko do logow, klient dostaje ogolny komunikat
        logger.exception(f"Store failure on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    @app.exception_handler(RequestException)
    def identity_unavailable_handler(request: Request, exc: RequestException):
        logger.error(f"Identity provider unavailable: {exc}")
        return JSONResponse(status_code=502, content={"detail": "Identity provider unavailable"})

    @app.exception_handler(redis.RedisError)
    def lock_store_unavailable_handler(request: Request, exc: redis.RedisError):
        logger.error(f"Lock store unavailable on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=503, content={"detail": "Cart lock store unavailable"})


def create_app() -> FastAPI:
    logger.info("Initializing database")
    init_db()

    app = FastAPI(
        title="Storefront Service",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(categories.router)
    app.include_router(carts.router)
    app.include_router(wishlist.router)
    app.include_router(orders.router)
    app.include_router(users.router)
    app.include_router(analytics.router)
    app.include_router(notifications.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
