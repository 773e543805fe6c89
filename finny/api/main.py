"""FastAPI application factory"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.middleware.sessions import SessionMiddleware
from starlette.responses import Response

from finny.api.middleware import RequestIDMiddleware, MetricsMiddleware
from finny.api.v1 import auth, users, incomes, expenses, payments, bills, dashboard
from finny.infrastructure.database.session import init_db
from finny.infrastructure.observability.logging import setup_logging
from finny.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Missing or malformed fields are client errors (400), not 422"""
    return JSONResponse(
        status_code=400,
        content={"detail": "Missing or invalid fields", "errors": jsonable_encoder(exc.errors())},
    )


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Finny",
        description="Personal budgeting with levels, XP and streaks",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret_key,
        session_cookie=settings.session_cookie_name,
        max_age=settings.session_max_age_seconds,
        same_site="lax",
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(auth.router, prefix="/api/v1", tags=["session"])
    app.include_router(users.router, prefix="/api/v1", tags=["user"])
    app.include_router(incomes.router, prefix="/api/v1", tags=["income"])
    app.include_router(expenses.router, prefix="/api/v1", tags=["expenses"])
    app.include_router(payments.router, prefix="/api/v1", tags=["bills"])
    app.include_router(bills.router, prefix="/api/v1", tags=["bills"])
    app.include_router(dashboard.router, prefix="/api/v1", tags=["dashboard"])

    return app


app = create_app()
