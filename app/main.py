"""
Credit simulation and application review service.
Public endpoints simulate loans and collect applications; admin endpoints
review, annotate and export them. Features strict input validation, audit
logging, and request tracing.
"""
from typing import Callable, Awaitable, Dict, Any
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import time
from uuid import uuid4

from app.core.config import settings
from app.core.database import init_db, SessionLocal
from app.core.logger import logger
from app.auth.router import router as auth_router
from app.auth.service import seed_admin
from app.catalog.router import router as catalog_router
from app.catalog.service import seed_catalog
from app.simulation.router import router as simulation_router
from app.applications.router import router as applications_router, admin_router as admin_applications_router
from app.notifications.router import router as notifications_router
from app.exports.formatters import FormatterRegistry


def bootstrap() -> None:
    """Creates tables and seeds reference data and the first admin."""
    init_db()
    db = SessionLocal()
    try:
        seed_catalog(db)
        seed_admin(db)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management (startup/shutdown hooks)."""
    # Startup
    logger.info(f"Initializing {settings.APP_NAME} v{settings.VERSION}")
    bootstrap()
    logger.info("Database initialized")

    yield

    # Shutdown
    logger.info("Shutting down application")


# FastAPI Application Factory
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    description=(
        "Loan simulation (monthly payment, approximate APR, amortization schedule), "
        "credit applications and back-office review."
    ),
    lifespan=lifespan
)

# One formatter registry per process, injected into exporters
app.state.formatters = FormatterRegistry(settings.DEFAULT_CURRENCY)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Middleware for distributed tracing and logging
@app.middleware("http")
async def add_correlation_id(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """
    Middleware for distributed tracing.
    Injects a unique Correlation ID into the request context and propagates it to the response headers.
    """
    correlation_id = request.headers.get("X-Correlation-ID", str(uuid4()))
    request.state.correlation_id = correlation_id

    start_time = time.time()

    logger.info(
        f"Request: {request.method} {request.url.path}",
        extra={"correlation_id": correlation_id}
    )

    response = await call_next(request)

    process_time = time.time() - start_time
    response.headers["X-Correlation-ID"] = correlation_id
    response.headers["X-Process-Time"] = str(process_time)

    logger.info(
        f"Response: {response.status_code} | {process_time:.3f}s",
        extra={"correlation_id": correlation_id}
    )

    return response


# Router Registration
app.include_router(simulation_router, prefix="/simulations", tags=["Simulations"])
app.include_router(catalog_router, prefix="/catalog", tags=["Catalog"])
app.include_router(applications_router, prefix="/applications", tags=["Applications"])
app.include_router(auth_router, prefix="/auth", tags=["Auth"])
app.include_router(admin_applications_router, prefix="/admin/applications", tags=["Admin"])
app.include_router(notifications_router, prefix="/admin/notifications", tags=["Admin"])


@app.get("/", tags=["Health"])
def api_info() -> Dict[str, Any]:
    """
    Endpoint exposing API metadata and service discovery links.
    """
    return {
        "app": settings.APP_NAME,
        "version": settings.VERSION,
        "status": "online",
        "endpoints": {
            "simulate": "/simulations",
            "preview": "/simulations/preview",
            "catalog": "/catalog/credit-types",
            "apply": "/applications",
            "admin_login": "/auth/login",
            "admin_applications": "/admin/applications",
            "admin_notifications": "/admin/notifications",
            "docs": "/docs"
        }
    }


@app.get("/health", tags=["Health"])
def health_check() -> Dict[str, str]:
    """
    Liveness probe endpoint for orchestration systems.
    """
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.VERSION
    }


# Global Exception Handler
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Attaches the correlation ID to every HTTP error body."""
    correlation_id = getattr(request.state, "correlation_id", "N/A")

    logger.info(
        f"HTTPException: {exc.status_code} | {exc.detail}",
        extra={"correlation_id": correlation_id}
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "correlation_id": correlation_id},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception barrier.
    Captures unhandled exceptions (persistence failures included), logs stack traces with
    Correlation IDs, and returns a sanitized 500 response.
    """
    correlation_id = getattr(request.state, "correlation_id", "N/A")

    logger.error(
        f"Unhandled exception: {str(exc)}",
        exc_info=True,
        extra={"correlation_id": correlation_id}
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Operation failed",
            "correlation_id": correlation_id
        }
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",  # nosec
        port=8000,
        reload=settings.DEBUG
    )
