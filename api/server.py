"""FastAPI server for the farm dashboard.

Main entry point for the API server.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes import (
    health,
    tasks,
    livestock,
    finances,
    records,
    dashboard,
    notifications,
)
from core import __version__
from core.models.forms import FormValidationError
from core.observability.logging import get_logger, with_correlation
from models.api_responses import ErrorResponse
from store_client import build_backend, get_store_settings, setup_logging
from stores import FarmStores

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Builds the stores once, unless they were injected by `create_app`.
    """
    client = None
    if getattr(app.state, "stores", None) is None:
        settings = get_store_settings()
        setup_logging(settings)
        repositories, client = build_backend(settings)
        if client is not None:
            await client.connect()
        app.state.stores = FarmStores.from_repositories(repositories)
        app.state.backend = "remote" if client is not None else "memory"

    logger.info(f"Farm API starting up ({app.state.backend} store)...")

    try:
        yield
    finally:
        if client is not None:
            await client.disconnect()
        logger.info("Farm API shutting down...")


async def form_validation_handler(request: Request, exc: FormValidationError) -> JSONResponse:
    logger.info(f"Rejected form on {request.url.path}: {exc}")
    body = ErrorResponse(message="Validation failed", errors=exc.errors)
    return JSONResponse(status_code=422, content=body.model_dump())


def create_app(stores: Optional[FarmStores] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        stores: Pre-built stores (tests); built from the environment at
            startup when omitted
    """
    app = FastAPI(
        title="Farm Management API",
        description="Livestock, tasks, finances and reference records for a working farm",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.stores = stores
    app.state.backend = "injected" if stores is not None else "unknown"

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def correlate_request(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or uuid4().hex[:12]
        with with_correlation(request_id=request_id):
            response = await call_next(request)
        response.headers["x-request-id"] = request_id
        return response

    app.add_exception_handler(FormValidationError, form_validation_handler)

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
    app.include_router(tasks.router, prefix="/tasks", tags=["Tasks"])
    app.include_router(livestock.router, prefix="/livestock", tags=["Livestock"])
    app.include_router(finances.router, prefix="/finances", tags=["Finances"])
    app.include_router(records.router, prefix="/records", tags=["Records"])
    app.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])

    return app


# Default app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api.server:app", host="0.0.0.0", port=8000, reload=True)
