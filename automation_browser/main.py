"""
FastAPI application entrypoint.

Creates and configures the FastAPI application with:
  - Lifespan management (logging, snapshot check)
  - Automation listing router
  - CORS middleware
  - Custom exception handlers
  - Health check endpoint
"""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from automation_browser.api.routes import router as automations_router
from automation_browser.core.config import settings
from automation_browser.core.exceptions import QueryError
from automation_browser.core.lifespan import lifespan
from automation_browser.core.logging import get_logger

logger = get_logger(__name__)


def create_app() -> FastAPI:
    """Build the FastAPI application."""

    application = FastAPI(
        title="Automation Browser",
        description=(
            "Read-only listing of automation records with pagination, "
            "per-field filters and single-field sorting."
        ),
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # ── Middleware ────────────────────────────────────────────
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routes ───────────────────────────────────────────────
    application.include_router(automations_router)

    # ── Health Check ─────────────────────────────────────────
    @application.get(
        "/api/health",
        tags=["Health"],
        summary="Service health check",
        status_code=status.HTTP_200_OK,
        response_class=PlainTextResponse,
    )
    async def health_check() -> str:
        """Return a plain-text liveness marker."""
        return "OK"

    # ── Exception Handlers ───────────────────────────────────
    @application.exception_handler(QueryError)
    async def query_error_handler(request: Request, exc: QueryError):
        """Answer pipeline failures with their status code and message."""
        if exc.status_code >= 500:
            logger.error("Listing failed for %s: %s", request.url.path, exc.message)
        else:
            logger.info("Rejected listing query %s: %s", request.url.query, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message},
        )

    @application.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Catch-all handler to prevent stack traces from leaking to clients."""
        logger.error("Unhandled error for %s: %s", request.url.path, exc, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "An internal server error occurred."},
        )

    return application


# Referenced by uvicorn as automation_browser.main:app
app = create_app()


def run() -> None:
    """Serve the API with uvicorn using the configured host and port."""
    import uvicorn

    uvicorn.run(
        "automation_browser.main:app",
        host=settings.api_host,
        port=settings.api_port,
    )
