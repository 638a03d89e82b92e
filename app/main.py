"""
FastAPI application entrypoint.

Creates and configures the FastAPI application with:
  - Lifespan management (logging)
  - API router registration
  - Error handlers and error boundary
  - Request logging, security headers and CORS middleware
"""

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.errors import register_error_handlers
from app.api.routes import router as metadata_router
from app.core.config import settings
from app.core.lifespan import lifespan
from app.core.middleware import RequestLoggingMiddleware, SecureHeadersMiddleware


def create_app() -> FastAPI:
    """Application factory: creates and configures the FastAPI instance."""

    application = FastAPI(
        title="Page Metadata Service",
        description=(
            "Fetches a web page and returns its metadata (title, "
            "description, keywords, language, icon and preview image) "
            "as JSON."
        ),
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_docs else None,
        redoc_url="/redoc" if settings.enable_docs else None,
        openapi_url="/openapi.json" if settings.enable_docs else None,
    )

    # ── Routes ───────────────────────────────────────────────
    application.include_router(metadata_router)

    # ── Exception Handlers ───────────────────────────────────
    # Registered first so the error boundary is the innermost middleware
    register_error_handlers(application)

    # ── Middleware ────────────────────────────────────────────
    application.add_middleware(RequestLoggingMiddleware)
    application.add_middleware(SecureHeadersMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return application


def run() -> None:
    """Serve the application with uvicorn using the configured bind address."""
    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


# Create the app instance, referenced by uvicorn as app.main:app
app = create_app()


if __name__ == "__main__":
    run()
