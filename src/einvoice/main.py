"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.routes import health_router, invoices_router
from .config import get_settings

# Configure logging
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="einvoice API",
        description=(
            "Validate, inspect and convert EN 16931 electronic invoices "
            "(ZUGFeRD/Factur-X, XRechnung, UBL and hybrid PDF)."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix="/api/v1")
    app.include_router(invoices_router, prefix="/api/v1")

    @app.get("/")
    async def root():
        return {
            "name": "einvoice API",
            "version": __version__,
            "docs": "/docs",
        }

    logger.info(f"einvoice API configured (debug={settings.debug})")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "einvoice.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
