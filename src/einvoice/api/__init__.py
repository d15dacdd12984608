"""HTTP API for invoice validation and conversion."""

from .routes import health_router, invoices_router

__all__ = ["health_router", "invoices_router"]
