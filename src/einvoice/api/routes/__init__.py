"""API routes."""

from .health import router as health_router
from .invoices import router as invoices_router

__all__ = ["health_router", "invoices_router"]
