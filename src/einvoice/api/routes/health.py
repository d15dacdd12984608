"""Health and readiness endpoints."""

import fitz  # PyMuPDF
import magic
from fastapi import APIRouter

from ... import __version__
from ...core.profiles import SchemaType
from ...rules import all_rules

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict:
    """Service status, version and the XML syntaxes it reads."""
    return {
        "status": "healthy",
        "version": __version__,
        "service": "einvoice",
        "syntaxes": [schema.display_name for schema in SchemaType],
    }


def _libmagic_ready() -> bool:
    return magic.from_buffer(b"%PDF-1.7\n", mime=True) == "application/pdf"


def _pymupdf_ready() -> bool:
    with fitz.open() as doc:
        return doc.page_count == 0


@router.get("/ready")
async def readiness_check() -> dict:
    """
    Readiness check endpoint.

    Verifies that file type detection and PDF extraction work and that the
    rule catalogue is loaded.
    """
    checks = {
        "libmagic": _libmagic_ready(),
        "pymupdf": _pymupdf_ready(),
        "rules": len(all_rules()) > 0,
    }

    return {
        "ready": all(checks.values()),
        "checks": checks,
        "rule_count": len(all_rules()),
    }
