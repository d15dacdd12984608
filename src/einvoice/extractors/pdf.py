"""Embedded invoice XML extraction from ZUGFeRD / Factur-X PDFs using PyMuPDF."""

import io
import logging

import fitz  # PyMuPDF

from ..core.errors import ExtractionError

logger = logging.getLogger(__name__)

# Known invoice attachment names in order of preference
KNOWN_XML_NAMES = (
    "factur-x.xml",
    "ZUGFeRD-invoice.xml",
    "zugferd-invoice.xml",
    "xrechnung.xml",
)


def list_embedded_files(doc: fitz.Document) -> list[tuple[str, str]]:
    """Return (entry name, file name) for every embedded file, in document order."""
    files = []
    for name in doc.embfile_names():
        info = doc.embfile_info(name)
        files.append((name, info.get("filename") or name))
    return files


def extract_invoice_xml(content: bytes) -> bytes:
    """
    Take the invoice XML out of a hybrid PDF (PDF/A-3 with attachment).

    Args:
        content: PDF file bytes

    Returns:
        Bytes of the first known invoice attachment, else of the first ``*.xml``

    Raises:
        ExtractionError: If the bytes are no PDF or carry no XML attachment
    """
    try:
        doc = fitz.open(stream=io.BytesIO(content), filetype="pdf")
    except RuntimeError as e:
        raise ExtractionError(f"failed to open PDF: {e}") from e

    with doc:
        files = list_embedded_files(doc)
        if not files:
            raise ExtractionError("PDF contains no embedded files (not a ZUGFeRD/Factur-X invoice)")

        by_filename = {filename: name for name, filename in files}
        for known in KNOWN_XML_NAMES:
            if known in by_filename:
                logger.info(f"Extracted embedded invoice {known}")
                return doc.embfile_get(by_filename[known])

        for name, filename in files:
            if filename.lower().endswith(".xml"):
                logger.info(f"Extracted embedded XML {filename}")
                return doc.embfile_get(name)

    raise ExtractionError("PDF contains no invoice XML attachment")
