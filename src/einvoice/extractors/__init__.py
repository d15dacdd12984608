"""Container extractors."""

from .pdf import KNOWN_XML_NAMES, extract_invoice_xml

__all__ = ["KNOWN_XML_NAMES", "extract_invoice_xml"]
