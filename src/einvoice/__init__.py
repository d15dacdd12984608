"""einvoice - read, write and validate EN 16931 electronic invoices."""

from typing import BinaryIO

__version__ = "0.1.0"

from .core.errors import (
    EInvoiceError,
    ExtractionError,
    InvalidAttachmentError,
    InvalidDateError,
    InvalidDecimalError,
    ParseError,
    SemanticError,
    UnknownFormatError,
    UnsupportedFormatError,
    ValidationError,
    WriteError,
)
from .core.models import Invoice, InvoiceLine, Party, TradeTax
from .core.pipeline import InvoicePipeline, PipelineResult, load_invoice
from .core.profiles import Profile, SchemaType
from .parsers import parse_reader, parse_xml_file
from .rules import Rule, Severity, all_rules, get_rule
from .validators import InvoiceValidator


def write(invoice: Invoice, sink: BinaryIO, schema: SchemaType | None = None) -> None:
    """Write an invoice as XML into a binary sink (CII unless another schema is given)."""
    invoice.write(sink, schema)


__all__ = [
    "EInvoiceError",
    "ExtractionError",
    "InvalidAttachmentError",
    "InvalidDateError",
    "InvalidDecimalError",
    "Invoice",
    "InvoiceLine",
    "InvoicePipeline",
    "InvoiceValidator",
    "ParseError",
    "Party",
    "PipelineResult",
    "Profile",
    "Rule",
    "SchemaType",
    "SemanticError",
    "Severity",
    "TradeTax",
    "UnknownFormatError",
    "UnsupportedFormatError",
    "ValidationError",
    "WriteError",
    "__version__",
    "all_rules",
    "get_rule",
    "load_invoice",
    "parse_reader",
    "parse_xml_file",
    "write",
]
