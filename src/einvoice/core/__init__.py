"""Core invoice model, errors, profiles and totals."""

from .errors import (
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
from .models import (
    AllowanceCharge,
    Characteristic,
    Classification,
    Contact,
    Document,
    GlobalID,
    Invoice,
    InvoiceLine,
    LegalOrganization,
    Note,
    Party,
    PaymentMeans,
    PaymentTerm,
    PostalAddress,
    ReferencedDocument,
    TradeTax,
)
from .profiles import Profile, SchemaType, profile_from_urn, profile_name
from .totals import round_half_up

__all__ = [
    "AllowanceCharge",
    "Characteristic",
    "Classification",
    "Contact",
    "Document",
    "EInvoiceError",
    "ExtractionError",
    "GlobalID",
    "InvalidAttachmentError",
    "InvalidDateError",
    "InvalidDecimalError",
    "Invoice",
    "InvoiceLine",
    "LegalOrganization",
    "Note",
    "ParseError",
    "Party",
    "PaymentMeans",
    "PaymentTerm",
    "PostalAddress",
    "Profile",
    "ReferencedDocument",
    "SchemaType",
    "SemanticError",
    "TradeTax",
    "UnknownFormatError",
    "UnsupportedFormatError",
    "ValidationError",
    "WriteError",
    "profile_from_urn",
    "profile_name",
    "round_half_up",
]
