"""Invoice validators."""

from .base import ValidationResult
from .calculation import CalculationValidator
from .core_rules import CoreRulesValidator
from .cross_field import CrossFieldValidator
from .custom import CustomValidator
from .decimals import DecimalsValidator, has_max_decimals
from .invoice_validator import InvoiceValidator
from .peppol import PeppolValidator
from .vat_categories import VatCategoryValidator
from .xrechnung import XRechnungValidator

__all__ = [
    "CalculationValidator",
    "CoreRulesValidator",
    "CrossFieldValidator",
    "CustomValidator",
    "DecimalsValidator",
    "InvoiceValidator",
    "PeppolValidator",
    "ValidationResult",
    "VatCategoryValidator",
    "XRechnungValidator",
    "has_max_decimals",
]
