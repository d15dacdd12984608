"""Run every applicable validation phase against an invoice."""

import logging

from ..config import Settings, get_settings
from ..core.errors import ValidationError
from ..core.models import Invoice
from . import peppol
from .base import ValidationResult
from .calculation import CalculationValidator
from .core_rules import CoreRulesValidator
from .cross_field import CrossFieldValidator
from .custom import CustomValidator
from .decimals import DecimalsValidator
from .peppol import PeppolValidator
from .vat_categories import VatCategoryValidator
from .xrechnung import XRechnungValidator

logger = logging.getLogger(__name__)


class InvoiceValidator:
    """
    EN 16931 business rule validation with the PEPPOL and XRechnung extensions.

    Phases run in a fixed order so that two runs over the same invoice report
    the same violations in the same order. The invoice's violation list is
    replaced by the outcome of every run.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.core_validator = CoreRulesValidator()
        self.calculation_validator = CalculationValidator()
        self.cross_field_validator = CrossFieldValidator()
        self.vat_validator = VatCategoryValidator()
        self.decimals_validator = DecimalsValidator()
        self.custom_validator = CustomValidator(self.settings)
        self.peppol_validator = PeppolValidator()
        self.xrechnung_validator = XRechnungValidator()

    def run(self, invoice: Invoice) -> ValidationResult:
        """Collect the violations of every applicable phase without touching the invoice."""
        result = ValidationResult()
        result = result.merge(self.core_validator.validate(invoice))
        result = result.merge(self.calculation_validator.validate(invoice))
        result = result.merge(self.cross_field_validator.validate(invoice))
        result = result.merge(self.vat_validator.validate(invoice))
        result = result.merge(self.decimals_validator.validate(invoice))
        result = result.merge(self.custom_validator.validate(invoice))

        if self.settings.enable_peppol_rules and peppol.applies_to(invoice):
            logger.debug(f"Running PEPPOL rules for invoice {invoice.invoice_number}")
            result = result.merge(self.peppol_validator.validate(invoice))

        if self.settings.enable_xrechnung_rules:
            if invoice.is_xrechnung:
                logger.debug(f"Running XRechnung rules for invoice {invoice.invoice_number}")
                result = result.merge(self.xrechnung_validator.validate(invoice))
            result = result.merge(self.xrechnung_validator.validate_specification_identifier(invoice))
        return result

    def validate(self, invoice: Invoice) -> ValidationError | None:
        """Validate and store the violations on the invoice; None when there are none."""
        invoice.set_violations([])
        result = self.run(invoice)
        invoice.set_violations(result.violations)

        logger.info(
            f"Validated invoice {invoice.invoice_number or '<no number>'}: "
            f"{len(result.errors)} errors, {len(result.warnings)} warnings"
        )
        if not result.violations:
            return None
        return ValidationError(result.violations)
