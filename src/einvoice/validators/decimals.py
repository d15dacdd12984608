"""Maximum fractional digits on amounts (BR-DEC-*)."""

from decimal import Decimal

from ..core.models import Invoice
from ..rules import Rule
from ..rules import en16931 as r
from .base import ValidationResult, fmt

MAX_DECIMALS = 2


def has_max_decimals(value: Decimal, places: int = MAX_DECIMALS) -> bool:
    """Count fractional digits after dropping trailing zeros, so 370.000 passes for two places."""
    exponent = value.normalize().as_tuple().exponent
    return isinstance(exponent, int) and exponent >= -places


class DecimalsValidator:
    def validate(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()

        for ac in invoice.allowance_charges:
            if ac.charge_indicator:
                self._check(result, r.BR_DEC_05, ac.actual_amount, "Document level charge amount")
                self._check(result, r.BR_DEC_06, ac.basis_amount, "Document level charge base amount")
            else:
                self._check(result, r.BR_DEC_01, ac.actual_amount, "Document level allowance amount")
                self._check(result, r.BR_DEC_02, ac.basis_amount, "Document level allowance base amount")

        totals = (
            (r.BR_DEC_09, invoice.line_total, "Sum of Invoice line net amount"),
            (r.BR_DEC_10, invoice.allowance_total, "Sum of allowances on document level"),
            (r.BR_DEC_11, invoice.charge_total, "Sum of charges on document level"),
            (r.BR_DEC_12, invoice.tax_basis_total, "Invoice total amount without VAT"),
            (r.BR_DEC_13, invoice.tax_total, "Invoice total VAT amount"),
            (r.BR_DEC_14, invoice.grand_total, "Invoice total amount with VAT"),
            (r.BR_DEC_15, invoice.tax_total_accounting, "Invoice total VAT amount in accounting currency"),
            (r.BR_DEC_16, invoice.total_prepaid, "Paid amount"),
            (r.BR_DEC_17, invoice.rounding_amount, "Rounding amount"),
            (r.BR_DEC_18, invoice.due_payable_amount, "Amount due for payment"),
        )
        for rule, value, name in totals:
            self._check(result, rule, value, name)

        for tax in invoice.trade_taxes:
            self._check(result, r.BR_DEC_19, tax.basis_amount, "VAT category taxable amount")
            self._check(result, r.BR_DEC_20, tax.calculated_amount, "VAT category tax amount")

        for index, line in enumerate(invoice.lines, start=1):
            prefix = f"Line {index}: "
            self._check(result, r.BR_DEC_23, line.total, prefix + "Invoice line net amount")
            for allowance in line.allowances:
                self._check(result, r.BR_DEC_24, allowance.actual_amount, prefix + "Invoice line allowance amount")
                self._check(result, r.BR_DEC_25, allowance.basis_amount, prefix + "Invoice line allowance base amount")
            for charge in line.charges:
                self._check(result, r.BR_DEC_27, charge.actual_amount, prefix + "Invoice line charge amount")
                self._check(result, r.BR_DEC_28, charge.basis_amount, prefix + "Invoice line charge base amount")
        return result

    @staticmethod
    def _check(result: ValidationResult, rule: Rule, value: Decimal, name: str) -> None:
        if not value.is_zero() and not has_max_decimals(value):
            result.add(
                rule,
                f"{name} ({rule.primary_field}) has more than {MAX_DECIMALS} decimal places: {fmt(value)}",
            )
