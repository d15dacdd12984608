"""Checks outside the published schematrons: line net amounts and tax currencies."""

from decimal import Decimal

from ..config import Settings
from ..core.models import Invoice, InvoiceLine
from ..core.totals import round_half_up
from ..rules import Rule
from ..rules import custom as c
from .base import ValidationResult, fmt


def line_net_amount(line: InvoiceLine) -> Decimal:
    """Expected BT-131: quantity x price / base quantity + line charges - line allowances, rounded half up."""
    base = line.basis_quantity if not line.basis_quantity.is_zero() else Decimal("1")
    charges = sum((ac.actual_amount for ac in line.charges), Decimal("0"))
    allowances = sum((ac.actual_amount for ac in line.allowances), Decimal("0"))
    return round_half_up(line.billed_quantity * line.net_price / base + charges - allowances)


class CustomValidator:
    def __init__(self, settings: Settings):
        self.settings = settings

    def validate(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        result = result.merge(self._validate_line_amounts(invoice))
        result = result.merge(self._validate_tax_currencies(invoice))
        return result

    def _validate_line_amounts(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        for line in invoice.lines:
            expected = line_net_amount(line)
            if line.total == expected:
                continue
            if line.allowances or line.charges:
                result.add(
                    c.BR_USER_05,
                    f"Line {line.line_id}: net amount {fmt(line.total)} does not match calculated "
                    f"{fmt(expected)} (qty {fmt(line.billed_quantity)} x price {fmt(line.net_price)} "
                    f"including line allowances and charges)",
                )
            else:
                result.add(
                    c.CHECK_LINE_TOTAL,
                    f"Line {line.line_id}: net amount {fmt(line.total)} does not match quantity "
                    f"{fmt(line.billed_quantity)} x net price {fmt(line.net_price)} = {fmt(expected)}",
                )
        return result

    def _validate_tax_currencies(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        severity = self.settings.unexpected_currency_level
        rule = c.UNEXPECTED_TAX_CURRENCY
        if rule.severity is not severity:
            rule = Rule(rule.code, rule.fields, rule.description, severity)

        expected = ", ".join(code for code in (invoice.invoice_currency_code, invoice.tax_currency_code) if code)
        for currency in invoice.unexpected_tax_currencies:
            result.add(rule, f"Tax total in currency {currency} is neither the invoice nor the accounting currency ({expected})")
        return result
