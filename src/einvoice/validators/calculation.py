"""Arithmetic rules on document totals (BR-CO-10 to BR-CO-17)."""

from decimal import Decimal

from ..core.models import Invoice
from ..core.totals import calculate_tax
from ..rules import en16931 as r
from .base import ValidationResult, fmt


class CalculationValidator:
    """
    Validate the document totals against their parts.

    Equality is decimal value equality: 370, 370.00 and 370.000 are the same
    amount. No tolerance is applied.
    """

    def validate(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        result = result.merge(self._validate_sums(invoice))
        result = result.merge(self._validate_derived_totals(invoice))
        result = result.merge(self._validate_category_tax(invoice))
        return result

    def _validate_sums(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()

        line_sum = sum((line.total for line in invoice.lines), Decimal("0"))
        if invoice.line_total != line_sum:
            result.add(
                r.BR_CO_10,
                f"Line total {fmt(invoice.line_total)} does not match sum of invoice lines {fmt(line_sum)}",
            )

        allowances = sum(
            (ac.actual_amount for ac in invoice.allowance_charges if not ac.charge_indicator),
            Decimal("0"),
        )
        if invoice.allowance_total != allowances:
            result.add(
                r.BR_CO_11,
                f"Allowance total {fmt(invoice.allowance_total)} does not match sum of document "
                f"level allowances {fmt(allowances)}",
            )

        charges = sum(
            (ac.actual_amount for ac in invoice.allowance_charges if ac.charge_indicator),
            Decimal("0"),
        )
        if invoice.charge_total != charges:
            result.add(
                r.BR_CO_12,
                f"Charge total {fmt(invoice.charge_total)} does not match sum of document "
                f"level charges {fmt(charges)}",
            )
        return result

    def _validate_derived_totals(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()

        expected_basis = invoice.line_total - invoice.allowance_total + invoice.charge_total
        if invoice.tax_basis_total != expected_basis:
            result.add(
                r.BR_CO_13,
                f"Tax basis total {fmt(invoice.tax_basis_total)} does not match "
                f"LineTotal - AllowanceTotal + ChargeTotal = {fmt(expected_basis)}",
            )

        tax_sum = sum((tax.calculated_amount for tax in invoice.trade_taxes), Decimal("0"))
        if invoice.tax_total != tax_sum:
            result.add(
                r.BR_CO_14,
                f"Invoice total VAT amount {fmt(invoice.tax_total)} does not match sum of VAT "
                f"category amounts {fmt(tax_sum)}",
            )

        expected_grand = invoice.tax_basis_total + invoice.tax_total
        if invoice.grand_total != expected_grand:
            result.add(
                r.BR_CO_15,
                f"Grand total {fmt(invoice.grand_total)} does not match TaxBasisTotal + "
                f"TaxTotal = {fmt(expected_grand)}",
            )

        expected_due = invoice.grand_total - invoice.total_prepaid + invoice.rounding_amount
        if invoice.due_payable_amount != expected_due:
            result.add(
                r.BR_CO_16,
                f"Due payable amount {fmt(invoice.due_payable_amount)} does not match GrandTotal "
                f"- TotalPrepaid + RoundingAmount = {fmt(expected_due)}",
            )
        return result

    def _validate_category_tax(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        for tax in invoice.trade_taxes:
            expected = calculate_tax(tax.basis_amount, tax.percent)
            if tax.calculated_amount != expected:
                result.add(
                    r.BR_CO_17,
                    f"VAT category tax amount {fmt(tax.calculated_amount)} does not match "
                    f"expected {fmt(expected)} (basis {fmt(tax.basis_amount)} x rate "
                    f"{fmt(tax.percent)} / 100)",
                )
        return result
