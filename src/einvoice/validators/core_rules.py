"""Structural EN 16931 rules (BR-01 to BR-65, BR-B)."""

import logging
from decimal import Decimal

from ..core.models import AllowanceCharge, Invoice, InvoiceLine, Party
from ..core.profiles import Profile
from ..rules import en16931 as r
from .base import ValidationResult, fmt

logger = logging.getLogger(__name__)

SPLIT_PAYMENT = "B"
STANDARD_RATED = "S"


class CoreRulesValidator:
    """
    Presence and consistency rules of the EN 16931 core.

    Totals elements (BR-12 to BR-15), the line net amount (BR-24) and the
    item net price (BR-26) count as present when the parser saw the element
    or the value is non-zero, so programmatically built invoices are judged
    by their values.
    """

    def validate(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        result = result.merge(self._validate_header(invoice))
        result = result.merge(self._validate_parties(invoice))
        result = result.merge(self._validate_totals_present(invoice))
        result = result.merge(self._validate_lines(invoice))
        result = result.merge(self._validate_periods(invoice))
        result = result.merge(self._validate_document_allowances_charges(invoice))
        result = result.merge(self._validate_line_allowances_charges(invoice))
        result = result.merge(self._validate_breakdown(invoice))
        result = result.merge(self._validate_payment(invoice))
        result = result.merge(self._validate_references(invoice))
        result = result.merge(self._validate_identifier_schemes(invoice))
        result = result.merge(self._validate_split_payment(invoice))
        return result

    def _validate_header(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        if invoice.profile is Profile.UNKNOWN:
            result.add(r.BR_01, f"Specification identifier '{invoice.guideline}' is not a known profile")
        if not invoice.invoice_number:
            result.add(r.BR_02, "Invoice number is missing")
        if invoice.invoice_date is None:
            result.add(r.BR_03, "Invoice issue date is missing")
        if invoice.invoice_type_code == 0:
            result.add(r.BR_04, "Invoice type code is missing")
        if not invoice.invoice_currency_code:
            result.add(r.BR_05, "Invoice currency code is missing")
        return result

    def _validate_parties(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        if not invoice.seller.name:
            result.add(r.BR_06, "Seller name is missing")
        if not invoice.buyer.name:
            result.add(r.BR_07, "Buyer name is missing")

        if invoice.seller.postal_address is None:
            result.add(r.BR_08, "Seller has no postal address")
        elif not invoice.seller.postal_address.country_id:
            result.add(r.BR_09, "Seller postal address has no country code")

        if invoice.profile > Profile.MINIMUM:
            if invoice.buyer.postal_address is None:
                result.add(r.BR_10, "Buyer has no postal address")
            elif not invoice.buyer.postal_address.country_id:
                result.add(r.BR_11, "Buyer postal address has no country code")

        if invoice.payee is not None and not invoice.payee.name:
            result.add(r.BR_17, "Payee is given but has no name")

        representative = invoice.seller_tax_representative
        if representative is not None:
            if not representative.name:
                result.add(r.BR_18, "Seller tax representative has no name")
            if representative.postal_address is None:
                result.add(r.BR_19, "Seller tax representative has no postal address")
            elif not representative.postal_address.country_id:
                result.add(r.BR_20, "Seller tax representative postal address has no country code")
        return result

    def _validate_totals_present(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        checks = (
            (r.BR_12, invoice.line_total_present, invoice.line_total, "Sum of invoice line net amount"),
            (r.BR_13, invoice.tax_basis_total_present, invoice.tax_basis_total, "Invoice total without VAT"),
            (r.BR_14, invoice.grand_total_present, invoice.grand_total, "Invoice total with VAT"),
            (r.BR_15, invoice.due_payable_amount_present, invoice.due_payable_amount, "Amount due for payment"),
        )
        for rule, present, value, name in checks:
            if not present and value.is_zero():
                result.add(rule, f"{name} is missing")
        return result

    def _validate_lines(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        if invoice.profile >= Profile.BASIC and not invoice.lines:
            result.add(r.BR_16, "Invoice has no lines")

        for line in invoice.lines:
            ref = self._line_ref(line)
            if not line.line_id:
                result.add(r.BR_21, "Invoice line has no identifier")
            if line.billed_quantity.is_zero():
                result.add(r.BR_22, f"{ref}: invoiced quantity is missing")
            if not line.billed_quantity_unit:
                result.add(r.BR_23, f"{ref}: invoiced quantity has no unit of measure")
            if not line.total_present and line.total.is_zero():
                result.add(r.BR_24, f"{ref}: line net amount is missing")
            if not line.item_name:
                result.add(r.BR_25, f"{ref}: item name is missing")
            if not line.net_price_present and line.net_price.is_zero():
                result.add(r.BR_26, f"{ref}: item net price is missing")
            if line.net_price < 0:
                result.add(r.BR_27, f"{ref}: item net price {fmt(line.net_price)} is negative")
            if line.gross_price < 0:
                result.add(r.BR_28, f"{ref}: item gross price {fmt(line.gross_price)} is negative")
        return result

    def _validate_periods(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        start, end = invoice.billing_period_start, invoice.billing_period_end
        if start and end and end < start:
            result.add(r.BR_29, f"Invoicing period end {end.isoformat()} is before start {start.isoformat()}")

        for line in invoice.lines:
            start, end = line.billing_period_start, line.billing_period_end
            if start and end and end < start:
                result.add(
                    r.BR_30,
                    f"{self._line_ref(line)}: period end {end.isoformat()} is before start {start.isoformat()}",
                )
        return result

    def _validate_document_allowances_charges(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        for ac in invoice.allowance_charges:
            if ac.charge_indicator:
                amount_rule, category_rule, reason_rule = r.BR_36, r.BR_37, r.BR_38
                negative_rule, negative_basis_rule = r.BR_39, r.BR_40
                kind = "Document level charge"
            else:
                amount_rule, category_rule, reason_rule = r.BR_31, r.BR_32, r.BR_33
                negative_rule, negative_basis_rule = r.BR_34, r.BR_35
                kind = "Document level allowance"

            if ac.actual_amount.is_zero():
                result.add(amount_rule, f"{kind} has no amount")
            if not ac.tax_category_code:
                result.add(category_rule, f"{kind} has no VAT category code")
            if not self._has_reason(ac):
                result.add(reason_rule, f"{kind} has neither a reason nor a reason code")
            if ac.actual_amount < 0:
                result.add(negative_rule, f"{kind} amount {fmt(ac.actual_amount)} is negative")
            if ac.basis_amount < 0:
                result.add(negative_basis_rule, f"{kind} base amount {fmt(ac.basis_amount)} is negative")
        return result

    def _validate_line_allowances_charges(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        for line in invoice.lines:
            ref = self._line_ref(line)
            for ac in line.allowances:
                if ac.actual_amount.is_zero():
                    result.add(r.BR_41, f"{ref}: line allowance has no amount")
                if not self._has_reason(ac):
                    result.add(r.BR_42, f"{ref}: line allowance has neither a reason nor a reason code")
            for ac in line.charges:
                if ac.actual_amount.is_zero():
                    result.add(r.BR_43, f"{ref}: line charge has no amount")
                if not self._has_reason(ac):
                    result.add(r.BR_44, f"{ref}: line charge has neither a reason nor a reason code")
        return result

    def _validate_breakdown(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        expected = expected_basis_amounts(invoice)
        for tax in invoice.trade_taxes:
            basis = expected.get(tax.key, Decimal("0"))
            if tax.basis_amount != basis:
                result.add(
                    r.BR_45,
                    f"VAT breakdown {tax.category_code} {fmt(tax.percent)}%: taxable amount "
                    f"{fmt(tax.basis_amount)} does not match calculated {fmt(basis)}",
                )
            if not tax.category_code:
                result.add(r.BR_47, "VAT breakdown has no VAT category code")
        return result

    def _validate_payment(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        for means in invoice.payment_means:
            if means.type_code == 0:
                result.add(r.BR_49, "Payment means type code is missing")
            if (means.payee_account_name or means.payee_bic) and not means.has_credit_transfer:
                result.add(r.BR_50, "Credit transfer information is given without a payment account identifier")

        if (
            invoice.tax_currency_code
            and invoice.tax_currency_code != invoice.invoice_currency_code
            and invoice.tax_total_accounting.is_zero()
        ):
            result.add(
                r.BR_53,
                f"VAT accounting currency {invoice.tax_currency_code} is given but the VAT total "
                f"in accounting currency is missing",
            )
        return result

    def _validate_references(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        for document in invoice.additional_documents:
            if not document.issuer_assigned_id:
                result.add(r.BR_52, "Supporting document has no reference")
        for line in invoice.lines:
            for characteristic in line.characteristics:
                if not characteristic.description or not characteristic.value:
                    result.add(
                        r.BR_54,
                        f"{self._line_ref(line)}: item attribute "
                        f"'{characteristic.description}' needs both name and value",
                    )
        for reference in invoice.invoice_referenced_documents:
            if not reference.id:
                result.add(r.BR_55, "Preceding invoice reference has no invoice number")
        representative = invoice.seller_tax_representative
        if representative is not None and not representative.vat_id:
            result.add(r.BR_56, "Seller tax representative has no VAT identifier")
        ship_to = invoice.ship_to
        if ship_to is not None and ship_to.postal_address is not None and not ship_to.postal_address.country_id:
            result.add(r.BR_57, "Deliver to address has no country code")
        return result

    def _validate_identifier_schemes(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        if self._missing_scheme(invoice.seller):
            result.add(r.BR_62, f"Seller electronic address '{invoice.seller.electronic_address}' has no scheme")
        if self._missing_scheme(invoice.buyer):
            result.add(r.BR_63, f"Buyer electronic address '{invoice.buyer.electronic_address}' has no scheme")
        for line in invoice.lines:
            if line.global_id and not line.global_id_scheme:
                result.add(r.BR_64, f"{self._line_ref(line)}: item standard identifier has no scheme")
            for classification in line.classifications:
                if classification.class_code and not classification.list_id:
                    result.add(
                        r.BR_65,
                        f"{self._line_ref(line)}: item classification "
                        f"'{classification.class_code}' has no scheme",
                    )
        return result

    def _validate_split_payment(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        categories = {line.tax_category_code for line in invoice.lines}
        categories.update(ac.tax_category_code for ac in invoice.allowance_charges)
        if SPLIT_PAYMENT not in categories:
            return result

        seller_country = invoice.seller.country_id
        buyer_country = invoice.buyer.country_id
        if seller_country != "IT" or buyer_country != "IT":
            result.add(
                r.BR_B_01,
                f"Split payment requires seller and buyer in IT (seller '{seller_country}', "
                f"buyer '{buyer_country}')",
            )
        if STANDARD_RATED in categories:
            result.add(r.BR_B_02, "Split payment must not be combined with standard rated items")
        return result

    @staticmethod
    def _has_reason(ac: AllowanceCharge) -> bool:
        return bool(ac.reason or ac.reason_code)

    @staticmethod
    def _missing_scheme(party: Party) -> bool:
        return bool(party.electronic_address) and not party.electronic_address_scheme

    @staticmethod
    def _line_ref(line: InvoiceLine) -> str:
        return f"Line {line.line_id}" if line.line_id else "Line"


def expected_basis_amounts(invoice: Invoice) -> dict[tuple[str, Decimal], Decimal]:
    """Taxable amount per (category, rate): line totals plus charges minus allowances."""
    amounts: dict[tuple[str, Decimal], Decimal] = {}
    for line in invoice.lines:
        key = (line.tax_category_code, line.tax_rate.normalize())
        amounts[key] = amounts.get(key, Decimal("0")) + line.total
    for ac in invoice.allowance_charges:
        key = (ac.tax_category_code, ac.tax_rate.normalize())
        amount = ac.actual_amount if ac.charge_indicator else -ac.actual_amount
        amounts[key] = amounts.get(key, Decimal("0")) + amount
    return amounts
