"""Cross-field rules (BR-CO-03, 04, 09, 18, 19, 20, 25, 26)."""

import re

from ..core.models import Invoice
from ..rules import en16931 as r
from .base import ValidationResult, fmt

VAT_ID_PREFIX = re.compile(r"^[A-Z]{2}.+")


class CrossFieldValidator:
    def validate(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        result = result.merge(self._validate_tax_point(invoice))
        result = result.merge(self._validate_line_categories(invoice))
        result = result.merge(self._validate_vat_id_prefixes(invoice))
        result = result.merge(self._validate_breakdown_present(invoice))
        result = result.merge(self._validate_periods_filled(invoice))
        result = result.merge(self._validate_payment_terms(invoice))
        result = result.merge(self._validate_seller_identification(invoice))
        return result

    def _validate_tax_point(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        for tax in invoice.trade_taxes:
            if tax.tax_point_date is not None and tax.due_date_type_code:
                result.add(
                    r.BR_CO_03,
                    f"VAT breakdown {tax.category_code}: tax point date "
                    f"{tax.tax_point_date.isoformat()} and tax point date code "
                    f"{tax.due_date_type_code} are mutually exclusive",
                )
        return result

    def _validate_line_categories(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        for line in invoice.lines:
            if not line.tax_category_code:
                result.add(r.BR_CO_04, f"Invoice line {line.line_id} has no VAT category code")
        return result

    def _validate_vat_id_prefixes(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        parties = [("Seller VAT identifier (BT-31)", invoice.seller), ("Buyer VAT identifier (BT-48)", invoice.buyer)]
        if invoice.seller_tax_representative is not None:
            parties.append(("Seller tax representative VAT identifier (BT-63)", invoice.seller_tax_representative))

        for label, party in parties:
            if party.vat_id and not VAT_ID_PREFIX.match(party.vat_id):
                result.add(
                    r.BR_CO_09,
                    f"{label} '{party.vat_id}' must start with a two letter ISO 3166-1 alpha-2 country code",
                )
        return result

    def _validate_breakdown_present(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        if not invoice.trade_taxes:
            result.add(r.BR_CO_18, "Invoice has no VAT breakdown")
        return result

    def _validate_periods_filled(self, invoice: Invoice) -> ValidationResult:
        """Only parsed invoices carry the presence flags, so built invoices never fail here."""
        result = ValidationResult()
        if (
            invoice.billing_period_present
            and invoice.billing_period_start is None
            and invoice.billing_period_end is None
        ):
            result.add(r.BR_CO_19, "Invoicing period is present without start or end date")

        for line in invoice.lines:
            if line.billing_period_present and line.billing_period_start is None and line.billing_period_end is None:
                result.add(r.BR_CO_20, f"Invoice line {line.line_id}: period is present without start or end date")
        return result

    def _validate_payment_terms(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        if invoice.due_payable_amount > 0:
            has_terms = any(term.due_date is not None or term.description for term in invoice.payment_terms)
            if not has_terms:
                result.add(
                    r.BR_CO_25,
                    f"Amount due {fmt(invoice.due_payable_amount)} is positive but neither a payment "
                    f"due date nor payment terms are given",
                )
        return result

    def _validate_seller_identification(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        seller = invoice.seller
        has_id = bool(seller.ids or seller.global_ids)
        has_legal = seller.legal_organization is not None and bool(seller.legal_organization.id)
        if not (has_id or has_legal or seller.vat_id):
            result.add(
                r.BR_CO_26,
                "Seller has neither an identifier (BT-29), a legal registration identifier (BT-30) "
                "nor a VAT identifier (BT-31)",
            )
        return result
