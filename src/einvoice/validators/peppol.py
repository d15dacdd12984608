"""PEPPOL BIS Billing 3.0 rules."""

from decimal import Decimal

from ..core.models import Invoice
from ..core.profiles import URN_PEPPOL_BILLING_30, is_peppol_business_process
from ..rules import peppol as p
from .base import ValidationResult, fmt
from .custom import line_net_amount


def applies_to(invoice: Invoice) -> bool:
    """PEPPOL rules run for PEPPOL business processes and for the PEPPOL BIS specification identifier."""
    return invoice.is_peppol or invoice.guideline.strip() == URN_PEPPOL_BILLING_30


class PeppolValidator:
    def validate(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        result = result.merge(self._validate_document(invoice))
        result = result.merge(self._validate_lines(invoice))
        return result

    def _validate_document(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        process = invoice.bp_specified
        if not process:
            result.add(p.PEPPOL_R001, "Business process MUST be provided")
        elif not is_peppol_business_process(process):
            result.add(
                p.PEPPOL_R007,
                f"Business process '{process}' is not in the format "
                f"'urn:fdc:peppol.eu:2017:poacc:billing:NN:1.0'",
            )

        if len(invoice.notes) > 1:
            result.add(p.PEPPOL_R002, f"Found {len(invoice.notes)} notes, no more than one is allowed")
        if not invoice.buyer_reference and not invoice.buyer_order_reference:
            result.add(p.PEPPOL_R003, "A buyer reference or purchase order reference MUST be provided")
        if not invoice.buyer.electronic_address:
            result.add(p.PEPPOL_R010, "Buyer electronic address MUST be provided")
        if not invoice.seller.electronic_address:
            result.add(p.PEPPOL_R020, "Seller electronic address MUST be provided")
        return result

    def _validate_lines(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        for index, line in enumerate(invoice.lines, start=1):
            ref = line.line_id or str(index)

            if not line.basis_quantity.is_zero() and not line.basis_quantity > 0:
                result.add(
                    p.PEPPOL_R121,
                    f"Line {ref}: Base quantity MUST be a positive number above zero (got {fmt(line.basis_quantity)})",
                )
            if line.basis_quantity_unit and line.basis_quantity_unit != line.billed_quantity_unit:
                result.add(
                    p.PEPPOL_R130,
                    f"Line {ref}: Unit code of price base quantity ({line.basis_quantity_unit}) MUST be "
                    f"same as invoiced quantity ({line.billed_quantity_unit})",
                )

            expected = line_net_amount(line)
            if line.total != expected:
                base = line.basis_quantity if not line.basis_quantity.is_zero() else Decimal("1")
                charges = sum((ac.actual_amount for ac in line.charges), Decimal("0"))
                allowances = sum((ac.actual_amount for ac in line.allowances), Decimal("0"))
                result.add(
                    p.PEPPOL_R120,
                    f"Line {ref}: Invoice line net amount {fmt(line.total)} does not match calculated "
                    f"{fmt(expected)} (qty {fmt(line.billed_quantity)} × price {fmt(line.net_price)} / "
                    f"baseQty {fmt(base)} + charges {fmt(charges)} - allowances {fmt(allowances)})",
                )
        return result
