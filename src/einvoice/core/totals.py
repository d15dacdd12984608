"""Recalculation of the VAT breakdown and the document totals."""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Invoice

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")
CENT = Decimal("0.01")


def round_half_up(value: Decimal, places: int = 2) -> Decimal:
    """Round commercially (0.005 -> 0.01)."""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def calculate_tax(basis: Decimal, rate: Decimal) -> Decimal:
    return round_half_up(basis * rate / HUNDRED)


def update_applicable_trade_tax(invoice: "Invoice", exempt_reasons: dict[str, str]) -> None:
    """
    Rebuild the VAT breakdown from lines and document level allowances/charges.

    Entries are grouped by (category code, rate), the rate compared by value.
    A charge adds to its group's taxable amount, an allowance subtracts; an
    allowance or charge without matching lines opens a group of its own.
    Exemption reason, reason code, tax point date and due date code carry
    over from the previous entry with the same key. A zero-rated group whose
    category is in ``exempt_reasons`` takes its exemption reason from there.
    """
    from .models import TradeTax

    previous = {tax.key: tax for tax in invoice.trade_taxes}
    groups: dict[tuple[str, Decimal], TradeTax] = {}

    for line in invoice.lines:
        key = (line.tax_category_code, line.tax_rate.normalize())
        if key in groups:
            groups[key].basis_amount += line.total
        else:
            groups[key] = TradeTax(
                category_code=line.tax_category_code,
                percent=line.tax_rate,
                basis_amount=line.total,
            )

    for ac in invoice.allowance_charges:
        amount = ac.actual_amount if ac.charge_indicator else -ac.actual_amount
        key = (ac.tax_category_code, ac.tax_rate.normalize())
        if key in groups:
            groups[key].basis_amount += amount
        else:
            groups[key] = TradeTax(
                category_code=ac.tax_category_code,
                percent=ac.tax_rate,
                basis_amount=amount,
            )

    for key, tax in groups.items():
        tax.calculated_amount = calculate_tax(tax.basis_amount, tax.percent)
        old = previous.get(key)
        if old is not None:
            tax.exemption_reason = old.exemption_reason
            tax.exemption_reason_code = old.exemption_reason_code
            tax.tax_point_date = old.tax_point_date
            tax.due_date_type_code = old.due_date_type_code
        if tax.percent.is_zero() and tax.category_code in exempt_reasons:
            tax.exemption_reason = exempt_reasons[tax.category_code]

    invoice.trade_taxes = list(groups.values())
    logger.debug(f"Rebuilt VAT breakdown with {len(invoice.trade_taxes)} entries")


def update_allowances_and_charges(invoice: "Invoice") -> None:
    """Recompute BT-107 and BT-108 from the document level allowances and charges."""
    invoice.allowance_total = sum(
        (ac.actual_amount for ac in invoice.allowance_charges if not ac.charge_indicator),
        Decimal("0"),
    )
    invoice.charge_total = sum(
        (ac.actual_amount for ac in invoice.allowance_charges if ac.charge_indicator),
        Decimal("0"),
    )


def update_totals(invoice: "Invoice") -> None:
    """
    Recompute the document totals BT-106 to BT-115.

    The VAT breakdown is taken as is; call ``update_applicable_trade_tax``
    first to rebuild it from the lines. Paid amount and rounding amount are
    inputs and left untouched.
    """
    invoice.line_total = sum((line.total for line in invoice.lines), Decimal("0"))
    update_allowances_and_charges(invoice)
    invoice.tax_total = sum((tax.calculated_amount for tax in invoice.trade_taxes), Decimal("0"))
    invoice.tax_basis_total = invoice.line_total - invoice.allowance_total + invoice.charge_total
    invoice.grand_total = invoice.tax_basis_total + invoice.tax_total
    invoice.due_payable_amount = invoice.grand_total - invoice.total_prepaid + invoice.rounding_amount

    invoice.line_total_present = True
    invoice.tax_basis_total_present = True
    invoice.grand_total_present = True
    invoice.due_payable_amount_present = True

    logger.debug(
        f"Totals for invoice {invoice.invoice_number}: net {invoice.tax_basis_total}, "
        f"tax {invoice.tax_total}, due {invoice.due_payable_amount}"
    )
