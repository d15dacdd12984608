"""VAT category family rules (BR-S, BR-AE, BR-E, BR-Z, BR-G, BR-IC, BR-AF, BR-AG, BR-O)."""

from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal

from ..core.models import AllowanceCharge, Invoice
from ..core.totals import calculate_tax
from ..rules import VAT_CATEGORY_ORDER, vat_category_rule
from .base import ValidationResult, fmt
from .core_rules import expected_basis_amounts


def _seller_registered(invoice: Invoice) -> bool:
    """Seller VAT id, seller tax registration or tax representative VAT id."""
    return bool(invoice.seller.vat_id or invoice.seller.fc_tax_id or _representative_vat(invoice))


def _seller_vat(invoice: Invoice) -> bool:
    return bool(invoice.seller.vat_id or _representative_vat(invoice))


def _representative_vat(invoice: Invoice) -> str:
    representative = invoice.seller_tax_representative
    return representative.vat_id if representative is not None else ""


def _reverse_charge_parties(invoice: Invoice) -> bool:
    buyer = invoice.buyer
    buyer_legal = buyer.legal_organization is not None and bool(buyer.legal_organization.id)
    return _seller_vat(invoice) and bool(buyer.vat_id or buyer_legal)


def _intra_community_parties(invoice: Invoice) -> bool:
    return _seller_vat(invoice) and bool(invoice.buyer.vat_id)


def _no_vat_identifiers(invoice: Invoice) -> bool:
    return not (invoice.seller.vat_id or _representative_vat(invoice) or invoice.buyer.vat_id)


@dataclass(frozen=True)
class CategoryPolicy:
    """What a VAT category demands from parties, rates, tax amounts and exemption reasons."""

    parties: Callable[[Invoice], bool]
    parties_text: str
    rate_ok: Callable[[Decimal], bool]
    rate_text: str
    taxed: bool
    exemption_required: bool


_SELLER_TEXT = "requires a seller VAT identifier, seller tax registration or tax representative VAT identifier"

POLICIES: dict[str, CategoryPolicy] = {
    "S": CategoryPolicy(_seller_registered, _SELLER_TEXT, lambda rate: rate > 0, "greater than zero", True, False),
    "Z": CategoryPolicy(_seller_registered, _SELLER_TEXT, lambda rate: rate == 0, "0", False, False),
    "E": CategoryPolicy(_seller_registered, _SELLER_TEXT, lambda rate: rate == 0, "0", False, True),
    "AE": CategoryPolicy(
        _reverse_charge_parties,
        "requires a seller (or tax representative) VAT identifier and a buyer VAT identifier "
        "or legal registration identifier",
        lambda rate: rate == 0,
        "0",
        False,
        True,
    ),
    "K": CategoryPolicy(
        _intra_community_parties,
        "requires a seller (or tax representative) VAT identifier and a buyer VAT identifier",
        lambda rate: rate == 0,
        "0",
        False,
        True,
    ),
    "G": CategoryPolicy(
        _seller_vat,
        "requires a seller or tax representative VAT identifier",
        lambda rate: rate == 0,
        "0",
        False,
        True,
    ),
    "L": CategoryPolicy(_seller_registered, _SELLER_TEXT, lambda rate: rate >= 0, "0 or greater", True, False),
    "M": CategoryPolicy(_seller_registered, _SELLER_TEXT, lambda rate: rate >= 0, "0 or greater", True, False),
    "O": CategoryPolicy(
        _no_vat_identifiers,
        "must not carry a seller, tax representative or buyer VAT identifier",
        lambda rate: rate == 0,
        "absent (0)",
        False,
        True,
    ),
}


class VatCategoryValidator:
    """
    Run the rule family of every VAT category, in a fixed category order.

    All families share one numbering scheme, so a single routine covers them
    with the per-category differences held in ``POLICIES``.
    """

    def validate(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        for category in VAT_CATEGORY_ORDER:
            result = result.merge(self._validate_category(invoice, category))
        return result

    def _validate_category(self, invoice: Invoice, category: str) -> ValidationResult:
        result = ValidationResult()
        policy = POLICIES[category]

        def rule(number: int):
            return vat_category_rule(category, number)

        lines = [line for line in invoice.lines if line.tax_category_code == category]
        allowances = [
            ac for ac in invoice.allowance_charges if not ac.charge_indicator and ac.tax_category_code == category
        ]
        charges = [ac for ac in invoice.allowance_charges if ac.charge_indicator and ac.tax_category_code == category]
        breakdown = [tax for tax in invoice.trade_taxes if tax.category_code == category]

        if (lines or allowances or charges) and not breakdown:
            result.add(rule(1), f"Items with VAT category {category} but no {category} entry in the VAT breakdown")

        for number, entries, kind in ((2, lines, "invoice line"), (3, allowances, "allowance"), (4, charges, "charge")):
            if entries and not policy.parties(invoice):
                result.add(rule(number), f"VAT category {category} on a {kind} {policy.parties_text}")

        for line in lines:
            if not policy.rate_ok(line.tax_rate):
                result.add(
                    rule(5),
                    f"Invoice line {line.line_id}: VAT rate {fmt(line.tax_rate)} for category "
                    f"{category} must be {policy.rate_text}",
                )
        for number, entries, kind in ((6, allowances, "Allowance"), (7, charges, "Charge")):
            for ac in entries:
                if not policy.rate_ok(ac.tax_rate):
                    result.add(
                        rule(number),
                        f"{kind} {self._describe(ac)}: VAT rate {fmt(ac.tax_rate)} for category "
                        f"{category} must be {policy.rate_text}",
                    )

        expected = expected_basis_amounts(invoice)
        for tax in breakdown:
            basis = expected.get(tax.key, Decimal("0"))
            if tax.basis_amount != basis:
                result.add(
                    rule(8),
                    f"Taxable amount {fmt(tax.basis_amount)} for category {category} at rate "
                    f"{fmt(tax.percent)} does not match calculated {fmt(basis)}",
                )

            tax_amount = calculate_tax(tax.basis_amount, tax.percent) if policy.taxed else Decimal("0")
            if tax.calculated_amount != tax_amount:
                result.add(
                    rule(9),
                    f"VAT amount {fmt(tax.calculated_amount)} for category {category} must be {fmt(tax_amount)}",
                )

            has_exemption = bool(tax.exemption_reason or tax.exemption_reason_code)
            if policy.exemption_required and not has_exemption:
                result.add(rule(10), f"VAT breakdown {category} needs an exemption reason or reason code")
            elif not policy.exemption_required and has_exemption:
                result.add(rule(10), f"VAT breakdown {category} must not have an exemption reason or reason code")

        if category == "K" and breakdown:
            result = result.merge(self._validate_intra_community(invoice))
        if category == "O" and breakdown:
            result = result.merge(self._validate_not_subject(invoice))
        return result

    def _validate_intra_community(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        has_period = invoice.billing_period_start is not None or invoice.billing_period_end is not None
        if invoice.occurrence_date is None and not has_period:
            result.add(
                vat_category_rule("K", 11),
                "Intra-community supply needs an actual delivery date or an invoicing period",
            )
        ship_to = invoice.ship_to
        if ship_to is None or not ship_to.country_id:
            result.add(vat_category_rule("K", 12), "Intra-community supply needs a deliver to country code")
        return result

    def _validate_not_subject(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        others = sorted({tax.category_code for tax in invoice.trade_taxes if tax.category_code != "O"})
        if others:
            result.add(
                vat_category_rule("O", 11),
                f"Not subject to VAT must not be combined with other VAT breakdowns ({', '.join(others)})",
            )
        for line in invoice.lines:
            if line.tax_category_code != "O":
                result.add(
                    vat_category_rule("O", 12),
                    f"Invoice line {line.line_id} has VAT category '{line.tax_category_code}' "
                    f"in a not subject to VAT invoice",
                )
        for ac in invoice.allowance_charges:
            if ac.tax_category_code == "O":
                continue
            number = 14 if ac.charge_indicator else 13
            kind = "Charge" if ac.charge_indicator else "Allowance"
            result.add(
                vat_category_rule("O", number),
                f"{kind} {self._describe(ac)} has VAT category '{ac.tax_category_code}' in a not "
                f"subject to VAT invoice",
            )
        return result

    @staticmethod
    def _describe(ac: AllowanceCharge) -> str:
        return f"'{ac.reason or ac.reason_code}' ({fmt(ac.actual_amount)})"
