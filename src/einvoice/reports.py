"""JSON-ready and text renderings of validation results and invoice summaries."""

from decimal import Decimal
from typing import Any

from . import codelists
from .core.errors import SemanticError
from .core.models import Invoice, Party
from .core.profiles import profile_name
from .rules import Severity


def _amount(value: Decimal) -> str:
    return format(value, "f")


def _date(value) -> str | None:
    return value.isoformat() if value else None


def violation_dict(violation: SemanticError) -> dict[str, Any]:
    return {
        "rule": violation.rule.code,
        "fields": list(violation.rule.fields),
        "description": violation.rule.description,
        "severity": violation.severity.value,
        "text": violation.text,
    }


def validation_report(
    file: str,
    invoice: Invoice | None,
    violations: list[SemanticError],
    error: str | None = None,
) -> dict[str, Any]:
    """
    Build the validation result shared by the CLI JSON output and the HTTP API.

    ``valid`` is true when the invoice was read and no rule of error severity
    failed; warnings do not make an invoice invalid.
    """
    summary = None
    if invoice is not None:
        summary = {
            "number": invoice.invoice_number,
            "date": _date(invoice.invoice_date),
            "total": _amount(invoice.grand_total),
        }
    return {
        "file": file,
        "valid": invoice is not None
        and error is None
        and not any(v.severity is Severity.ERROR for v in violations),
        "invoice": summary,
        "violations": [violation_dict(v) for v in violations],
        "error": error,
    }


def _party_dict(party: Party | None) -> dict[str, Any] | None:
    if party is None:
        return None
    address = party.postal_address
    return {
        "name": party.name,
        "vat_id": party.vat_id,
        "electronic_address": party.electronic_address,
        "city": address.city if address else "",
        "postcode": address.postcode if address else "",
        "country": address.country_id if address else "",
        "country_name": codelists.country_name(address.country_id) if address and address.country_id else "",
    }


def invoice_summary(invoice: Invoice) -> dict[str, Any]:
    """Summary of an invoice: header, parties, lines, totals, VAT breakdown and payment."""
    return {
        "number": invoice.invoice_number,
        "date": _date(invoice.invoice_date),
        "type_code": invoice.invoice_type_code,
        "type_name": codelists.document_type(invoice.invoice_type_code),
        "profile": profile_name(invoice.guideline),
        "guideline": invoice.guideline,
        "business_process": invoice.bp_specified,
        "syntax": invoice.schema_type.display_name,
        "currency": invoice.invoice_currency_code,
        "tax_currency": invoice.tax_currency_code,
        "buyer_reference": invoice.buyer_reference,
        "seller": _party_dict(invoice.seller),
        "buyer": _party_dict(invoice.buyer),
        "payee": _party_dict(invoice.payee),
        "lines": [
            {
                "id": line.line_id,
                "name": line.item_name,
                "quantity": _amount(line.billed_quantity),
                "unit": line.billed_quantity_unit,
                "unit_name": codelists.unit_code(line.billed_quantity_unit),
                "net_price": _amount(line.net_price),
                "total": _amount(line.total),
                "tax_category": line.tax_category_code,
                "tax_rate": _amount(line.tax_rate),
            }
            for line in invoice.lines
        ],
        "totals": {
            "line_total": _amount(invoice.line_total),
            "allowance_total": _amount(invoice.allowance_total),
            "charge_total": _amount(invoice.charge_total),
            "tax_basis_total": _amount(invoice.tax_basis_total),
            "tax_total": _amount(invoice.tax_total),
            "grand_total": _amount(invoice.grand_total),
            "prepaid": _amount(invoice.total_prepaid),
            "due_payable": _amount(invoice.due_payable_amount),
        },
        "tax_breakdown": [
            {
                "category": tax.category_code,
                "category_name": codelists.vat_category(tax.category_code),
                "rate": _amount(tax.percent),
                "basis": _amount(tax.basis_amount),
                "amount": _amount(tax.calculated_amount),
                "exemption_reason": tax.exemption_reason,
            }
            for tax in invoice.trade_taxes
        ],
        "payment_means": [
            {
                "type_code": means.type_code,
                "type_name": codelists.payment_means(means.type_code),
                "iban": means.payee_iban,
                "bic": means.payee_bic,
            }
            for means in invoice.payment_means
        ],
        "payment_terms": [
            {"description": term.description, "due_date": _date(term.due_date)}
            for term in invoice.payment_terms
        ],
        "notes": [
            {
                "subject": note.subject_code,
                "subject_name": codelists.text_subject_qualifier(note.subject_code) if note.subject_code else "",
                "text": note.text,
            }
            for note in invoice.notes
        ],
    }


def format_violations_text(invoice: Invoice, violations: list[SemanticError], verbose: bool = False) -> str:
    number = invoice.invoice_number or "<no number>"
    errors = [v for v in violations if v.severity is Severity.ERROR]
    if not errors and not violations:
        return f"✓ Invoice {number} is valid"

    lines = []
    if errors:
        lines.append(f"✗ Invoice {number} has {len(violations)} violation(s):")
    else:
        lines.append(f"✓ Invoice {number} is valid with {len(violations)} warning(s):")
    for violation in violations:
        lines.append(f"  - {violation.rule.code} ({violation.rule.primary_field}): {violation.text}")
        if verbose:
            lines.append(f"      {violation.rule.description}")
            lines.append(f"      fields: {', '.join(violation.rule.fields)}")
            lines.append(f"      severity: {violation.severity.value}")
    return "\n".join(lines)


def format_summary_text(summary: dict[str, Any]) -> str:
    lines = [
        f"Invoice:   {summary['number']}",
        f"Date:      {summary['date'] or '-'}",
        f"Type:      {summary['type_code']} ({summary['type_name']})",
        f"Profile:   {summary['profile']}",
        f"Guideline: {summary['guideline'] or '-'}",
        f"Syntax:    {summary['syntax']}",
    ]
    if summary["business_process"]:
        lines.append(f"Process:   {summary['business_process']}")
    lines.append(f"Currency:  {summary['currency']}")

    for role in ("seller", "buyer", "payee"):
        party = summary[role]
        if party is None:
            continue
        location = " ".join(p for p in (party["postcode"], party["city"], party["country"]) if p)
        lines.append(f"{role.capitalize() + ':':<10} {party['name']}" + (f", {location}" if location else ""))
        if party["vat_id"]:
            lines.append(f"           VAT {party['vat_id']}")

    lines.append("")
    lines.append(f"Lines ({len(summary['lines'])}):")
    for line in summary["lines"]:
        lines.append(
            f"  {line['id']}. {line['name']}: {line['quantity']} {line['unit']} x {line['net_price']}"
            f" = {line['total']} [{line['tax_category']} {line['tax_rate']}%]"
        )

    totals = summary["totals"]
    lines.append("")
    lines.append("Totals:")
    lines.append(f"  Line total:     {totals['line_total']}")
    lines.append(f"  Allowances:     {totals['allowance_total']}")
    lines.append(f"  Charges:        {totals['charge_total']}")
    lines.append(f"  Tax basis:      {totals['tax_basis_total']}")
    lines.append(f"  Tax:            {totals['tax_total']}")
    lines.append(f"  Grand total:    {totals['grand_total']}")
    lines.append(f"  Prepaid:        {totals['prepaid']}")
    lines.append(f"  Due payable:    {totals['due_payable']}")

    if summary["tax_breakdown"]:
        lines.append("")
        lines.append("Tax breakdown:")
        for tax in summary["tax_breakdown"]:
            lines.append(
                f"  {tax['category']} ({tax['category_name']}) {tax['rate']}%: "
                f"{tax['basis']} -> {tax['amount']}"
            )

    if summary["payment_means"] or summary["payment_terms"]:
        lines.append("")
        lines.append("Payment:")
        for means in summary["payment_means"]:
            account = f" {means['iban']}" if means["iban"] else ""
            lines.append(f"  {means['type_code']} ({means['type_name']}){account}")
        for term in summary["payment_terms"]:
            due = f" due {term['due_date']}" if term["due_date"] else ""
            lines.append(f"  {term['description']}{due}".rstrip())

    if summary["notes"]:
        lines.append("")
        lines.append("Notes:")
        for note in summary["notes"]:
            prefix = f"[{note['subject']}] " if note["subject"] else ""
            lines.append(f"  {prefix}{note['text']}")
    return "\n".join(lines)
