"""XRechnung CIUS rules (BR-DE-*)."""

import re

import pycountry

from ..core.models import Invoice, PaymentMeans
from ..rules import xrechnung as x
from .base import ValidationResult

CREDIT_TRANSFER_CODES = {30, 58}
PAYMENT_CARD_CODES = {48, 54, 55}
DIRECT_DEBIT_CODES = {59}
SEPA_CREDIT_TRANSFER = 58
SEPA_DIRECT_DEBIT = 59
CORRECTED_INVOICE = 384

SKONTO_PATTERN = re.compile(
    r"#SKONTO#TAGE=\d+#PROZENT=\d+(\.\d{1,2})?#(BASISBETRAG=\d+(\.\d{1,2})?#)?",
    re.IGNORECASE,
)
IBAN_PATTERN = re.compile(r"^[A-Z]{2}[0-9]{2}[A-Z0-9]+$")

# Greece uses EL in VAT identifiers instead of its ISO code GR.
VAT_PREFIX_EXCEPTIONS = {"EL"}


def count_digits(value: str) -> int:
    return sum(1 for char in value if char.isdigit())


def is_valid_email(email: str) -> bool:
    """
    Check the BR-DE-28 shape of an email address.

    Exactly one ``@``, at least two characters on each side, no dot at either
    end of the address, and neither a space nor a dot next to the ``@``.
    """
    if email.count("@") != 1:
        return False
    if email.startswith(".") or email.endswith("."):
        return False
    local, domain = email.split("@")
    if len(local) < 2 or len(domain) < 2:
        return False
    if local.endswith((" ", ".")) or domain.startswith((" ", ".")):
        return False
    return True


def has_iso_country_prefix(vat_id: str) -> bool:
    """True when the identifier starts with an ISO 3166-1 alpha-2 code (or EL) followed by at least one character."""
    if len(vat_id) < 3:
        return False
    prefix = vat_id[:2]
    if prefix in VAT_PREFIX_EXCEPTIONS:
        return True
    return prefix.isupper() and pycountry.countries.get(alpha_2=prefix) is not None


def is_valid_iban(iban: str) -> bool:
    """Structural IBAN check: 15 to 34 characters, country letters, check digits, alphanumeric rest."""
    value = iban.replace(" ", "").upper()
    if not 15 <= len(value) <= 34:
        return False
    return bool(IBAN_PATTERN.match(value))


def is_valid_skonto(terms: str) -> bool:
    """Payment terms mentioning SKONTO must carry the structured cash discount form."""
    if "SKONTO" not in terms.upper():
        return True
    return bool(SKONTO_PATTERN.search(terms))


class XRechnungValidator:
    """
    German CIUS rules, applied to invoices with the XRechnung profile.

    Contact rules look at the first seller contact only. BR-DE-21 is not part
    of this class: it applies to German sellers whose invoice is *not*
    XRechnung, see ``validate_specification_identifier``.
    """

    def validate(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        result = result.merge(self._validate_seller(invoice))
        result = result.merge(self._validate_addresses(invoice))
        result = result.merge(self._validate_references(invoice))
        result = result.merge(self._validate_vat_prefixes(invoice))
        result = result.merge(self._validate_payment(invoice))
        return result

    def validate_specification_identifier(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        if invoice.seller.country_id == "DE" and not invoice.is_xrechnung:
            result.add(
                x.BR_DE_21,
                f"Seller is located in DE but the specification identifier '{invoice.guideline}' "
                f"is not XRechnung",
            )
        return result

    def _validate_seller(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        seller = invoice.seller
        if not invoice.payment_means:
            result.add(x.BR_DE_1, "An invoice must contain information on PAYMENT INSTRUCTIONS (BG-16)")
        if not seller.contacts:
            result.add(x.BR_DE_2, "The element group SELLER CONTACT (BG-6) must be transmitted")

        address = seller.postal_address
        if address is None or not address.city:
            result.add(x.BR_DE_3, "The element 'Seller city' (BT-37) must be transmitted")
        if address is None or not address.postcode:
            result.add(x.BR_DE_4, "The element 'Seller post code' (BT-38) must be transmitted")

        if seller.contacts:
            contact = seller.contacts[0]
            if not contact.person_name and not contact.department:
                result.add(x.BR_DE_5, "The element 'Seller contact point' (BT-41) must be transmitted")
            if not contact.phone:
                result.add(x.BR_DE_6, "The element 'Seller contact telephone number' (BT-42) must be transmitted")
            elif count_digits(contact.phone) < 3:
                result.add(x.BR_DE_27, f"Seller contact telephone number '{contact.phone}' has fewer than three digits")
            if not contact.email:
                result.add(x.BR_DE_7, "The element 'Seller contact email address' (BT-43) must be transmitted")
            elif not is_valid_email(contact.email):
                result.add(x.BR_DE_28, f"Seller contact email address '{contact.email}' is not well formed")
        return result

    def _validate_addresses(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        address = invoice.buyer.postal_address
        if address is None or not address.city:
            result.add(x.BR_DE_8, "The element 'Buyer city' (BT-52) must be transmitted")
        if address is None or not address.postcode:
            result.add(x.BR_DE_9, "The element 'Buyer post code' (BT-53) must be transmitted")

        if invoice.ship_to is not None and invoice.ship_to.postal_address is not None:
            delivery = invoice.ship_to.postal_address
            if not delivery.city:
                result.add(x.BR_DE_10, "The element 'Deliver to city' (BT-77) must be transmitted")
            if not delivery.postcode:
                result.add(x.BR_DE_11, "The element 'Deliver to post code' (BT-78) must be transmitted")
        return result

    def _validate_references(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        if not invoice.buyer_reference:
            result.add(x.BR_DE_15, "The element 'Buyer reference' (BT-10) must be transmitted")
        if invoice.invoice_type_code == CORRECTED_INVOICE and not invoice.invoice_referenced_documents:
            result.add(x.BR_DE_26, "Corrected invoice (384) without PRECEDING INVOICE REFERENCE (BG-3)")
        for term in invoice.payment_terms:
            if not is_valid_skonto(term.description):
                result.add(x.BR_DE_18, f"Payment terms '{term.description}' do not follow the SKONTO structure")
        return result

    def _validate_vat_prefixes(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        parties = [("Seller VAT identifier (BT-31)", invoice.seller), ("Buyer VAT identifier (BT-48)", invoice.buyer)]
        if invoice.seller_tax_representative is not None:
            parties.append(("Tax representative VAT identifier (BT-63)", invoice.seller_tax_representative))
        for label, party in parties:
            if party.vat_id and not has_iso_country_prefix(party.vat_id):
                result.add(x.BR_DE_16, f"{label} '{party.vat_id}' has no ISO 3166-1 alpha-2 prefix")
        return result

    def _validate_payment(self, invoice: Invoice) -> ValidationResult:
        result = ValidationResult()
        for means in invoice.payment_means:
            result = result.merge(self._validate_payment_groups(means))
            code = means.type_code
            if code == SEPA_CREDIT_TRANSFER and means.payee_iban and not is_valid_iban(means.payee_iban):
                result.add(x.BR_DE_19, f"Payment account identifier '{means.payee_iban}' is not a valid IBAN")
            if code == SEPA_DIRECT_DEBIT:
                if means.payer_iban and not is_valid_iban(means.payer_iban):
                    result.add(x.BR_DE_20, f"Debited account identifier '{means.payer_iban}' is not a valid IBAN")
                if not invoice.creditor_reference_id:
                    result.add(x.BR_DE_30, "Bank assigned creditor identifier (BT-90) must be provided for direct debit")
                if not means.payer_iban:
                    result.add(x.BR_DE_31, "Debited account identifier (BT-91) must be provided for direct debit")
        return result

    def _validate_payment_groups(self, means: PaymentMeans) -> ValidationResult:
        """Exactly the group matching the payment means code may be present."""
        result = ValidationResult()
        code = means.type_code
        if code in CREDIT_TRANSFER_CODES:
            if not means.has_credit_transfer:
                result.add(x.BR_DE_23_A, f"Payment means {code} (credit transfer) requires CREDIT TRANSFER (BG-17)")
            if means.has_card:
                result.add(x.BR_DE_23_B, f"Payment means {code} (credit transfer) must not contain PAYMENT CARD (BG-18)")
            if means.has_direct_debit:
                result.add(x.BR_DE_23_B, f"Payment means {code} (credit transfer) must not contain DIRECT DEBIT (BG-19)")
        elif code in PAYMENT_CARD_CODES:
            if not means.has_card:
                result.add(x.BR_DE_24_A, f"Payment means {code} (payment card) requires PAYMENT CARD (BG-18)")
            if means.has_credit_transfer:
                result.add(x.BR_DE_24_B, f"Payment means {code} (payment card) must not contain CREDIT TRANSFER (BG-17)")
            if means.has_direct_debit:
                result.add(x.BR_DE_24_B, f"Payment means {code} (payment card) must not contain DIRECT DEBIT (BG-19)")
        elif code in DIRECT_DEBIT_CODES:
            if not means.has_direct_debit:
                result.add(x.BR_DE_25_A, f"Payment means {code} (direct debit) requires DIRECT DEBIT (BG-19)")
            if means.has_credit_transfer:
                result.add(x.BR_DE_25_B, f"Payment means {code} (direct debit) must not contain CREDIT TRANSFER (BG-17)")
            if means.has_card:
                result.add(x.BR_DE_25_B, f"Payment means {code} (direct debit) must not contain PAYMENT CARD (BG-18)")
        return result
