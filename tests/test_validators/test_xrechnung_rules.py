"""Tests for the XRechnung (BR-DE) rules."""

import pytest

from einvoice.config import Settings
from einvoice.core.models import PaymentTerm
from einvoice.core.profiles import URN_XRECHNUNG_30
from einvoice.rules import Severity
from einvoice.validators import InvoiceValidator
from einvoice.validators.xrechnung import (
    count_digits,
    has_iso_country_prefix,
    is_valid_email,
    is_valid_iban,
    is_valid_skonto,
)


class TestHelpers:
    """Test cases for the BR-DE value checks."""

    @pytest.mark.parametrize(
        "email,expected",
        [
            ("claire.martin@lumiere.example", True),
            ("ab@cd", True),
            ("a@b", False),
            ("a@@bc.de", False),
            (".ab@cd.de", False),
            ("ab@cd.de.", False),
            ("ab.@cd.de", False),
            ("ab@.cd.de", False),
            ("no-at-sign.de", False),
        ],
    )
    def test_is_valid_email(self, email, expected):
        assert is_valid_email(email) is expected

    def test_count_digits(self):
        assert count_digits("+49 (0) 30") == 5
        assert count_digits("n/a") == 0

    def test_has_iso_country_prefix(self):
        assert has_iso_country_prefix("DE123456789")
        assert has_iso_country_prefix("EL123456789")
        assert not has_iso_country_prefix("XX123456789")
        assert not has_iso_country_prefix("de123456789")
        assert not has_iso_country_prefix("DE")

    def test_is_valid_iban(self):
        assert is_valid_iban("DE02 1203 0000 0000 2020 51")
        assert is_valid_iban("FR7630006000011234567890189")
        assert not is_valid_iban("DE02")
        assert not is_valid_iban("0202120300000000202051")

    def test_is_valid_skonto(self):
        assert is_valid_skonto("Zahlbar innerhalb 30 Tagen")
        assert is_valid_skonto("#SKONTO#TAGE=14#PROZENT=2.00#")
        assert is_valid_skonto("#SKONTO#TAGE=7#PROZENT=3#BASISBETRAG=100.00#")
        assert not is_valid_skonto("2% Skonto bei Zahlung in 14 Tagen")


class TestXRechnungRules:
    """Test cases for XRechnungValidator through the invoice validator."""

    def setup_method(self):
        """Setup test fixtures."""
        self.validator = InvoiceValidator(Settings(_env_file=None))

    def _codes(self, invoice) -> list[str]:
        error = self.validator.validate(invoice)
        return [v.rule.code for v in error] if error is not None else []

    @pytest.fixture
    def xrechnung_invoice(self, sample_invoice):
        sample_invoice.guideline = URN_XRECHNUNG_30
        return sample_invoice

    def test_complete_invoice_is_valid(self, xrechnung_invoice):
        assert self._codes(xrechnung_invoice) == []

    def test_seller_contact_required(self, xrechnung_invoice):
        xrechnung_invoice.seller.contacts = []

        assert self._codes(xrechnung_invoice) == ["BR-DE-2"]

    def test_malformed_email(self, xrechnung_invoice):
        xrechnung_invoice.seller.contacts[0].email = "a@b"

        assert self._codes(xrechnung_invoice) == ["BR-DE-28"]

    def test_phone_needs_three_digits(self, xrechnung_invoice):
        xrechnung_invoice.seller.contacts[0].phone = "+4"

        assert self._codes(xrechnung_invoice) == ["BR-DE-27"]

    def test_credit_transfer_requires_account(self, xrechnung_invoice):
        """Test that code 58 without an IBAN reports the lettered rule code."""
        xrechnung_invoice.payment_means[0].payee_iban = ""

        assert "BR-DE-23-a" in self._codes(xrechnung_invoice)

    def test_credit_transfer_with_card(self, xrechnung_invoice):
        xrechnung_invoice.payment_means[0].card_id = "4111"

        assert self._codes(xrechnung_invoice) == ["BR-DE-23-b"]

    def test_unstructured_skonto(self, xrechnung_invoice):
        xrechnung_invoice.payment_terms = [PaymentTerm(description="2% Skonto bei Zahlung in 14 Tagen")]

        assert self._codes(xrechnung_invoice) == ["BR-DE-18"]

    def test_buyer_reference_required(self, xrechnung_invoice):
        xrechnung_invoice.buyer_reference = ""

        assert self._codes(xrechnung_invoice) == ["BR-DE-15"]

    def test_payment_instructions_required(self, xrechnung_invoice):
        xrechnung_invoice.payment_means = []

        assert self._codes(xrechnung_invoice) == ["BR-DE-1"]

    def test_direct_debit_needs_creditor_reference(self, xrechnung_invoice):
        means = xrechnung_invoice.payment_means[0]
        means.type_code = 59
        means.payee_iban = ""
        means.payee_bic = ""
        means.payer_iban = "DE02120300000000202051"

        assert self._codes(xrechnung_invoice) == ["BR-DE-30"]

    def test_corrected_invoice_needs_preceding_reference(self, xrechnung_invoice):
        xrechnung_invoice.invoice_type_code = 384

        assert self._codes(xrechnung_invoice) == ["BR-DE-26"]


class TestSpecificationIdentifier:
    """BR-DE-21 applies to German sellers that do not send XRechnung."""

    def test_german_seller_gets_warning(self, sample_invoice, settings):
        sample_invoice.seller.postal_address.country_id = "DE"

        error = InvoiceValidator(settings).validate(sample_invoice)

        assert [v.rule.code for v in error] == ["BR-DE-21"]
        assert error.violations()[0].severity is Severity.WARNING
        assert error.errors() == []

    def test_xrechnung_seller_is_not_warned(self, sample_invoice, settings):
        sample_invoice.seller.postal_address.country_id = "DE"
        sample_invoice.guideline = URN_XRECHNUNG_30

        assert InvoiceValidator(settings).validate(sample_invoice) is None

    def test_disabled_by_settings(self, sample_invoice):
        sample_invoice.seller.postal_address.country_id = "DE"
        validator = InvoiceValidator(Settings(_env_file=None, enable_xrechnung_rules=False))

        assert validator.validate(sample_invoice) is None
