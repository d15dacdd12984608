"""Tests for the UBL reader."""

from datetime import date
from decimal import Decimal

from einvoice.core.profiles import Profile, SchemaType
from einvoice.parsers import parse_reader


def to_credit_note(xml: bytes) -> bytes:
    text = xml.decode("utf-8")
    for old, new in (
        ("<Invoice ", "<CreditNote "),
        ("</Invoice>", "</CreditNote>"),
        ("xsd:Invoice-2", "xsd:CreditNote-2"),
        ("<cbc:InvoiceTypeCode>380</cbc:InvoiceTypeCode>", "<cbc:CreditNoteTypeCode>381</cbc:CreditNoteTypeCode>"),
        ("cac:InvoiceLine>", "cac:CreditNoteLine>"),
        ("cbc:InvoicedQuantity", "cbc:CreditedQuantity"),
    ):
        text = text.replace(old, new)
    return text.encode("utf-8")


class TestUBLParser:
    """Test cases for reading the PEPPOL UBL sample."""

    def test_header(self, ubl_xml):
        invoice = parse_reader(ubl_xml)

        assert invoice.schema_type is SchemaType.UBL
        assert invoice.profile is Profile.EN16931
        assert invoice.is_peppol
        assert invoice.invoice_number == "NL-INV-1001"
        assert invoice.invoice_type_code == 380
        assert invoice.invoice_date == date(2024, 3, 1)
        assert invoice.invoice_currency_code == "EUR"
        assert invoice.buyer_reference == "REF-4711"
        assert [note.text for note in invoice.notes] == ["Thank you for your order"]

    def test_parties(self, ubl_xml):
        invoice = parse_reader(ubl_xml)
        seller, buyer = invoice.seller, invoice.buyer

        assert seller.name == "Tulip Supplies"
        assert seller.electronic_address == "12345678"
        assert seller.electronic_address_scheme == "0106"
        assert seller.vat_id == "NL123456789B01"
        assert seller.legal_organization.trading_name == "Tulip Supplies B.V."
        assert seller.contacts[0].email == "jan@tulip.example"
        assert seller.postal_address.line1 == "Damrak 1"
        assert buyer.name == "Nordic Retail AB"
        assert buyer.electronic_address_scheme == "0088"
        assert buyer.country_id == "SE"

    def test_name_falls_back_to_registration_name(self, ubl_xml):
        xml = ubl_xml.replace(
            b"<cac:PartyName>\n        <cbc:Name>Nordic Retail AB</cbc:Name>\n      </cac:PartyName>", b""
        )
        assert b"<cbc:Name>Nordic Retail AB</cbc:Name>" not in xml

        invoice = parse_reader(xml)

        assert invoice.buyer.name == "Nordic Retail AB"

    def test_root_due_date_becomes_payment_term(self, ubl_xml):
        invoice = parse_reader(ubl_xml)

        assert len(invoice.payment_terms) == 1
        assert invoice.payment_terms[0].due_date == date(2024, 3, 31)
        assert invoice.payment_reference == "NL-INV-1001"
        assert invoice.payment_means[0].type_code == 30
        assert invoice.payment_means[0].payee_iban == "NL91ABNA0417164300"

    def test_tax_and_totals(self, ubl_xml):
        invoice = parse_reader(ubl_xml)

        assert invoice.tax_total == Decimal("21.00")
        tax = invoice.trade_taxes[0]
        assert (tax.type_code, tax.category_code, tax.percent) == ("VAT", "S", Decimal("21"))
        assert tax.basis_amount == Decimal("100.00")
        assert invoice.line_total == Decimal("100.00")
        assert invoice.tax_basis_total == Decimal("100.00")
        assert invoice.grand_total == Decimal("121.00")
        assert invoice.due_payable_amount == Decimal("121.00")
        assert invoice.due_payable_amount_present

    def test_lines(self, ubl_xml):
        line = parse_reader(ubl_xml).lines[0]

        assert line.line_id == "1"
        assert line.item_name == "Tulip bulbs"
        assert line.seller_assigned_id == "TB-100"
        assert line.billed_quantity == Decimal("4")
        assert line.billed_quantity_unit == "EA"
        assert line.net_price == Decimal("25.00")
        assert line.tax_category_code == "S"
        assert line.tax_rate == Decimal("21")
        assert line.total == Decimal("100.00")

    def test_credit_note(self, ubl_xml):
        """Test that CreditNote documents use their own line container."""
        invoice = parse_reader(to_credit_note(ubl_xml))

        assert invoice.schema_type is SchemaType.UBL
        assert invoice.invoice_type_code == 381
        assert len(invoice.lines) == 1
        assert invoice.lines[0].billed_quantity == Decimal("4")
