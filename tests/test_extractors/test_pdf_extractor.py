"""Tests for embedded invoice extraction from hybrid PDFs."""

import fitz
import pytest

from conftest import make_pdf
from einvoice.core.errors import ExtractionError
from einvoice.extractors import extract_invoice_xml
from einvoice.extractors.pdf import list_embedded_files


class TestExtractInvoiceXml:
    """Test cases for extract_invoice_xml."""

    def test_factur_x_attachment(self, hybrid_pdf, cii_xml):
        assert extract_invoice_xml(hybrid_pdf) == cii_xml

    def test_known_name_is_preferred(self, cii_xml):
        """Test that a known invoice name wins over an earlier generic XML attachment."""
        pdf = make_pdf({"metadata.xml": b"<meta/>", "zugferd-invoice.xml": cii_xml})

        assert extract_invoice_xml(pdf) == cii_xml

    def test_known_names_in_order(self):
        pdf = make_pdf({"xrechnung.xml": b"<x/>", "factur-x.xml": b"<f/>"})

        assert extract_invoice_xml(pdf) == b"<f/>"

    def test_falls_back_to_first_xml(self):
        pdf = make_pdf({"readme.txt": b"hello", "invoice-42.xml": b"<a/>", "other.xml": b"<b/>"})

        assert extract_invoice_xml(pdf) == b"<a/>"

    def test_no_attachments(self):
        with pytest.raises(ExtractionError, match="no embedded files"):
            extract_invoice_xml(make_pdf({}))

    def test_no_xml_attachment(self):
        with pytest.raises(ExtractionError, match="no invoice XML"):
            extract_invoice_xml(make_pdf({"terms.txt": b"terms"}))

    def test_not_a_pdf(self):
        with pytest.raises(ExtractionError):
            extract_invoice_xml(b"definitely not a pdf")

    def test_list_embedded_files(self, hybrid_pdf):
        with fitz.open(stream=hybrid_pdf, filetype="pdf") as doc:
            assert list_embedded_files(doc) == [("factur-x.xml", "factur-x.xml")]
