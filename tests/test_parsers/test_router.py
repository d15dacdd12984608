"""Tests for syntax detection and parser dispatch."""

import io

import pytest

from einvoice.core.errors import ParseError, UnknownFormatError
from einvoice.parsers import CIIParser, UBLParser, get_parser, parse_reader, parse_xml_file
from einvoice.parsers.cii import NS_RSM
from einvoice.parsers.ubl import NS_UBL_CREDIT_NOTE, NS_UBL_INVOICE


class TestRouter:
    """Test cases for the format router."""

    def test_get_parser(self):
        assert isinstance(get_parser(NS_RSM), CIIParser)
        assert isinstance(get_parser(NS_UBL_INVOICE), UBLParser)
        assert isinstance(get_parser(NS_UBL_CREDIT_NOTE), UBLParser)

    def test_unknown_namespace(self):
        with pytest.raises(UnknownFormatError, match="unknown root element namespace"):
            parse_reader(b'<?xml version="1.0"?><Order xmlns="urn:example:order"/>')

    def test_no_namespace(self):
        with pytest.raises(UnknownFormatError):
            parse_reader(b"<Invoice/>")

    def test_not_xml(self):
        with pytest.raises(ParseError, match="cannot read XML"):
            parse_reader(b"this is not an invoice")

    def test_accepts_str_bytes_and_streams(self, cii_xml):
        """Test that every supported source type yields the same invoice."""
        from_bytes = parse_reader(cii_xml)
        from_str = parse_reader(cii_xml.decode("utf-8").split("\n", 1)[1])
        from_stream = parse_reader(io.BytesIO(cii_xml))

        assert from_bytes == from_str == from_stream

    def test_parse_xml_file(self, ubl_file):
        assert parse_xml_file(ubl_file).invoice_number == "NL-INV-1001"

    def test_parse_missing_file(self, tmp_path):
        with pytest.raises(ParseError):
            parse_xml_file(tmp_path / "missing.xml")
