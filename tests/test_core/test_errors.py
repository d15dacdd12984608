"""Tests for error types."""

from einvoice.core.errors import (
    EInvoiceError,
    InvalidDateError,
    ParseError,
    SemanticError,
    UnknownFormatError,
    UnsupportedFormatError,
    ValidationError,
    WriteError,
)
from einvoice.rules import Severity
from einvoice.rules import en16931 as r
from einvoice.rules import xrechnung as x


class TestErrorHierarchy:
    def test_parse_errors_share_base(self):
        """Test that every read failure can be caught as ParseError."""
        assert issubclass(UnknownFormatError, ParseError)
        assert issubclass(InvalidDateError, ParseError)
        assert issubclass(ParseError, EInvoiceError)
        assert issubclass(UnsupportedFormatError, WriteError)

    def test_invalid_date_carries_location(self):
        error = InvalidDateError("2024-01-15", "ram:IssueDateTime/udt:DateTimeString")

        assert error.value == "2024-01-15"
        assert error.xpath == "ram:IssueDateTime/udt:DateTimeString"
        assert "2024-01-15" in str(error)

    def test_unknown_format_message(self):
        assert str(UnknownFormatError("urn:example")) == "unknown root element namespace"


class TestValidationError:
    """Test cases for the violation collection."""

    def setup_method(self):
        """Setup test fixtures."""
        self.error = ValidationError(
            [
                SemanticError(r.BR_11, "Buyer postal address has no country code"),
                SemanticError(r.vat_category_rule("S", 8), "Taxable amount mismatch"),
                SemanticError(x.BR_DE_21, "Seller is located in DE"),
            ]
        )

    def test_count_and_iteration(self):
        assert self.error.count() == 3
        assert len(self.error) == 3
        assert [v.rule.code for v in self.error] == ["BR-11", "BR-S-08", "BR-DE-21"]

    def test_has_rule(self):
        """Test lookup by rule object and by exact code."""
        assert self.error.has_rule(r.BR_11)
        assert self.error.has_rule("BR-S-08")
        assert not self.error.has_rule("BR-S-8")
        assert not self.error.has_rule(r.BR_12)

    def test_has_rule_code_normalises(self):
        """Test that unpadded codes are accepted."""
        assert self.error.has_rule_code("BR-S-8")
        assert self.error.has_rule_code("br-11")
        assert not self.error.has_rule_code("BR-12")

    def test_errors_excludes_warnings(self):
        assert [v.rule.code for v in self.error.errors()] == ["BR-11", "BR-S-08"]
        assert self.error.violations()[2].severity is Severity.WARNING

    def test_message_names_first_violation(self):
        assert "3 violations" in str(self.error)
        assert "BR-11" in str(self.error)

    def test_semantic_error_str(self):
        violation = SemanticError(r.BR_02, "Invoice number is missing")
        assert str(violation) == "BR-02 - Invoice number is missing"
