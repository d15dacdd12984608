"""Exceptions raised while reading, writing or extracting invoices."""

from collections.abc import Iterator
from dataclasses import dataclass

from ..rules import Rule, Severity, normalise_code


class EInvoiceError(Exception):
    """Base class for all errors raised by the library."""


class ParseError(EInvoiceError):
    """Invoice XML could not be read into the model."""

    def __init__(self, message: str, xpath: str | None = None):
        super().__init__(message)
        self.xpath = xpath


class UnknownFormatError(ParseError):
    """Root element namespace is neither CII nor UBL."""

    def __init__(self, namespace: str = ""):
        super().__init__("unknown root element namespace")
        self.namespace = namespace


class InvalidDateError(ParseError):
    def __init__(self, value: str, xpath: str):
        super().__init__(f'invalid date "{value}" at {xpath}', xpath)
        self.value = value


class InvalidDecimalError(ParseError):
    def __init__(self, value: str, xpath: str):
        super().__init__(f'invalid decimal "{value}" at {xpath}', xpath)
        self.value = value


class InvalidAttachmentError(ParseError):
    """Embedded attachment is not valid base64."""

    def __init__(self, xpath: str, reason: str = ""):
        message = f"cannot decode attachment at {xpath}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, xpath)


class WriteError(EInvoiceError):
    """Invoice could not be serialised."""


class UnsupportedFormatError(WriteError):
    def __init__(self, message: str = "UBL writing is not supported yet"):
        super().__init__(message)


class ExtractionError(EInvoiceError):
    """No invoice XML could be taken out of a container file."""


@dataclass(frozen=True)
class SemanticError:
    """A single failed business rule with a message describing the observed values."""

    rule: Rule
    text: str

    @property
    def severity(self) -> Severity:
        return self.rule.severity

    def __str__(self) -> str:
        return f"{self.rule.code} - {self.text}"


class ValidationError(EInvoiceError):
    """
    Every business rule violation found by one validation run.

    Returned by ``Invoice.validate()`` rather than raised, so callers can
    inspect the violations and still decide whether to raise it.
    """

    def __init__(self, violations: list[SemanticError]):
        self._violations = list(violations)
        super().__init__(self._message())

    def _message(self) -> str:
        if not self._violations:
            return "validation failed with no violations"
        first = self._violations[0]
        if len(self._violations) == 1:
            return f"validation failed: {first.rule.code} - {first.text}"
        return (
            f"validation failed with {len(self._violations)} violations "
            f"(first: {first.rule.code} - {first.text})"
        )

    def __str__(self) -> str:
        return self._message()

    def violations(self) -> list[SemanticError]:
        return list(self._violations)

    def count(self) -> int:
        return len(self._violations)

    def has_rule(self, rule: Rule | str) -> bool:
        """
        Check for a rule, given either the Rule itself or its exact code.

        Rules match by code, so a rule reported at a configured severity still counts.
        """
        code = rule if isinstance(rule, str) else rule.code
        return any(v.rule.code == code for v in self._violations)

    def has_rule_code(self, code: str) -> bool:
        """Check for a rule by code, accepting unpadded and aliased spellings."""
        wanted = normalise_code(code).upper()
        return any(v.rule.code.upper() == wanted for v in self._violations)

    def errors(self) -> list[SemanticError]:
        """Violations of rules with error severity."""
        return [v for v in self._violations if v.severity is Severity.ERROR]

    def __iter__(self) -> Iterator[SemanticError]:
        return iter(list(self._violations))

    def __len__(self) -> int:
        return len(self._violations)
