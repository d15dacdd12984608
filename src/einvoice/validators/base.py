"""Shared result type for the validation phases."""

from dataclasses import dataclass, field
from decimal import Decimal

from ..core.errors import SemanticError
from ..rules import Rule, Severity


@dataclass
class ValidationResult:
    """Violations found by one validation phase, in detection order."""

    violations: list[SemanticError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True when no violation has error severity."""
        return not any(v.severity is Severity.ERROR for v in self.violations)

    @property
    def errors(self) -> list[SemanticError]:
        return [v for v in self.violations if v.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[SemanticError]:
        return [v for v in self.violations if v.severity is not Severity.ERROR]

    def add(self, rule: Rule, text: str) -> None:
        self.violations.append(SemanticError(rule, text))

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge two validation results."""
        return ValidationResult(violations=self.violations + other.violations)


def fmt(value: Decimal) -> str:
    """Render a decimal for a violation message without exponent notation."""
    return f"{value:f}"
