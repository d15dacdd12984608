"""Rule record shared by every catalogue module."""

from dataclasses import dataclass
from enum import Enum


class Severity(str, Enum):
    """How strongly a rule is enforced."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Rule:
    """
    A business rule with its stable code.

    ``fields`` lists the BT-/BG- identifiers the rule is about; the first
    entry is the primary field shown next to a violation.
    """

    code: str
    fields: tuple[str, ...]
    description: str
    severity: Severity = Severity.ERROR

    @property
    def primary_field(self) -> str:
        return self.fields[0] if self.fields else ""

    def __str__(self) -> str:
        return self.code
