"""Business rule catalogue: EN 16931, PEPPOL, XRechnung and custom checks."""

import re
from functools import lru_cache
from types import ModuleType

from . import custom, en16931, peppol, xrechnung
from .en16931 import VAT_CATEGORY_ORDER, VAT_CATEGORY_RULES, vat_category_rule
from .types import Rule, Severity

_PADDED = re.compile(r"^BR-(?:(CO|S|Z|E|AE|IC|G|AF|AG|IG|IP|O|B|DEC)-)?(\d+)$")
_PEPPOL = re.compile(r"^PEPPOL-EN16931-R(\d+)$")
_ALIASES = {"IG": "AF", "IP": "AG"}


def normalise_code(code: str) -> str:
    """
    Bring a rule code into catalogue spelling.

    Accepts unpadded numbers (``BR-1``, ``BR-S-8``), the IGIC/IPSI aliases
    (``BR-IG-*``, ``BR-IP-*``) and short PEPPOL numbers (``PEPPOL-EN16931-R1``).
    XRechnung codes (``BR-DE-*``) are never padded.
    """
    value = code.strip()
    upper = value.upper()

    match = _PADDED.match(upper)
    if match:
        family, number = match.groups()
        if family is None:
            return f"BR-{int(number):02d}"
        family = _ALIASES.get(family, family)
        return f"BR-{family}-{int(number):02d}"

    match = _PEPPOL.match(upper)
    if match:
        return f"PEPPOL-EN16931-R{int(match.group(1)):03d}"

    return value


def _module_rules(module: ModuleType) -> list[Rule]:
    return [value for value in vars(module).values() if isinstance(value, Rule)]


@lru_cache
def _catalogue() -> dict[str, Rule]:
    rules: list[Rule] = _module_rules(en16931)
    for category in VAT_CATEGORY_ORDER:
        family = VAT_CATEGORY_RULES[category]
        rules.extend(family[number] for number in sorted(family))
    rules.extend(_module_rules(peppol))
    rules.extend(_module_rules(xrechnung))
    rules.extend(_module_rules(custom))
    return {rule.code.upper(): rule for rule in rules}


def get_rule(code: str) -> Rule | None:
    """Look up a rule by code; returns None for unknown codes."""
    return _catalogue().get(normalise_code(code).upper())


def all_rules() -> list[Rule]:
    """Every rule in the catalogue, grouped by family."""
    return list(_catalogue().values())


__all__ = [
    "Rule",
    "Severity",
    "VAT_CATEGORY_ORDER",
    "VAT_CATEGORY_RULES",
    "all_rules",
    "custom",
    "en16931",
    "get_rule",
    "normalise_code",
    "peppol",
    "vat_category_rule",
    "xrechnung",
]
