"""Invoice profiles (BT-24) and business process identifiers (BT-23)."""

import re
from enum import Enum, IntEnum


class SchemaType(str, Enum):
    """XML syntax an invoice was read from or is written to."""

    CII = "cii"
    UBL = "ubl"

    @property
    def display_name(self) -> str:
        return "ZUGFeRD/Factur-X" if self is SchemaType.CII else "UBL"


class Profile(IntEnum):
    """
    Profile level of an invoice.

    Ordered so that higher profiles include every element of the lower ones,
    which lets callers compare with plain ``>=``.
    """

    UNKNOWN = 0
    MINIMUM = 1
    BASIC_WL = 2
    BASIC = 3
    EN16931 = 4
    EXTENDED = 5
    XRECHNUNG = 6

    @property
    def urn(self) -> str:
        """Canonical specification identifier written for this profile."""
        return CANONICAL_URNS.get(self, "")

    @property
    def label(self) -> str:
        return PROFILE_LABELS[self]


URN_FACTURX_MINIMUM = "urn:factur-x.eu:1p0:minimum"
URN_FACTURX_BASICWL = "urn:factur-x.eu:1p0:basicwl"
URN_FACTURX_BASIC = "urn:cen.eu:en16931:2017#compliant#urn:factur-x.eu:1p0:basic"
URN_FACTURX_BASIC_ALT = "urn:cen.eu:en16931:2017:compliant:factur-x.eu:1p0:basic"
URN_FACTURX_EXTENDED = "urn:cen.eu:en16931:2017#conformant#urn:factur-x.eu:1p0:extended"
URN_ZUGFERD_MINIMUM = "urn:zugferd.de:2p0:minimum"
URN_ZUGFERD_BASICWL = "urn:zugferd.de:2p0:basicwl"
URN_ZUGFERD_BASIC = "urn:cen.eu:en16931:2017#compliant#urn:zugferd.de:2p0:basic"
URN_ZUGFERD_EXTENDED = "urn:cen.eu:en16931:2017#conformant#urn:zugferd.de:2p0:extended"
URN_EN16931 = "urn:cen.eu:en16931:2017"
URN_XRECHNUNG_30 = "urn:cen.eu:en16931:2017#compliant#urn:xeinkauf.de:kosit:xrechnung_3.0"
URN_PEPPOL_BILLING_30 = "urn:cen.eu:en16931:2017#compliant#urn:fdc:peppol.eu:2017:poacc:billing:3.0"

BP_PEPPOL_BILLING_01 = "urn:fdc:peppol.eu:2017:poacc:billing:01:1.0"

# Specification identifier -> (profile, display name)
PROFILE_URNS: dict[str, tuple[Profile, str]] = {
    URN_FACTURX_MINIMUM: (Profile.MINIMUM, "Factur-X Minimum"),
    URN_FACTURX_BASICWL: (Profile.BASIC_WL, "Factur-X Basic WL"),
    URN_FACTURX_BASIC: (Profile.BASIC, "Factur-X Basic"),
    URN_FACTURX_BASIC_ALT: (Profile.BASIC, "Factur-X Basic"),
    URN_FACTURX_EXTENDED: (Profile.EXTENDED, "Factur-X Extended"),
    URN_ZUGFERD_MINIMUM: (Profile.MINIMUM, "ZUGFeRD Minimum"),
    URN_ZUGFERD_BASICWL: (Profile.BASIC_WL, "ZUGFeRD Basic WL"),
    URN_ZUGFERD_BASIC: (Profile.BASIC, "ZUGFeRD Basic"),
    URN_ZUGFERD_EXTENDED: (Profile.EXTENDED, "ZUGFeRD Extended"),
    URN_EN16931: (Profile.EN16931, "EN 16931"),
    URN_XRECHNUNG_30: (Profile.XRECHNUNG, "XRechnung 3.0"),
    URN_PEPPOL_BILLING_30: (Profile.EN16931, "PEPPOL BIS Billing 3.0"),
}

CANONICAL_URNS: dict[Profile, str] = {
    Profile.MINIMUM: URN_FACTURX_MINIMUM,
    Profile.BASIC_WL: URN_FACTURX_BASICWL,
    Profile.BASIC: URN_FACTURX_BASIC,
    Profile.EN16931: URN_EN16931,
    Profile.EXTENDED: URN_FACTURX_EXTENDED,
    Profile.XRECHNUNG: URN_XRECHNUNG_30,
}

PROFILE_LABELS: dict[Profile, str] = {
    Profile.UNKNOWN: "Unknown",
    Profile.MINIMUM: "Minimum",
    Profile.BASIC_WL: "Basic WL",
    Profile.BASIC: "Basic",
    Profile.EN16931: "EN 16931",
    Profile.EXTENDED: "Extended",
    Profile.XRECHNUNG: "XRechnung",
}

PEPPOL_BUSINESS_PROCESS = re.compile(r"^urn:fdc:peppol\.eu:2017:poacc:billing:\d{2}:1\.0$")


def profile_from_urn(urn: str) -> Profile:
    """Look up the profile for a specification identifier, UNKNOWN if not recognised."""
    entry = PROFILE_URNS.get(urn.strip())
    return entry[0] if entry else Profile.UNKNOWN


def profile_name(urn: str) -> str:
    """Human readable name of a specification identifier."""
    entry = PROFILE_URNS.get(urn.strip())
    return entry[1] if entry else "Unknown"


def is_profile_urn(urn: str) -> bool:
    return urn.strip() in PROFILE_URNS


def is_peppol_business_process(identifier: str) -> bool:
    """Check a BT-23 value against the PEPPOL billing process pattern."""
    return bool(PEPPOL_BUSINESS_PROCESS.match(identifier))
