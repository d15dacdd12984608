"""Tests for profile and business process identifiers."""

import pytest

from einvoice.core.profiles import (
    URN_EN16931,
    URN_FACTURX_BASIC,
    URN_FACTURX_EXTENDED,
    URN_FACTURX_MINIMUM,
    URN_PEPPOL_BILLING_30,
    URN_XRECHNUNG_30,
    URN_ZUGFERD_BASICWL,
    Profile,
    is_peppol_business_process,
    profile_from_urn,
    profile_name,
)


class TestProfiles:
    """Test cases for specification identifier lookup."""

    @pytest.mark.parametrize(
        "urn,profile",
        [
            (URN_FACTURX_MINIMUM, Profile.MINIMUM),
            (URN_ZUGFERD_BASICWL, Profile.BASIC_WL),
            (URN_FACTURX_BASIC, Profile.BASIC),
            (URN_EN16931, Profile.EN16931),
            (URN_FACTURX_EXTENDED, Profile.EXTENDED),
            (URN_XRECHNUNG_30, Profile.XRECHNUNG),
            (URN_PEPPOL_BILLING_30, Profile.EN16931),
        ],
    )
    def test_known_urns(self, urn, profile):
        assert profile_from_urn(urn) is profile

    def test_surrounding_whitespace_ignored(self):
        assert profile_from_urn(f"  {URN_EN16931}\n") is Profile.EN16931

    def test_unknown_urn(self):
        assert profile_from_urn("urn:example:invoice") is Profile.UNKNOWN
        assert profile_name("urn:example:invoice") == "Unknown"

    def test_profiles_are_ordered(self):
        """Test that higher profiles compare greater than the ones they include."""
        assert Profile.MINIMUM < Profile.BASIC_WL < Profile.BASIC < Profile.EN16931
        assert Profile.EN16931 < Profile.EXTENDED < Profile.XRECHNUNG

    def test_display_names(self):
        assert profile_name(URN_XRECHNUNG_30) == "XRechnung 3.0"
        assert Profile.BASIC_WL.label == "Basic WL"
        assert Profile.EN16931.urn == URN_EN16931


class TestBusinessProcess:
    """Test cases for the PEPPOL business process pattern."""

    def test_billing_process_matches(self):
        assert is_peppol_business_process("urn:fdc:peppol.eu:2017:poacc:billing:01:1.0")

    @pytest.mark.parametrize(
        "identifier",
        [
            "",
            "A1",
            "urn:fdc:peppol.eu:2017:poacc:billing:1:1.0",
            "urn:fdc:peppol.eu:2017:poacc:billing:01:2.0",
        ],
    )
    def test_other_processes_do_not_match(self, identifier):
        assert not is_peppol_business_process(identifier)
