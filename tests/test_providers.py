"""Tests for provider list parsing and validation."""

import pytest

from dnsbl.errors import EngineConfigurationError, ProviderListError
from dnsbl.models import AddressFamily
from dnsbl.providers import (
    DEFAULT_IPV4_PROVIDERS,
    DEFAULT_IPV6_PROVIDERS,
    default_providers,
    load_providers,
    parse_providers,
    validate_provider,
)


class TestValidateProvider:
    @pytest.mark.parametrize(
        "provider",
        ["bl.spamcop.net", "zen.spamhaus.org.", "dnsbl-1.uceprotect.net", "Example.ORG"],
    )
    def test_valid(self, provider):
        assert validate_provider(provider) == provider

    @pytest.mark.parametrize(
        "provider",
        [
            "",
            None,
            "localhost",
            "bl.spamcop.net zen.spamhaus.org",
            "bl.spamcop.net,zen.spamhaus.org",
            "bad..example.org",
            "-bad.example.org",
            "x" * 64 + ".example.org",
        ],
    )
    def test_invalid(self, provider):
        with pytest.raises(EngineConfigurationError):
            validate_provider(provider)


class TestParseProviders:
    def test_comments_and_blank_lines(self):
        lines = ["# IPv4 lists", "", "bl.spamcop.net", "  zen.spamhaus.org  # premium", ""]
        assert parse_providers(lines) == ["bl.spamcop.net", "zen.spamhaus.org"]

    def test_normalizes(self):
        assert parse_providers(["BL.SpamCop.Net."]) == ["bl.spamcop.net"]

    def test_keeps_duplicates(self):
        assert parse_providers(["a.example.org", "a.example.org"]) == [
            "a.example.org",
            "a.example.org",
        ]

    def test_glued_entries_are_rejected(self):
        with pytest.raises(ProviderListError, match="list.txt:2"):
            parse_providers(
                ["bl.spamcop.net", "dnsbl.sorbs.net spam.dnsbl.sorbs.net"], "list.txt"
            )


class TestLoadProviders:
    def test_text_file(self, tmp_path):
        path = tmp_path / "dnsbl-providers-v4"
        path.write_text("bl.spamcop.net\n# comment\nb.barracudacentral.org\n")
        assert load_providers(path) == ["bl.spamcop.net", "b.barracudacentral.org"]

    def test_yaml_list(self, tmp_path):
        path = tmp_path / "providers.yaml"
        path.write_text("- bl.spamcop.net\n- zen.spamhaus.org\n")
        assert load_providers(path) == ["bl.spamcop.net", "zen.spamhaus.org"]

    def test_yaml_mapping(self, tmp_path):
        path = tmp_path / "providers.yml"
        path.write_text("providers:\n  - bl.spamcop.net\n")
        assert load_providers(path) == ["bl.spamcop.net"]

    def test_yaml_non_string_entry(self, tmp_path):
        path = tmp_path / "providers.yaml"
        path.write_text("- 42\n")
        with pytest.raises(ProviderListError):
            load_providers(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "providers.yaml"
        path.write_text("providers: [unclosed\n")
        with pytest.raises(ProviderListError):
            load_providers(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ProviderListError):
            load_providers(tmp_path / "missing.txt")


def test_defaults_are_valid():
    for provider in DEFAULT_IPV4_PROVIDERS + DEFAULT_IPV6_PROVIDERS:
        validate_provider(provider)


def test_default_providers_per_family():
    assert default_providers(AddressFamily.IPV4) == DEFAULT_IPV4_PROVIDERS
    assert default_providers(AddressFamily.IPV6) == DEFAULT_IPV6_PROVIDERS
    assert default_providers(AddressFamily.IPV4) is not DEFAULT_IPV4_PROVIDERS
