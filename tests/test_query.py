"""Tests for reverse query name construction."""

import pytest

from dnsbl.errors import InvalidAddressError
from dnsbl.models import AddressFamily
from dnsbl.query import build_query, parse_address, reverse_labels


class TestParseAddress:
    def test_ipv4(self):
        address = parse_address("87.226.224.34")
        assert address.family is AddressFamily.IPV4
        assert str(address) == "87.226.224.34"

    def test_ipv6(self):
        address = parse_address("2001:db8::1")
        assert address.family is AddressFamily.IPV6

    def test_strips_whitespace(self):
        assert str(parse_address(" 10.0.0.1\n")) == "10.0.0.1"

    def test_parsed_address_passes_through(self):
        address = parse_address("127.0.0.2")
        assert parse_address(address) is address

    @pytest.mark.parametrize(
        "value",
        ["999.999.999.999", "192.168.1", "8.8.8.8.8", "", "not-an-ip", "2001:db8::g"],
    )
    def test_invalid(self, value):
        with pytest.raises(InvalidAddressError):
            parse_address(value)


class TestBuildQuery:
    def test_ipv4_reverses_octets(self):
        assert (
            build_query("87.226.224.34", "bl.spamcop.net")
            == "34.224.226.87.bl.spamcop.net"
        )

    def test_ipv4_is_deterministic(self):
        first = build_query("1.2.3.4", "zen.spamhaus.org")
        assert build_query("1.2.3.4", "zen.spamhaus.org") == first

    def test_ipv4_label_count(self):
        query = build_query("192.0.2.200", "dnsbl.example.org")
        assert query.split(".")[:4] == ["200", "2", "0", "192"]
        assert len(query.split(".")) == 4 + 3

    def test_ipv6_nibbles(self):
        query = build_query("2001:db8::1", "bl.example.net")
        labels = query.split(".")
        assert len(labels) == 32 + 3
        assert labels[:32] == list("1000000000000000000000008bd01002")
        assert query.endswith(".bl.example.net")

    def test_ipv6_lowercase_hex(self):
        query = build_query("2001:DB8:ABCD::FFFF", "zone.example")
        nibbles = query.split(".")[:32]
        assert all(len(n) == 1 and n in "0123456789abcdef" for n in nibbles)
        assert nibbles[:4] == ["f", "f", "f", "f"]

    def test_different_addresses_give_different_queries(self):
        assert build_query("1.2.3.4", "a.example") != build_query("4.3.2.1", "a.example")

    def test_invalid_address(self):
        with pytest.raises(InvalidAddressError):
            build_query("999.999.999.999", "bl.spamcop.net")


def test_reverse_labels_ipv4():
    assert reverse_labels(parse_address("10.20.30.40")) == ["40", "30", "20", "10"]
