"""Reverse query names for DNSBL lookups.

An address is checked against a DNSBL zone by reversing its labels and
appending the zone (RFC 5782)::

    87.226.224.34 @ bl.spamcop.net -> 34.224.226.87.bl.spamcop.net
    2001:db8::1   @ zone           -> 1.0.0.0. ... .8.b.d.0.1.0.0.2.zone
"""

import ipaddress

from .errors import InvalidAddressError
from .models import Address, AddressFamily


def parse_address(value: str | Address) -> Address:
    """Validate an IPv4/IPv6 address string."""
    if isinstance(value, Address):
        return value

    try:
        ip = ipaddress.ip_address(str(value).strip())
    except ValueError as e:
        raise InvalidAddressError(f"Invalid IP address: {value!r}") from e

    if isinstance(ip, ipaddress.IPv4Address):
        return Address(ip=ip, family=AddressFamily.IPV4)
    return Address(ip=ip, family=AddressFamily.IPV6)


def reverse_labels(address: Address) -> list[str]:
    """Return the reversed octets (IPv4) or nibbles (IPv6) of an address."""
    packed = address.ip.packed

    if address.family is AddressFamily.IPV4:
        if len(packed) != 4:
            raise InvalidAddressError(f"Not an IPv4 address: {address}")
        return [str(octet) for octet in reversed(packed)]

    if len(packed) != 16:
        raise InvalidAddressError(f"Not an IPv6 address: {address}")
    nibbles = packed.hex()
    return list(reversed(nibbles))


def build_query(address: str | Address, provider: str) -> str:
    """Build the fully-qualified lookup name for an address and a DNSBL zone."""
    labels = reverse_labels(parse_address(address))
    return ".".join(labels + [provider])
