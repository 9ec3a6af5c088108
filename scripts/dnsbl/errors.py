"""Exceptions raised by the DNSBL check."""


class DnsblError(Exception):
    """Base class for errors that abort a blacklist check."""


class InvalidAddressError(DnsblError, ValueError):
    """The address to check is not a valid IPv4 or IPv6 address."""


class EngineConfigurationError(DnsblError, ValueError):
    """Invalid engine parameters (providers, concurrency, deadline)."""


class ProviderListError(EngineConfigurationError):
    """A provider list could not be read or contains a malformed entry."""
