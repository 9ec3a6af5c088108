"""
Name-existence resolvers used by the provider probes.

Each resolver answers one question for a fully-qualified name: does it have
an A record (RESOLVED), does it not exist (NOT_FOUND), or did the lookup
itself fail (FAILURE). DNSBL zones publish their listings as 127.0.0.x A
records for both IPv4 and IPv6 reverse names, so A is the only record type
queried.
"""

import logging
import socket
from abc import ABC, abstractmethod
from typing import Optional

import dns.exception
import dns.resolver

from .errors import EngineConfigurationError
from .models import Resolution

logger = logging.getLogger(__name__)

# getaddrinfo error codes meaning "no such host"
_NOT_FOUND_ERRNOS = {
    code
    for code in (
        getattr(socket, "EAI_NONAME", None),
        getattr(socket, "EAI_NODATA", None),
    )
    if code is not None
}

RESOLVER_BACKENDS = ("system", "dnspython")


class Resolver(ABC):
    """Resolves a query name into a tagged Resolution."""

    name: str = ""

    @abstractmethod
    def resolve(self, query: str) -> Resolution:
        """Look up the A records for ``query``. Must not raise."""
        ...


class SystemResolver(Resolver):
    """Uses the operating system resolver (getaddrinfo)."""

    name = "system"

    def resolve(self, query: str) -> Resolution:
        try:
            _, _, addresses = socket.gethostbyname_ex(query)
        except socket.gaierror as e:
            if e.errno in _NOT_FOUND_ERRNOS:
                return Resolution.not_found()
            return Resolution.failure(f"{type(e).__name__}: {e}")
        except (OSError, UnicodeError) as e:
            return Resolution.failure(f"{type(e).__name__}: {e}")

        if not addresses:
            return Resolution.not_found()
        return Resolution.resolved(addresses)


class DnsPythonResolver(Resolver):
    """Stub resolver built on dnspython, optionally pinned to nameservers.

    Public resolvers are blocked by several DNSBL operators; pointing this at
    your own recursive resolver avoids false "not listed" answers.
    """

    name = "dnspython"

    def __init__(
        self,
        nameservers: Optional[list[str]] = None,
        timeout: float = 5.0,
        lifetime: Optional[float] = None,
    ):
        self._resolver = dns.resolver.Resolver(configure=not nameservers)
        if nameservers:
            self._resolver.nameservers = list(nameservers)
        self._resolver.timeout = timeout
        self._resolver.lifetime = lifetime if lifetime is not None else timeout * 2

    @property
    def nameservers(self) -> list[str]:
        return [str(ns) for ns in self._resolver.nameservers]

    def resolve(self, query: str) -> Resolution:
        try:
            answers = self._resolver.resolve(query, "A")
        except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer):
            return Resolution.not_found()
        except dns.exception.DNSException as e:
            return Resolution.failure(f"{type(e).__name__}: {e}")
        except (OSError, ValueError) as e:
            return Resolution.failure(f"{type(e).__name__}: {e}")

        return Resolution.resolved([str(answer) for answer in answers])


def create_resolver(
    backend: str = "system",
    nameservers: Optional[list[str]] = None,
    timeout: float = 5.0,
) -> Resolver:
    """Create a resolver for the configured backend."""
    backend = (backend or "system").lower()

    if nameservers and backend == "system":
        # Explicit nameservers can only be honoured by dnspython
        logger.debug("DNS servers configured, using dnspython resolver")
        backend = "dnspython"

    if backend == "system":
        return SystemResolver()
    if backend == "dnspython":
        try:
            return DnsPythonResolver(nameservers=nameservers, timeout=timeout)
        except dns.resolver.NoResolverConfiguration as e:
            raise EngineConfigurationError(
                "No system DNS configuration found for dnspython; "
                "set DNS servers explicitly"
            ) from e
        except ValueError as e:
            raise EngineConfigurationError(f"Invalid DNS server setting: {e}") from e

    raise EngineConfigurationError(
        f"Unknown resolver backend {backend!r} "
        f"(expected one of: {', '.join(RESOLVER_BACKENDS)})"
    )
