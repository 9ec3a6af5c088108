"""Data models for DNSBL checks."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class AddressFamily(str, Enum):
    IPV4 = "ipv4"
    IPV6 = "ipv6"


@dataclass(frozen=True)
class Address:
    """A validated IP address together with its family."""

    ip: IPAddress
    family: AddressFamily

    def __str__(self) -> str:
        return str(self.ip)


class ResolutionKind(Enum):
    """What the resolver said about a query name."""

    RESOLVED = "resolved"  # name has at least one A record
    NOT_FOUND = "not-found"  # NXDOMAIN / no data
    FAILURE = "failure"  # network error, timeout, malformed name


@dataclass(frozen=True)
class Resolution:
    """Tagged resolver outcome."""

    kind: ResolutionKind
    addresses: tuple[str, ...] = ()
    error: str = ""

    @classmethod
    def resolved(cls, addresses: list[str] | tuple[str, ...]) -> Resolution:
        return cls(ResolutionKind.RESOLVED, addresses=tuple(addresses))

    @classmethod
    def not_found(cls) -> Resolution:
        return cls(ResolutionKind.NOT_FOUND)

    @classmethod
    def failure(cls, error: str) -> Resolution:
        return cls(ResolutionKind.FAILURE, error=error)


class Outcome(str, Enum):
    """Per-provider outcome kind, kept distinct for diagnostics."""

    LISTED = "listed"
    NOT_LISTED = "not-listed"
    LOOKUP_ERROR = "lookup-error"

    @classmethod
    def from_resolution(cls, resolution: Resolution) -> Outcome:
        if resolution.kind is ResolutionKind.RESOLVED:
            return cls.LISTED
        if resolution.kind is ResolutionKind.NOT_FOUND:
            return cls.NOT_LISTED
        return cls.LOOKUP_ERROR


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a single name-existence check with its timing."""

    query: str
    resolution: Resolution
    duration_ms: float

    @property
    def outcome(self) -> Outcome:
        return Outcome.from_resolution(self.resolution)

    @property
    def listed(self) -> bool:
        return self.outcome is Outcome.LISTED


@dataclass(frozen=True)
class LookupResult:
    """Result of checking one address against one provider."""

    provider: str
    listed: bool
    duration_ms: float
    outcome: Outcome = Outcome.NOT_LISTED
    return_codes: tuple[str, ...] = ()  # A records, e.g. 127.0.0.2
    error: str = ""  # set for lookup errors only

    def __post_init__(self) -> None:
        if self.duration_ms < 0:
            raise ValueError("duration_ms must be non-negative")


class VerdictStatus(str, Enum):
    NOT_LISTED = "NOT_LISTED"
    LISTED = "LISTED"


@dataclass(frozen=True)
class Verdict:
    """Aggregate listed/not-listed determination for one check run."""

    status: VerdictStatus
    elapsed_ms: float
    providers_attempted: int
    providers_responded: int
    providers_listed: int
    listing_providers: tuple[str, ...] = ()
    lookup_errors: tuple[str, ...] = ()

    @property
    def listed(self) -> bool:
        return self.status is VerdictStatus.LISTED

    @property
    def reason(self) -> str:
        if not self.listed:
            return ""
        return "Blacklisted on: " + ", ".join(self.listing_providers)


@dataclass(frozen=True)
class EngineReport:
    """Everything one engine run produced.

    ``results`` holds completed lookups in completion order. Providers whose
    probe did not finish before the deadline are only named in ``abandoned``
    and still count toward ``providers_attempted``.
    """

    address: Address
    elapsed_ms: float
    providers_attempted: int
    results: tuple[LookupResult, ...] = ()
    abandoned: tuple[str, ...] = ()
    timed_out: bool = False
    checked_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc), compare=False
    )

    @property
    def providers_responded(self) -> int:
        return len(self.results)

    @property
    def verdict(self) -> Verdict:
        from .aggregator import aggregate

        return aggregate(self)
