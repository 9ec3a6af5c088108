"""DNSBL check package.

Public API:
    - LookupEngine: Concurrent lookups of one address against many DNSBLs
    - aggregate: Reduce an EngineReport to a Verdict
    - build_query / parse_address: Reverse query names
    - BlacklistMonitor: Engine + configuration + notification
    - CheckConfig: Configuration dataclass

Resolver API (for custom name resolution):
    - Resolver: Base class for resolvers
    - SystemResolver / DnsPythonResolver: Built-in backends
"""

from .aggregator import aggregate
from .config import CheckConfig
from .engine import LookupEngine
from .errors import (
    DnsblError,
    EngineConfigurationError,
    InvalidAddressError,
    ProviderListError,
)
from .models import (
    Address,
    AddressFamily,
    EngineReport,
    LookupResult,
    Outcome,
    Resolution,
    ResolutionKind,
    Verdict,
    VerdictStatus,
)
from .monitor import BlacklistMonitor
from .probe import ProviderProbe
from .query import build_query, parse_address
from .resolver import DnsPythonResolver, Resolver, SystemResolver, create_resolver

__all__ = [
    # Main API
    "LookupEngine",
    "aggregate",
    "build_query",
    "parse_address",
    "BlacklistMonitor",
    "CheckConfig",
    "ProviderProbe",
    # Models
    "Address",
    "AddressFamily",
    "EngineReport",
    "LookupResult",
    "Outcome",
    "Resolution",
    "ResolutionKind",
    "Verdict",
    "VerdictStatus",
    # Errors
    "DnsblError",
    "InvalidAddressError",
    "EngineConfigurationError",
    "ProviderListError",
    # Resolver API
    "Resolver",
    "SystemResolver",
    "DnsPythonResolver",
    "create_resolver",
]

__version__ = "1.0.0"
