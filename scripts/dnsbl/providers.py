"""
DNSBL provider lists.

Providers are plain DNS zone names, one per entry. Lists can come from the
built-in defaults, from a text file (one zone per line, ``#`` comments) or
from a YAML file (a list, or a mapping with a ``providers`` key).
"""

import logging
import re
from pathlib import Path
from typing import Any, Iterable

import yaml

from .errors import EngineConfigurationError, ProviderListError
from .models import AddressFamily

logger = logging.getLogger(__name__)

# Public DNSBLs that answer queries from public resolvers
DEFAULT_IPV4_PROVIDERS: list[str] = [
    "b.barracudacentral.org",
    "bl.spamcop.net",
    "dnsbl-1.uceprotect.net",
    "dnsbl-2.uceprotect.net",
    "dnsbl-3.uceprotect.net",
    "psbl.surriel.com",
    "dyna.spamrats.com",
    "noptr.spamrats.com",
    "spam.spamrats.com",
    "bl.mailspike.net",
    "z.mailspike.net",
    "bl.blocklist.de",
    "ips.backscatterer.org",
    "bogons.cymru.com",
    "backscatter.spameatingmonkey.net",
    "bl.spameatingmonkey.net",
    "all.s5h.net",
    "rbl.interserver.net",
    "dnsbl.zapbl.net",
    "db.wpbl.info",
    "truncate.gbudb.net",
    "bl.nordspam.com",
    "bl.suomispam.net",
    "dnsbl.dronebl.org",
    "dnsbl.spfbl.net",
]

# Zones that publish IPv6 listings
DEFAULT_IPV6_PROVIDERS: list[str] = [
    "bl.ipv6.spameatingmonkey.net",
    "dnsbl.spfbl.net",
    "bl.mailspike.net",
    "dnsbl.dronebl.org",
    "all.s5h.net",
]

_LABEL_RE = re.compile(r"^(?!-)[a-z0-9_-]{1,63}(?<!-)$")


def normalize_provider(provider: str) -> str:
    """Lower-case a zone name and drop surrounding whitespace/trailing dot."""
    if not isinstance(provider, str):
        raise EngineConfigurationError(f"Invalid DNSBL provider: {provider!r}")
    return provider.strip().rstrip(".").lower()


def validate_provider(provider: Any) -> str:
    """Check that ``provider`` is a single, syntactically valid DNS zone.

    Entries that contain whitespace or commas are several providers glued
    together and are rejected rather than split.
    """
    if not isinstance(provider, str) or not provider:
        raise EngineConfigurationError(f"Invalid DNSBL provider: {provider!r}")

    if re.search(r"[\s,;]", provider):
        raise EngineConfigurationError(
            f"DNSBL provider {provider!r} contains separators; "
            "list one provider per entry"
        )

    zone = provider.rstrip(".")
    if len(zone) > 253:
        raise EngineConfigurationError(f"DNSBL provider too long: {provider!r}")

    labels = zone.split(".")
    if len(labels) < 2 or not all(_LABEL_RE.match(label.lower()) for label in labels):
        raise EngineConfigurationError(f"Invalid DNSBL provider: {provider!r}")

    return provider


def parse_providers(lines: Iterable[str], source: str = "<input>") -> list[str]:
    """Parse a text provider list, one zone per line."""
    providers: list[str] = []

    for lineno, raw in enumerate(lines, start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue

        provider = normalize_provider(line)
        try:
            validate_provider(provider)
        except EngineConfigurationError as e:
            raise ProviderListError(f"{source}:{lineno}: {e}") from e
        providers.append(provider)

    return providers


def _parse_yaml_providers(text: str, source: str) -> list[str]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ProviderListError(f"{source}: invalid YAML: {e}") from e

    if isinstance(data, dict):
        data = data.get("providers")
    if data is None:
        return []
    if not isinstance(data, list):
        raise ProviderListError(
            f"{source}: expected a list of providers or a 'providers' key"
        )

    providers: list[str] = []
    for index, entry in enumerate(data, start=1):
        if not isinstance(entry, str):
            raise ProviderListError(f"{source}: entry {index} is not a string")
        provider = normalize_provider(entry)
        try:
            validate_provider(provider)
        except EngineConfigurationError as e:
            raise ProviderListError(f"{source}: entry {index}: {e}") from e
        providers.append(provider)

    return providers


def load_providers(path: str | Path) -> list[str]:
    """Load a provider list from a text or YAML file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ProviderListError(f"Cannot read provider list {path}: {e}") from e

    if path.suffix.lower() in (".yaml", ".yml"):
        providers = _parse_yaml_providers(text, str(path))
    else:
        providers = parse_providers(text.splitlines(), str(path))

    logger.debug(f"Loaded {len(providers)} providers from {path}")
    return providers


def default_providers(family: AddressFamily) -> list[str]:
    """Return a copy of the built-in provider list for an address family."""
    if family is AddressFamily.IPV6:
        return list(DEFAULT_IPV6_PROVIDERS)
    return list(DEFAULT_IPV4_PROVIDERS)
