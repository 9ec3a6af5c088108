"""Configuration for DNSBL checks."""

import dataclasses
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, get_origin

import yaml

from .errors import EngineConfigurationError
from .models import AddressFamily
from .providers import (
    default_providers,
    load_providers,
    normalize_provider,
    validate_provider,
)

TRUE_VALUES = ("true", "1", "yes", "on")


def _split_list(value: str) -> list[str]:
    return [x.strip() for x in value.split(",") if x.strip()]


def _env_flag(name: str, default: str = "false") -> bool:
    """Boolean env var: true/1/yes/on (any case) are true, anything else false."""
    return os.environ.get(name, default).strip().lower() in TRUE_VALUES


def _coerce_setting(name: str, expected: Any, value: Any, source: str) -> Any:
    """Check a config-file value against the field type it is assigned to."""
    if get_origin(expected) is list:
        if isinstance(value, str):
            value = _split_list(value)
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise EngineConfigurationError(
                f"{source}: {name} must be a list of strings, got {value!r}"
            )
        return value

    if expected is bool:
        if not isinstance(value, bool):
            raise EngineConfigurationError(
                f"{source}: {name} must be true or false, got {value!r}"
            )
        return value

    if expected in (int, float):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise EngineConfigurationError(
                f"{source}: {name} must be a number, got {value!r}"
            )
        if expected is int and not isinstance(value, int):
            raise EngineConfigurationError(
                f"{source}: {name} must be an integer, got {value!r}"
            )
        if not math.isfinite(value):
            raise EngineConfigurationError(f"{source}: {name} must be finite")
        return expected(value)

    if not isinstance(value, str):
        raise EngineConfigurationError(
            f"{source}: {name} must be a string, got {value!r}"
        )
    return value


@dataclass
class CheckConfig:
    """Configuration for a blacklist check.

    Boolean environment variables accept true/1/yes/on (case-insensitive);
    any other value, including an empty one, means false.
    """

    threads: int = 10  # Parallel DNS lookups
    timeout: float = 30.0  # Deadline for the whole batch, in seconds
    shutdown_grace: float = 1.0  # Bounded wait for in-flight lookups

    # Provider list files per address family (empty = built-in list)
    providers_v4: str = ""
    providers_v6: str = ""

    # Inline providers, used for both families when set
    providers: list[str] = field(default_factory=list)

    # Resolver backend: "system" or "dnspython"
    resolver: str = "system"
    dns_servers: list[str] = field(default_factory=list)
    dns_timeout: float = 5.0

    # Webhook notification
    webhook_url: str = ""
    webhook_timeout: int = 5
    webhook_on_clean: bool = False

    @classmethod
    def from_env(cls) -> "CheckConfig":
        """Create config from environment variables."""
        try:
            return cls(
                threads=int(os.environ.get("DNSBL_THREADS", "10")),
                timeout=float(os.environ.get("DNSBL_TIMEOUT", "30")),
                shutdown_grace=float(os.environ.get("DNSBL_SHUTDOWN_GRACE", "1")),
                providers_v4=os.environ.get("DNSBL_PROVIDERS_V4", ""),
                providers_v6=os.environ.get("DNSBL_PROVIDERS_V6", ""),
                providers=_split_list(os.environ.get("DNSBL_PROVIDERS", "")),
                resolver=os.environ.get("DNSBL_RESOLVER", "system"),
                dns_servers=_split_list(os.environ.get("DNSBL_DNS_SERVER", "")),
                dns_timeout=float(os.environ.get("DNSBL_DNS_TIMEOUT", "5")),
                webhook_url=os.environ.get("DNSBL_WEBHOOK_URL", ""),
                webhook_timeout=int(os.environ.get("DNSBL_WEBHOOK_TIMEOUT", "5")),
                webhook_on_clean=_env_flag("DNSBL_WEBHOOK_ON_CLEAN"),
            )
        except ValueError as e:
            raise EngineConfigurationError(f"Invalid environment setting: {e}") from e

    @classmethod
    def load(cls, path: str | Path, base: "CheckConfig | None" = None) -> "CheckConfig":
        """Load a YAML config file on top of ``base`` (default: environment)."""
        base = base or cls.from_env()
        path = Path(path)

        try:
            with open(path, encoding="utf-8") as f:
                values: dict[str, Any] = yaml.safe_load(f) or {}
        except OSError as e:
            raise EngineConfigurationError(f"Cannot read config {path}: {e}") from e
        except yaml.YAMLError as e:
            raise EngineConfigurationError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(values, dict):
            raise EngineConfigurationError(f"{path}: expected a mapping at top level")

        types = {f.name: f.type for f in dataclasses.fields(cls)}
        unknown = sorted(set(values) - set(types))
        if unknown:
            raise EngineConfigurationError(
                f"{path}: unknown setting(s): {', '.join(map(str, unknown))}"
            )

        for key, value in values.items():
            values[key] = _coerce_setting(key, types[key], value, str(path))

        if "providers" in values:
            try:
                values["providers"] = [
                    validate_provider(normalize_provider(p)) for p in values["providers"]
                ]
            except EngineConfigurationError as e:
                raise EngineConfigurationError(f"{path}: providers: {e}") from e

        return dataclasses.replace(base, **values)

    def providers_for(self, family: AddressFamily) -> list[str]:
        """Return the providers to check for an address family."""
        if self.providers:
            return [validate_provider(normalize_provider(p)) for p in self.providers]

        path = self.providers_v6 if family is AddressFamily.IPV6 else self.providers_v4
        if path:
            return load_providers(path)
        return default_providers(family)
