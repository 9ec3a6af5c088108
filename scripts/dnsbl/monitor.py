"""Single-shot blacklist check: engine, logging and notification wired together."""

import logging
from typing import Optional

from .alerts import WebhookNotifier
from .config import CheckConfig
from .engine import LookupEngine
from .models import Address, EngineReport
from .query import parse_address
from .resolver import Resolver, create_resolver


class BlacklistMonitor:
    """Checks an address against the configured DNSBLs."""

    def __init__(
        self,
        config: CheckConfig,
        resolver: Optional[Resolver] = None,
        notifier: Optional[WebhookNotifier] = None,
    ):
        self.config = config
        self.logger = logging.getLogger(__name__)

        self.resolver = resolver or create_resolver(
            config.resolver, config.dns_servers, config.dns_timeout
        )
        self.engine = LookupEngine(self.resolver, shutdown_grace=config.shutdown_grace)
        self.notifier = notifier or WebhookNotifier(config)

    def check(self, address: str | Address) -> EngineReport:
        """Run one check and return the report."""
        parsed = parse_address(address)
        providers = self.config.providers_for(parsed.family)

        self.logger.debug(f"Resolver: {self.resolver.name}")
        report = self.engine.run(
            parsed,
            providers,
            concurrency_limit=self.config.threads,
            deadline=self.config.timeout,
        )
        self._log_summary(report)

        self.notifier.notify(report)
        return report

    def _log_summary(self, report: EngineReport) -> None:
        verdict = report.verdict
        clean = verdict.providers_responded - verdict.providers_listed

        if verdict.listed:
            self.logger.warning(
                f"{report.address} LISTED on {verdict.providers_listed} "
                f"blacklist(s), clean on {clean}"
            )
            for r in report.results:
                if r.listed:
                    self.logger.warning(f"  - {r.provider}: {', '.join(r.return_codes)}")
        else:
            self.logger.info(
                f"{report.address} clean on all {verdict.providers_responded} blacklists"
            )

        if verdict.lookup_errors:
            self.logger.warning(
                f"{len(verdict.lookup_errors)} lookup error(s): "
                f"{', '.join(verdict.lookup_errors)}"
            )

        self.logger.info(
            f"Queried {verdict.providers_attempted} providers, "
            f"{verdict.providers_responded} responded in {verdict.elapsed_ms:.0f}ms"
        )
