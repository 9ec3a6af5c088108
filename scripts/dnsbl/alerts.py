"""Webhook notifications for blacklist listings."""

import logging
from datetime import datetime, timezone
from typing import Any

import requests

from .config import CheckConfig
from .models import EngineReport


class WebhookNotifier:
    """Posts a JSON summary of a check to a webhook (Slack relay, PagerDuty, ...)."""

    def __init__(self, config: CheckConfig, session: requests.Session | None = None):
        self.config = config
        self.session = session or requests.Session()
        self.logger = logging.getLogger(__name__)

    @property
    def enabled(self) -> bool:
        return bool(self.config.webhook_url)

    def build_payload(self, report: EngineReport) -> dict[str, Any]:
        verdict = report.verdict
        listings = {r.provider: r for r in report.results if r.listed}
        return {
            "event": "blacklist_alert" if verdict.listed else "blacklist_clean",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "address": str(report.address),
            "status": verdict.status.value,
            "reason": verdict.reason,
            "providers": verdict.providers_attempted,
            "responded": verdict.providers_responded,
            "listings": [
                {
                    "blacklist": provider,
                    "return_codes": list(listings[provider].return_codes),
                }
                for provider in verdict.listing_providers
            ],
            "lookup_errors": list(verdict.lookup_errors),
            "querytime_ms": round(verdict.elapsed_ms),
        }

    def notify(self, report: EngineReport) -> bool:
        """Send the notification. Returns True if a webhook was delivered."""
        if not self.enabled:
            return False

        if not report.verdict.listed and not self.config.webhook_on_clean:
            return False

        try:
            response = self.session.post(
                self.config.webhook_url,
                json=self.build_payload(report),
                timeout=self.config.webhook_timeout,
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()
            self.logger.info(f"Sent webhook alert to {self.config.webhook_url}")
            return True
        except requests.RequestException as e:
            self.logger.error(f"Failed to send webhook alert: {e}")
            return False
