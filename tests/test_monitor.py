"""Tests for the check orchestration."""

from unittest.mock import MagicMock

import pytest

from dnsbl.config import CheckConfig
from dnsbl.errors import InvalidAddressError
from dnsbl.models import Resolution, VerdictStatus
from dnsbl.monitor import BlacklistMonitor
from dnsbl.providers import DEFAULT_IPV6_PROVIDERS

from conftest import FakeResolver


def test_check_uses_family_providers():
    resolver = FakeResolver()
    monitor = BlacklistMonitor(CheckConfig(), resolver=resolver, notifier=MagicMock())

    report = monitor.check("2001:db8::1")

    assert report.providers_attempted == len(DEFAULT_IPV6_PROVIDERS)
    assert all(len(q.split(".")) > 32 for q in resolver.queries)


def test_check_notifies_with_report():
    resolver = FakeResolver({"bl.spamcop.net": Resolution.resolved(["127.0.0.2"])})
    notifier = MagicMock()
    config = CheckConfig(providers=["bl.spamcop.net"], threads=1, timeout=5)

    report = BlacklistMonitor(config, resolver=resolver, notifier=notifier).check(
        "87.226.224.34"
    )

    assert report.verdict.status is VerdictStatus.LISTED
    notifier.notify.assert_called_once_with(report)


def test_invalid_address():
    notifier = MagicMock()
    monitor = BlacklistMonitor(CheckConfig(), resolver=FakeResolver(), notifier=notifier)
    with pytest.raises(InvalidAddressError):
        monitor.check("999.999.999.999")
    notifier.notify.assert_not_called()
