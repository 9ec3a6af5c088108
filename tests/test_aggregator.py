"""Tests for verdict aggregation."""

from dnsbl.aggregator import aggregate
from dnsbl.models import EngineReport, LookupResult, Outcome, VerdictStatus
from dnsbl.query import parse_address


def make_report(results, attempted=None, abandoned=()):
    return EngineReport(
        address=parse_address("87.226.224.34"),
        elapsed_ms=123.4,
        providers_attempted=len(results) if attempted is None else attempted,
        results=tuple(results),
        abandoned=tuple(abandoned),
    )


def listed(provider):
    return LookupResult(provider, True, 1.0, Outcome.LISTED, ("127.0.0.2",))


def clean(provider):
    return LookupResult(provider, False, 1.0, Outcome.NOT_LISTED)


def test_empty_results_not_listed():
    verdict = aggregate(make_report([], attempted=3, abandoned=["a.org", "b.org", "c.org"]))
    assert verdict.status is VerdictStatus.NOT_LISTED
    assert verdict.listing_providers == ()
    assert verdict.providers_listed == 0
    assert verdict.providers_attempted == 3
    assert verdict.providers_responded == 0
    assert verdict.reason == ""


def test_single_listing():
    verdict = aggregate(make_report([clean("a.example.org"), listed("bl.spamcop.net")]))
    assert verdict.status is VerdictStatus.LISTED
    assert verdict.listing_providers == ("bl.spamcop.net",)
    assert verdict.providers_listed == 1
    assert verdict.providers_responded == 2
    assert verdict.reason == "Blacklisted on: bl.spamcop.net"


def test_listing_order_follows_completion_order():
    results = [listed("z.example.org"), clean("m.example.org"), listed("a.example.org")]
    verdict = aggregate(make_report(results))
    assert verdict.listing_providers == ("z.example.org", "a.example.org")


def test_lookup_errors_do_not_list():
    error = LookupResult("broken.example.org", False, 2.0, Outcome.LOOKUP_ERROR, error="x")
    verdict = aggregate(make_report([error]))
    assert verdict.status is VerdictStatus.NOT_LISTED
    assert verdict.lookup_errors == ("broken.example.org",)


def test_elapsed_time_is_carried():
    assert aggregate(make_report([])).elapsed_ms == 123.4


def test_report_verdict_property():
    report = make_report([listed("bl.example.org")])
    assert report.verdict == aggregate(report)
