"""Render check results for monitoring hosts and humans."""

import json
from typing import Any

from .models import EngineReport, Outcome, Verdict


def to_poller_maps(verdict: Verdict) -> tuple[dict[str, str], dict[str, float]]:
    """Translate a verdict into the poller ``results``/``times`` maps.

    ``results["status"]`` is OK or NOK, with a ``reason`` when listed.
    ``times`` carries the provider counts and the query time in ms.
    """
    results: dict[str, str] = {"status": "NOK" if verdict.listed else "OK"}
    if verdict.listed:
        results["reason"] = verdict.reason

    times: dict[str, float] = {
        "providers": verdict.providers_attempted,
        "responded": verdict.providers_responded,
        "listings": verdict.providers_listed,
        "querytime": round(verdict.elapsed_ms),
    }
    return results, times


def render_poller(report: EngineReport) -> str:
    results, times = to_poller_maps(report.verdict)
    return f"times = {times}\nresults = {results}\n"


def report_to_dict(report: EngineReport) -> dict[str, Any]:
    verdict = report.verdict
    return {
        "address": str(report.address),
        "family": report.address.family.value,
        "status": verdict.status.value,
        "reason": verdict.reason,
        "elapsed_ms": round(report.elapsed_ms, 1),
        "providers_attempted": verdict.providers_attempted,
        "providers_responded": verdict.providers_responded,
        "providers_listed": verdict.providers_listed,
        "listing_providers": list(verdict.listing_providers),
        "lookup_errors": list(verdict.lookup_errors),
        "abandoned": list(report.abandoned),
        "timed_out": report.timed_out,
        "checked_at": report.checked_at.isoformat(),
        "results": [
            {
                "provider": r.provider,
                "outcome": r.outcome.value,
                "listed": r.listed,
                "duration_ms": round(r.duration_ms, 1),
                "return_codes": list(r.return_codes),
                "error": r.error,
            }
            for r in report.results
        ],
    }


def render_json(report: EngineReport) -> str:
    return json.dumps(report_to_dict(report), indent=2) + "\n"


def render_text(report: EngineReport, verbose: bool = False) -> str:
    verdict = report.verdict
    lines: list[str] = []

    if verdict.listed:
        lines.append(
            f"{report.address}: LISTED on {verdict.providers_listed} of "
            f"{verdict.providers_responded} blacklist(s)"
        )
        for r in report.results:
            if r.listed:
                codes = ", ".join(r.return_codes)
                lines.append(f"  - {r.provider}: {codes}")
    else:
        lines.append(
            f"{report.address}: clean on all {verdict.providers_responded} blacklists"
        )

    if verdict.lookup_errors:
        lines.append(f"Lookup errors: {', '.join(verdict.lookup_errors)}")
    if report.abandoned:
        lines.append(
            f"No answer before deadline ({len(report.abandoned)}): "
            f"{', '.join(report.abandoned)}"
        )

    if verbose:
        lines.append("")
        for r in report.results:
            lines.append(f"  {r.provider:<40} {r.outcome.value:<13} {r.duration_ms:8.1f}ms")

    lines.append(
        f"Queried {verdict.providers_attempted} providers, "
        f"{verdict.providers_responded} responded in {verdict.elapsed_ms:.0f}ms"
    )
    return "\n".join(lines) + "\n"


def _escape_label_value(value: str) -> str:
    """Escape special characters in Prometheus label values."""
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def render_prometheus(report: EngineReport) -> str:
    """Prometheus text exposition, e.g. for a node_exporter textfile."""
    verdict = report.verdict
    address = _escape_label_value(str(report.address))
    lines: list[str] = []

    lines.append("# HELP dnsbl_listed Blacklist status per provider (1=listed, 0=clean)")
    lines.append("# TYPE dnsbl_listed gauge")
    for r in report.results:
        provider = _escape_label_value(r.provider)
        lines.append(
            f'dnsbl_listed{{address="{address}",provider="{provider}"}} {int(r.listed)}'
        )

    lines.append("")
    lines.append("# HELP dnsbl_lookup_error Lookup failed for reasons other than NXDOMAIN")
    lines.append("# TYPE dnsbl_lookup_error gauge")
    for r in report.results:
        provider = _escape_label_value(r.provider)
        value = int(r.outcome is Outcome.LOOKUP_ERROR)
        lines.append(
            f'dnsbl_lookup_error{{address="{address}",provider="{provider}"}} {value}'
        )

    lines.append("")
    lines.append("# HELP dnsbl_lookup_duration_seconds Duration of each DNSBL lookup")
    lines.append("# TYPE dnsbl_lookup_duration_seconds gauge")
    for r in report.results:
        provider = _escape_label_value(r.provider)
        lines.append(
            f'dnsbl_lookup_duration_seconds{{address="{address}",provider="{provider}"}} '
            f"{r.duration_ms / 1000:.6f}"
        )

    summary = [
        ("dnsbl_providers", "Number of providers queried", verdict.providers_attempted),
        ("dnsbl_responded", "Number of providers that answered in time", verdict.providers_responded),
        ("dnsbl_listed_count", "Number of providers listing the address", verdict.providers_listed),
        ("dnsbl_check_duration_seconds", "Total check duration", f"{verdict.elapsed_ms / 1000:.6f}"),
        ("dnsbl_last_check_timestamp", "Unix timestamp of the check", int(report.checked_at.timestamp())),
    ]
    for name, help_text, value in summary:
        lines.append("")
        lines.append(f"# HELP {name} {help_text}")
        lines.append(f"# TYPE {name} gauge")
        lines.append(f'{name}{{address="{address}"}} {value}')

    return "\n".join(lines) + "\n"


RENDERERS = {
    "text": render_text,
    "json": render_json,
    "poller": render_poller,
    "prometheus": render_prometheus,
}
