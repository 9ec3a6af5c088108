"""Reduce an engine report to a listed/not-listed verdict."""

from .models import EngineReport, Outcome, Verdict, VerdictStatus


def aggregate(report: EngineReport) -> Verdict:
    """Build the Verdict for a report.

    The address is LISTED as soon as one completed lookup found it. Listing
    providers keep completion order so diagnostics are reproducible.
    """
    listing = tuple(r.provider for r in report.results if r.listed)
    errors = tuple(
        r.provider for r in report.results if r.outcome is Outcome.LOOKUP_ERROR
    )

    return Verdict(
        status=VerdictStatus.LISTED if listing else VerdictStatus.NOT_LISTED,
        elapsed_ms=report.elapsed_ms,
        providers_attempted=report.providers_attempted,
        providers_responded=len(report.results),
        providers_listed=len(listing),
        listing_providers=listing,
        lookup_errors=errors,
    )
