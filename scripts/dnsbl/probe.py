"""Single name-existence check against one DNSBL query name."""

import logging
import time

from .models import Outcome, ProbeResult, Resolution
from .resolver import Resolver, SystemResolver


class ProviderProbe:
    """Runs one lookup, times it and classifies the answer.

    A name that does not exist is the normal "not listed" answer. Any other
    resolver failure is reported as a lookup error: it does not list the
    address, but it is kept apart so broken resolvers can be alerted on.
    No retries are attempted here.
    """

    def __init__(self, resolver: Resolver | None = None):
        self.resolver = resolver or SystemResolver()
        self.logger = logging.getLogger(__name__)

    def probe(self, query: str) -> ProbeResult:
        start = time.perf_counter()
        try:
            resolution = self.resolver.resolve(query)
        except Exception as e:
            # Resolver contract is "never raise"; contain it if one does
            resolution = Resolution.failure(f"{type(e).__name__}: {e}")
        duration_ms = max(0.0, (time.perf_counter() - start) * 1000)

        result = ProbeResult(
            query=query, resolution=resolution, duration_ms=duration_ms
        )

        if result.outcome is Outcome.LOOKUP_ERROR:
            self.logger.debug(
                f"Lookup error for {query} after {duration_ms:.1f}ms: "
                f"{resolution.error}"
            )
        else:
            self.logger.debug(
                f"{query}: {result.outcome.value} ({duration_ms:.1f}ms)"
            )
        return result
