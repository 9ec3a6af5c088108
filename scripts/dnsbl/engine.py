"""Concurrent DNSBL lookup engine."""

from __future__ import annotations

import logging
import math
import queue
import threading
import time
from typing import Iterable, Optional

from .errors import EngineConfigurationError
from .models import Address, EngineReport, LookupResult, Outcome
from .probe import ProviderProbe
from .providers import validate_provider
from .query import build_query, parse_address
from .resolver import Resolver, SystemResolver


class LookupEngine:
    """Checks one address against many DNSBL providers in parallel.

    Every run starts its own pool of daemon worker threads that take work
    from a FIFO queue, so probes start in submission order and at most
    ``concurrency_limit`` run at once. A single deadline covers the whole
    batch: whatever has not finished by then is abandoned and left out of
    the report, which is still a normal (partial) result rather than an
    error. Abandoned lookups stay on daemon threads and never hold up
    interpreter exit.
    """

    def __init__(
        self,
        resolver: Optional[Resolver] = None,
        shutdown_grace: float = 1.0,
    ):
        if (
            isinstance(shutdown_grace, bool)
            or not isinstance(shutdown_grace, (int, float))
            or not math.isfinite(shutdown_grace)
            or shutdown_grace < 0
        ):
            raise EngineConfigurationError(
                f"shutdown_grace must be a non-negative number, got {shutdown_grace!r}"
            )
        self.resolver = resolver or SystemResolver()
        self.shutdown_grace = shutdown_grace
        self.logger = logging.getLogger(__name__)

    def run(
        self,
        address: str | Address,
        providers: Iterable[str],
        concurrency_limit: int = 10,
        deadline: float = 30.0,
    ) -> EngineReport:
        """Check ``address`` against every provider and return the report.

        Args:
            address: IPv4/IPv6 address (string or parsed Address)
            providers: DNSBL zones, duplicates are checked independently
            concurrency_limit: Maximum number of probes running at once
            deadline: Seconds the whole batch may take

        Raises:
            InvalidAddressError: address is malformed
            EngineConfigurationError: bad providers, limit or deadline
        """
        parsed = parse_address(address)
        provider_list = list(providers)
        self._validate(provider_list, concurrency_limit, deadline)

        self.logger.info(
            f"Checking {parsed} against {len(provider_list)} DNSBLs "
            f"(threads={concurrency_limit}, deadline={deadline}s)"
        )

        probe = ProviderProbe(self.resolver)
        cancel = threading.Event()
        work: queue.Queue[tuple[int, str]] = queue.Queue()
        done: queue.Queue[tuple[int, LookupResult]] = queue.Queue()
        for item in enumerate(provider_list):
            work.put(item)

        results: list[LookupResult] = []
        collected: set[int] = set()
        workers: list[threading.Thread] = []
        timed_out = False

        start = time.monotonic()
        try:
            for n in range(min(concurrency_limit, len(provider_list))):
                worker = threading.Thread(
                    target=self._worker,
                    args=(probe, parsed, work, done, cancel),
                    name=f"dnsbl-{n}",
                    daemon=True,
                )
                worker.start()
                workers.append(worker)

            while len(collected) < len(provider_list):
                remaining = deadline - (time.monotonic() - start)
                try:
                    index, result = done.get(timeout=max(0.0, remaining))
                except queue.Empty:
                    timed_out = True
                    break
                collected.add(index)
                results.append(self._collect(result))
        finally:
            cancel.set()
            # Give blocked lookups a bounded chance to release their threads
            grace_end = time.monotonic() + self.shutdown_grace
            for worker in workers:
                worker.join(max(0.0, grace_end - time.monotonic()))

        elapsed_ms = (time.monotonic() - start) * 1000

        abandoned = tuple(
            provider
            for index, provider in enumerate(provider_list)
            if index not in collected
        )
        if abandoned:
            self.logger.warning(
                f"Deadline of {deadline}s reached, abandoned {len(abandoned)} "
                f"provider(s): {', '.join(abandoned)}"
            )

        return EngineReport(
            address=parsed,
            elapsed_ms=elapsed_ms,
            providers_attempted=len(provider_list),
            results=tuple(results),
            abandoned=abandoned,
            timed_out=timed_out,
        )

    def _validate(
        self, providers: list[str], concurrency_limit: int, deadline: float
    ) -> None:
        if not providers:
            raise EngineConfigurationError("At least one DNSBL provider is required")
        for provider in providers:
            validate_provider(provider)

        if (
            isinstance(concurrency_limit, bool)
            or not isinstance(concurrency_limit, int)
            or concurrency_limit <= 0
        ):
            raise EngineConfigurationError(
                f"Concurrency limit must be a positive integer, got {concurrency_limit!r}"
            )

        if (
            isinstance(deadline, bool)
            or not isinstance(deadline, (int, float))
            or not math.isfinite(deadline)
            or deadline <= 0
        ):
            raise EngineConfigurationError(
                f"Deadline must be a positive number of seconds, got {deadline!r}"
            )

    def _worker(
        self,
        probe: ProviderProbe,
        address: Address,
        work: queue.Queue[tuple[int, str]],
        done: queue.Queue[tuple[int, LookupResult]],
        cancel: threading.Event,
    ) -> None:
        """Worker thread: take providers off the queue until it is empty."""
        while True:
            try:
                index, provider = work.get_nowait()
            except queue.Empty:
                return

            if cancel.is_set():
                # Past the deadline, nobody is waiting for it
                continue

            done.put((index, self._check(probe, address, provider)))

    def _check(
        self, probe: ProviderProbe, address: Address, provider: str
    ) -> LookupResult:
        """Build the query, probe it, wrap the answer."""
        try:
            query = build_query(address, provider)
            result = probe.probe(query)
        except Exception as e:
            self.logger.warning(f"Failed to check {provider}: {e}")
            return LookupResult(
                provider=provider,
                listed=False,
                duration_ms=0.0,
                outcome=Outcome.LOOKUP_ERROR,
                error=str(e),
            )

        return LookupResult(
            provider=provider,
            listed=result.listed,
            duration_ms=result.duration_ms,
            outcome=result.outcome,
            return_codes=result.resolution.addresses,
            error=result.resolution.error,
        )

    def _collect(self, result: LookupResult) -> LookupResult:
        if result.outcome is Outcome.LOOKUP_ERROR:
            self.logger.warning(f"Lookup error on {result.provider}: {result.error}")
        return result
