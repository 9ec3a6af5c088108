"""Shared fixtures: in-memory resolvers, no network access."""

import threading
import time

import pytest

from dnsbl.models import Resolution
from dnsbl.resolver import Resolver


class FakeResolver(Resolver):
    """Answers from a dict keyed by zone suffix; unknown names are NXDOMAIN.

    Values are a Resolution, or a float meaning "sleep that long, then NXDOMAIN".
    """

    name = "fake"

    def __init__(self, answers=None, delay: float = 0.0):
        self.answers = answers or {}
        self.delay = delay
        self.queries: list[str] = []
        self._lock = threading.Lock()
        self.active = 0
        self.max_active = 0

    def resolve(self, query: str) -> Resolution:
        with self._lock:
            self.queries.append(query)
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            answer = None
            for zone, value in self.answers.items():
                if query.endswith("." + zone):
                    answer = value
                    break
            if isinstance(answer, (int, float)):
                time.sleep(answer)
                return Resolution.not_found()
            if self.delay:
                time.sleep(self.delay)
            return answer or Resolution.not_found()
        finally:
            with self._lock:
                self.active -= 1


class BlockingResolver(Resolver):
    """Blocks on selected zones until released."""

    name = "blocking"

    def __init__(self, blocked: set[str]):
        self.blocked = blocked
        self.release = threading.Event()

    def resolve(self, query: str) -> Resolution:
        if any(query.endswith("." + zone) for zone in self.blocked):
            self.release.wait(10)
        return Resolution.not_found()


@pytest.fixture
def fake_resolver():
    return FakeResolver()


@pytest.fixture
def blocking_resolver():
    resolver = BlockingResolver(set())
    yield resolver
    resolver.release.set()
