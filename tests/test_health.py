"""Tests for the per-engine circuit breakers."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from arabic_legal_translator.translator.health import (
    Admission,
    BreakerState,
    EngineHealthRegistry,
)


class TestEngineHealthRegistry:
    @pytest.fixture(autouse=True)
    def _registry(self, clock):
        self.clock = clock
        self.registry = EngineHealthRegistry(
            ["claude", "deepl"],
            failure_threshold=3,
            half_open_after_seconds=60.0,
            clock=self.clock,
        )

    def _trip(self, name="claude"):
        for _ in range(3):
            self.registry.record_failure(name)

    def test_ranked_names_keep_configuration_order(self):
        assert self.registry.ranked_names == ["claude", "deepl"]

    def test_closed_allows(self):
        assert self.registry.acquire("claude") is Admission.ALLOWED

    def test_opens_after_threshold(self):
        self.registry.record_failure("claude")
        self.registry.record_failure("claude")
        assert self.registry.get("claude").state is BreakerState.CLOSED
        self.registry.record_failure("claude")
        assert self.registry.get("claude").state is BreakerState.OPEN
        assert self.registry.acquire("claude") is Admission.REJECTED

    def test_success_resets_streak(self):
        self.registry.record_failure("claude")
        self.registry.record_failure("claude")
        self.registry.record_success("claude")
        self.registry.record_failure("claude")
        assert self.registry.get("claude").state is BreakerState.CLOSED
        assert self.registry.get("claude").consecutive_failures == 1

    def test_quality_rejection_resets_streak(self):
        self.registry.record_failure("claude")
        self.registry.record_failure("claude")
        self.registry.record_response("claude")
        self.registry.record_failure("claude")
        assert self.registry.get("claude").state is BreakerState.CLOSED

    def test_half_open_after_cooldown(self):
        self._trip()
        self.clock.advance(59.0)
        assert self.registry.acquire("claude") is Admission.REJECTED
        self.clock.advance(1.0)
        assert self.registry.acquire("claude") is Admission.PROBE
        assert self.registry.get("claude").state is BreakerState.HALF_OPEN

    def test_single_probe_at_a_time(self):
        self._trip()
        self.clock.advance(60.0)
        assert self.registry.acquire("claude") is Admission.PROBE
        assert self.registry.acquire("claude") is Admission.REJECTED

    def test_probe_success_closes(self):
        self._trip()
        self.clock.advance(60.0)
        self.registry.acquire("claude")
        self.registry.record_success("claude", probe=True)
        descriptor = self.registry.get("claude")
        assert descriptor.state is BreakerState.CLOSED
        assert descriptor.consecutive_failures == 0
        assert not descriptor.probe_in_flight

    def test_probe_failure_reopens_and_restarts_cooldown(self):
        self._trip()
        self.clock.advance(60.0)
        self.registry.acquire("claude")
        self.registry.record_failure("claude", probe=True)
        assert self.registry.get("claude").state is BreakerState.OPEN
        self.clock.advance(30.0)
        assert self.registry.acquire("claude") is Admission.REJECTED
        self.clock.advance(30.0)
        assert self.registry.acquire("claude") is Admission.PROBE

    def test_probe_quality_rejection_stays_half_open(self):
        self._trip()
        self.clock.advance(60.0)
        self.registry.acquire("claude")
        self.registry.record_response("claude", probe=True)
        assert self.registry.get("claude").state is BreakerState.HALF_OPEN
        assert self.registry.acquire("claude") is Admission.PROBE

    def test_release_probe(self):
        self._trip()
        self.clock.advance(60.0)
        self.registry.acquire("claude")
        self.registry.release_probe("claude")
        assert self.registry.get("claude").state is BreakerState.HALF_OPEN
        assert self.registry.acquire("claude") is Admission.PROBE

    @pytest.mark.parametrize("report", ["record_response", "record_failure"])
    def test_non_probe_report_keeps_probe_held(self, report):
        self._trip()
        self.clock.advance(60.0)
        assert self.registry.acquire("claude") is Admission.PROBE
        getattr(self.registry, report)("claude")
        descriptor = self.registry.get("claude")
        assert descriptor.state is BreakerState.HALF_OPEN
        assert descriptor.probe_in_flight
        assert self.registry.acquire("claude") is Admission.REJECTED

    def test_engines_are_independent(self):
        self._trip("claude")
        assert self.registry.acquire("deepl") is Admission.ALLOWED

    def test_get_returns_copy(self):
        descriptor = self.registry.get("claude")
        descriptor.consecutive_failures = 99
        assert self.registry.get("claude").consecutive_failures == 0

    def test_snapshot(self):
        self._trip("deepl")
        snapshot = self.registry.snapshot()
        assert [entry["name"] for entry in snapshot] == ["claude", "deepl"]
        assert snapshot[1]["state"] == "open"
        assert snapshot[1]["consecutive_failures"] == 3


class TestConcurrentUpdates:
    def test_no_failure_is_lost(self):
        registry = EngineHealthRegistry(["google"], failure_threshold=10_000)
        with ThreadPoolExecutor(max_workers=8) as pool:
            for _ in range(400):
                pool.submit(registry.record_failure, "google")
        assert registry.get("google").consecutive_failures == 400

    def test_only_one_probe_admitted(self, clock):
        registry = EngineHealthRegistry(
            ["google"], failure_threshold=1, half_open_after_seconds=5.0, clock=clock
        )
        registry.record_failure("google")
        clock.advance(5.0)
        with ThreadPoolExecutor(max_workers=8) as pool:
            admissions = list(pool.map(lambda _: registry.acquire("google"), range(32)))
        assert admissions.count(Admission.PROBE) == 1
        assert admissions.count(Admission.REJECTED) == 31
