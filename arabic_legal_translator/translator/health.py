"""
Per-engine circuit breakers.

Each engine's health lives in an EngineDescriptor owned by one registry.
Updates for an engine are serialized by that engine's lock, so concurrent
requests reporting on the same engine cannot lose a failure.

    CLOSED --N consecutive transport failures--> OPEN
    OPEN --cooldown elapsed, one probe admitted--> HALF_OPEN
    HALF_OPEN --probe accepted--> CLOSED
    HALF_OPEN --probe transport failure--> OPEN (cooldown restarts)
    HALF_OPEN --probe rejected on quality--> HALF_OPEN (next request may probe)

Only the request holding the probe ends it. A request dispatched while the
breaker was still closed reports with probe=False and leaves a half-open
breaker and its probe alone.
"""

import logging
import threading
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Iterable, Optional

logger = logging.getLogger(__name__)


class BreakerState(Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class Admission(Enum):
    ALLOWED = "allowed"
    PROBE = "probe"
    REJECTED = "rejected"


@dataclass
class EngineDescriptor:
    name: str
    priority: int
    consecutive_failures: int = 0
    state: BreakerState = BreakerState.CLOSED
    last_failure_at: Optional[float] = None
    opened_at: Optional[float] = None
    probe_in_flight: bool = False

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "priority": self.priority,
            "state": self.state.value,
            "consecutive_failures": self.consecutive_failures,
            "probe_in_flight": self.probe_in_flight,
        }


class EngineHealthRegistry:
    """Breaker state for a fixed, ranked set of engines."""

    def __init__(
        self,
        engine_names: Iterable[str],
        failure_threshold: int = 3,
        half_open_after_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.failure_threshold = failure_threshold
        self.half_open_after_seconds = half_open_after_seconds
        self._clock = clock
        self._engines: dict[str, EngineDescriptor] = {}
        self._locks: dict[str, threading.Lock] = {}
        for rank, name in enumerate(engine_names):
            self._engines[name] = EngineDescriptor(name=name, priority=rank)
            self._locks[name] = threading.Lock()

    @property
    def ranked_names(self) -> list[str]:
        return sorted(self._engines, key=lambda name: self._engines[name].priority)

    def acquire(self, name: str) -> Admission:
        """Decide whether a request may dispatch to ``name`` right now."""
        with self._locks[name]:
            engine = self._engines[name]
            if engine.state is BreakerState.CLOSED:
                return Admission.ALLOWED

            if engine.state is BreakerState.OPEN:
                if self._clock() - engine.opened_at < self.half_open_after_seconds:
                    return Admission.REJECTED
                engine.state = BreakerState.HALF_OPEN
                logger.info("Circuit half-open for %s, admitting one probe", name)

            if engine.probe_in_flight:
                return Admission.REJECTED
            engine.probe_in_flight = True
            return Admission.PROBE

    def record_success(self, name: str, probe: bool = False) -> None:
        with self._locks[name]:
            engine = self._engines[name]
            if engine.state is not BreakerState.CLOSED:
                logger.info("Circuit closed for %s", name)
            engine.state = BreakerState.CLOSED
            engine.consecutive_failures = 0
            engine.opened_at = None
            if probe:
                engine.probe_in_flight = False

    def record_failure(self, name: str, probe: bool = False) -> None:
        with self._locks[name]:
            engine = self._engines[name]
            now = self._clock()
            engine.consecutive_failures += 1
            engine.last_failure_at = now

            if probe:
                engine.probe_in_flight = False

            if engine.state is BreakerState.HALF_OPEN and probe:
                engine.state = BreakerState.OPEN
                engine.opened_at = now
                logger.warning("Probe failed, circuit re-opened for %s", name)
            elif (
                engine.state is BreakerState.CLOSED
                and engine.consecutive_failures >= self.failure_threshold
            ):
                engine.state = BreakerState.OPEN
                engine.opened_at = now
                logger.warning(
                    "Circuit opened for %s after %d consecutive failures",
                    name,
                    engine.consecutive_failures,
                )

    def record_response(self, name: str, probe: bool = False) -> None:
        """
        The engine answered but the answer was rejected on quality.

        The transport worked, so a closed breaker's failure streak ends. A
        half-open breaker stays half-open and the next request may probe.
        """
        with self._locks[name]:
            engine = self._engines[name]
            if probe:
                engine.probe_in_flight = False
            if engine.state is BreakerState.CLOSED:
                engine.consecutive_failures = 0

    def release_probe(self, name: str) -> None:
        """End a probe that produced no verdict on the engine's transport."""
        with self._locks[name]:
            self._engines[name].probe_in_flight = False

    def get(self, name: str) -> EngineDescriptor:
        """Copy of the descriptor for ``name``."""
        with self._locks[name]:
            return replace(self._engines[name])

    def snapshot(self) -> list[dict]:
        return [self.get(name).to_dict() for name in self.ranked_names]
