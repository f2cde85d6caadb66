"""
Translation Gateway.

Routes one request across the ranked engines until a cleaned, pure and
well-scored translation is found, or falls back to a static notice.

Per-request state machine:

    NEXT_ENGINE --healthy engine left--> DISPATCHING
    NEXT_ENGINE --none left / deadline spent--> FALLBACK
    DISPATCHING --response--> VALIDATING
    DISPATCHING --transport error / timeout--> NEXT_ENGINE
    VALIDATING --score >= threshold--> ACCEPTED
    VALIDATING --score below threshold--> NEXT_ENGINE

Cache hits and sources with no meaningful text never enter the loop. A
cancelled request ends in CANCELLED at the next dispatch or before fallback.
Engines are tried one at a time; each at most once per request.
"""

import asyncio
import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Sequence

from arabic_legal_translator.config import LANGUAGE_SCRIPTS, TranslationConfig
from arabic_legal_translator.errors import (
    CapacityExceeded,
    ConfigurationFault,
    PurityViolation,
    QualityRejected,
    TransportError,
)
from arabic_legal_translator.fallback import FallbackContentGenerator
from arabic_legal_translator.quality.evaluator import QualityScorer
from arabic_legal_translator.quality.purity import PurityThresholds, validate
from arabic_legal_translator.text.analyzer import analyze
from arabic_legal_translator.text.cleaner import ContentCleaner
from arabic_legal_translator.translator.base import BaseEngine
from arabic_legal_translator.translator.cache import TranslationCache
from arabic_legal_translator.translator.health import Admission, EngineHealthRegistry
from arabic_legal_translator.translator.limiter import DispatchLimiter
from arabic_legal_translator.translator.models import (
    AttemptOutcome,
    OutcomeStatus,
    TranslationAttempt,
    TranslationOutcome,
    TranslationRequest,
)
from arabic_legal_translator.translator.prompts import TranslationPrompt
from arabic_legal_translator.utils import cache_key

logger = logging.getLogger(__name__)


class RequestState(Enum):
    NEXT_ENGINE = "next_engine"
    DISPATCHING = "dispatching"
    VALIDATING = "validating"
    ACCEPTED = "accepted"
    FALLBACK = "fallback"
    SKIPPED = "skipped"
    CANCELLED = "cancelled"


TERMINAL_STATES = frozenset({
    RequestState.ACCEPTED,
    RequestState.FALLBACK,
    RequestState.SKIPPED,
    RequestState.CANCELLED,
})


@dataclass
class _RequestRun:
    """Mutable bookkeeping for one request while it moves through the loop."""
    request: TranslationRequest
    source: str
    prompt: TranslationPrompt
    key: str
    pending: list[str]
    deadline_at: Optional[float] = None
    engine: Optional[str] = None
    probe: bool = False
    raw_response: str = ""
    latency: float = 0.0
    text: str = ""
    attempts: list[TranslationAttempt] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    def remaining(self) -> Optional[float]:
        if self.deadline_at is None:
            return None
        return self.deadline_at - time.monotonic()


class TranslationGateway:
    """
    Multi-engine orchestrator with circuit breakers, caching and a global
    concurrency limit. One instance serves many concurrent requests.
    """

    def __init__(
        self,
        engines: Sequence[BaseEngine],
        config: Optional[TranslationConfig] = None,
        cleaner: Optional[ContentCleaner] = None,
        scorer: Optional[QualityScorer] = None,
        fallback: Optional[FallbackContentGenerator] = None,
        cache: Optional[TranslationCache] = None,
        health: Optional[EngineHealthRegistry] = None,
        limiter: Optional[DispatchLimiter] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or TranslationConfig()
        self.engines: dict[str, BaseEngine] = {}
        for engine in engines:
            if engine.name in self.engines:
                raise ConfigurationFault(f"duplicate engine name: {engine.name}")
            self.engines[engine.name] = engine

        self.thresholds = PurityThresholds(
            min_target_pct=self.config.purity_target_threshold_pct,
            max_foreign_pct=self.config.purity_foreign_threshold_pct,
        )
        self.cleaner = cleaner or ContentCleaner(self.config.extra_ui_labels)
        self.scorer = scorer or QualityScorer()
        self.fallback = fallback or FallbackContentGenerator(thresholds=self.thresholds)
        self.cache = cache or TranslationCache(
            max_entries=self.config.cache_max_entries,
            ttl_seconds=self.config.cache_ttl_ms / 1000,
            clock=clock,
        )
        self.health = health or EngineHealthRegistry(
            self.engines,
            failure_threshold=self.config.max_consecutive_failures_before_open,
            half_open_after_seconds=self.config.circuit_half_open_after_ms / 1000,
            clock=clock,
        )
        self.limiter = limiter or DispatchLimiter(
            max_concurrency=self.config.global_concurrency_limit,
            max_queued=self.config.max_queued_requests,
        )
        self.timeout_seconds = self.config.engine_timeout_ms / 1000
        self.stats: Counter = Counter()
        self._active: set[str] = set()
        self._cancelled: set[str] = set()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def translate(self, request: TranslationRequest) -> TranslationOutcome:
        """
        Translate one request.

        Returns:
            TranslationOutcome with status accepted, fallback, skipped or
            cancelled. Engine failures never raise.

        Raises:
            CapacityExceeded: the dispatch queue is full.
        """
        self.stats["requests"] += 1
        key = cache_key(
            request.text, request.source_lang.value, request.target_lang.value
        )

        cached = self.cache.get(key)
        if cached is not None:
            self.stats["cache_hits"] += 1
            self.stats[OutcomeStatus.ACCEPTED.value] += 1
            logger.info("Cache hit for request %s", request.correlation_id)
            return TranslationOutcome(
                text=cached,
                status=OutcomeStatus.ACCEPTED,
                correlation_id=request.correlation_id,
                cached=True,
            )
        self.stats["cache_misses"] += 1

        source = self.cleaner.clean(request.text).text
        profile = analyze(source, LANGUAGE_SCRIPTS[request.source_lang])
        if profile.meaningful_count < self.config.min_meaningful_chars:
            logger.info(
                "Skipping request %s: %d meaningful chars",
                request.correlation_id,
                profile.meaningful_count,
            )
            self.stats[OutcomeStatus.SKIPPED.value] += 1
            return TranslationOutcome(
                text=source,
                status=OutcomeStatus.SKIPPED,
                correlation_id=request.correlation_id,
            )

        try:
            self.limiter.admit()
        except CapacityExceeded:
            self.stats["capacity_rejected"] += 1
            raise

        run = _RequestRun(
            request=request,
            source=source,
            prompt=TranslationPrompt(
                text=source,
                source_lang=request.source_lang,
                target_lang=request.target_lang,
                domain=request.domain,
            ),
            key=key,
            pending=self.health.ranked_names,
        )
        if request.deadline_seconds is not None:
            run.deadline_at = time.monotonic() + request.deadline_seconds

        self._active.add(request.correlation_id)
        try:
            state = RequestState.NEXT_ENGINE
            while state not in TERMINAL_STATES:
                if state is RequestState.NEXT_ENGINE:
                    state = self._select_engine(run)
                elif state is RequestState.DISPATCHING:
                    state = await self._dispatch(run)
                elif state is RequestState.VALIDATING:
                    state = self._validate(run)
            return self._finish(run, state)
        finally:
            self._active.discard(request.correlation_id)
            self._cancelled.discard(request.correlation_id)

    def cancel(self, correlation_id: str) -> bool:
        """
        Cancel an in-progress request.

        Takes effect before the next dispatch or before fallback. An engine
        call already in flight finishes, but its result is discarded.
        Returns False if no request with that id is running.
        """
        if correlation_id not in self._active:
            return False
        self._cancelled.add(correlation_id)
        logger.info("Cancellation requested for %s", correlation_id)
        return True

    def engine_health(self) -> list[dict]:
        return self.health.snapshot()

    # ------------------------------------------------------------------
    # State handlers
    # ------------------------------------------------------------------

    def _is_cancelled(self, run: _RequestRun) -> bool:
        return run.request.correlation_id in self._cancelled

    def _select_engine(self, run: _RequestRun) -> RequestState:
        if self._is_cancelled(run):
            return RequestState.CANCELLED

        while run.pending:
            remaining = run.remaining()
            if remaining is not None and remaining <= 0:
                logger.warning(
                    "Deadline spent for %s with %d engines untried",
                    run.request.correlation_id,
                    len(run.pending),
                )
                return RequestState.FALLBACK

            name = run.pending.pop(0)
            admission = self.health.acquire(name)
            if admission is Admission.REJECTED:
                logger.info("Skipping %s: circuit open", name)
                run.skipped.append(name)
                continue

            run.engine = name
            run.probe = admission is Admission.PROBE
            return RequestState.DISPATCHING

        return RequestState.FALLBACK

    async def _dispatch(self, run: _RequestRun) -> RequestState:
        name = run.engine
        engine = self.engines[name]
        timeout = self.timeout_seconds
        remaining = run.remaining()
        if remaining is not None:
            timeout = min(timeout, remaining)

        logger.info(
            "Dispatching %s to %s (timeout %.1fs%s)",
            run.request.correlation_id,
            name,
            timeout,
            ", probe" if run.probe else "",
        )

        response = ""
        error: Optional[TransportError] = None
        started = time.monotonic()
        try:
            async with self.limiter.slot():
                if self._is_cancelled(run):
                    if run.probe:
                        self.health.release_probe(name)
                    logger.info(
                        "Request %s cancelled while queued for %s",
                        run.request.correlation_id,
                        name,
                    )
                    return RequestState.CANCELLED
                started = time.monotonic()
                response = await asyncio.wait_for(engine.generate(run.prompt), timeout)
        except asyncio.TimeoutError:
            error = TransportError(name, f"timed out after {timeout:.2f}s")
        except TransportError as e:
            error = e
        except asyncio.CancelledError:
            if run.probe:
                self.health.release_probe(name)
            raise
        except Exception as e:
            error = TransportError(name, f"{type(e).__name__}: {e}")
        latency = time.monotonic() - started

        if error is None and not isinstance(response, str):
            error = TransportError(name, "non-text response")
        elif error is None and not response.strip():
            error = TransportError(name, "empty response")

        if self._is_cancelled(run):
            if run.probe:
                self.health.release_probe(name)
            run.attempts.append(TranslationAttempt(
                engine=name,
                outcome=AttemptOutcome.DISCARDED,
                latency_seconds=latency,
                raw_response=response if isinstance(response, str) else "",
                reason="request cancelled while in flight",
            ))
            return RequestState.CANCELLED

        if error is not None:
            self.health.record_failure(name, probe=run.probe)
            logger.warning("Engine %s failed: %s", name, error.reason)
            run.attempts.append(TranslationAttempt(
                engine=name,
                outcome=AttemptOutcome.TRANSPORT_ERROR,
                latency_seconds=latency,
                reason=error.reason,
            ))
            return RequestState.NEXT_ENGINE

        run.raw_response = response
        run.latency = latency
        return RequestState.VALIDATING

    def _validate(self, run: _RequestRun) -> RequestState:
        request = run.request
        name = run.engine
        cleaned = self.cleaner.clean(run.raw_response)
        verdict = validate(
            analyze(cleaned.text, LANGUAGE_SCRIPTS[request.target_lang]),
            request.target_lang,
            self.thresholds,
        )
        score = self.scorer.score(
            cleaned.text,
            run.source,
            verdict,
            domain=request.domain,
            source_lang=request.source_lang,
            target_lang=request.target_lang,
        )
        threshold = self.config.acceptance_score_threshold

        if score.accepted(threshold):
            self.health.record_success(name, probe=run.probe)
            self.cache.set(run.key, cleaned.text)
            run.text = cleaned.text
            run.attempts.append(TranslationAttempt(
                engine=name,
                outcome=AttemptOutcome.ACCEPTED,
                latency_seconds=run.latency,
                raw_response=run.raw_response,
                cleaned_text=cleaned.text,
                fired_rules=cleaned.fired_rules,
                verdict=verdict,
                score=score,
            ))
            logger.info("Accepted %s translation (score %.1f)", name, score.overall)
            return RequestState.ACCEPTED

        if verdict.passed:
            rejection = QualityRejected(score.overall, threshold)
        else:
            rejection = PurityViolation(threshold, verdict.describe())
        self.health.record_response(name, probe=run.probe)
        logger.warning("Engine %s rejected: %s", name, rejection)
        run.attempts.append(TranslationAttempt(
            engine=name,
            outcome=AttemptOutcome.QUALITY_REJECTED,
            latency_seconds=run.latency,
            raw_response=run.raw_response,
            cleaned_text=cleaned.text,
            reason=str(rejection),
            fired_rules=cleaned.fired_rules,
            verdict=verdict,
            score=score,
        ))
        return RequestState.NEXT_ENGINE

    def _finish(self, run: _RequestRun, state: RequestState) -> TranslationOutcome:
        request = run.request
        if state is RequestState.FALLBACK and self._is_cancelled(run):
            state = RequestState.CANCELLED

        outcome = TranslationOutcome(
            text="",
            status=OutcomeStatus(state.value),
            correlation_id=request.correlation_id,
            attempts=run.attempts,
            skipped_engines=run.skipped,
        )
        if state is RequestState.ACCEPTED:
            outcome.text = run.text
            outcome.engine = run.engine
        elif state is RequestState.FALLBACK:
            outcome.text = self.fallback.generate(request.target_lang, request.domain)
            logger.error(
                "No acceptable translation for %s, returning fallback (%s)",
                request.correlation_id,
                ", ".join(outcome.reason_codes + [f"{n}:circuit_open" for n in run.skipped])
                or "no engines",
            )
        elif state is RequestState.CANCELLED:
            logger.info("Request %s cancelled", request.correlation_id)

        self.stats[outcome.status.value] += 1
        return outcome
