"""
Global cap on in-flight engine calls.

Waiters are served FIFO by the underlying asyncio.Semaphore. New requests
are refused with CapacityExceeded once the wait queue is full, instead of
queueing without bound.
"""

import asyncio
import logging
from contextlib import asynccontextmanager

from arabic_legal_translator.errors import CapacityExceeded

logger = logging.getLogger(__name__)


class DispatchLimiter:
    def __init__(self, max_concurrency: int = 8, max_queued: int = 64):
        self.max_concurrency = max_concurrency
        self.max_queued = max_queued
        self.semaphore = asyncio.Semaphore(max_concurrency)
        self._waiting = 0
        self._in_flight = 0

    @property
    def waiting(self) -> int:
        return self._waiting

    @property
    def in_flight(self) -> int:
        return self._in_flight

    def admit(self) -> None:
        """Refuse a new request if every slot is busy and the queue is full."""
        if self.semaphore.locked() and self._waiting >= self.max_queued:
            logger.warning(
                "Dispatch queue full (%d waiting, %d in flight)",
                self._waiting,
                self._in_flight,
            )
            raise CapacityExceeded(self._waiting, self.max_queued)

    @asynccontextmanager
    async def slot(self):
        """Hold one of the global dispatch slots for the duration of a call."""
        self._waiting += 1
        try:
            await self.semaphore.acquire()
        finally:
            self._waiting -= 1

        self._in_flight += 1
        try:
            yield
        finally:
            self._in_flight -= 1
            self.semaphore.release()
