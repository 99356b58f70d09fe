"""In-flight request tracking.

uvicorn cancels requests that outlive the graceful-shutdown window. The
tracker counts those cancellations so the process can report the shutdown as
failed.
"""

import asyncio
import threading
from collections.abc import Awaitable
from typing import TypeVar

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

T = TypeVar("T")


class RequestTracker:
    """Counts requests in progress and requests cancelled before completing."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._in_flight = 0
        self._aborted = 0

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def aborted(self) -> int:
        return self._aborted

    async def run(self, awaitable: Awaitable[T]) -> T:
        with self._lock:
            self._in_flight += 1
        try:
            return await awaitable
        except asyncio.CancelledError:
            with self._lock:
                self._aborted += 1
            raise
        finally:
            with self._lock:
                self._in_flight -= 1


class InFlightRequestMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, tracker: RequestTracker):
        super().__init__(app)
        self.tracker = tracker

    async def dispatch(self, request: Request, call_next):
        return await self.tracker.run(call_next(request))
