# app/middleware/rate_limit.py
import logging
import time
from typing import Callable, Dict, Tuple

from fastapi import Request

from app.errors import RateLimitExceeded

logger = logging.getLogger(__name__)


class FixedWindowLimiter:
    """In-memory per-client request counter that resets every `window_seconds`."""

    def __init__(self, name: str, limit: int, window_seconds: int, message: str,
                 clock: Callable[[], float] = time.monotonic):
        self.name = name
        self.limit = limit
        self.window_seconds = window_seconds
        self.message = message
        self._clock = clock
        self._windows: Dict[str, Tuple[float, int]] = {}

    def allow(self, key: str) -> bool:
        now = self._clock()
        started, count = self._windows.get(key, (now, 0))
        if now - started >= self.window_seconds:
            started, count = now, 0
        if count >= self.limit:
            self._windows[key] = (started, count)
            return False
        self._windows[key] = (started, count + 1)
        self._prune(now)
        return True

    def _prune(self, now: float) -> None:
        # keep memory bounded to clients seen in the current window
        if len(self._windows) < 1024:
            return
        expired = [k for k, (started, _) in self._windows.items() if now - started >= self.window_seconds]
        for k in expired:
            del self._windows[k]


def client_key(request: Request, trusted_hops: int = 1) -> str:
    """
    Address of the caller as seen by the outermost proxy we trust.

    Each trusted proxy appends the address it received the request from, so the
    entry `trusted_hops` places from the right of X-Forwarded-For is the first one
    a caller cannot forge. Anything to the left of it is client-supplied.
    """
    peer = request.client.host if request.client else "unknown"
    forwarded = request.headers.get("x-forwarded-for")
    if trusted_hops <= 0 or not forwarded:
        return peer
    hops = [hop.strip() for hop in forwarded.split(",") if hop.strip()]
    if not hops:
        return peer
    return hops[-min(trusted_hops, len(hops))]


def rate_limit(limiter_name: str):
    """FastAPI dependency enforcing the named limiter from app.state.limiters."""

    def _dependency(request: Request) -> None:
        limiter: FixedWindowLimiter = request.app.state.limiters[limiter_name]
        key = client_key(request, request.app.state.settings.trusted_proxy_hops)
        if not limiter.allow(key):
            logger.warning(f"[RATE LIMIT] IP {key} exceeded {limiter.name} limit")
            raise RateLimitExceeded(limiter.message)

    return _dependency
