"""In-process sliding-window limiter for abuse-prone endpoints (login, auth codes)."""
from __future__ import annotations

from collections import deque
import math
import threading
import time
from typing import Deque, Dict

from fastapi import HTTPException, Request


class _SlidingWindow:
    def __init__(self) -> None:
        self._hits: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str, limit: int, window_seconds: int) -> float:
        """Record a hit; return seconds to wait when the limit is exceeded, else 0."""
        now = time.monotonic()
        with self._lock:
            hits = self._hits.setdefault(key, deque())
            while hits and hits[0] <= now - window_seconds:
                hits.popleft()
            if len(hits) >= limit:
                return hits[0] + window_seconds - now
            hits.append(now)
            return 0.0

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


_window = _SlidingWindow()


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def rate_limit_ip(request: Request, scope: str, *, limit: int, window_seconds: int) -> None:
    wait = _window.hit(f"{scope}:{_client_ip(request)}", limit, window_seconds)
    if wait > 0:
        raise HTTPException(
            429,
            "Too many requests. Try again shortly.",
            headers={"Retry-After": str(max(1, math.ceil(wait)))},
        )


def reset_rate_limits() -> None:
    _window.reset()
