import time
import asyncio
import logging
from collections import deque
from typing import Callable, Iterable
from fastapi import Request
from fastapi.responses import JSONResponse
from jose import JWTError
from app.utils.security import token_user_id

logger = logging.getLogger(__name__)

class RateLimitMiddleware:
    """Sliding-window limiter for the credential endpoints."""

    def __init__(
        self,
        app,
        *,
        window_seconds: int,
        max_calls: int,
        key_func: Callable[[Request], str],
        include_paths: Iterable[str] = ("/api/login", "/api/register"),
        clock: Callable[[], float] = time.monotonic,
    ):
        self.app = app
        self.window = window_seconds
        self.max_calls = max_calls
        self.key_func = key_func
        self.include_paths = frozenset(include_paths)

        self.clock = clock

        self._hits: dict[str, deque[float]] = {}
        self._last_sweep = clock()
        self._lock = asyncio.Lock()

    def _evict_stale(self, now: float):
        # once per window, forget keys whose newest hit has aged out
        if now - self._last_sweep < self.window:
            return
        cutoff = now - self.window
        for key in [k for k, hits in self._hits.items() if not hits or hits[-1] < cutoff]:
            del self._hits[key]
        self._last_sweep = now

    def _should_guard(self, scope) -> bool:
        return scope.get("method") == "POST" and scope.get("path", "") in self.include_paths

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http" or not self._should_guard(scope):
            return await self.app(scope, receive, send)

        request = Request(scope, receive=receive)
        key = f"{self.key_func(request)}:{scope['path']}"

        now = self.clock()
        async with self._lock:
            self._evict_stale(now)
            hits = self._hits.setdefault(key, deque())

            cutoff = now - self.window
            while hits and hits[0] < cutoff:
                hits.popleft()

            if len(hits) >= self.max_calls:
                retry_after = max(1, int(hits[0] + self.window - now))
                logger.warning("Rate limit hit for %s", key)
                resp = JSONResponse(
                    status_code=429,
                    content={
                        "message": "Too many requests",
                        "try_again_in": retry_after,
                    },
                )
                resp.headers["Retry-After"] = str(retry_after)
                return await resp(scope, receive, send)

            hits.append(now)

        return await self.app(scope, receive, send)


def client_key(req: Request) -> str:
    auth = req.headers.get("authorization", "")
    if auth.lower().startswith("bearer "):
        try:
            return f"user:{token_user_id(auth.split(' ', 1)[1].strip())}"
        except (JWTError, ValueError):
            pass

    ip = req.client.host if req.client else "unknown"
    return f"ip:{ip}"
