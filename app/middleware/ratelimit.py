import time
import asyncio
from collections import deque
from typing import Callable, Iterable
from fastapi import Request
from fastapi.responses import JSONResponse
from jose import JWTError
from loguru import logger
from app.auth.deps import get_token
from app.utils.security import decode_token

class RateLimitMiddleware:
    """Sliding-window limiter for credential endpoints, keyed by user or client IP."""

    def __init__(
        self,
        app,
        *,
        window_seconds: int,
        max_calls: int,
        key_func: Callable[[Request], str],
        include_path_prefixes: Iterable[str] = ("/auth/login", "/auth/register"),
    ):
        self.app = app
        self.window = window_seconds
        self.max_calls = max_calls
        self.key_func = key_func
        self.include_paths = tuple(include_path_prefixes)

        self._buckets: dict[str, deque[float]] = {}
        self._lock = asyncio.Lock()

    def _should_guard(self, path: str) -> bool:
        return any(path.startswith(p) for p in self.include_paths)

    def _prune(self, cutoff: float) -> None:
        for key in list(self._buckets):
            q = self._buckets[key]
            while q and q[0] < cutoff:
                q.popleft()
            if not q:
                del self._buckets[key]

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http" or not self._should_guard(scope.get("path", "")):
            return await self.app(scope, receive, send)

        key = self.key_func(Request(scope, receive=receive))
        now = time.monotonic()
        async with self._lock:
            cutoff = now - self.window
            self._prune(cutoff)
            q = self._buckets.setdefault(key, deque())

            if len(q) >= self.max_calls:
                retry_after = max(1, int(q[0] + self.window - now))
                logger.warning("rate limit hit for {} on {}", key, scope.get("path"))
                resp = JSONResponse(
                    status_code=429,
                    content={
                        "detail": "Too Many Requests",
                        "error_type": "RateLimited",
                        "try_again_in": retry_after,
                    },
                    headers={"Retry-After": str(retry_after)},
                )
                return await resp(scope, receive, send)

            q.append(now)

        return await self.app(scope, receive, send)


def client_key(req: Request) -> str:
    token = get_token(req)
    if token:
        try:
            sub = decode_token(token).get("sub")
            if sub:
                return f"user:{sub}"
        except JWTError:
            pass
    ip = req.client.host if req.client else "unknown"
    return f"ip:{ip}"
