"""Registry of revoked bearer tokens.

Tokens are keyed by their SHA-256 digest and forgotten once they would have expired
anyway. The Redis registry is shared by every API process; the in-memory one keeps
the same semantics for single-process development and tests.
"""

from __future__ import annotations

import hashlib
import logging
import time
from typing import Protocol

import redis.asyncio as redis  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

_KEY_PREFIX = "revoked-token:"


def token_digest(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


class RevocationRegistry(Protocol):
    async def revoke(self, token: str, ttl_seconds: int) -> None: ...

    async def is_revoked(self, token: str) -> bool: ...


class InMemoryRevocationRegistry:
    """Process-local registry with per-entry expiry."""

    def __init__(self) -> None:
        self._entries: dict[str, float] = {}

    def _purge(self, now: float) -> None:
        expired = [key for key, deadline in self._entries.items() if deadline <= now]
        for key in expired:
            del self._entries[key]

    async def revoke(self, token: str, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            return
        now = time.monotonic()
        self._purge(now)
        self._entries[token_digest(token)] = now + ttl_seconds

    async def is_revoked(self, token: str) -> bool:
        now = time.monotonic()
        deadline = self._entries.get(token_digest(token))
        if deadline is None:
            return False
        if deadline <= now:
            self._entries.pop(token_digest(token), None)
            return False
        return True


class RedisRevocationRegistry:
    """Registry stored in Redis with key expiry matching token lifetime."""

    def __init__(self, client: redis.Redis) -> None:
        self._client = client

    async def revoke(self, token: str, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            return
        await self._client.set(f"{_KEY_PREFIX}{token_digest(token)}", "1", ex=ttl_seconds)

    async def is_revoked(self, token: str) -> bool:
        return bool(await self._client.exists(f"{_KEY_PREFIX}{token_digest(token)}"))


__all__ = [
    "InMemoryRevocationRegistry",
    "RedisRevocationRegistry",
    "RevocationRegistry",
    "token_digest",
]
