"""
cache.py — Redis-backed request rate limiting for reformcert.

Namespace:
  ratelimit:{scope}:{identifier}  → request count for the current window  TTL = window

Design:
  - Uses redis.asyncio (part of redis-py 5.x)
  - Pool created once in lifespan, stored on app.state.redis
  - Helper functions take the client as a param; no module-level client
  - Fixed window: INCR, and EXPIRE on the first hit of a window
  - No pool on app.state (tests, rate limiting disabled) → every request allowed
"""
import logging
from dataclasses import dataclass

import redis.asyncio as aioredis
from fastapi import HTTPException, Request
from redis.exceptions import RedisError

from reformcert.config import settings

logger = logging.getLogger(__name__)

RATE_LIMIT_PREFIX = "ratelimit"


def make_rate_limit_key(scope: str, identifier: str) -> str:
    """Build Redis key for one client's window counter: ratelimit:{scope}:{identifier}"""
    return f"{RATE_LIMIT_PREFIX}:{scope}:{identifier}"


# ---------------------------------------------------------------------------
# Pool factory: called once in lifespan
# ---------------------------------------------------------------------------

async def create_redis_pool() -> aioredis.Redis:
    """
    Create and return an async Redis connection pool.
    Verifies connectivity with PING before returning.
    """
    client = aioredis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        max_connections=20,
    )
    await client.ping()
    logger.info("Redis connection pool established at %s", settings.redis_url)
    return client


# ---------------------------------------------------------------------------
# Fixed-window limiter
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    remaining: int
    reset_in: int      # seconds until the window resets


async def check_rate_limit(
    client: aioredis.Redis,
    scope: str,
    identifier: str,
    limit: int,
    window_seconds: int,
) -> RateLimitResult:
    """Count one request against the caller's window and report whether it fits."""
    key = make_rate_limit_key(scope, identifier)
    count = await client.incr(key)
    if count == 1:
        await client.expire(key, window_seconds)
    ttl = await client.ttl(key)
    if ttl is None or ttl < 0:
        # Counter left without expiry (e.g. crash between INCR and EXPIRE)
        await client.expire(key, window_seconds)
        ttl = window_seconds

    return RateLimitResult(
        allowed=count <= limit,
        remaining=max(0, limit - count),
        reset_in=ttl,
    )


def _client_identifier(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "anonymous"


def rate_limiter(scope: str):
    """
    Build a FastAPI dependency that rate-limits one route family.

    Usage:
        @router.post(..., dependencies=[Depends(rate_limiter("calculate"))])
    """
    async def _dependency(request: Request) -> None:
        if not settings.rate_limit_enabled:
            return
        client = getattr(request.app.state, "redis", None)
        if client is None:
            return

        identifier = _client_identifier(request)
        try:
            result = await check_rate_limit(
                client,
                scope,
                identifier,
                settings.rate_limit_requests,
                settings.rate_limit_window_seconds,
            )
        except RedisError as exc:
            logger.warning("Rate limiter unavailable scope=%s: %s", scope, exc)
            return

        if not result.allowed:
            logger.info("Rate limit exceeded scope=%s identifier=%s", scope, identifier)
            raise HTTPException(
                status_code=429,
                detail=f"Too many requests. Retry in {result.reset_in} seconds.",
                headers={"Retry-After": str(result.reset_in)},
            )

    return _dependency
