"""Durable counter store backed by the hosted Redis service.

Each resource key is a Redis hash and each counter a hash field, so the
layout mirrors the in-memory store one-to-one:

    site      -> {views: 42}
    <page_id> -> {views: 7}

Atomicity of ``increment`` comes from HINCRBY on the server, which also
creates missing hashes and fields starting from 0.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import ResponseError
from redis.exceptions import TimeoutError as RedisTimeoutError

from .interface import (
    StoreError,
    StoreOverflowError,
    StoreUnavailableError,
    check_address,
    check_amount,
    check_value,
)
from blog_backend import metrics

logger = logging.getLogger(__name__)


def _wrap(exc: RedisError, op: str) -> StoreError:
    if isinstance(exc, (RedisConnectionError, RedisTimeoutError)):
        return StoreUnavailableError(f"{op} failed: redis unavailable: {exc}")
    if isinstance(exc, ResponseError) and "overflow" in str(exc):
        return StoreOverflowError(f"{op} failed: {exc}")
    return StoreError(f"{op} failed: {exc}")


def _to_int(raw: Any, key: str, field: str) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise StoreError(f"non-integer value stored at {key}.{field}: {raw!r}")


class RedisStore:
    """Counter store that forwards get/set/increment to Redis hash commands.

    ``client`` may be passed to share an existing ``redis.asyncio.Redis``
    (tests pass a fake); otherwise one is built from ``url`` with ``token``
    used as the connection password.
    """

    name = "redis"

    def __init__(
        self,
        url: str = "",
        token: str = "",
        socket_timeout: Optional[float] = 5.0,
        client: Optional[Redis] = None,
    ) -> None:
        if client is None:
            if not url:
                raise StoreError("redis store requires a connection URL (KV_URL)")
            kwargs: dict = {"decode_responses": True, "socket_timeout": socket_timeout}
            if token:
                kwargs["password"] = token
            client = Redis.from_url(url, **kwargs)
        self._client = client

    async def get(self, key: str, field: str) -> Optional[int]:
        check_address(key, field)
        metrics.inc("kv_get")
        try:
            raw = await self._client.hget(key, field)
        except RedisError as exc:
            raise _wrap(exc, f"HGET {key} {field}") from exc
        if raw is None:
            return None
        return _to_int(raw, key, field)

    async def set(self, key: str, field: str, value: int) -> bool:
        check_address(key, field)
        check_value(value)
        metrics.inc("kv_set")
        try:
            await self._client.hset(key, field, value)
        except RedisError as exc:
            raise _wrap(exc, f"HSET {key} {field}") from exc
        return True

    async def increment(self, key: str, field: str, by: int = 1) -> int:
        check_address(key, field)
        check_amount(by)
        metrics.inc("kv_increment")
        try:
            new_value = await self._client.hincrby(key, field, by)
        except RedisError as exc:
            raise _wrap(exc, f"HINCRBY {key} {field}") from exc
        return _to_int(new_value, key, field)
