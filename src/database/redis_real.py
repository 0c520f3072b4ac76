"""
Real Redis-backed rate store for production when REDIS_URL (or REDIS_SVC) is
set. Implements the same interface as src.database.redis (in-memory stub).

Each rate key is a sorted set. Members are stored as "<score>:<premium>" so
that equal premiums published for different scores stay distinct members;
the prefix is stripped again on read.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import redis

from src.database.interfaces import RateStoreClient
from src.premium.errors import InternalServerError

logger = logging.getLogger(__name__)

MEMBER_SEPARATOR = ":"


def encode_member(score: int, premium: str) -> str:
    return f"{score}{MEMBER_SEPARATOR}{premium}"


def decode_member(member: str) -> str:
    _, sep, premium = member.partition(MEMBER_SEPARATOR)
    if not sep:
        raise ValueError(f"Malformed rate member: {member!r}")
    return premium


class RedisRateStore(RateStoreClient):
    """
    Redis-backed rate store. Use when a Redis URL is configured.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        socket_timeout: float = 5.0,
        client: Optional[Any] = None,
    ) -> None:
        if client is None:
            if not url:
                raise ValueError("RedisRateStore needs either a url or a client")
            client = redis.from_url(url, decode_responses=True, socket_timeout=socket_timeout)
        self._client = client

    def range_by_score(self, key: str, min_score: int, max_score: int) -> List[str]:
        try:
            members = self._client.zrangebyscore(key, min_score, max_score)
            return [decode_member(m) for m in members]
        except redis.RedisError as e:
            logger.error("Redis error while getting score %s", e)
            raise InternalServerError() from e
        except ValueError as e:
            logger.error("Unexpected rate member under %s: %s", key, e)
            raise InternalServerError() from e

    def bulk_insert(self, key: str, score: int, member: str) -> None:
        try:
            pipe = self._client.pipeline(transaction=True)
            pipe.zremrangebyscore(key, score, score)
            pipe.zadd(key, {encode_member(score, member): score})
            pipe.execute()
        except redis.RedisError as e:
            logger.error("Redis error while inserting %s score %s: %s", key, score, e)
            raise InternalServerError() from e

    def list_keys(self, pattern: str = "*") -> List[str]:
        try:
            return list(self._client.keys(pattern))
        except redis.RedisError as e:
            logger.error("Redis error while fetching keys %s", e)
            raise InternalServerError() from e

    def clear_all(self) -> None:
        try:
            self._client.flushall()
        except redis.RedisError as e:
            logger.error("Redis error while executing command FLUSHALL %s", e)
            raise InternalServerError() from e

    def ping(self) -> bool:
        try:
            return self._client.ping()
        except redis.RedisError:
            return False
