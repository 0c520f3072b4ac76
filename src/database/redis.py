"""
Lightweight in-memory RedisRateStore replacement for local development.

This implements the RateStoreClient interface used by PremiumService and
RateLoader so that the FastAPI app and the tests can run without a real Redis
instance.
"""

from __future__ import annotations

from fnmatch import fnmatchcase
from typing import Dict, List

from src.database.interfaces import RateStoreClient


class RedisRateStore(RateStoreClient):
    def __init__(self) -> None:
        # key -> {score -> member}
        self._rates: Dict[str, Dict[int, str]] = {}

    def range_by_score(self, key: str, min_score: int, max_score: int) -> List[str]:
        members = self._rates.get(key, {})
        return [members[score] for score in sorted(members) if min_score <= score <= max_score]

    def bulk_insert(self, key: str, score: int, member: str) -> None:
        self._rates.setdefault(key, {})[int(score)] = str(member)

    def list_keys(self, pattern: str = "*") -> List[str]:
        return [key for key in self._rates if fnmatchcase(key, pattern)]

    def clear_all(self) -> None:
        self._rates.clear()

    def ping(self) -> bool:
        return True
