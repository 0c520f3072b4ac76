from abc import ABC, abstractmethod
from typing import List


# ---------------------------------------------------------------------------
# Abstract rate store interface
# ---------------------------------------------------------------------------

class RateStoreClient(ABC):
    """Sorted key/score store holding published premium rates.

    Every implementation reports operation failures as
    src.premium.errors.InternalServerError.
    """

    @abstractmethod
    def range_by_score(self, key: str, min_score: int, max_score: int) -> List[str]:
        """Return members under key with score in [min_score, max_score], score ascending."""

    @abstractmethod
    def bulk_insert(self, key: str, score: int, member: str) -> None:
        """Store member at score under key, replacing whatever held that score."""

    @abstractmethod
    def list_keys(self, pattern: str = "*") -> List[str]:
        """Return keys matching a glob-style pattern."""

    @abstractmethod
    def clear_all(self) -> None:
        """Remove every key from the store."""
