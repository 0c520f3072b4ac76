"""Error handling helpers for the premium API."""
from typing import Any, Dict, Tuple
import logging

from src.premium.errors import PremiumError

logger = logging.getLogger(__name__)


class ErrorHandler:
    def to_payload(self, exc: PremiumError) -> Tuple[int, Dict[str, Any]]:
        """Map a taxonomy error to (HTTP status, {"code", "message"})."""
        if exc.status_code >= 500:
            logger.error("Premium request failed: %s", exc, exc_info=exc.__cause__ or exc)
        else:
            logger.info("Premium request rejected (%s): %s", exc.code, exc)
        return exc.status_code, {"code": exc.code, "message": str(exc)}
