"""
Premium quoting service.

Single pass per request, no state kept between requests:
  content type -> QuoteRequest -> age -> score -> rate key
  -> store range query -> exactly one premium, or a typed PremiumError
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional, Union

from pydantic import ValidationError

from src.database.interfaces import RateStoreClient
from src.premium.age import age_on, calculate_age, parse_date_of_birth
from src.premium.errors import InvalidHeaderError, InvalidInputError, RiskCalculationError
from src.premium.keys import rate_key
from src.premium.models import QuoteRequest
from src.premium.scoring import calculate_score
from src.utils.config_loader import QuoteConfig

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"


def validate_content_type(content_type: Optional[str]) -> None:
    """Require an application/json media type; parameters such as charset are ignored."""
    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    if media_type != JSON_MEDIA_TYPE:
        raise InvalidHeaderError("content-type")


def parse_request(body: Union[bytes, str]) -> QuoteRequest:
    try:
        return QuoteRequest.model_validate_json(body)
    except ValidationError as e:
        logger.error("Serialization error while converting json to QuoteRequest: %s", e)
        raise InvalidInputError() from e


class PremiumService:
    def __init__(
        self,
        store: RateStoreClient,
        config: Optional[QuoteConfig] = None,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        self.store = store
        self.config = config or QuoteConfig()
        self.today = today or date.today

    def _age(self, date_of_birth: str) -> int:
        if self.config.strict_date_of_birth:
            try:
                birth = parse_date_of_birth(date_of_birth)
            except ValueError as e:
                logger.warning("Rejecting unparsable date of birth %r", date_of_birth)
                raise InvalidInputError() from e
            return age_on(birth, self.today(), self.config.age_basis)
        return calculate_age(date_of_birth, today=self.today(), basis=self.config.age_basis)

    def quote(self, request: QuoteRequest) -> str:
        """Look up the published premium for a parsed request."""
        age = self._age(request.date_of_birth)
        score = calculate_score(age)
        logger.info("age %s score %s", age, score)

        key = rate_key(request.product_code, request.sum_insured)
        matches = self.store.range_by_score(key, score, score)

        if not matches:
            logger.warning("No premium published for %s score %s", key, score)
            raise RiskCalculationError()
        if len(matches) > 1:
            logger.error("Rate store has %d premiums for %s score %s", len(matches), key, score)
            raise RiskCalculationError()
        return matches[0]

    def quote_from_body(self, content_type: Optional[str], body: Union[bytes, str]) -> str:
        validate_content_type(content_type)
        return self.quote(parse_request(body))

    def unload(self) -> None:
        self.store.clear_all()
        logger.info("Rate store cleared")

    def keys_exist(self) -> bool:
        return len(self.store.list_keys("*")) > 0
