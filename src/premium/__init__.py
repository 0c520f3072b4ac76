"""
Premium rating core.

This package wires together:
- premium.age      (date of birth -> age)
- premium.scoring  (age -> risk score band)
- premium.keys     (product code + insured sum -> rate key)
- premium.loader   (rate matrix workbook -> rate store)
- premium.service  (quote requests -> premium)
"""

from .age import calculate_age, parse_date_of_birth
from .errors import (
    InternalServerError,
    InvalidHeaderError,
    InvalidInputError,
    PremiumError,
    RiskCalculationError,
)
from .keys import rate_key
from .loader import RateLoader, read_matrix
from .models import QuoteRequest, QuoteResponse, RateEntry
from .scoring import calculate_score
from .service import PremiumService

__all__ = [
    "calculate_age",
    "parse_date_of_birth",
    "calculate_score",
    "rate_key",
    "read_matrix",
    "RateLoader",
    "PremiumService",
    "QuoteRequest",
    "QuoteResponse",
    "RateEntry",
    "PremiumError",
    "InvalidHeaderError",
    "InvalidInputError",
    "RiskCalculationError",
    "InternalServerError",
]
