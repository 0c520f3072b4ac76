"""
Age derivation from an ISO date of birth.

Two bases are supported:
- day_of_month: years difference, minus one when today's day-of-month is
  before the birth day-of-month. The month is not compared. This is the rule
  the published rate tables were quoted against and stays the default.
- anniversary: calendar-correct age (month and day compared).
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

logger = logging.getLogger(__name__)

DATE_OF_BIRTH_FORMAT = "%Y-%m-%d"

AGE_BASIS_DAY_OF_MONTH = "day_of_month"
AGE_BASIS_ANNIVERSARY = "anniversary"


def parse_date_of_birth(value: str) -> date:
    """Parse a YYYY-MM-DD string. Raises ValueError on bad format or impossible dates."""
    return datetime.strptime(value, DATE_OF_BIRTH_FORMAT).date()


def age_on(birth: date, today: date, basis: str = AGE_BASIS_DAY_OF_MONTH) -> int:
    years = today.year - birth.year
    if basis == AGE_BASIS_ANNIVERSARY:
        if (today.month, today.day) < (birth.month, birth.day):
            years -= 1
    elif today.day < birth.day:
        years -= 1
    return years


def calculate_age(
    date_of_birth: str,
    today: Optional[date] = None,
    basis: str = AGE_BASIS_DAY_OF_MONTH,
) -> int:
    """
    Age in years for a date-of-birth string.

    Returns 0 when the string cannot be parsed, which callers cannot tell apart
    from an applicant younger than one. Use parse_date_of_birth first when the
    distinction matters.
    """
    try:
        birth = parse_date_of_birth(date_of_birth)
    except (TypeError, ValueError):
        logger.warning("Unparsable date of birth %r, using age 0", date_of_birth)
        return 0

    years = age_on(birth, today or date.today(), basis)
    logger.info("years calculated %s", years)
    return years
