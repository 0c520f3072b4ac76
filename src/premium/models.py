"""
Request/response shapes for premium quotes and the rate entries behind them.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class QuoteRequest(BaseModel):
    """Inbound quote body: {"code", "sumInsured", "dateOfBirth"}."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    product_code: StrictStr = Field(..., alias="code", description="Product code, e.g. 1A")
    sum_insured: StrictStr = Field(..., alias="sumInsured", description="Insured-sum band, used verbatim")
    date_of_birth: StrictStr = Field(..., alias="dateOfBirth", description="ISO format: YYYY-MM-DD")


class QuoteResponse(BaseModel):
    premium: str


class ErrorResponse(BaseModel):
    code: str
    message: str


@dataclass(frozen=True)
class RateEntry:
    key: str
    score: int
    premium: str
