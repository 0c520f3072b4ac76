"""Error taxonomy shared by the quote and rate-loading paths.

Every failure the core can report is one of four kinds. Each kind carries the
wire `code`, the HTTP `status_code` and the default `message` the API layer
renders (see src.error_handler).
"""

from __future__ import annotations

from typing import Optional


class PremiumError(Exception):
    code: str = "001"
    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidHeaderError(PremiumError):
    """A required header is missing or carries the wrong value."""

    code = "001"
    status_code = 400

    def __init__(self, header: str) -> None:
        self.header = header
        super().__init__(f"Header {header} not provided or invalid")


class InvalidInputError(PremiumError):
    """The payload could not be parsed into a quote request."""

    code = "002"
    status_code = 400
    message = "Invalid request"


class RiskCalculationError(PremiumError):
    """Zero or several rate entries matched, or the rate matrix is unusable."""

    code = "004"
    status_code = 422
    message = "Cannot calculate risk for input"


class InternalServerError(PremiumError):
    """Store connectivity/operation failure or a malformed numeric field during load."""

    code = "001"
    status_code = 500
    message = "Internal server error"
