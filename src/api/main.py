"""
FastAPI application - Main entry point

Endpoints:
- GET  /                                   -> 200, empty
- POST /api/v1/healths/premiums            -> {"premium": ...}
- POST /api/v1/healths/premiums/loads      -> load the rate matrix workbook
- POST /api/v1/healths/premiums/unloads    -> clear the rate store
- GET  /api/v1/healths/premiums/checks     -> 200 when the store holds rates

  uvicorn src.api.main:app --host 127.0.0.1 --port 8000
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Header, Request, Response
from fastapi.responses import JSONResponse

from src.database import create_rate_store
from src.error_handler import ErrorHandler
from src.premium.errors import InternalServerError, PremiumError, RiskCalculationError
from src.premium.loader import RateLoader
from src.premium.models import ErrorResponse, QuoteResponse
from src.premium.service import PremiumService, validate_content_type
from src.utils.config_loader import load_premium_config

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Health Premium API",
    description="Health insurance premium quotes from a published rate matrix",
    version="1.0.0",
)

# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================

settings = load_premium_config()
rate_store = create_rate_store(settings.store)
premium_service = PremiumService(rate_store, settings.quote)
rate_loader = RateLoader(rate_store, settings.matrix)
error_handler = ErrorHandler()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid header (001) or invalid input (002)"},
    422: {"model": ErrorResponse, "description": "No single premium for the input (004)"},
    500: {"model": ErrorResponse, "description": "Rate store failure (001)"},
}


def get_premium_service() -> PremiumService:
    """Dependency for the quoting service"""
    return premium_service


def get_rate_loader() -> RateLoader:
    """Dependency for the rate matrix loader"""
    return rate_loader


def require_json_content_type(content_type: Optional[str] = Header(default=None)) -> None:
    validate_content_type(content_type)


@app.exception_handler(PremiumError)
async def premium_error_handler(request: Request, exc: PremiumError) -> JSONResponse:
    status_code, payload = error_handler.to_payload(exc)
    return JSONResponse(status_code=status_code, content=payload)


# ============================================================================
# ENDPOINTS
# ============================================================================
@app.get("/", tags=["Health"])
async def root():
    """Health check endpoint."""
    return Response(status_code=200)


@app.post("/api/v1/healths/premiums", response_model=QuoteResponse, responses=ERROR_RESPONSES, tags=["Premiums"])
async def premiums(request: Request, service: PremiumService = Depends(get_premium_service)) -> QuoteResponse:
    """Quote the premium for {code, sumInsured, dateOfBirth}."""
    try:
        body = await request.body()
    except Exception as e:
        logger.error("Parsing error of request body %s", e)
        raise InternalServerError() from e

    try:
        premium = service.quote_from_body(request.headers.get("content-type"), body)
    except PremiumError:
        raise
    except Exception as e:
        logger.error("Unexpected error while quoting: %s", e, exc_info=True)
        raise InternalServerError() from e

    return QuoteResponse(premium=premium)


@app.post(
    "/api/v1/healths/premiums/loads",
    tags=["Rate Matrix"],
    responses=ERROR_RESPONSES,
    dependencies=[Depends(require_json_content_type)],
)
async def load_matrix(loader: RateLoader = Depends(get_rate_loader)):
    """Load the rate matrix workbook into the rate store."""
    try:
        loaded = loader.load_workbook()
    except PremiumError:
        raise
    except Exception as e:
        logger.error("Unexpected error while loading rate matrix: %s", e, exc_info=True)
        raise InternalServerError() from e

    logger.info("Rate matrix loaded: %d entries", loaded)
    return Response(status_code=200)


@app.post(
    "/api/v1/healths/premiums/unloads",
    tags=["Rate Matrix"],
    responses=ERROR_RESPONSES,
    dependencies=[Depends(require_json_content_type)],
)
async def unload_matrix(service: PremiumService = Depends(get_premium_service)):
    """Remove every rate from the store."""
    try:
        service.unload()
    except PremiumError:
        raise
    except Exception as e:
        logger.error("Unexpected error while clearing rate store: %s", e, exc_info=True)
        raise InternalServerError() from e
    return Response(status_code=200)


@app.get("/api/v1/healths/premiums/checks", responses=ERROR_RESPONSES, tags=["Rate Matrix"])
async def check_matrix(service: PremiumService = Depends(get_premium_service)):
    """200 when the rate store holds at least one key."""
    try:
        loaded = service.keys_exist()
    except PremiumError:
        raise
    except Exception as e:
        logger.error("Unexpected error while checking rate store: %s", e, exc_info=True)
        raise InternalServerError() from e

    if not loaded:
        raise RiskCalculationError("Rate matrix is not loaded")
    return Response(status_code=200)
