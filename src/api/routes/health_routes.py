"""
Health check routes for monitoring.
"""
import logging
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from src.core.dependencies import get_drug_repository
from src.core.exceptions import StoreException
from src.models.drug_model import utc_now
from src.models.dto.drug_dto import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint reporting record store contents."""
    try:
        repository = get_drug_repository()
        return HealthResponse(
            status="OK",
            timestamp=utc_now(),
            database=repository.backend_name,
            total_drugs=repository.count(),
            unique_companies=len(repository.distinct('company'))
        )
    except StoreException as e:
        logger.error("Health check failed: %s", e.message)
        payload = HealthResponse(
            status="ERROR",
            timestamp=utc_now(),
            database="unavailable",
            error="Record store unavailable"
        )
        return JSONResponse(
            status_code=503,
            content=payload.model_dump(mode="json", by_alias=True, exclude_none=True)
        )
