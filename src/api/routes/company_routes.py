"""
Company API routes.
"""
from fastapi import APIRouter, Depends
from src.core.dependencies import get_company_service
from src.models.dto.drug_dto import CompaniesResponse, CompanyStatsResponse
from src.services.company_service import CompanyService

router = APIRouter(prefix="/api/companies", tags=["Companies"])


@router.get("", response_model=CompaniesResponse)
async def list_companies(company_service: CompanyService = Depends(get_company_service)):
    """Distinct company names, sorted case-insensitively."""
    return company_service.list_companies()


@router.get("/stats", response_model=CompanyStatsResponse)
async def company_stats(company_service: CompanyService = Depends(get_company_service)):
    """Drug count and launch date range per company, largest first."""
    return company_service.company_stats()
