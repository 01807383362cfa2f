"""
Drug API routes.
Handles HTTP endpoints for listing, fetching and creating drugs.
"""
from typing import Literal, Optional
from fastapi import APIRouter, Depends, Query, status
from src.core.dependencies import get_drug_service
from src.models.dto.drug_dto import DrugCreateRequest, DrugListResponse, DrugResponse
from src.services.drug_service import DrugService

router = APIRouter(prefix="/api/drugs", tags=["Drugs"])


@router.get("", response_model=DrugListResponse)
async def list_drugs(
    company: Optional[str] = Query(default=None, description="Exact company name to filter by"),
    page: int = Query(default=1, ge=1, description="1-based page number"),
    limit: Optional[int] = Query(default=None, ge=1, description="Number of items per page"),
    sort_by: str = Query(default="launchDate", alias="sortBy", description="Field to sort on"),
    sort_order: Literal["asc", "desc"] = Query(default="desc", alias="sortOrder", description="Sort direction"),
    drug_service: DrugService = Depends(get_drug_service)
):
    """
    Retrieve drugs with optional company filter, sorting and pagination.

    - **company**: Exact company name; blank means all companies
    - **page**: Page number (default 1)
    - **limit**: Items per page (default from PAGINATION_DEFAULT_LIMIT)
    - **sortBy**: code, genericName, brandName, company, launchDate or displayName
    - **sortOrder**: asc or desc (default desc)
    """
    return drug_service.list_drugs(
        company=company,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order
    )


@router.get("/{drug_id}", response_model=DrugResponse, response_model_exclude_none=True)
async def get_drug(
    drug_id: str,
    drug_service: DrugService = Depends(get_drug_service)
):
    """
    Retrieve a single drug by id.
    """
    return drug_service.get_drug(drug_id)


@router.post("", response_model=DrugResponse, response_model_exclude_none=True, status_code=status.HTTP_201_CREATED)
async def create_drug(
    request: DrugCreateRequest,
    drug_service: DrugService = Depends(get_drug_service)
):
    """
    Create a drug record. Codes are unique.
    """
    return drug_service.create_drug(request)
