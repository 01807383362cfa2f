"""
Data Transfer Objects for Drug API.
Defines request and response schemas for API endpoints.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class DrugCreateRequest(CamelModel):
    """Request schema for creating a single drug record."""
    code: str = Field(..., min_length=1, max_length=100, description="Unique drug code")
    generic_name: str = Field(..., min_length=1, max_length=200, description="Generic name")
    brand_name: str = Field(..., min_length=1, max_length=200, description="Brand name")
    company: str = Field(..., min_length=1, max_length=200, description="Marketing company")
    launch_date: datetime = Field(..., description="Launch date as ISO-8601 timestamp")

    @field_validator('code', 'generic_name', 'brand_name', 'company')
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v or v.strip() == "":
            raise ValueError("Field cannot be empty")
        return v.strip()


class DrugResponse(CamelModel):
    """Response schema for drug data retrieval."""
    id: str
    code: str
    generic_name: str
    brand_name: str
    company: str
    launch_date: datetime
    created_at: Optional[datetime] = None
    display_name: str
    sequential_id: Optional[int] = None


class PaginationResponse(CamelModel):
    """Pagination envelope returned alongside a page of drugs."""
    current_page: int
    total_pages: int
    total_count: int
    has_next_page: bool
    has_prev_page: bool


class DrugListResponse(CamelModel):
    """Response schema for a page of drugs."""
    drugs: List[DrugResponse]
    pagination: PaginationResponse


class CompaniesResponse(CamelModel):
    """Response schema for the distinct company listing."""
    companies: List[str]


class CompanyStatResponse(CamelModel):
    """Response schema for one company's statistics."""
    company: str
    drug_count: int
    earliest_launch: datetime
    latest_launch: datetime


class CompanyStatsResponse(CamelModel):
    """Response schema for company statistics."""
    company_stats: List[CompanyStatResponse]


class HealthResponse(CamelModel):
    """Response schema for the health check."""
    status: str
    timestamp: datetime
    database: str
    total_drugs: Optional[int] = None
    unique_companies: Optional[int] = None
    error: Optional[str] = None
