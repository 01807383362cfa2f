"""
Table configuration route.
"""
from fastapi import APIRouter, Depends
from src.core.dependencies import get_config_service
from src.models.dto.config_dto import TableConfig
from src.services.config_service import ConfigService

router = APIRouter(prefix="/api/config", tags=["Config"])


@router.get("", response_model=TableConfig, response_model_exclude_none=True)
async def get_table_config(config_service: ConfigService = Depends(get_config_service)):
    """Column, pagination and sorting configuration for the drug table."""
    return config_service.get_table_config()
