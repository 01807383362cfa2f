"""
Dependency injection container for FastAPI.
Provides singleton-like behavior for services and repositories.
"""
from functools import lru_cache
from src.core import config
from src.core.exceptions import ValidationException
from src.repositories.db_repository import DBRepository
from src.repositories.dynamo_repository import DynamoRepository
from src.repositories.file_repository import FileRepository
from src.services.company_service import CompanyService
from src.services.config_service import ConfigService
from src.services.drug_service import DrugService
from src.services.file_service import FileService


@lru_cache()
def get_drug_repository() -> DBRepository:
    """Get the record store selected by STORE_BACKEND."""
    backend = config.settings.store_backend.lower()
    if backend == "dynamodb":
        return DynamoRepository()
    if backend == "file":
        return FileRepository()
    raise ValidationException(f"Unknown store backend: {config.settings.store_backend}")


@lru_cache()
def get_file_service() -> FileService:
    """Get FileService singleton instance."""
    return FileService()


@lru_cache()
def get_drug_service() -> DrugService:
    """Get DrugService singleton instance with injected dependencies."""
    return DrugService(db_repository=get_drug_repository())


@lru_cache()
def get_company_service() -> CompanyService:
    """Get CompanyService singleton instance."""
    return CompanyService(db_repository=get_drug_repository())


@lru_cache()
def get_config_service() -> ConfigService:
    """Get ConfigService singleton instance."""
    return ConfigService()


def clear_caches() -> None:
    """Drop all singletons so the next request rebuilds them from settings."""
    for provider in (
        get_drug_repository,
        get_file_service,
        get_drug_service,
        get_company_service,
        get_config_service,
    ):
        provider.cache_clear()
