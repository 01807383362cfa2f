"""
Company Service.
Derives the company directory and per-company statistics from drug records.
"""
import logging
import unicodedata
from typing import List, Tuple
from src.core.exceptions import ServiceException, StoreException
from src.models.company_stats import CompanyStats
from src.models.dto.drug_dto import CompaniesResponse, CompanyStatResponse, CompanyStatsResponse
from src.repositories.db_repository import DBRepository

logger = logging.getLogger(__name__)


def collation_key(name: str) -> Tuple[str, str, str]:
    """
    Case and accent insensitive sort key.

    "cipla", "Cipla" and "Cípla" compare equal on the first element and are
    then ordered case-insensitively with accents, then by exact spelling.
    """
    folded = name.casefold()
    base = ''.join(
        ch for ch in unicodedata.normalize('NFKD', folded)
        if not unicodedata.combining(ch)
    )
    return base, folded, name


class CompanyService:
    """Service for company directory operations."""

    def __init__(self, db_repository: DBRepository):
        self.db_repository = db_repository

    def list_companies(self) -> CompaniesResponse:
        """
        List distinct company names, sorted case-insensitively.

        Raises:
            ServiceException: If the store fails
        """
        try:
            companies = self.db_repository.distinct('company')
        except StoreException as e:
            logger.error("Error fetching companies: %s", e.message, exc_info=True)
            raise ServiceException("Failed to fetch companies") from e

        return CompaniesResponse(companies=sorted(companies, key=collation_key))

    def company_stats(self) -> CompanyStatsResponse:
        """
        Drug count and launch range per company, largest first.
        Equal counts are ordered by company name.

        Raises:
            ServiceException: If the store fails
        """
        try:
            stats = self.db_repository.aggregate_by_company()
        except StoreException as e:
            logger.error("Error fetching company stats: %s", e.message, exc_info=True)
            raise ServiceException("Failed to fetch company statistics") from e

        return CompanyStatsResponse(
            company_stats=[self._to_response(entry) for entry in sort_stats(stats)]
        )

    def _to_response(self, stats: CompanyStats) -> CompanyStatResponse:
        return CompanyStatResponse(
            company=stats.company,
            drug_count=stats.drug_count,
            earliest_launch=stats.earliest_launch,
            latest_launch=stats.latest_launch
        )


def sort_stats(stats: List[CompanyStats]) -> List[CompanyStats]:
    by_name = sorted(stats, key=lambda entry: collation_key(entry.company))
    return sorted(by_name, key=lambda entry: entry.drug_count, reverse=True)
