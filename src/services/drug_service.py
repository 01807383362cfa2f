"""
Drug Service for business logic.
Resolves list queries against the record store and orchestrates imports.
"""
import logging
import math
from typing import List, Optional
from src.core import config
from src.core.exceptions import (
    DrugNotFoundException,
    DuplicateDrugCodeException,
    ServiceException,
    StoreException,
    ValidationException
)
from src.models.drug_model import Drug, SORT_FIELDS
from src.models.drug_query import DrugQuery
from src.models.dto.drug_dto import (
    DrugCreateRequest,
    DrugListResponse,
    DrugResponse,
    PaginationResponse
)
from src.repositories.db_repository import DBRepository

logger = logging.getLogger(__name__)

SORT_ORDERS = ('asc', 'desc')


class ImportSummary:
    """Outcome of a bulk import."""

    def __init__(self, deleted_count: int, imported_count: int, skipped_count: int):
        self.deleted_count = deleted_count
        self.imported_count = imported_count
        self.skipped_count = skipped_count

    def __repr__(self):
        return (
            f"ImportSummary(deleted={self.deleted_count}, imported={self.imported_count}, "
            f"skipped={self.skipped_count})"
        )


class DrugService:
    """Service for drug-related business operations."""

    def __init__(self, db_repository: DBRepository):
        self.db_repository = db_repository

    def list_drugs(
        self,
        company: Optional[str] = None,
        page: int = 1,
        limit: Optional[int] = None,
        sort_by: str = 'launchDate',
        sort_order: str = 'desc'
    ) -> DrugListResponse:
        """
        Retrieve one page of drugs, optionally filtered by company.

        Args:
            company: Exact company name; blank or missing means no filter
            page: 1-based page number, not clamped to the last page
            limit: Page size; defaults to PAGINATION_DEFAULT_LIMIT
            sort_by: API field name to sort on
            sort_order: 'asc' or 'desc'

        Returns:
            DrugListResponse with the page and its pagination envelope

        Raises:
            ValidationException: If paging or sort parameters are invalid
            ServiceException: If the store fails
        """
        if limit is None:
            limit = config.settings.pagination_default_limit
        if page < 1:
            raise ValidationException("page must be greater than or equal to 1")
        if limit < 1:
            raise ValidationException("limit must be greater than or equal to 1")
        if limit > config.settings.pagination_max_limit:
            raise ValidationException(f"limit must not exceed {config.settings.pagination_max_limit}")
        if sort_by not in SORT_FIELDS:
            raise ValidationException(f"Invalid sort field: {sort_by}")
        if sort_order not in SORT_ORDERS:
            raise ValidationException(f"Invalid sort order: {sort_order}")

        company_filter = company if company and company.strip() else None
        skip = (page - 1) * limit
        query = DrugQuery(
            company=company_filter,
            sort_field=SORT_FIELDS[sort_by],
            descending=sort_order == 'desc',
            skip=skip,
            limit=limit
        )

        try:
            drugs = self.db_repository.find(query)
            total_count = self.db_repository.count(company_filter)
        except StoreException as e:
            logger.error("Error fetching drugs: %s", e.message, exc_info=True)
            raise ServiceException("Failed to fetch drugs") from e

        total_pages = math.ceil(total_count / limit)
        drug_responses = [
            self._to_response(drug, sequential_id=skip + index + 1)
            for index, drug in enumerate(drugs)
        ]

        return DrugListResponse(
            drugs=drug_responses,
            pagination=PaginationResponse(
                current_page=page,
                total_pages=total_pages,
                total_count=total_count,
                has_next_page=page < total_pages,
                has_prev_page=page > 1
            )
        )

    def get_drug(self, drug_id: str) -> DrugResponse:
        """
        Retrieve a single drug by id.

        Raises:
            ValidationException: If the id is blank
            DrugNotFoundException: If no drug has this id
            ServiceException: If the store fails
        """
        if not drug_id or not drug_id.strip():
            raise ValidationException("Invalid drug id")

        try:
            drug = self.db_repository.find_by_id(drug_id)
        except StoreException as e:
            logger.error("Error fetching drug %s: %s", drug_id, e.message, exc_info=True)
            raise ServiceException("Failed to fetch drug") from e

        if drug is None:
            raise DrugNotFoundException()
        return self._to_response(drug)

    def create_drug(self, request: DrugCreateRequest) -> DrugResponse:
        """
        Create a drug record.

        Raises:
            DuplicateDrugCodeException: If the code already exists
            ServiceException: If the store fails
        """
        drug = Drug(
            code=request.code,
            generic_name=request.generic_name,
            brand_name=request.brand_name,
            company=request.company,
            launch_date=request.launch_date
        )
        try:
            created = self.db_repository.insert(drug)
        except DuplicateDrugCodeException:
            raise
        except StoreException as e:
            logger.error("Error creating drug %s: %s", drug.code, e.message, exc_info=True)
            raise ServiceException("Failed to create drug") from e

        logger.info("Created drug %s (%s)", created.code, created.id)
        return self._to_response(created)

    def import_drugs(self, drugs: List[Drug], batch_size: int = 100, replace: bool = True) -> ImportSummary:
        """
        Bulk import drugs in batches, skipping duplicate codes.

        Args:
            drugs: Drugs to import
            batch_size: Number of drugs inserted per batch
            replace: Clear the store before importing

        Returns:
            ImportSummary with deleted, imported and skipped counts

        Raises:
            StoreException: If the store fails
        """
        if batch_size < 1:
            raise ValidationException("batch_size must be greater than or equal to 1")

        deleted = self.db_repository.delete_all() if replace else 0
        if replace:
            logger.info("Cleared %d existing drugs", deleted)

        imported = 0
        for start in range(0, len(drugs), batch_size):
            batch = drugs[start:start + batch_size]
            inserted = self.db_repository.insert_many(batch)
            imported += inserted
            if inserted < len(batch):
                logger.info("Batch had %d duplicates, imported %d drugs", len(batch) - inserted, inserted)
            logger.info("Imported batch: %d/%d drugs", imported, len(drugs))

        return ImportSummary(deleted, imported, len(drugs) - imported)

    def _to_response(self, drug: Drug, sequential_id: Optional[int] = None) -> DrugResponse:
        return DrugResponse(
            id=drug.id,
            code=drug.code,
            generic_name=drug.generic_name,
            brand_name=drug.brand_name,
            company=drug.company,
            launch_date=drug.launch_date,
            created_at=drug.created_at,
            display_name=drug.display_name,
            sequential_id=sequential_id
        )
