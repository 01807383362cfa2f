"""
HTTP client for the Drug Information API.
Wraps requests and parses responses into the API's DTOs.
"""
import logging
import os
from typing import List, Optional, Type, TypeVar
import requests
from pydantic import BaseModel, ValidationError
from src.models.dto.config_dto import TableConfig
from src.models.dto.drug_dto import CompaniesResponse, DrugListResponse, DrugResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = os.getenv("DRUG_API_URL", "http://localhost:8000/api")
DEFAULT_TIMEOUT = float(os.getenv("DRUG_API_TIMEOUT", "10"))

ModelT = TypeVar("ModelT", bound=BaseModel)


class ApiClientError(Exception):
    """Raised when a request fails or returns a non-2xx status."""
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class DrugApiClient:
    """Client for the drug, company and config endpoints."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def get_drugs(
        self,
        company: Optional[str] = None,
        page: int = 1,
        limit: int = 50,
        sort_by: str = 'launchDate',
        sort_order: str = 'desc'
    ) -> DrugListResponse:
        params = {'page': page, 'limit': limit, 'sortBy': sort_by, 'sortOrder': sort_order}
        if company:
            params['company'] = company
        return self._get('/drugs', DrugListResponse, params)

    def get_drug(self, drug_id: str) -> DrugResponse:
        return self._get(f'/drugs/{drug_id}', DrugResponse)

    def get_companies(self) -> List[str]:
        return self._get('/companies', CompaniesResponse).companies

    def get_table_config(self) -> TableConfig:
        return self._get('/config', TableConfig)

    def _get(self, path: str, model: Type[ModelT], params: Optional[dict] = None) -> ModelT:
        """
        GET a path and validate the JSON body against a response model.

        Raises:
            ApiClientError: On network failure, non-2xx status or an unexpected body
        """
        url = f"{self.base_url}{path}"
        logger.debug("Making API request: GET %s %s", url, params or {})
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("API error: GET %s failed: %s", url, e)
            raise ApiClientError(f"Request to {path} failed: {str(e)}") from e

        if not response.ok:
            detail = self._error_detail(response)
            logger.error("API error: GET %s returned %d: %s", url, response.status_code, detail)
            raise ApiClientError(f"{path} returned {response.status_code}: {detail}", response.status_code)

        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ApiClientError(f"{path} returned an unexpected body: {str(e)}") from e

    def _error_detail(self, response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.reason
        if isinstance(body, dict) and body.get('error'):
            return str(body['error'])
        return response.reason
