"""
Immutable state of the drug table view.

Every user action is a transition returning a new TableState. Each
transition that triggers a fetch bumps ``request_id``; a response is applied
only when it carries the current id, so a slow earlier request can never
overwrite a newer state.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional, Tuple
from src.models.dto.config_dto import TableConfig
from src.models.dto.drug_dto import DrugListResponse, DrugResponse

INITIAL_LOAD_ERROR = "Failed to load initial data. Please try again."
REFRESH_ERROR = "Failed to load drug data. Please try again."


class LoadPhase(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FILTERING = "filtering"
    ERROR = "error"


class StateTransitionError(Exception):
    """Raised when an action is not allowed in the current state."""
    pass


@dataclass(frozen=True)
class TableState:
    phase: LoadPhase = LoadPhase.LOADING
    config: Optional[TableConfig] = None
    companies: Tuple[str, ...] = ()
    selected_company: str = ""
    current_page: int = 1
    page_size: int = 50
    sort_field: str = "launchDate"
    sort_direction: str = "desc"
    drugs: Tuple[DrugResponse, ...] = ()
    total_pages: int = 0
    total_count: int = 0
    error: Optional[str] = None
    request_id: int = 0

    @property
    def loaded(self) -> bool:
        """True once the initial load has completed."""
        return self.config is not None and self.phase != LoadPhase.LOADING

    @property
    def is_loading(self) -> bool:
        return self.phase in (LoadPhase.LOADING, LoadPhase.FILTERING)

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.current_page > 1

    def query_params(self) -> dict:
        """Keyword arguments for the drug list request matching this state."""
        return {
            'company': self.selected_company or None,
            'page': self.current_page,
            'limit': self.page_size,
            'sort_by': self.sort_field,
            'sort_order': self.sort_direction,
        }

    # Initial load

    def start_initial_load(self) -> "TableState":
        return TableState(request_id=self.request_id + 1)

    def configured(self, request_id: int, config: TableConfig, companies: Iterable[str]) -> "TableState":
        """Apply configuration and companies while the first page is still loading."""
        if request_id != self.request_id or self.phase != LoadPhase.LOADING:
            return self
        default_sort = config.sorting.default_sort
        return replace(
            self,
            config=config,
            companies=tuple(companies),
            current_page=1,
            page_size=config.pagination.default_page_size,
            sort_field=default_sort.field,
            sort_direction=default_sort.direction,
        )

    # Refinements

    def select_company(self, company: str) -> "TableState":
        """Select a company ("" for all companies) and go back to page 1."""
        return self._refine(selected_company=company, current_page=1)

    def clear_filter(self) -> "TableState":
        return self.select_company("")

    def change_page(self, page: int) -> "TableState":
        if page < 1:
            raise StateTransitionError(f"Page must be 1 or greater, got {page}")
        return self._refine(current_page=page)

    def change_page_size(self, page_size: int) -> "TableState":
        if page_size < 1:
            raise StateTransitionError(f"Page size must be 1 or greater, got {page_size}")
        return self._refine(page_size=page_size, current_page=1)

    def change_sort(self, field: str, direction: str) -> "TableState":
        if direction not in ('asc', 'desc'):
            raise StateTransitionError(f"Sort direction must be asc or desc, got {direction}")
        return self._refine(sort_field=field, sort_direction=direction, current_page=1)

    def _refine(self, **changes) -> "TableState":
        if not self.loaded:
            raise StateTransitionError("Initial data has not been loaded")
        return replace(
            self,
            phase=LoadPhase.FILTERING,
            error=None,
            request_id=self.request_id + 1,
            **changes
        )

    # Responses

    def resolve(self, request_id: int, response: DrugListResponse) -> "TableState":
        """Apply a page of drugs if it answers the latest request."""
        if request_id != self.request_id:
            return self
        return replace(
            self,
            phase=LoadPhase.READY,
            drugs=tuple(response.drugs),
            total_pages=response.pagination.total_pages,
            total_count=response.pagination.total_count,
            error=None,
        )

    def fail(self, request_id: int) -> "TableState":
        """
        Record a failed request if it is the latest one.

        A failed initial load renders nothing; a failed refinement keeps the
        selection and the rows already shown.
        """
        if request_id != self.request_id:
            return self
        if self.phase == LoadPhase.LOADING:
            return TableState(phase=LoadPhase.ERROR, error=INITIAL_LOAD_ERROR, request_id=self.request_id)
        return replace(self, phase=LoadPhase.ERROR, error=REFRESH_ERROR)

    def dismiss_error(self) -> "TableState":
        """Hide the error banner; the view stays usable if data was loaded."""
        if self.phase != LoadPhase.ERROR:
            return self
        if self.config is None:
            return replace(self, error=None)
        return replace(self, phase=LoadPhase.READY, error=None)
