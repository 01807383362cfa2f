"""
Controller driving the drug table.
Runs fetches for state transitions and applies their responses.
"""
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, List, Optional
from src.client.api_client import ApiClientError, DrugApiClient
from src.client.table_state import TableState

logger = logging.getLogger(__name__)

Listener = Callable[[TableState], None]


class DrugTableController:
    """Owns the current TableState and the requests that move it forward."""

    def __init__(self, api: DrugApiClient, executor: Optional[ThreadPoolExecutor] = None):
        self.api = api
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=4, thread_name_prefix="drug-table")
        self._lock = threading.Lock()
        self._state = TableState()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> TableState:
        with self._lock:
            return self._state

    def subscribe(self, listener: Listener) -> None:
        """Call listener with every new state."""
        self._listeners.append(listener)

    def load_initial(self) -> TableState:
        """
        Fetch configuration and companies concurrently, then the first page.
        Blocks until the load has finished or failed.
        """
        request_id = self._transition(lambda state: state.start_initial_load()).request_id
        try:
            config_future = self._executor.submit(self.api.get_table_config)
            companies_future = self._executor.submit(self.api.get_companies)
            config = config_future.result()
            companies = companies_future.result()
            state = self._transition(lambda current: current.configured(request_id, config, companies))
            response = self.api.get_drugs(**state.query_params())
        except ApiClientError as e:
            logger.error("Error loading initial data: %s", e.message)
            return self._transition(lambda current: current.fail(request_id))
        return self._transition(lambda current: current.resolve(request_id, response))

    def select_company(self, company: str) -> "Future[TableState]":
        """Filter by company from the dropdown or a clicked row; resets to page 1."""
        return self._refine(lambda state: state.select_company(company))

    def clear_filter(self) -> "Future[TableState]":
        return self._refine(lambda state: state.clear_filter())

    def change_page(self, page: int) -> "Future[TableState]":
        return self._refine(lambda state: state.change_page(page))

    def next_page(self) -> "Future[TableState]":
        return self._refine(lambda state: state.change_page(state.current_page + 1))

    def prev_page(self) -> "Future[TableState]":
        return self._refine(lambda state: state.change_page(state.current_page - 1))

    def change_page_size(self, page_size: int) -> "Future[TableState]":
        return self._refine(lambda state: state.change_page_size(page_size))

    def change_sort(self, field: str, direction: str) -> "Future[TableState]":
        return self._refine(lambda state: state.change_sort(field, direction))

    def dismiss_error(self) -> TableState:
        return self._transition(lambda state: state.dismiss_error())

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def _refine(self, transition: Callable[[TableState], TableState]) -> "Future[TableState]":
        state = self._transition(transition)
        return self._executor.submit(self._fetch_page, state.request_id, state.query_params())

    def _fetch_page(self, request_id: int, params: dict) -> TableState:
        try:
            response = self.api.get_drugs(**params)
        except ApiClientError as e:
            logger.error("Error loading drugs: %s", e.message)
            return self._transition(lambda state: state.fail(request_id))
        return self._transition(lambda state: state.resolve(request_id, response))

    def _transition(self, transition: Callable[[TableState], TableState]) -> TableState:
        with self._lock:
            previous = self._state
            self._state = transition(previous)
            current = self._state
        if current is not previous:
            for listener in self._listeners:
                listener(current)
        return current
