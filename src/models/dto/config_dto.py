"""
Data Transfer Objects for the table configuration endpoint.
"""
from typing import List, Literal, Optional
from src.models.dto.drug_dto import CamelModel


class ColumnConfig(CamelModel):
    """Display metadata for one table column."""
    key: str
    label: str
    sortable: bool
    visible: bool
    width: Optional[int] = None
    clickable: Optional[bool] = None
    type: Optional[Literal['date', 'string', 'number']] = None


class PaginationConfig(CamelModel):
    default_page_size: int
    page_size_options: List[int]


class SortConfig(CamelModel):
    field: str
    direction: Literal['asc', 'desc']


class SortingConfig(CamelModel):
    default_sort: SortConfig


class TableConfig(CamelModel):
    """Response schema for the table configuration."""
    columns: List[ColumnConfig]
    pagination: PaginationConfig
    sorting: SortingConfig
