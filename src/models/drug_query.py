"""
Query model passed from the service layer to the record store.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DrugQuery:
    """Filter, sort and window applied to the drug collection."""
    company: Optional[str] = None
    sort_field: str = 'launch_date'
    descending: bool = True
    skip: int = 0
    limit: Optional[int] = None
