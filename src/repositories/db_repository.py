"""
Abstract base class for record store repositories.
Defines the contract for drug data storage operations.

Backends only have to load records (optionally pre-filtered by company) and
write them; sorting, windowing, distinct values and company aggregation are
shared so every backend orders results the same way.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from src.models.company_stats import CompanyStats
from src.models.drug_model import Drug
from src.models.drug_query import DrugQuery


class DBRepository(ABC):
    """Abstract repository interface for drug data operations."""

    backend_name = "abstract"

    @abstractmethod
    def scan(self, company: Optional[str] = None) -> List[Drug]:
        """Load all drugs, restricted to an exact company match when given."""
        pass

    @abstractmethod
    def find_by_id(self, drug_id: str) -> Optional[Drug]:
        """Find a drug by its identifier."""
        pass

    @abstractmethod
    def insert(self, drug: Drug) -> Drug:
        """Insert a single drug. Raises DuplicateDrugCodeException on a taken code."""
        pass

    @abstractmethod
    def insert_many(self, drugs: List[Drug]) -> int:
        """Insert drugs, skipping duplicate codes. Returns the number inserted."""
        pass

    @abstractmethod
    def delete_all(self) -> int:
        """Delete every drug. Returns the number deleted."""
        pass

    def find(self, query: DrugQuery) -> List[Drug]:
        """Filter, sort and window the collection."""
        drugs = sort_drugs(self.scan(query.company), query.sort_field, query.descending)
        end = None if query.limit is None else query.skip + query.limit
        return drugs[query.skip:end]

    def count(self, company: Optional[str] = None) -> int:
        return len(self.scan(company))

    def distinct(self, field: str) -> List[Any]:
        """Distinct values of a domain attribute, in first-seen order."""
        seen: Dict[Any, None] = {}
        for drug in self.scan():
            seen.setdefault(getattr(drug, field), None)
        return list(seen)

    def aggregate_by_company(self) -> List[CompanyStats]:
        """Drug count and launch date range per company, unordered."""
        stats: Dict[str, CompanyStats] = {}
        for drug in self.scan():
            entry = stats.get(drug.company)
            if entry is None:
                stats[drug.company] = CompanyStats(drug.company, 1, drug.launch_date, drug.launch_date)
                continue
            entry.drug_count += 1
            entry.earliest_launch = min(entry.earliest_launch, drug.launch_date)
            entry.latest_launch = max(entry.latest_launch, drug.launch_date)
        return list(stats.values())


def sort_drugs(drugs: List[Drug], field: str, descending: bool = False) -> List[Drug]:
    """
    Sort drugs on a single domain attribute.

    Equal keys keep code ascending order in both directions: the list is first
    ordered by code, and Python's sort stays stable when reversed.
    """
    by_code = sorted(drugs, key=lambda drug: drug.code)
    return sorted(by_code, key=lambda drug: getattr(drug, field), reverse=descending)
