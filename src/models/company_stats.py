"""
Company statistics domain model.
Aggregated view over drug records sharing a company name.
"""
from datetime import datetime


class CompanyStats:
    """Per-company drug count and launch date range."""

    def __init__(
        self,
        company: str,
        drug_count: int,
        earliest_launch: datetime,
        latest_launch: datetime
    ):
        self.company = company
        self.drug_count = drug_count
        self.earliest_launch = earliest_launch
        self.latest_launch = latest_launch

    def __repr__(self):
        return f"CompanyStats(company={self.company}, drug_count={self.drug_count})"
