"""
Domain model for Drug entity.
Database-agnostic representation of drug data.
"""
import uuid
from datetime import date, datetime, timezone
from typing import Optional, Union


# API field name -> domain attribute used for sorting
SORT_FIELDS = {
    'code': 'code',
    'genericName': 'generic_name',
    'brandName': 'brand_name',
    'company': 'company',
    'launchDate': 'launch_date',
    'displayName': 'display_name',
}

DRUG_FIELDS = {'id', 'code', 'genericName', 'brandName', 'company', 'launchDate', 'createdAt'}
DERIVED_FIELDS = {'displayName', 'sequentialId'}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Union[str, date, datetime]) -> datetime:
    """
    Parse an ISO-8601 date or timestamp into a timezone-aware datetime.

    Naive values are taken as UTC. A trailing 'Z' is accepted.

    Raises:
        ValueError: If the value is not a valid date or timestamp
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith('Z') or text.endswith('z'):
            text = text[:-1] + '+00:00'
        parsed = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Invalid timestamp: {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class Drug:
    """Domain model representing a marketed drug."""

    def __init__(
        self,
        code: str,
        generic_name: str,
        brand_name: str,
        company: str,
        launch_date: datetime,
        id: Optional[str] = None,
        created_at: Optional[datetime] = None
    ):
        self.code = code
        self.generic_name = generic_name
        self.brand_name = brand_name
        self.company = company
        self.launch_date = parse_timestamp(launch_date)
        self.id = id or str(uuid.uuid4())
        self.created_at = parse_timestamp(created_at) if created_at else utc_now()

    @property
    def display_name(self) -> str:
        """Combined name shown in listings."""
        return f"{self.generic_name} ({self.brand_name})"

    def __eq__(self, other):
        if not isinstance(other, Drug):
            return NotImplemented
        return self.id == other.id and self.code == other.code

    def __hash__(self):
        return hash((self.id, self.code))

    def __repr__(self):
        return f"Drug(code={self.code}, generic_name={self.generic_name}, company={self.company})"
