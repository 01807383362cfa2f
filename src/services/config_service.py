"""
Table configuration provider.
Describes how clients should render the drug table.
"""
from src.core import config
from src.models.dto.config_dto import (
    ColumnConfig,
    PaginationConfig,
    SortConfig,
    SortingConfig,
    TableConfig
)

PAGE_SIZE_OPTIONS = [25, 50, 100, 200]


class ConfigService:
    """Builds the table configuration served to clients."""

    def get_table_config(self) -> TableConfig:
        """Return the fixed column set with pagination and sorting defaults."""
        return TableConfig(
            columns=[
                ColumnConfig(key='sequentialId', label='Id', sortable=False, visible=True, width=80),
                ColumnConfig(key='code', label='Code', sortable=True, visible=True, width=120),
                ColumnConfig(key='displayName', label='Name', sortable=True, visible=True, width=200),
                ColumnConfig(
                    key='company', label='Company', sortable=True, visible=True, width=250, clickable=True
                ),
                ColumnConfig(
                    key='launchDate', label='Launch Date', sortable=True, visible=True, width=120, type='date'
                ),
            ],
            pagination=PaginationConfig(
                default_page_size=config.settings.pagination_default_limit,
                page_size_options=PAGE_SIZE_OPTIONS
            ),
            sorting=SortingConfig(
                default_sort=SortConfig(field='launchDate', direction='desc')
            )
        )
