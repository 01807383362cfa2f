"""
Unit tests for ConfigService.
"""
from src.models.drug_model import DERIVED_FIELDS, DRUG_FIELDS
from src.services.config_service import ConfigService


class TestConfigService:
    """Test the table configuration provider."""

    def test_columns_in_order(self):
        table_config = ConfigService().get_table_config()

        assert [column.key for column in table_config.columns] == [
            "sequentialId", "code", "displayName", "company", "launchDate"
        ]

    def test_column_keys_are_known_fields(self):
        """Test every column refers to a stored or derived drug field."""
        table_config = ConfigService().get_table_config()

        assert {column.key for column in table_config.columns} <= DRUG_FIELDS | DERIVED_FIELDS

    def test_column_metadata(self):
        columns = {column.key: column for column in ConfigService().get_table_config().columns}

        assert columns["sequentialId"].sortable is False
        assert columns["company"].clickable is True
        assert columns["launchDate"].type == "date"
        assert all(column.visible for column in columns.values())

    def test_defaults(self):
        table_config = ConfigService().get_table_config()

        assert table_config.pagination.default_page_size == 50
        assert table_config.pagination.page_size_options == [25, 50, 100, 200]
        assert table_config.sorting.default_sort.field == "launchDate"
        assert table_config.sorting.default_sort.direction == "desc"

    def test_deterministic(self):
        service = ConfigService()

        assert service.get_table_config() == service.get_table_config()

    def test_serialized_keys_are_camel_case(self):
        payload = ConfigService().get_table_config().model_dump(by_alias=True, exclude_none=True)

        assert payload["pagination"] == {"defaultPageSize": 50, "pageSizeOptions": [25, 50, 100, 200]}
        assert payload["sorting"] == {"defaultSort": {"field": "launchDate", "direction": "desc"}}
        assert "clickable" not in payload["columns"][0]
