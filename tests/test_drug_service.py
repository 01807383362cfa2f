"""
Unit tests for DrugService.
Tests query resolution and pagination with mocked and file-backed stores.
"""
import math
from datetime import datetime, timezone
from unittest.mock import Mock
import pytest
from src.core import config
from src.core.exceptions import (
    DrugNotFoundException,
    DuplicateDrugCodeException,
    ServiceException,
    StoreException,
    ValidationException
)
from src.models.dto.drug_dto import DrugCreateRequest, DrugListResponse
from src.services.drug_service import DrugService


class TestDrugServiceWithMockStore:
    """Test suite for DrugService with a mocked repository."""

    @pytest.fixture
    def mock_repo(self):
        """Mock DBRepository."""
        repo = Mock()
        repo.find.return_value = []
        repo.count.return_value = 0
        return repo

    @pytest.fixture
    def drug_service(self, mock_repo):
        return DrugService(db_repository=mock_repo)

    def test_blank_company_applies_no_filter(self, drug_service, mock_repo):
        """Test whitespace-only company is treated as no filter."""
        drug_service.list_drugs(company="   ")

        query = mock_repo.find.call_args[0][0]
        assert query.company is None
        mock_repo.count.assert_called_once_with(None)

    def test_company_passed_as_given(self, drug_service, mock_repo):
        """Test company filter is passed through unchanged."""
        drug_service.list_drugs(company="Sun Pharma")

        query = mock_repo.find.call_args[0][0]
        assert query.company == "Sun Pharma"
        mock_repo.count.assert_called_once_with("Sun Pharma")

    def test_skip_and_sort_translation(self, drug_service, mock_repo):
        """Test page/limit become skip/limit and API sort names map to attributes."""
        drug_service.list_drugs(page=3, limit=20, sort_by="genericName", sort_order="asc")

        query = mock_repo.find.call_args[0][0]
        assert query.skip == 40
        assert query.limit == 20
        assert query.sort_field == "generic_name"
        assert query.descending is False

    def test_defaults(self, drug_service, mock_repo):
        """Test default sort is launch date descending on page 1."""
        drug_service.list_drugs()

        query = mock_repo.find.call_args[0][0]
        assert query.skip == 0
        assert query.limit == 50
        assert query.sort_field == "launch_date"
        assert query.descending is True

    @pytest.mark.parametrize("total_count,limit", [(0, 10), (1, 10), (10, 10), (11, 10), (99, 7), (1000, 1)])
    def test_total_pages_is_ceiling(self, drug_service, mock_repo, total_count, limit):
        """Test totalPages = ceil(totalCount / pageSize)."""
        mock_repo.count.return_value = total_count

        result = drug_service.list_drugs(page=1, limit=limit)

        assert result.pagination.total_pages == math.ceil(total_count / limit)
        assert result.pagination.total_count == total_count

    def test_navigation_flags(self, drug_service, mock_repo):
        """Test hasNextPage/hasPrevPage follow currentPage and totalPages."""
        mock_repo.count.return_value = 25

        first = drug_service.list_drugs(page=1, limit=10).pagination
        middle = drug_service.list_drugs(page=2, limit=10).pagination
        last = drug_service.list_drugs(page=3, limit=10).pagination

        assert (first.has_prev_page, first.has_next_page) == (False, True)
        assert (middle.has_prev_page, middle.has_next_page) == (True, True)
        assert (last.has_prev_page, last.has_next_page) == (True, False)

    @pytest.mark.parametrize("kwargs", [
        {"page": 0},
        {"limit": 0},
        {"limit": 100000},
        {"sort_by": "price"},
        {"sort_order": "sideways"},
    ])
    def test_invalid_parameters(self, drug_service, kwargs):
        """Test invalid paging and sort parameters raise ValidationException."""
        with pytest.raises(ValidationException):
            drug_service.list_drugs(**kwargs)

    def test_store_failure_is_generic(self, drug_service, mock_repo):
        """Test store errors surface as a generic message without detail."""
        mock_repo.find.side_effect = StoreException("connection refused to 10.0.0.5")

        with pytest.raises(ServiceException) as exc_info:
            drug_service.list_drugs()

        assert exc_info.value.message == "Failed to fetch drugs"

    def test_get_drug_blank_id(self, drug_service, mock_repo):
        """Test blank ids are rejected before reaching the store."""
        with pytest.raises(ValidationException):
            drug_service.get_drug("   ")
        mock_repo.find_by_id.assert_not_called()

    def test_get_drug_accepts_non_uuid_id(self, drug_service, mock_repo, make_drug):
        """Test ids written by older data files are looked up as given."""
        mock_repo.find_by_id.return_value = make_drug("L1")

        result = drug_service.get_drug("drug_1700000000000_0")

        assert result.code == "L1"
        mock_repo.find_by_id.assert_called_once_with("drug_1700000000000_0")

    def test_default_limit_follows_settings(self, drug_service, mock_repo, monkeypatch):
        """Test the page size falls back to the configured default."""
        monkeypatch.setattr(config.settings, "pagination_default_limit", 25)

        drug_service.list_drugs()

        assert mock_repo.find.call_args[0][0].limit == 25

    def test_get_drug_not_found(self, drug_service, mock_repo):
        """Test unknown id raises DrugNotFoundException."""
        mock_repo.find_by_id.return_value = None

        with pytest.raises(DrugNotFoundException) as exc_info:
            drug_service.get_drug("0b8b7a9e-2f0c-4a53-9d6f-2a1b3c4d5e6f")

        assert exc_info.value.message == "Drug not found"

    def test_get_drug_store_failure(self, drug_service, mock_repo):
        mock_repo.find_by_id.side_effect = StoreException("boom")

        with pytest.raises(ServiceException) as exc_info:
            drug_service.get_drug("0b8b7a9e-2f0c-4a53-9d6f-2a1b3c4d5e6f")

        assert exc_info.value.message == "Failed to fetch drug"

    def test_create_drug_store_failure(self, drug_service, mock_repo):
        mock_repo.insert.side_effect = StoreException("disk full")
        request = DrugCreateRequest(
            code="X1", generic_name="a", brand_name="b", company="c", launch_date="2024-01-01T00:00:00Z"
        )

        with pytest.raises(ServiceException) as exc_info:
            drug_service.create_drug(request)

        assert exc_info.value.message == "Failed to create drug"

    def test_import_drugs_in_batches(self, drug_service, mock_repo, make_drug):
        """Test import clears the store and inserts in batches, counting skips."""
        drugs = [make_drug(f"D{i:03d}") for i in range(250)]
        mock_repo.delete_all.return_value = 7
        mock_repo.insert_many.side_effect = [100, 98, 50]

        summary = drug_service.import_drugs(drugs, batch_size=100)

        assert mock_repo.insert_many.call_count == 3
        assert [len(call[0][0]) for call in mock_repo.insert_many.call_args_list] == [100, 100, 50]
        assert summary.deleted_count == 7
        assert summary.imported_count == 248
        assert summary.skipped_count == 2

    def test_import_drugs_keep_existing(self, drug_service, mock_repo, make_drug):
        mock_repo.insert_many.return_value = 1

        summary = drug_service.import_drugs([make_drug("D1")], replace=False)

        mock_repo.delete_all.assert_not_called()
        assert summary.deleted_count == 0


class TestDrugServiceWithFileStore:
    """Query resolution against a real file-backed store."""

    @pytest.fixture
    def five_drugs(self, make_drug):
        return [
            make_drug("E1", "A", "2020-01-01T00:00:00Z"),
            make_drug("E2", "B", "2024-05-01T00:00:00Z"),
            make_drug("E3", "A", "2022-03-01T00:00:00Z"),
            make_drug("E4", "C", "2023-07-01T00:00:00Z"),
            make_drug("E5", "B", "2021-09-01T00:00:00Z"),
        ]

    @pytest.fixture
    def drug_service(self, file_repository):
        return DrugService(db_repository=file_repository)

    def test_second_page_by_launch_date(self, drug_service, file_repository, five_drugs):
        """Test page 2 of 2-per-page holds the 3rd and 4th newest drugs."""
        file_repository.insert_many(five_drugs)

        result = drug_service.list_drugs(page=2, limit=2, sort_by="launchDate", sort_order="desc")

        assert isinstance(result, DrugListResponse)
        assert [drug.code for drug in result.drugs] == ["E3", "E5"]
        assert [drug.sequential_id for drug in result.drugs] == [3, 4]
        assert result.pagination.current_page == 2
        assert result.pagination.total_pages == 3
        assert result.pagination.has_next_page is True
        assert result.pagination.has_prev_page is True

    @pytest.mark.parametrize("page,limit", [(1, 2), (2, 2), (3, 2), (1, 5), (2, 3)])
    def test_sequential_ids_follow_rank(self, drug_service, file_repository, five_drugs, page, limit):
        """Test sequential ids run (page-1)*limit+1 upwards by one."""
        file_repository.insert_many(five_drugs)

        result = drug_service.list_drugs(page=page, limit=limit)

        start = (page - 1) * limit + 1
        assert [drug.sequential_id for drug in result.drugs] == list(range(start, start + len(result.drugs)))

    def test_page_past_end(self, drug_service, file_repository, five_drugs):
        """Test a page beyond the end is empty but reports true totals."""
        file_repository.insert_many(five_drugs)

        result = drug_service.list_drugs(page=10, limit=2)

        assert result.drugs == []
        assert result.pagination.total_count == 5
        assert result.pagination.total_pages == 3
        assert result.pagination.has_next_page is False
        assert result.pagination.has_prev_page is True

    def test_company_filter_is_exact(self, drug_service, file_repository, make_drug):
        """Test company matching is exact and case-sensitive."""
        file_repository.insert_many([
            make_drug("F1", "Cipla"),
            make_drug("F2", "cipla"),
            make_drug("F3", "Cipla Ltd"),
        ])

        result = drug_service.list_drugs(company="Cipla")

        assert [drug.code for drug in result.drugs] == ["F1"]
        assert all(drug.company == "Cipla" for drug in result.drugs)
        assert result.pagination.total_count == 1

    def test_company_scenario(self, drug_service, file_repository, sample_drugs):
        """Test filtering {A,B,A,C} by A returns two drugs."""
        file_repository.insert_many(sample_drugs)

        result = drug_service.list_drugs(company="A")

        assert len(result.drugs) == 2
        assert result.pagination.total_count == 2

    def test_tie_break_by_code(self, drug_service, file_repository, make_drug):
        """Test equal launch dates are ordered by code ascending in both directions."""
        same_day = "2024-02-02T00:00:00Z"
        file_repository.insert_many([
            make_drug("T3", launch_date=same_day),
            make_drug("T1", launch_date=same_day),
            make_drug("T2", launch_date=same_day),
        ])

        desc = drug_service.list_drugs(sort_order="desc")
        asc = drug_service.list_drugs(sort_order="asc")

        assert [drug.code for drug in desc.drugs] == ["T1", "T2", "T3"]
        assert [drug.code for drug in asc.drugs] == ["T1", "T2", "T3"]

    def test_date_sort_uses_instants(self, drug_service, file_repository, make_drug):
        """Test launch dates with offsets sort by instant, not by string."""
        file_repository.insert_many([
            make_drug("Z1", launch_date="2024-01-01T23:00:00-05:00"),  # 2024-01-02T04:00Z
            make_drug("Z2", launch_date="2024-01-02T01:00:00+00:00"),
        ])

        result = drug_service.list_drugs(sort_order="asc")

        assert [drug.code for drug in result.drugs] == ["Z2", "Z1"]

    def test_display_name_and_id(self, drug_service, file_repository, make_drug):
        drug = make_drug("G1", generic_name="Atorvastatin", brand_name="Lipitor")
        file_repository.insert(drug)

        result = drug_service.get_drug(drug.id)

        assert result.display_name == "Atorvastatin (Lipitor)"
        assert result.id == drug.id
        assert result.sequential_id is None

    def test_create_then_duplicate(self, drug_service):
        """Test a created code appears once and a duplicate create is rejected."""
        request = DrugCreateRequest(
            code="X",
            generic_name="Sitagliptin",
            brand_name="Januvia",
            company="MSD",
            launch_date=datetime(2024, 4, 1, tzinfo=timezone.utc)
        )

        created = drug_service.create_drug(request)
        listed = drug_service.list_drugs(page=1, sort_by="code", sort_order="asc")

        assert created.id
        assert [drug.code for drug in listed.drugs].count("X") == 1

        with pytest.raises(DuplicateDrugCodeException) as exc_info:
            drug_service.create_drug(request)

        assert exc_info.value.message == "Drug code already exists"
        assert drug_service.list_drugs().pagination.total_count == 1
