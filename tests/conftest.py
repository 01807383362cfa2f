"""
Shared test fixtures and utilities.
"""
import pytest
from src.core import config, dependencies
from src.models.drug_model import Drug
from src.repositories.file_repository import FileRepository


def _make_drug(code, company="Cipla", launch_date="2024-01-01T00:00:00Z", generic_name=None, brand_name=None):
    return Drug(
        code=code,
        generic_name=generic_name or f"generic-{code}",
        brand_name=brand_name or f"Brand{code}",
        company=company,
        launch_date=launch_date
    )


@pytest.fixture
def make_drug():
    """Factory building Drug objects with sensible defaults."""
    return _make_drug


@pytest.fixture
def sample_drugs():
    """Four drugs from companies A, B, A, C with distinct launch dates."""
    return [
        _make_drug("D001", "A", "2024-01-10T00:00:00Z", "Paracetamol", "Calpol"),
        _make_drug("D002", "B", "2023-06-01T00:00:00Z", "Ibuprofen", "Brufen"),
        _make_drug("D003", "A", "2024-03-15T00:00:00Z", "Aspirin", "Ecosprin"),
        _make_drug("D004", "C", "2022-11-20T00:00:00Z", "Metformin", "Glycomet"),
    ]


@pytest.fixture
def data_file(tmp_path):
    return str(tmp_path / "drugs.json")


@pytest.fixture
def file_repository(data_file):
    """Empty file-backed repository in a temporary directory."""
    return FileRepository(data_file)


@pytest.fixture
def file_backend(data_file, monkeypatch):
    """Point the application at a file-backed store and rebuild singletons."""
    monkeypatch.setenv("STORE_BACKEND", "file")
    monkeypatch.setenv("DATA_FILE_PATH", data_file)
    monkeypatch.setattr(config, "settings", config.Settings())
    dependencies.clear_caches()

    yield data_file

    dependencies.clear_caches()
