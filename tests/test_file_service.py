"""
Unit tests for FileService.
Tests JSON and CSV drug data parsing.
"""
import io
import json
import pytest
from src.core.exceptions import FileProcessingException, ValidationException
from src.services.file_service import FileService


class TestFileService:
    """Test suite for FileService."""

    @pytest.fixture
    def file_service(self):
        return FileService()

    def test_parse_json_success(self, file_service):
        content = json.dumps([
            {
                "code": "A1",
                "genericName": "Amoxicillin",
                "brandName": "Mox",
                "company": "Ranbaxy",
                "launchDate": "2001-03-04T00:00:00.000Z"
            }
        ]).encode()

        drugs = file_service.parse_json_to_drugs(io.BytesIO(content))

        assert len(drugs) == 1
        assert drugs[0].code == "A1"
        assert drugs[0].display_name == "Amoxicillin (Mox)"
        assert drugs[0].launch_date.year == 2001
        assert drugs[0].launch_date.tzinfo is not None

    def test_parse_json_not_array(self, file_service):
        with pytest.raises(FileProcessingException):
            file_service.parse_json_to_drugs(io.BytesIO(b'{"code": "A1"}'))

    def test_parse_json_invalid(self, file_service):
        with pytest.raises(FileProcessingException):
            file_service.parse_json_to_drugs(io.BytesIO(b'[{"code": '))

    def test_parse_json_missing_field(self, file_service):
        content = json.dumps([{"code": "A1", "genericName": "x", "brandName": "y", "company": ""}]).encode()

        with pytest.raises(ValidationException) as exc_info:
            file_service.parse_json_to_drugs(io.BytesIO(content))

        assert "Record 1" in exc_info.value.message
        assert "company" in exc_info.value.message

    def test_parse_csv_success(self, file_service):
        content = (
            b"code,genericName,brandName,company,launchDate\n"
            b"C1,Cetirizine,Zyrtec,UCB,2019-07-01\n"
            b"C2, Losartan ,Cozaar,MSD,2018-02-03T12:00:00Z\n"
        )

        drugs = file_service.parse_csv_to_drugs(io.BytesIO(content))

        assert [drug.code for drug in drugs] == ["C1", "C2"]
        assert drugs[1].generic_name == "Losartan"
        assert drugs[0].launch_date.isoformat() == "2019-07-01T00:00:00+00:00"

    def test_parse_csv_missing_columns(self, file_service):
        content = b"code,genericName\nC1,Cetirizine\n"

        with pytest.raises(ValidationException) as exc_info:
            file_service.parse_csv_to_drugs(io.BytesIO(content))

        assert "brandName" in exc_info.value.message

    def test_parse_csv_invalid_date(self, file_service):
        content = b"code,genericName,brandName,company,launchDate\nC1,a,b,c,yesterday\n"

        with pytest.raises(ValidationException) as exc_info:
            file_service.parse_csv_to_drugs(io.BytesIO(content))

        assert "Row 2" in exc_info.value.message

    def test_parse_csv_not_utf8(self, file_service):
        with pytest.raises(ValidationException):
            file_service.parse_csv_to_drugs(io.BytesIO(b"\xff\xfe\x00bad"))

    def test_load_drugs_by_extension(self, file_service, tmp_path):
        csv_path = tmp_path / "drugs.csv"
        csv_path.write_text("code,genericName,brandName,company,launchDate\nC1,a,b,c,2020-01-01\n", encoding="utf-8")
        json_path = tmp_path / "drugs.json"
        json_path.write_text(json.dumps([
            {"code": "J1", "genericName": "a", "brandName": "b", "company": "c", "launchDate": "2020-01-01"}
        ]), encoding="utf-8")

        assert [drug.code for drug in file_service.load_drugs(str(csv_path))] == ["C1"]
        assert [drug.code for drug in file_service.load_drugs(str(json_path))] == ["J1"]

    def test_load_drugs_missing_file(self, file_service, tmp_path):
        with pytest.raises(FileProcessingException):
            file_service.load_drugs(str(tmp_path / "absent.json"))
