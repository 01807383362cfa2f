"""
File Service for drug data files.
Handles JSON and CSV parsing and conversion to domain models.
"""
import csv
import io
import json
from typing import BinaryIO, List
from src.models.drug_model import Drug
from src.core.exceptions import FileProcessingException, ValidationException


class FileService:
    """Service for drug data file processing."""

    REQUIRED_FIELDS = ('code', 'genericName', 'brandName', 'company', 'launchDate')

    def load_drugs(self, path: str) -> List[Drug]:
        """
        Read a JSON or CSV drug data file from disk.

        Raises:
            FileProcessingException: If the file cannot be read or parsed
            ValidationException: If a record is invalid
        """
        try:
            with open(path, 'rb') as file:
                if path.lower().endswith('.csv'):
                    return self.parse_csv_to_drugs(file)
                return self.parse_json_to_drugs(file)
        except OSError as e:
            raise FileProcessingException(f"Failed to read {path}: {str(e)}") from e

    def parse_json_to_drugs(self, file: BinaryIO) -> List[Drug]:
        """
        Parse a JSON array of drug objects.

        Raises:
            FileProcessingException: If the content is not a JSON array
            ValidationException: If a record is invalid
        """
        try:
            records = json.loads(file.read().decode('utf-8'))
        except (UnicodeDecodeError, ValueError) as e:
            raise FileProcessingException(f"Failed to parse JSON file: {str(e)}") from e

        if not isinstance(records, list):
            raise FileProcessingException("JSON drug data must be an array of objects")

        drugs = []
        for index, record in enumerate(records, start=1):
            if not isinstance(record, dict):
                raise ValidationException(f"Record {index}: expected an object")
            try:
                drugs.append(self._record_to_drug(record))
            except ValidationException as e:
                raise ValidationException(f"Record {index}: {e.message}") from e
        return drugs

    def parse_csv_to_drugs(self, file: BinaryIO) -> List[Drug]:
        """
        Parse a CSV file with one drug per row.

        Raises:
            FileProcessingException: If parsing fails
            ValidationException: If headers or row data are invalid
        """
        try:
            content = file.read().decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise ValidationException("File must be a valid UTF-8 encoded CSV") from e

        try:
            csv_reader = csv.DictReader(io.StringIO(content))
            missing_columns = [
                field for field in self.REQUIRED_FIELDS
                if field not in (csv_reader.fieldnames or [])
            ]
            if missing_columns:
                raise ValidationException(
                    f"Missing required columns: {', '.join(missing_columns)}"
                )

            drugs = []
            for row_num, row in enumerate(csv_reader, start=2):  # Start at 2 (header is row 1)
                try:
                    drugs.append(self._record_to_drug(row))
                except ValidationException as e:
                    raise ValidationException(f"Row {row_num}: {e.message}") from e
            return drugs

        except ValidationException:
            raise
        except csv.Error as e:
            raise FileProcessingException(f"Failed to parse CSV file: {str(e)}") from e

    def _record_to_drug(self, record: dict) -> Drug:
        """
        Convert a parsed record to a Drug domain model.

        Raises:
            ValidationException: If a field is missing or the launch date is invalid
        """
        values = {}
        for field in self.REQUIRED_FIELDS:
            value = record.get(field)
            value = value.strip() if isinstance(value, str) else value
            if not value:
                raise ValidationException(f"{field} cannot be empty")
            values[field] = value

        try:
            return Drug(
                code=str(values['code']),
                generic_name=str(values['genericName']),
                brand_name=str(values['brandName']),
                company=str(values['company']),
                launch_date=values['launchDate']
            )
        except ValueError as e:
            raise ValidationException(f"launchDate is invalid: {values['launchDate']}") from e
