"""
File-backed repository for local development.
Keeps drugs in memory and persists them to a JSON file after every write.
"""
import json
import logging
import os
import threading
from typing import Dict, List, Optional
from src.core import config
from src.core.exceptions import DuplicateDrugCodeException, StoreException
from src.models.drug_model import Drug
from src.repositories.db_repository import DBRepository

logger = logging.getLogger(__name__)


class FileRepository(DBRepository):
    """Repository storing drug records in a JSON file."""

    backend_name = "file-based"

    def __init__(self, file_path: Optional[str] = None):
        self.file_path = file_path or config.settings.data_file_path
        self._lock = threading.RLock()
        self._drugs: List[Drug] = self._load()
        logger.info("Loaded %d drugs from %s", len(self._drugs), self.file_path)

    def scan(self, company: Optional[str] = None) -> List[Drug]:
        with self._lock:
            if company is None:
                return list(self._drugs)
            return [drug for drug in self._drugs if drug.company == company]

    def find_by_id(self, drug_id: str) -> Optional[Drug]:
        with self._lock:
            return next((drug for drug in self._drugs if drug.id == drug_id), None)

    def insert(self, drug: Drug) -> Drug:
        with self._lock:
            if any(existing.code == drug.code for existing in self._drugs):
                raise DuplicateDrugCodeException()
            self._drugs.append(drug)
            try:
                self._save()
            except StoreException:
                self._drugs.pop()
                raise
            return drug

    def insert_many(self, drugs: List[Drug]) -> int:
        with self._lock:
            previous = list(self._drugs)
            codes = {drug.code for drug in self._drugs}
            inserted = 0
            for drug in drugs:
                if drug.code in codes:
                    continue
                codes.add(drug.code)
                self._drugs.append(drug)
                inserted += 1
            if inserted:
                try:
                    self._save()
                except StoreException:
                    self._drugs = previous
                    raise
            return inserted

    def delete_all(self) -> int:
        with self._lock:
            previous = self._drugs
            deleted = len(previous)
            self._drugs = []
            try:
                self._save()
            except StoreException:
                self._drugs = previous
                raise
            return deleted

    def _load(self) -> List[Drug]:
        """Read the data file. A missing file is an empty store."""
        if not os.path.exists(self.file_path):
            return []
        try:
            with open(self.file_path, encoding='utf-8') as handle:
                records = json.load(handle)
            return [self._record_to_drug(record) for record in records]
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise StoreException(f"Failed to load data file {self.file_path}: {str(e)}") from e

    def _save(self) -> None:
        try:
            directory = os.path.dirname(self.file_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            tmp_path = f"{self.file_path}.tmp"
            with open(tmp_path, 'w', encoding='utf-8') as handle:
                json.dump([self._drug_to_record(drug) for drug in self._drugs], handle, indent=2)
            os.replace(tmp_path, self.file_path)
        except OSError as e:
            raise StoreException(f"Failed to save data file {self.file_path}: {str(e)}") from e

    def _drug_to_record(self, drug: Drug) -> Dict[str, str]:
        return {
            'id': drug.id,
            'code': drug.code,
            'genericName': drug.generic_name,
            'brandName': drug.brand_name,
            'company': drug.company,
            'launchDate': drug.launch_date.isoformat(),
            'createdAt': drug.created_at.isoformat()
        }

    def _record_to_drug(self, record: dict) -> Drug:
        return Drug(
            code=record['code'],
            generic_name=record['genericName'],
            brand_name=record['brandName'],
            company=record['company'],
            launch_date=record['launchDate'],
            id=record.get('id') or record.get('_id'),
            created_at=record.get('createdAt')
        )
