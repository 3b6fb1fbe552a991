"""
Saved estimates: an ordered JSON list under the `paintEstimates` key.

Records are immutable once saved; the only mutation is a full delete.
Reads of an unreadable list come back empty, but writes refuse to replace it.
"""

import logging
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from .schemas import EstimateRecord, EstimateSummary
from .storage import KeyValueStore

logger = logging.getLogger(__name__)

ESTIMATES_KEY = "paintEstimates"

_records = TypeAdapter(List[EstimateRecord])


class EstimateStoreUnreadable(Exception):
    """The stored list failed validation and must not be overwritten."""


class EstimateRepository:

    def __init__(self, store: KeyValueStore):
        self.store = store

    def _load_strict(self) -> List[EstimateRecord]:
        raw = self.store.get(ESTIMATES_KEY)
        if raw is None:
            return []
        try:
            return _records.validate_json(raw)
        except ValidationError as e:
            raise EstimateStoreUnreadable(
                f"Saved estimates unreadable ({e.error_count()} errors)"
            ) from e

    def _load(self) -> List[EstimateRecord]:
        try:
            return self._load_strict()
        except EstimateStoreUnreadable as e:
            logger.warning("%s, treating as empty", e)
            return []

    def _save(self, records: List[EstimateRecord]) -> None:
        self.store.set(ESTIMATES_KEY, _records.dump_json(records).decode())

    def list(self) -> List[EstimateRecord]:
        return self._load()

    def summaries(self) -> List[EstimateSummary]:
        return [
            EstimateSummary(
                id=r.id,
                client_name=r.client_name,
                project_address=r.project_address,
                project_category=r.project_category,
                total=r.breakdown.total,
                created_at=r.created_at,
                valid_until=r.valid_until,
            )
            for r in self._load()
        ]

    def get(self, estimate_id: str) -> Optional[EstimateRecord]:
        for record in self._load():
            if record.id == estimate_id:
                return record
        return None

    def add(self, record: EstimateRecord) -> EstimateRecord:
        records = self._load_strict()
        records.append(record)
        self._save(records)
        logger.info("Saved estimate %s (%d on file)", record.id, len(records))
        return record

    def delete(self, estimate_id: str) -> bool:
        """Remove an estimate. Returns False when the id is unknown."""
        records = self._load_strict()
        remaining = [r for r in records if r.id != estimate_id]
        if len(remaining) == len(records):
            return False
        self._save(remaining)
        logger.info("Deleted estimate %s", estimate_id)
        return True
