"""
Key-value persistence collaborator.

The pricing core only ever needs get/set of whole string values (JSON).
A read either returns the full value or None; there are no partial writes.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Optional

from sqlalchemy.orm import Session

from . import models


class KeyValueStore(ABC):

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass


class MemoryKeyValueStore(KeyValueStore):
    """Dict-backed store for tests and throwaway engines."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class SqlKeyValueStore(KeyValueStore):
    """Store backed by the stored_values table. Every write commits."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> Optional[str]:
        row = self.db.query(models.StoredValue).filter(models.StoredValue.key == key).first()
        return row.value if row else None

    def set(self, key: str, value: str) -> None:
        row = self.db.query(models.StoredValue).filter(models.StoredValue.key == key).first()
        if row:
            row.value = value
            row.updated_at = datetime.utcnow()
        else:
            self.db.add(models.StoredValue(key=key, value=value))
        self.db.commit()

    def delete(self, key: str) -> None:
        self.db.query(models.StoredValue).filter(models.StoredValue.key == key).delete()
        self.db.commit()
