"""
In-memory store for Costbook.

Holds two collections:
- ingredients: Ingredient records
- recipes: Recipe records

Nothing is persisted; a store lives as long as whoever created it.
"""

import logging
import threading
import uuid
from typing import Generic, List, Optional, TypeVar

from .models import Ingredient, Recipe

logger = logging.getLogger(__name__)

T = TypeVar("T", Ingredient, Recipe)


class EntityCollection(Generic[T]):
    """Ordered collection of records keyed by their ``id`` attribute.

    Lookups match on id only. No uniqueness check is done on add, so a
    caller that supplies a duplicate id gets two records with that id.
    """

    def __init__(self, kind: str, id_prefix: str):
        """
        Initialize an empty collection.

        Args:
            kind: Human-readable record type, used in log messages
            id_prefix: Prefix for generated ids (e.g. "ing")
        """
        self.kind = kind
        self.id_prefix = id_prefix
        self._records: List[T] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def new_id(self) -> str:
        return f"{self.id_prefix}_{uuid.uuid4().hex}"

    def add(self, record: T) -> T:
        """
        Append a record, assigning an id if it has none.

        Args:
            record: Record to store

        Returns:
            The same record object
        """
        if not record.id:
            record.id = self.new_id()
        with self._lock:
            self._records.append(record)
        logger.debug(f"Added {self.kind} {record.id}")
        return record

    def update(self, record_id: str, record: T) -> T:
        """
        Replace the first record with a matching id, keeping its position.

        A miss leaves the collection untouched. The input record is
        returned either way. A record without an id takes ``record_id``.

        Raises:
            ValueError: If the record carries a different id
        """
        with self._lock:
            if not record.id:
                record.id = record_id
            elif record.id != record_id:
                raise ValueError(
                    f"Cannot replace {self.kind} {record_id} with a record whose id is {record.id}"
                )
            for index, existing in enumerate(self._records):
                if existing.id == record_id:
                    self._records[index] = record
                    break
            else:
                logger.warning(f"{self.kind.capitalize()} {record_id} not found, update skipped")
                return record
        logger.debug(f"Updated {self.kind} {record_id}")
        return record

    def delete(self, record_id: str) -> None:
        """Remove every record with a matching id. Absent ids are ignored."""
        with self._lock:
            before = len(self._records)
            self._records = [r for r in self._records if r.id != record_id]
            removed = before - len(self._records)
        if removed:
            logger.debug(f"Deleted {removed} {self.kind} record(s) with id {record_id}")

    def list(self) -> List[T]:
        """Snapshot of all records in insertion order."""
        with self._lock:
            return list(self._records)

    def get(self, record_id: str) -> Optional[T]:
        with self._lock:
            for record in self._records:
                if record.id == record_id:
                    return record
        return None

    def contains(self, record_id: str) -> bool:
        return self.get(record_id) is not None

    def clear(self) -> None:
        with self._lock:
            self._records = []


class CostingStore:
    """Owns the ingredient and recipe collections for one application."""

    def __init__(self):
        self.ingredients: EntityCollection[Ingredient] = EntityCollection("ingredient", "ing")
        self.recipes: EntityCollection[Recipe] = EntityCollection("recipe", "rcp")

    def reset(self) -> None:
        """Empty both collections."""
        self.ingredients.clear()
        self.recipes.clear()
        logger.info("Costing store reset")

    def __repr__(self) -> str:
        return (
            f"CostingStore(ingredients={len(self.ingredients)}, "
            f"recipes={len(self.recipes)})"
        )
