"""
In-memory institution store.

The record list is owned here and only changes through create/save/delete.
A mutation builds a new list and swaps it in under a lock, so readers see
either the previous list or the next one, never a half-applied change.
Records handed out are deep copies.
"""

import threading
from typing import Iterable, List, Optional

from bson import ObjectId

from config import get_settings
from errors import DuplicateInstitutionId
from logging_config import get_logger
from schemas import InstitutionType, new_institution, parse_institution
from seed import load_seed

logger = get_logger("database")


def generate_id() -> str:
    return str(ObjectId())


class InstitutionRepository:
    def __init__(self, records: Optional[Iterable] = None):
        items = [parse_institution(r) for r in (records or [])]
        seen = set()
        for item in items:
            if item.id in seen:
                raise DuplicateInstitutionId(item.id)
            seen.add(item.id)
        self._items: List = items
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, institution_id: str) -> bool:
        return any(i.id == institution_id for i in self._items)

    def list(self, institution_type: Optional[InstitutionType] = None) -> List:
        """Copies of the current records in list order, optionally of one type."""
        items = self._items
        if institution_type is not None:
            wanted = InstitutionType(institution_type).value
            items = [i for i in items if i.type == wanted]
        return [i.model_copy(deep=True) for i in items]

    def get(self, institution_id: str):
        for item in self._items:
            if item.id == institution_id:
                return item.model_copy(deep=True)
        return None

    def create(self, institution_type: InstitutionType):
        """Empty record of the given type with a fresh id. Not stored until saved."""
        institution_id = generate_id()
        while institution_id in self:
            institution_id = generate_id()
        return new_institution(institution_type, institution_id)

    def save(self, item) -> bool:
        """Replace the record with the same id in place, or append it.

        Returns True when the record was new.
        """
        item = parse_institution(item)
        with self._lock:
            updated = list(self._items)
            for index, existing in enumerate(updated):
                if existing.id == item.id:
                    updated[index] = item
                    self._items = updated
                    logger.info("Replaced institution %s (%s) at position %d", item.id, item.type, index)
                    return False
            updated.append(item)
            self._items = updated
        logger.info("Added institution %s (%s)", item.id, item.type)
        return True

    def delete(self, institution_id: str) -> bool:
        """Remove the record with this id. Unknown ids are a no-op returning False."""
        with self._lock:
            remaining = [i for i in self._items if i.id != institution_id]
            if len(remaining) == len(self._items):
                logger.debug("Delete of unknown institution %s ignored", institution_id)
                return False
            self._items = remaining
        logger.info("Deleted institution %s", institution_id)
        return True


db = InstitutionRepository(load_seed(get_settings().seed_path))


def get_db() -> InstitutionRepository:
    return db
