"""
Typed access to a single collection
"""
import logging
from typing import Dict, Generic, List, Optional, Type, TypeVar

from pydantic import ValidationError

from quotedesk.models.base import Record, stamp
from quotedesk.models.lookup import LookupRecord
from quotedesk.storage import Collection, CollectionStore

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Record)
L = TypeVar("L", bound=LookupRecord)


def dump_all(records: List[Record]) -> List[dict]:
    return [r.to_record() for r in records]


class Repository(Generic[T]):
    """Loads and saves one collection as a list of model instances"""

    def __init__(self, store: CollectionStore, collection: Collection, model: Type[T]):
        self.store = store
        self.collection = collection
        self.model = model
        # Raw records that failed validation on the last load; written back
        # untouched so a save never drops data it could not parse
        self.rejected: List[dict] = []

    async def all(self) -> List[T]:
        records = []
        self.rejected = []
        for raw in await self.store.read(self.collection):
            try:
                records.append(self.model.model_validate(raw))
            except ValidationError as e:
                self.rejected.append(raw)
                logger.warning(
                    f"Skipping malformed record in {self.collection.value}: "
                    f"{e.error_count()} error(s), id={raw.get('id') if isinstance(raw, dict) else None}"
                )
        return records

    async def get(self, record_id: str) -> Optional[T]:
        for record in await self.all():
            if record.id == record_id:
                return record
        return None

    def rejected_values(self, field: str) -> List[str]:
        """String values of `field` held by records that failed validation"""
        return [
            raw[field] for raw in self.rejected
            if isinstance(raw, dict) and isinstance(raw.get(field), str)
        ]

    def drop_rejected(self, field: str, value: str) -> None:
        self.rejected = [
            raw for raw in self.rejected
            if not (isinstance(raw, dict) and raw.get(field) == value)
        ]

    def dump(self, records: List[T]) -> List[dict]:
        return dump_all(records) + self.rejected

    async def save_all(self, records: List[T]) -> bool:
        return await self.store.write(self.collection, self.dump(records))

    async def add(self, record: T) -> Optional[T]:
        records = await self.all()
        records.append(stamp(record))
        if not await self.save_all(records):
            return None
        return record

    async def remove(self, record_id: str) -> bool:
        """Delete by id; False when no record matched (or the write failed)"""
        records = await self.all()
        remaining = [r for r in records if r.id != record_id]
        if len(remaining) == len(records):
            return False
        return await self.save_all(remaining)


class LookupRepository(Repository[L]):
    """Repository for named lookups with case-insensitive name reuse"""

    @staticmethod
    def name_key(name: str) -> str:
        return name.strip().lower()

    @classmethod
    def build_index(cls, records: List[L]) -> Dict[str, L]:
        # First record wins when legacy data already holds duplicates
        by_name: Dict[str, L] = {}
        for record in records:
            by_name.setdefault(cls.name_key(record.name), record)
        return by_name

    async def get_or_create(self, name: str) -> Optional[L]:
        """Return the record with this name (any case), creating it if absent.

        Returns None only when a new record could not be written.
        """
        name = name.strip()
        records = await self.all()
        existing = self.build_index(records).get(self.name_key(name))
        if existing:
            return existing

        created = stamp(self.model(name=name))
        records.append(created)
        if not await self.save_all(records):
            return None
        logger.info(f"Created {self.collection.key} entry {name!r}")
        return created
