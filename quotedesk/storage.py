"""
Collection storage - whole-file JSON collections and store selection
"""
import asyncio
import contextlib
import copy
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from quotedesk.config import Settings, get_settings

logger = logging.getLogger(__name__)


class Collection(str, Enum):
    QUOTATIONS = "quotations.json"
    QUOTATION_ITEMS = "quotation_items.json"
    VENDORS = "vendors.json"
    RECIPIENTS = "recipients.json"
    CATEGORIES = "categories.json"
    ITEM_TYPES = "item_types.json"
    EXCHANGE_RATES = "exchange_rates.json"
    SETTINGS = "settings.json"
    VENDOR_DOCUMENTS = "vendor_documents.json"

    @property
    def key(self) -> str:
        """Bundle key for the collection (file name without extension)"""
        return self.value[: -len(".json")]


class CollectionStore(ABC):
    """Reads and writes entire collections.

    Faults never propagate: a failed read yields an empty list and a failed
    write returns False.
    """

    @abstractmethod
    async def read(self, collection: Collection) -> List[dict]:
        ...

    @abstractmethod
    async def write_many(self, changes: Mapping[Collection, List[dict]]) -> bool:
        """Replace several collections; either all of them change or none."""

    async def write(self, collection: Collection, records: List[dict]) -> bool:
        return await self.write_many({collection: records})

    async def initialize(self) -> None:
        """Make sure every collection exists (empty when new)."""


class MemoryStore(CollectionStore):
    """In-process store, used by tests and as a fallback without a data dir"""

    def __init__(self, initial: Optional[Mapping[Collection, List[dict]]] = None):
        self._data: Dict[Collection, List[dict]] = {}
        for collection, records in (initial or {}).items():
            self._data[collection] = copy.deepcopy(records)

    async def read(self, collection: Collection) -> List[dict]:
        return copy.deepcopy(self._data.get(collection, []))

    async def write_many(self, changes: Mapping[Collection, List[dict]]) -> bool:
        staged = {}
        try:
            # Same serializability rules as the file store
            for collection, records in changes.items():
                staged[collection] = json.loads(json.dumps(records))
        except (TypeError, ValueError) as e:
            logger.error(f"Error writing data: {e}")
            return False

        self._data.update(staged)
        return True

    async def initialize(self) -> None:
        for collection in Collection:
            self._data.setdefault(collection, [])


class JsonFileStore(CollectionStore):
    """One pretty-printed JSON array per collection inside data_dir"""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def path_for(self, collection: Collection) -> Path:
        return self.data_dir / collection.value

    async def read(self, collection: Collection) -> List[dict]:
        return await asyncio.to_thread(self._read_sync, collection)

    async def write_many(self, changes: Mapping[Collection, List[dict]]) -> bool:
        return await asyncio.to_thread(self._write_many_sync, dict(changes))

    async def initialize(self) -> None:
        await asyncio.to_thread(self._initialize_sync)

    def _read_sync(self, collection: Collection) -> List[dict]:
        path = self.path_for(collection)
        if not path.exists():
            return []
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error reading {collection.value}: {e}")
            return []

        if not isinstance(data, list):
            logger.error(f"Error reading {collection.value}: expected a JSON array")
            return []
        return data

    def _write_many_sync(self, changes: Dict[Collection, List[dict]]) -> bool:
        # Stage every collection next to its target, then rename. A staging
        # failure leaves all existing files untouched.
        staged: List[tuple] = []
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            for collection, records in changes.items():
                fd, tmp_path = tempfile.mkstemp(
                    prefix=f".{collection.value}.", suffix=".tmp", dir=self.data_dir
                )
                staged.append((tmp_path, self.path_for(collection)))
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(records, f, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error writing data: {e}")
            self._discard(staged)
            return False

        try:
            for index, (tmp_path, target) in enumerate(staged):
                os.replace(tmp_path, target)
        except OSError as e:
            logger.error(f"Error committing {target.name}: {e}")
            self._discard(staged[index:])
            return False

        logger.debug(f"Wrote {', '.join(c.value for c in changes)}")
        return True

    @staticmethod
    def _discard(staged: List[tuple]) -> None:
        for tmp_path, _ in staged:
            with contextlib.suppress(OSError):
                os.remove(tmp_path)

    def _initialize_sync(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        for collection in Collection:
            path = self.path_for(collection)
            if not path.exists():
                path.write_text("[]", encoding="utf-8")
                logger.info(f"Created empty collection {collection.value}")


def build_store(settings: Settings) -> CollectionStore:
    """Pick the store implementation named by STORAGE_BACKEND"""
    if settings.STORAGE_BACKEND == "memory":
        return MemoryStore()
    if settings.STORAGE_BACKEND != "file":
        raise ValueError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND!r}")
    return JsonFileStore(settings.DATA_DIR)


@lru_cache()
def _default_store() -> CollectionStore:
    return build_store(get_settings())


async def get_store() -> CollectionStore:
    """Dependency for getting the process-wide collection store"""
    return _default_store()
