"""
Persistence adapters for the Store.

A Storage keeps whole collections of wire-format records (see data.codec)
under a key. Every save replaces the full collection for that key; there is
no incremental update.

Contract shared by all adapters:
- load(key) returns None when the key was never saved (first run), never an error.
- load(key) raises PersistenceCorruptError when stored data cannot be parsed.
  Corrupt data is never turned into an empty collection.
- save(key, records) raises PersistenceWriteError when the backend rejects the write.
"""

import abc
import copy
import json
import logging
import os
from typing import Any, Dict, List, Optional, Sequence

from mongoengine.errors import OperationError
from mongoengine.errors import ValidationError as DocumentValidationError
from pymongo.errors import PyMongoError

from reptile_log.data.collections import StoredCollection
from reptile_log.infrastructure.errors import PersistenceCorruptError, PersistenceError, PersistenceWriteError

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class Storage(abc.ABC):

    @abc.abstractmethod
    def load(self, key: str) -> Optional[List[Record]]:
        ...

    @abc.abstractmethod
    def save(self, key: str, records: Sequence[Record]) -> None:
        ...


def _check_records(key: str, records: Any) -> List[Record]:
    # Shape check only; field-level validation happens in data.codec.
    if not isinstance(records, list):
        raise PersistenceCorruptError(key, f"expected a list of records, got {type(records).__name__}")
    for r in records:
        if not isinstance(r, dict):
            raise PersistenceCorruptError(key, f"expected record objects, got {r!r}")
    return records


"""
Process-local storage backed by a dict.

Stores deep copies on save and hands out deep copies on load, so neither the
Store nor a test can mutate what was "persisted" by accident.
"""
class MemoryStorage(Storage):

    def __init__(self, initial: Optional[Dict[str, List[Record]]] = None):
        self._data: Dict[str, List[Record]] = copy.deepcopy(initial) if initial else {}

    def load(self, key: str) -> Optional[List[Record]]:
        if key not in self._data:
            return None
        return _check_records(key, copy.deepcopy(self._data[key]))

    def save(self, key: str, records: Sequence[Record]) -> None:
        self._data[key] = copy.deepcopy(list(records))


"""
Local JSON file storage: one '<key>.json' file per key inside a directory.

Writes go to a temporary file first and are moved into place with
os.replace, so a crash mid-write leaves the previous file intact.
"""
class JsonFileStorage(Storage):

    def __init__(self, directory: str):
        self.directory = directory

    def path_for(self, key: str) -> str:
        return os.path.join(self.directory, f"{key}.json")

    def load(self, key: str) -> Optional[List[Record]]:
        path = self.path_for(key)
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except FileNotFoundError:
            logger.debug("No saved collection at %s", path)
            return None
        except (json.JSONDecodeError, UnicodeDecodeError) as ex:
            logger.error("Could not parse %s: %s", path, ex)
            raise PersistenceCorruptError(key, f"{path} is not valid JSON") from ex
        except OSError as ex:
            logger.error("Could not read %s: %s", path, ex)
            raise PersistenceError(key, f"could not read {path}: {ex}") from ex

        records = _check_records(key, raw)
        logger.debug("Loaded %d records from %s", len(records), path)
        return records

    def save(self, key: str, records: Sequence[Record]) -> None:
        path = self.path_for(key)
        tmp = f"{path}.tmp"
        try:
            os.makedirs(self.directory, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(list(records), f, ensure_ascii=False, indent=2)
            os.replace(tmp, path)
        except (OSError, TypeError, ValueError) as ex:
            # Leave no half-written temp file behind, then report the failure.
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise PersistenceWriteError(key, f"could not write {path}: {ex}") from ex

        logger.debug("Saved %d records to %s", len(records), path)


"""
MongoDB storage through MongoEngine.

Each key is one StoredCollection document, so a save is a single-document
replace. Requires data.mongo_setup.global_init() (or an equivalent
connection registered under the 'core' alias) before use.
"""
class MongoStorage(Storage):

    def load(self, key: str) -> Optional[List[Record]]:
        try:
            doc = StoredCollection.objects(key=key).first()
        except PyMongoError as ex:
            logger.error("Loading %s from MongoDB failed: %s", key, ex)
            raise PersistenceError(key, f"could not reach MongoDB: {ex}") from ex

        if doc is None:
            logger.debug("No stored collection document for %s", key)
            return None

        records = _check_records(key, doc.records)
        # DictField hands back BaseDict wrappers; the codec expects plain dicts.
        return [dict(r) for r in records]

    def save(self, key: str, records: Sequence[Record]) -> None:
        doc = StoredCollection(key=key, records=list(records))
        try:
            doc.save()
        except (PyMongoError, OperationError, DocumentValidationError) as ex:
            logger.error("Saving %s to MongoDB failed: %s", key, ex)
            raise PersistenceWriteError(key, str(ex)) from ex

        logger.debug("Saved %d records to MongoDB collection document %s", len(records), key)


"""
Build the Storage selected by config.STORAGE.

Parameters:
    config: An infrastructure.config.Config instance.

Returns:
    A ready Storage. For 'mongo' the caller must already have run
    data.mongo_setup.global_init(config).
"""
def open_storage(config) -> Storage:
    backend = (config.STORAGE or '').strip().lower()

    if backend == 'json':
        return JsonFileStorage(config.DATA_DIR)
    if backend == 'mongo':
        return MongoStorage()
    if backend == 'memory':
        return MemoryStorage()

    raise ValueError(f"Unknown storage backend: {config.STORAGE!r}")
