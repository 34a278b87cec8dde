import datetime
import logging
import uuid
from typing import Callable, List, Optional, Union

from reptile_log.data import codec
from reptile_log.data.entries import Entry, EntryType
from reptile_log.data.reptiles import Reptile
from reptile_log.infrastructure.errors import PersistenceWriteError, ValidationError
from reptile_log.services.storage import Storage

logger = logging.getLogger(__name__)

"""
Authoritative holder of the Reptile and Entry collections.

Notes:
- Both collections are loaded from the injected Storage when the Store is
  built; a PersistenceCorruptError at that point is a startup failure and is
  not caught here.
- Every creation re-saves the whole owning collection.
- Persist-before-acknowledge: the new list is saved first and only then
  swapped into memory, so a PersistenceWriteError leaves the Store exactly
  as it was.
- Timestamps are timezone-aware UTC; `clock` and `id_factory` can be
  injected (tests use this to get deterministic times and ids).
"""
class Store:

    def __init__(self, storage: Storage,
                 clock: Optional[Callable[[], datetime.datetime]] = None,
                 id_factory: Optional[Callable[[], str]] = None):
        self.storage = storage
        self.clock = clock or _utc_now
        self.id_factory = id_factory or _new_id

        self._reptiles: List[Reptile] = codec.decode_reptiles(storage.load(codec.REPTILES_KEY) or [])
        self._entries: List[Entry] = codec.decode_entries(storage.load(codec.ENTRIES_KEY) or [])

        logger.info("Store loaded: %d reptiles, %d entries", len(self._reptiles), len(self._entries))

    """
    Register a new reptile.

    Parameters:
        name: Display name; surrounding whitespace is removed.

    Returns:
        The created Reptile.

    Raises:
        ValidationError: name is not a string or is blank.
        PersistenceWriteError: the collection could not be saved (nothing changed).
    """
    def add_reptile(self, name: str) -> Reptile:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Reptile name must not be empty.")

        reptile = Reptile(id=self.id_factory(), name=name.strip())
        updated = self._reptiles + [reptile]

        self._save(codec.REPTILES_KEY, [codec.encode_reptile(r) for r in updated])
        self._reptiles = updated

        logger.info("Added reptile %s (%s)", reptile.id, reptile.name)
        return reptile

    """
    Log a husbandry event for a reptile, stamped with the current time.

    Parameters:
        reptile_id: Id of an existing reptile.
        entry_type: An EntryType or its string value ('feeding', 'toilet', 'bath', 'vet').
        notes: Optional free text; blank notes are stored as None.

    Raises:
        ValidationError: unknown reptile id or entry type.
        PersistenceWriteError: the collection could not be saved (nothing changed).
    """
    def add_entry(self, reptile_id: str, entry_type: Union[EntryType, str],
                  notes: Optional[str] = None) -> Entry:
        if self.get_reptile(reptile_id) is None:
            raise ValidationError(f"Unknown reptile id: {reptile_id!r}")

        try:
            entry_type = EntryType(entry_type)
        except ValueError as ex:
            raise ValidationError(f"Unknown entry type: {entry_type!r}") from ex

        if notes is not None and not isinstance(notes, str):
            raise ValidationError("Notes must be text.")

        entry = Entry(
            id=self.id_factory(),
            reptile_id=reptile_id,
            type=entry_type,
            timestamp=self.clock(),
            notes=(notes or '').strip() or None,
        )
        updated = self._entries + [entry]

        self._save(codec.ENTRIES_KEY, [codec.encode_entry(e) for e in updated])
        self._entries = updated

        logger.info("Added %s entry %s for reptile %s", entry.type.value, entry.id, reptile_id)
        return entry

    def list_reptiles(self) -> List[Reptile]:
        return list(self._reptiles)

    def get_reptile(self, reptile_id: str) -> Optional[Reptile]:
        for r in self._reptiles:
            if r.id == reptile_id:
                return r
        return None

    @property
    def reptile_count(self) -> int:
        return len(self._reptiles)

    """
    All entries of one reptile, newest first.

    sorted() is stable, so entries sharing a timestamp stay in insertion
    order and repeated calls return the same sequence.
    """
    def list_entries_for(self, reptile_id: str) -> List[Entry]:
        entries = [e for e in self._entries if e.reptile_id == reptile_id]
        return sorted(entries, key=lambda e: e.timestamp, reverse=True)

    def _save(self, key: str, records: list):
        try:
            self.storage.save(key, records)
        except PersistenceWriteError:
            logger.error("Could not save %s; change was not applied.", key)
            raise


def _utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex
