"""
Conversion between domain records and their stored (wire) form.

Stored records are plain dicts using the field names below, so the same
shape works for JSON files and for MongoDB documents:

    reptiles -> {"id": str, "name": str}
    entries  -> {"id": str, "reptileId": str, "type": str,
                 "timestamp": ISO-8601 str, "notes": str (omitted when absent)}

Decoding is strict: anything that does not match raises
PersistenceCorruptError instead of being silently dropped.
"""

import datetime
from typing import Any, Dict, Iterable, List

from dateutil import parser

from reptile_log.data.entries import Entry, EntryType
from reptile_log.data.reptiles import Reptile
from reptile_log.infrastructure.errors import PersistenceCorruptError

REPTILES_KEY = 'reptiles'
ENTRIES_KEY = 'entries'


def encode_timestamp(value: datetime.datetime) -> str:
    return value.isoformat()


"""
Parse an ISO-8601 timestamp and normalize it to UTC. Offsets such as "Z" or
"+02:00" are converted; naive values are read as UTC. Microseconds are preserved.
"""
def decode_timestamp(value: str) -> datetime.datetime:
    parsed = parser.isoparse(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed.astimezone(datetime.timezone.utc)


def encode_reptile(reptile: Reptile) -> Dict[str, Any]:
    return {'id': reptile.id, 'name': reptile.name}


def encode_entry(entry: Entry) -> Dict[str, Any]:
    record = {
        'id': entry.id,
        'reptileId': entry.reptile_id,
        'type': entry.type.value,
        'timestamp': encode_timestamp(entry.timestamp),
    }
    # Absent notes are omitted rather than written as null.
    if entry.notes is not None:
        record['notes'] = entry.notes
    return record


def _require_str(record: Dict[str, Any], field: str, key: str) -> str:
    value = record.get(field)
    if not isinstance(value, str):
        raise PersistenceCorruptError(key, f"field '{field}' must be a string, got {value!r}")
    return value


def decode_reptile(record: Any) -> Reptile:
    if not isinstance(record, dict):
        raise PersistenceCorruptError(REPTILES_KEY, f"record must be an object, got {record!r}")

    return Reptile(
        id=_require_str(record, 'id', REPTILES_KEY),
        name=_require_str(record, 'name', REPTILES_KEY),
    )


def decode_entry(record: Any) -> Entry:
    if not isinstance(record, dict):
        raise PersistenceCorruptError(ENTRIES_KEY, f"record must be an object, got {record!r}")

    raw_type = _require_str(record, 'type', ENTRIES_KEY)
    try:
        entry_type = EntryType(raw_type)
    except ValueError as ex:
        raise PersistenceCorruptError(ENTRIES_KEY, f"unknown entry type {raw_type!r}") from ex

    raw_timestamp = _require_str(record, 'timestamp', ENTRIES_KEY)
    try:
        timestamp = decode_timestamp(raw_timestamp)
    except (ValueError, OverflowError) as ex:
        raise PersistenceCorruptError(ENTRIES_KEY, f"bad timestamp {raw_timestamp!r}") from ex

    notes = record.get('notes')
    if notes is not None and not isinstance(notes, str):
        raise PersistenceCorruptError(ENTRIES_KEY, f"field 'notes' must be a string, got {notes!r}")

    return Entry(
        id=_require_str(record, 'id', ENTRIES_KEY),
        reptile_id=_require_str(record, 'reptileId', ENTRIES_KEY),
        type=entry_type,
        timestamp=timestamp,
        notes=notes,
    )


def decode_reptiles(records: Iterable[Any]) -> List[Reptile]:
    return [decode_reptile(r) for r in records]


def decode_entries(records: Iterable[Any]) -> List[Entry]:
    return [decode_entry(r) for r in records]
