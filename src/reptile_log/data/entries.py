"""
Husbandry entry record and the closed set of entry types.

An Entry is a single timestamped event (feeding, toilet, bath or vet visit)
belonging to one Reptile. Entries are append-only.
"""

import datetime
import enum
from dataclasses import dataclass
from typing import Optional


class EntryType(str, enum.Enum):
    FEEDING = 'feeding'
    TOILET = 'toilet'
    BATH = 'bath'
    VET = 'vet'


"""
A single husbandry event.

Fields:
    id (str): Opaque unique identifier assigned by the Store.
    reptile_id (str): Id of the owning Reptile (stored as 'reptileId').
    type (EntryType): What happened.
    timestamp (datetime): Timezone-aware UTC creation time, full precision.
    notes (str | None): Optional free text; None when the user left it blank.

Notes:
    - Ordering is never stored; callers sort by timestamp at query time.
"""
@dataclass(frozen=True)
class Entry:
    id: str
    reptile_id: str
    type: EntryType
    timestamp: datetime.datetime
    notes: Optional[str] = None
