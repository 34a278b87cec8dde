"""
Summary figures for one reptile's entries.

compute_stats() is a pure function over a sequence of entries; it keeps no
cache and is simply called again whenever a view needs fresh numbers.
"""

import datetime
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from reptile_log.data.entries import Entry, EntryType


@dataclass(frozen=True)
class TypeStats:
    count: int = 0
    last: Optional[datetime.datetime] = None # None when no entry of this type exists.


@dataclass(frozen=True)
class Stats:
    total_entries: int
    last_activity: datetime.datetime
    per_type: Dict[EntryType, TypeStats]


"""
Aggregate a reptile's entries.

Parameters:
    entries: Entries of a single reptile, in any order.

Returns:
    None when there are no entries, otherwise a Stats with the total count,
    the most recent timestamp overall, and count/most recent timestamp for
    every EntryType (types with no entries get count 0 and last None).

Notes:
    "Most recent" uses a strict greater-than comparison, so among entries
    sharing a timestamp the first one encountered is kept.
"""
def compute_stats(entries: Iterable[Entry]) -> Optional[Stats]:
    counts = {t: 0 for t in EntryType}
    lasts: Dict[EntryType, Optional[datetime.datetime]] = {t: None for t in EntryType}
    total = 0
    last_activity = None

    for e in entries:
        total += 1
        counts[e.type] += 1

        if lasts[e.type] is None or e.timestamp > lasts[e.type]:
            lasts[e.type] = e.timestamp
        if last_activity is None or e.timestamp > last_activity:
            last_activity = e.timestamp

    if total == 0:
        return None

    return Stats(
        total_entries=total,
        last_activity=last_activity,
        per_type={t: TypeStats(count=counts[t], last=lasts[t]) for t in EntryType},
    )
