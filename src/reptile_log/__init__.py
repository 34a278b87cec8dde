"""
Reptile Log

A personal record keeper for reptile husbandry: register animals, log
feeding / toilet / bath / vet events and view per-type statistics.
"""

__version__ = "1.0.0"

from .data.entries import Entry, EntryType
from .data.reptiles import Reptile
from .infrastructure.errors import (
    PersistenceCorruptError,
    PersistenceError,
    PersistenceWriteError,
    ReptileLogError,
    ValidationError,
)
from .services.stats import Stats, TypeStats, compute_stats
from .services.storage import JsonFileStorage, MemoryStorage, MongoStorage, Storage, open_storage
from .services.store import Store

__all__ = [
    "Entry",
    "EntryType",
    "JsonFileStorage",
    "MemoryStorage",
    "MongoStorage",
    "PersistenceCorruptError",
    "PersistenceError",
    "PersistenceWriteError",
    "Reptile",
    "ReptileLogError",
    "Stats",
    "Storage",
    "Store",
    "TypeStats",
    "ValidationError",
    "compute_stats",
    "open_storage",
    "__version__",
]
