"""
Exception types raised by the Reptile Log core.

Hierarchy:
    ReptileLogError
        ValidationError          - bad input to a creation operation (nothing was changed).
        PersistenceError
            PersistenceCorruptError - stored data could not be parsed on load.
            PersistenceWriteError   - the storage backend rejected a write.

Nothing in the core retries; every failure reaches the caller.
"""


class ReptileLogError(Exception):
    pass


class ValidationError(ReptileLogError):
    pass


class PersistenceError(ReptileLogError):
    """
    Storage failure for a single collection key.
    """
    def __init__(self, key: str, message: str):
        super().__init__(f"{key}: {message}")
        self.key = key


class PersistenceCorruptError(PersistenceError):
    pass


class PersistenceWriteError(PersistenceError):
    pass
