"""
Reptile record: a tracked animal.

Reptiles are created once through the Store and never edited or deleted.
"""

from dataclasses import dataclass

"""
A reptile registered by the user.

Fields:
    id (str): Opaque unique identifier assigned by the Store; never reused.
    name (str): Display name, already trimmed and non-empty.
"""
@dataclass(frozen=True)
class Reptile:
    id: str
    name: str
