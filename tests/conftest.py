"""
Shared fixtures: an in-memory Storage, a controllable clock and a Store wired to both.
"""
from __future__ import annotations

import datetime
import itertools

import pytest

import reptile_log.infrastructure.state as state
from reptile_log.services.storage import MemoryStorage
from reptile_log.services.store import Store

T0 = datetime.datetime(2024, 5, 1, 8, 0, 0, tzinfo=datetime.timezone.utc)


class FakeClock:
    """Returns `now`; call advance() to move time forward."""

    def __init__(self, start: datetime.datetime = T0):
        self.now = start

    def __call__(self) -> datetime.datetime:
        return self.now

    def advance(self, **kwargs) -> datetime.datetime:
        self.now = self.now + datetime.timedelta(**kwargs)
        return self.now


@pytest.fixture()
def storage():
    return MemoryStorage()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def store(storage, clock):
    counter = itertools.count(1)
    return Store(storage, clock=clock, id_factory=lambda: f"id-{next(counter)}")


@pytest.fixture(autouse=True)
def reset_selection():
    state.selected_reptile_id = None
    yield
    state.selected_reptile_id = None
