from __future__ import annotations

from types import SimpleNamespace
from typing import Iterator

import pytest

from latebind.config import COLLISION_POLICY_VAR


class Alive:
    label = "alive"

    def is_live(self):
        return True

    def tick(self, amount=1):
        self.ticks += amount
        return self.ticks


class Dead:
    label = "dead"

    def is_live(self):
        return False

    def tick(self, amount=1):
        return self.ticks


class Cell:
    def __init__(self, state=None) -> None:
        self.ticks = 0
        self.state = state


@pytest.fixture(autouse=True)
def _default_policy(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep the caller's environment from changing the collision policy."""
    monkeypatch.delenv(COLLISION_POLICY_VAR, raising=False)
    yield


@pytest.fixture
def cell() -> Cell:
    return Cell(Alive)


@pytest.fixture
def states() -> SimpleNamespace:
    return SimpleNamespace(Alive=Alive, Dead=Dead, Cell=Cell)
