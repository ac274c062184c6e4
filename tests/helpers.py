"""Shared fakes for the test suites."""

from __future__ import annotations

import tempfile
import threading
from pathlib import Path

from sqlalchemy.orm import Session, sessionmaker

from lottery_live import models  # noqa: F401
from lottery_live.db import create_app_engine, create_session_factory
from lottery_live.lottery import SystemRandomSource
from lottery_live.models.base import Base


class FakeClock:
    """Manually advanced stand-in for ``time.monotonic``."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedSource:
    """Returns the given values in order, ignoring the requested range."""

    def __init__(self, values: list[int]) -> None:
        self._values = list(values)

    def randint(self, low: int, high: int) -> int:
        return self._values.pop(0)


class CyclingSource:
    """Cycles through ``low, low + 1, ...`` with a fixed length per range.

    With a cycle equal to the number of values a draw needs, every draw from
    that range comes out identical, so draw and guess match exactly.
    Ranges without a configured cycle use the real source.
    """

    def __init__(self, cycles: dict[tuple[int, int], int]) -> None:
        self._cycles = dict(cycles)
        self._counters = {key: 0 for key in cycles}
        self._lock = threading.Lock()
        self._fallback = SystemRandomSource()

    def randint(self, low: int, high: int) -> int:
        key = (low, high)
        if key not in self._cycles:
            return self._fallback.randint(low, high)
        with self._lock:
            step = self._counters[key]
            self._counters[key] = step + 1
        return low + step % self._cycles[key]


class TempDatabase:
    """SQLite file database in a temporary directory."""

    def __init__(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.path = Path(self._tmpdir.name) / "test.db"
        self.url = f"sqlite:///{self.path}"
        self.engine = create_app_engine(self.url)
        Base.metadata.create_all(self.engine)
        self.session_factory: sessionmaker[Session] = create_session_factory(self.engine)

    def close(self) -> None:
        self.engine.dispose()
        self._tmpdir.cleanup()


EUROJACKPOT_DRAW = {"type": "eurojackpot", "numbers": [3, 11, 19, 27, 44], "stars": [2, 9]}
POWERBALL_DRAW = {"type": "powerball", "numbers": [61, 4, 33, 17, 8], "powerball": 12}
