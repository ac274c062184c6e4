"""Durable, append-only log of simulated results."""

from __future__ import annotations

import threading
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session, sessionmaker

from lottery_live.repositories.draw_result_repository import DrawResultRecord, DrawResultRepository


class ResultStore:
    """Result store use-cases.

    Every call opens its own short session. Appends are serialized with a
    process-local lock, so results written concurrently within one tick get
    strictly increasing ids in commit order.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        repository: DrawResultRepository | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._repo = repository or DrawResultRepository()
        self._write_lock = threading.Lock()

    def append(
        self,
        lottery_type: str,
        draw: dict[str, Any],
        guesses: Sequence[dict[str, Any]],
        score: float,
    ) -> DrawResultRecord:
        """Persist one result and return it with its id and timestamp."""

        with self._write_lock:
            with self._session_factory.begin() as session:
                row = self._repo.create(
                    session,
                    lottery_type=lottery_type,
                    draw=dict(draw),
                    guesses=[dict(g) for g in guesses],
                    score=float(score),
                    timestamp=datetime.now(timezone.utc),
                )
                return DrawResultRecord.from_model(row)

    def count_by_variant(self, lottery_type: str) -> int:
        with self._session_factory() as session:
            return self._repo.count_by_type(session, lottery_type)

    def page(self, lottery_type: str, page_size: int, page_number: int) -> list[DrawResultRecord]:
        """Return one page of results, most recent first.

        ``page_number`` is zero-based; the row offset is ``page_size * page_number``.
        """

        if page_size <= 0:
            raise ValueError("page_size must be positive")
        if page_number < 0:
            raise ValueError("page_number must not be negative")

        with self._session_factory() as session:
            rows = self._repo.list_page(
                session,
                lottery_type,
                limit=page_size,
                offset=page_size * page_number,
            )
            return [DrawResultRecord.from_model(r) for r in rows]

    def count_jackpots(self) -> int:
        with self._session_factory() as session:
            return self._repo.count_jackpots(session)
