"""Repository layer for draw result persistence."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from lottery_live.models.draw_result import DrawResult

JACKPOT_SCORE = 1.0


@dataclass(frozen=True)
class DrawResultRecord:
    """Detached, read-only copy of a stored result."""

    id: int
    lottery_type: str
    draw: dict[str, Any]
    guesses: list[dict[str, Any]]
    score: float
    timestamp: datetime

    @classmethod
    def from_model(cls, row: DrawResult) -> "DrawResultRecord":
        timestamp = row.timestamp
        # SQLite drops tzinfo on read; stored values are always UTC.
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return cls(
            id=int(row.id),
            lottery_type=str(row.lottery_type),
            draw=dict(row.draw),
            guesses=[dict(g) for g in row.guesses],
            score=float(row.score),
            timestamp=timestamp,
        )


class DrawResultRepository:
    """Insert and read operations on the ``draw`` table."""

    def create(
        self,
        session: Session,
        *,
        lottery_type: str,
        draw: dict[str, Any],
        guesses: list[dict[str, Any]],
        score: float,
        timestamp: datetime,
    ) -> DrawResult:
        row = DrawResult(
            lottery_type=lottery_type,
            draw=draw,
            guesses=guesses,
            score=score,
            timestamp=timestamp,
        )
        session.add(row)
        session.flush()  # assign PK
        return row

    def count_by_type(self, session: Session, lottery_type: str) -> int:
        stmt = select(func.count()).select_from(DrawResult).where(DrawResult.lottery_type == lottery_type)
        return int(session.scalar(stmt) or 0)

    def list_page(self, session: Session, lottery_type: str, *, limit: int, offset: int) -> Sequence[DrawResult]:
        stmt = (
            select(DrawResult)
            .where(DrawResult.lottery_type == lottery_type)
            .order_by(DrawResult.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(session.scalars(stmt).all())

    def count_jackpots(self, session: Session) -> int:
        stmt = select(func.count()).select_from(DrawResult).where(DrawResult.score == JACKPOT_SCORE)
        return int(session.scalar(stmt) or 0)
