"""Simulated draw results.

One row per variant per tick:
- id (PK, assigned on insert)
- lottery_type
- draw / guesses (JSON, variant-specific shape)
- score
- timestamp
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Float, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from lottery_live.models.base import Base


class DrawResult(Base):
    """A draw, the simulated guesses against it and the match score."""

    __tablename__ = "draw"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    lottery_type: Mapped[str] = mapped_column(String(32), nullable=False, index=True)

    draw: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    guesses: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)

    score: Mapped[float] = mapped_column(Float, nullable=False, index=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
