"""ORM models."""

from lottery_live.models.draw_result import DrawResult

__all__ = ["DrawResult"]
