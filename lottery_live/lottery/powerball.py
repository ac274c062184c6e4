"""Powerball: 5 white balls from 1..69 and one powerball from 1..26.

White balls are kept in the order they were drawn.
"""

from __future__ import annotations

from lottery_live.schemas.draw import PowerballDrawSchema

from .base import Draw, LotteryVariant, count_matches, sample_distinct
from .random_source import RandomNumberSource

KEY = "powerball"


def draw_powerball(source: RandomNumberSource) -> Draw:
    numbers = sample_distinct(source, 5, 1, 69)
    powerball = source.randint(1, 26)
    return {"type": KEY, "numbers": numbers, "powerball": powerball}


def match_powerball(guess: Draw, target: Draw) -> int:
    matched_powerball = 1 if guess["powerball"] == target["powerball"] else 0
    return count_matches(guess["numbers"], target["numbers"]) + matched_powerball


POWERBALL = LotteryVariant(
    key=KEY,
    drawer=draw_powerball,
    matcher=match_powerball,
    slots=6,
    schema=PowerballDrawSchema,
    description="5 of 69 plus a powerball of 26; score is matched balls over 6.",
)
