"""EuroJackpot: 5 numbers from 1..50 and 2 stars from 1..12, both sorted."""

from __future__ import annotations

from lottery_live.schemas.draw import EuroJackpotDrawSchema

from .base import Draw, LotteryVariant, count_matches, sample_distinct
from .random_source import RandomNumberSource

KEY = "eurojackpot"


def draw_eurojackpot(source: RandomNumberSource) -> Draw:
    numbers = sample_distinct(source, 5, 1, 50)
    stars = sample_distinct(source, 2, 1, 12)
    return {"type": KEY, "numbers": sorted(numbers), "stars": sorted(stars)}


def match_eurojackpot(guess: Draw, target: Draw) -> int:
    return count_matches(guess["numbers"], target["numbers"]) + count_matches(
        guess["stars"], target["stars"]
    )


EUROJACKPOT = LotteryVariant(
    key=KEY,
    drawer=draw_eurojackpot,
    matcher=match_eurojackpot,
    slots=7,
    schema=EuroJackpotDrawSchema,
    description="5 of 50 plus 2 of 12 stars; score is matched numbers and stars over 7.",
)
