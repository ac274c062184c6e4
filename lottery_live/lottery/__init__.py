"""Lottery variants: draw shapes, draw generation and scoring."""

from .base import Draw, LotteryVariant, VariantRegistry, count_matches, sample_distinct
from .eurojackpot import EUROJACKPOT
from .powerball import POWERBALL
from .random_source import RandomNumberSource, SystemRandomSource

DEFAULT_VARIANT_REGISTRY = VariantRegistry([EUROJACKPOT, POWERBALL])

__all__ = [
    "DEFAULT_VARIANT_REGISTRY",
    "Draw",
    "EUROJACKPOT",
    "LotteryVariant",
    "POWERBALL",
    "RandomNumberSource",
    "SystemRandomSource",
    "VariantRegistry",
    "count_matches",
    "sample_distinct",
]
