"""Lottery variant definitions and the registry the scheduler draws from."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Iterator, Optional

from marshmallow import Schema

from .random_source import RandomNumberSource

Draw = Dict[str, Any]


def sample_distinct(source: RandomNumberSource, count: int, low: int, high: int) -> list[int]:
    """Draw ``count`` distinct integers from ``[low, high]``.

    Duplicates are rejected and redrawn, so every value stays equally likely.
    The result keeps the order in which values were first drawn.

    Parameters
    ----------
    source : RandomNumberSource
        Source used for every individual pick.
    count : int
        Number of distinct values required.
    low, high : int
        Inclusive bounds of the range.

    Raises
    ------
    ValueError
        If the range holds fewer than ``count`` values.
    """
    if count < 0:
        raise ValueError("count must not be negative")
    if count > high - low + 1:
        raise ValueError(f"Cannot pick {count} distinct values from [{low}, {high}]")

    picked: list[int] = []
    seen: set[int] = set()
    while len(picked) < count:
        value = source.randint(low, high)
        if value in seen:
            continue
        seen.add(value)
        picked.append(value)
    return picked


def count_matches(guess: Iterable[int], target: Iterable[int]) -> int:
    """Count guessed values that appear anywhere in ``target``."""
    target_values = set(target)
    return sum(1 for value in guess if value in target_values)


@dataclass(frozen=True)
class LotteryVariant:
    """Definition of one lottery game.

    Attributes
    ----------
    key : str
        Identifier stored as ``lottery_type`` and used in the history URL.
    drawer : Callable[[RandomNumberSource], Draw]
        Produces a new draw. Guesses are produced by the same callable.
    matcher : Callable[[Draw, Draw], int]
        Returns how many slots of the guess (first argument) are contained
        in the target (second argument).
    slots : int
        Total number of matchable slots; the denominator of :meth:`score`.
    schema : type[Schema]
        Marshmallow schema describing the draw shape.
    description : Optional[str]
        Human-readable summary of the game.
    """

    key: str
    drawer: Callable[[RandomNumberSource], Draw]
    matcher: Callable[[Draw, Draw], int]
    slots: int
    schema: type[Schema]
    description: Optional[str] = None

    def draw(self, source: RandomNumberSource) -> Draw:
        """Generate a draw and check it against the variant's schema."""
        result = self.drawer(source)
        errors = self.schema().validate(result)
        if errors:
            raise ValueError(f"Invalid {self.key} draw {result!r}: {errors}")
        return result

    def score(self, guess: Draw, target: Draw) -> float:
        """Return the fraction of slots of ``guess`` matched by ``target``.

        ``1.0`` means every slot matched (a jackpot).
        """
        matched = self.matcher(guess, target)
        if matched < 0 or matched > self.slots:
            raise ValueError(
                f"{self.key} matcher returned {matched}, expected 0..{self.slots}"
            )
        return matched / self.slots


class VariantRegistry:
    """Mutable registry mapping lottery keys to variants, in registration order."""

    def __init__(self, variants: Iterable[LotteryVariant] = ()) -> None:
        self._variants: Dict[str, LotteryVariant] = {}
        for variant in variants:
            self.register(variant)

    def register(self, variant: LotteryVariant, *, replace: bool = False) -> None:
        """Register ``variant`` under its key.

        Parameters
        ----------
        variant : LotteryVariant
            Variant to add.
        replace : bool, default: False
            When ``True`` an existing registration with the same key is
            overwritten. Otherwise a duplicate raises :class:`ValueError`.
        """
        if not replace and variant.key in self._variants:
            raise ValueError(f"Lottery '{variant.key}' is already registered")
        self._variants[variant.key] = variant

    def get(self, key: str) -> LotteryVariant:
        """Return the variant registered under ``key``."""
        try:
            return self._variants[key]
        except KeyError as exc:
            raise KeyError(f"Unknown lottery '{key}'") from exc

    def keys(self) -> list[str]:
        return list(self._variants)

    def __contains__(self, key: object) -> bool:
        return key in self._variants

    def __iter__(self) -> Iterator[LotteryVariant]:
        return iter(list(self._variants.values()))

    def __len__(self) -> int:
        return len(self._variants)
