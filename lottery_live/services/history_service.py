"""Paged history and win count queries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from lottery_live.errors import UnknownLotteryError
from lottery_live.lottery import VariantRegistry
from lottery_live.schemas.result import dump_result
from lottery_live.services.result_store import ResultStore


@dataclass(frozen=True)
class HistoryPage:
    data: list[dict[str, Any]]
    total: int


def parse_page(raw: str | None) -> int:
    """Parse the ``page`` query parameter; absent, unparsable or negative means 0."""

    if raw is None:
        return 0
    try:
        page = int(raw.strip())
    except ValueError:
        return 0
    return max(page, 0)


class HistoryService:
    """Read side of the result store as exposed over HTTP."""

    def __init__(self, store: ResultStore, registry: VariantRegistry, page_size: int = 24) -> None:
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self._store = store
        self._registry = registry
        self._page_size = page_size

    @property
    def page_size(self) -> int:
        return self._page_size

    def history(self, lottery_type: str | None, page: int = 0) -> HistoryPage:
        if not lottery_type or lottery_type not in self._registry:
            raise UnknownLotteryError(lottery_type, self._registry.keys())

        variant = self._registry.get(lottery_type)
        total = self._store.count_by_variant(lottery_type)
        page = max(page, 0)
        if page * self._page_size >= total:
            # Past the last row; also keeps huge offsets away from the driver.
            return HistoryPage(data=[], total=total)
        records = self._store.page(lottery_type, self._page_size, page)
        return HistoryPage(
            data=[dump_result(variant.schema, record) for record in records],
            total=total,
        )

    def wins(self) -> int:
        return self._store.count_jackpots() or 0
