"""Long-lived collaborators shared by the routes and the draw thread."""

from __future__ import annotations

from flask import Flask, current_app

from lottery_live.lottery import DEFAULT_VARIANT_REGISTRY, RandomNumberSource, VariantRegistry
from lottery_live.services.broadcaster import Broadcaster
from lottery_live.services.history_service import HistoryService
from lottery_live.services.result_store import ResultStore
from lottery_live.services.scheduler import DrawScheduler


def init_runtime(
    app: Flask,
    *,
    registry: VariantRegistry | None = None,
    source: RandomNumberSource | None = None,
) -> None:
    """Build the store, broadcaster, scheduler and history service for ``app``.

    Requires :func:`lottery_live.db.init_db` to have run first.
    """

    variants = registry or DEFAULT_VARIANT_REGISTRY
    store = ResultStore(app.extensions["session_factory"])
    broadcaster = Broadcaster(queue_size=int(app.config["SUBSCRIBER_QUEUE_SIZE"]))
    scheduler = DrawScheduler(
        variants,
        store,
        broadcaster,
        source=source,
        interval=float(app.config["DRAW_INTERVAL_SECONDS"]),
        pause_seconds=float(app.config["JACKPOT_PAUSE_SECONDS"]),
        max_workers=int(app.config["DRAW_MAX_WORKERS"]),
    )

    app.extensions["variant_registry"] = variants
    app.extensions["result_store"] = store
    app.extensions["broadcaster"] = broadcaster
    app.extensions["draw_scheduler"] = scheduler
    app.extensions["history_service"] = HistoryService(
        store, variants, page_size=int(app.config["HISTORY_PAGE_SIZE"])
    )


def get_broadcaster() -> Broadcaster:
    return current_app.extensions["broadcaster"]


def get_scheduler() -> DrawScheduler:
    return current_app.extensions["draw_scheduler"]


def get_history_service() -> HistoryService:
    return current_app.extensions["history_service"]
