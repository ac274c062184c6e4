"""Live feed WebSocket. The server pushes; clients only listen."""

from __future__ import annotations

import logging
from typing import Any

from flask import Blueprint, current_app
from simple_websocket import ConnectionClosed

from lottery_live.extensions import sock
from lottery_live.runtime import get_broadcaster
from lottery_live.services.broadcaster import Broadcaster

logger = logging.getLogger(__name__)

feed_bp = Blueprint("feed", __name__)


def stream_results(ws: Any, broadcaster: Broadcaster, poll_seconds: float) -> None:
    """Forward published results to ``ws`` until the client disconnects."""
    subscription = broadcaster.subscribe()
    try:
        while ws.connected:
            payload = subscription.get(timeout=poll_seconds)
            if payload is not None:
                ws.send(payload)
    except ConnectionClosed:
        logger.debug("Live feed client went away")
    finally:
        broadcaster.unsubscribe(subscription)


@sock.route("/ws", bp=feed_bp)
def live_feed(ws):  # type: ignore[no-untyped-def]
    stream_results(ws, get_broadcaster(), float(current_app.config["FEED_POLL_SECONDS"]))
