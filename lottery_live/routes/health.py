"""Health check routes."""

from __future__ import annotations

from flask import Blueprint

from lottery_live.runtime import get_broadcaster, get_scheduler
from lottery_live.utils.responses import ok

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health_check():
    """Health check endpoint, including the draw loop's pause state."""

    scheduler = get_scheduler()
    return ok(
        {
            "status": "ok",
            "scheduler": {
                "running": scheduler.running,
                "interval_seconds": scheduler.interval,
                "state": scheduler.state.value,
                "resumes_in_seconds": round(scheduler.seconds_until_resume(), 3),
                "subscribers": len(get_broadcaster()),
            },
        }
    )
