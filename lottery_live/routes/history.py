"""History and wins API. No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from lottery_live.runtime import get_history_service
from lottery_live.schemas.result import WinsResponseSchema
from lottery_live.services.history_service import parse_page
from lottery_live.utils.responses import bare

history_bp = Blueprint("history", __name__)

_wins_schema = WinsResponseSchema()


@history_bp.get("/history")
@history_bp.get("/history/")
@history_bp.get("/history/<lottery_type>")
def get_history(lottery_type: str | None = None):
    """Return one page of past results for a lottery, most recent first.

    Query params:
    - page: zero-based page number (default 0)
    """

    page = parse_page(request.args.get("page"))
    result = get_history_service().history(lottery_type, page)
    return bare({"data": result.data, "total": result.total})


@history_bp.get("/wins")
def get_wins():
    """Total number of jackpots across all lotteries."""

    return bare(_wins_schema.dump({"wins": get_history_service().wins()}))
