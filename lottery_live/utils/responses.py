"""Helpers for JSON responses.

Operational endpoints use the ``{"success", "data", "error"}`` envelope.
The history and wins endpoints return bare bodies because the live results
page reads them as-is; their errors still use the envelope.
"""

from __future__ import annotations

from typing import Any

from flask import jsonify
from flask.typing import ResponseReturnValue


def ok(data: Any, status_code: int = 200) -> ResponseReturnValue:
    """Success response (enveloped)."""

    return jsonify({"success": True, "data": data, "error": None}), status_code


def bare(body: dict[str, Any], status_code: int = 200) -> ResponseReturnValue:
    """Success response without the envelope."""

    return jsonify(body), status_code


def fail(code: str, message: str, status_code: int, details: Any | None = None) -> ResponseReturnValue:
    """Error response."""

    error = {"code": code, "message": message, "details": details}
    return jsonify({"success": False, "data": None, "error": error}), status_code
