"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int
    details: Any | None = None


class ValidationError(AppError):
    """Input validation error."""

    def __init__(self, message: str = "Validation error", details: Any | None = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=400, details=details)


class UnknownLotteryError(ValidationError):
    """Requested lottery type is missing or not registered."""

    def __init__(self, lottery_type: str | None, known: list[str]) -> None:
        message = f"Unknown lottery type: {lottery_type!r}" if lottery_type else "Lottery type is required"
        super().__init__(
            message=message,
            details={"lottery_type": [f"Must be one of {'|'.join(known)}"]},
        )


class StoreUnavailableError(AppError):
    """The result store could not be reached."""

    def __init__(self, message: str = "Result store unavailable", details: Any | None = None) -> None:
        super().__init__(code="store_unavailable", message=message, status_code=503, details=details)
