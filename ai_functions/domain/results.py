from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Success:
    """Handler produced a result string (rendered as 200 `{"result": ...}`)."""

    result: str


@dataclass(frozen=True)
class Failure:
    """Handler terminated with an error (rendered as `{"error": ...}` with `status_code`)."""

    status_code: int
    error: str


HandlerResult = Success | Failure
