"""ai-handler: local keyword analysis of a piece of text.

Request:  POST {"input": "..."}
Response: 200 {"result": "<summary>"} or {"error": "..."} with 400/405/500.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ai_functions.analysis.topics import analyze_text
from ai_functions.api.schemas import FunctionEvent
from ai_functions.domain.exceptions import (
    FunctionError,
    InvalidRequestError,
    MethodNotAllowedError,
)
from ai_functions.domain.results import Failure, HandlerResult, Success

ANALYSIS_FUNCTION = "ai-handler"

logger = logging.getLogger("ai_functions.analysis")


def _load_body(event: FunctionEvent) -> dict[str, Any]:
    # Missing, unparsable or non-object bodies all count as `{}`.
    try:
        payload = json.loads(event.decoded_body() or "{}")
    except (ValueError, RecursionError):
        return {}
    return payload if isinstance(payload, dict) else {}


def _parse_input(event: FunctionEvent) -> str:
    if event.method != "POST":
        raise MethodNotAllowedError("Method not allowed. Use POST.")

    text = _load_body(event).get("input")
    if not isinstance(text, str) or not text.strip():
        raise InvalidRequestError('No input provided. Send { input: "text" }')
    return text


class AnalysisHandler:
    """Pure function of the request body: identical input yields an identical summary."""

    async def __call__(self, event: FunctionEvent) -> HandlerResult:
        try:
            text = _parse_input(event)
            analysis = analyze_text(text)
        except FunctionError as exc:
            return Failure(status_code=exc.status_code, error=exc.message)
        except Exception as exc:  # noqa: BLE001 - every failure must end in an error envelope
            logger.exception("AI handler error", extra={"function": ANALYSIS_FUNCTION})
            return Failure(status_code=500, error=f"Internal server error: {exc}")

        return Success(result=analysis.summary)
