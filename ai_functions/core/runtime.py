"""Bridge between the serverless runtime's event/response objects and handler results.

Every invocation ends in a `FunctionResponse`: anything that escapes a handler is
logged with its stack trace and rendered as a generic 500 envelope.
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from ai_functions.api.schemas import ErrorOut, FunctionEvent, FunctionResponse, ResultOut
from ai_functions.core.metrics import observe_function_invocation
from ai_functions.domain.results import Failure, HandlerResult, Success

logger = logging.getLogger("ai_functions.runtime")

Handler = Callable[[FunctionEvent], Awaitable[HandlerResult]]

_JSON_HEADERS = {"Content-Type": "application/json"}


def render_result(result: HandlerResult) -> FunctionResponse:
    if isinstance(result, Success):
        status_code = 200
        body = ResultOut(result=result.result).model_dump()
    else:
        status_code = result.status_code
        body = ErrorOut(error=result.error).model_dump()

    return FunctionResponse(
        status_code=status_code,
        headers=dict(_JSON_HEADERS),
        body=json.dumps(body, ensure_ascii=False),
    )


async def invoke(
    *,
    function_name: str,
    build_handler: Callable[[], Handler],
    event: Mapping[str, Any],
    request_id: str | None = None,
) -> FunctionResponse:
    """Run one invocation: parse the event, build the handler, await it, render the result."""

    request_id = request_id or uuid.uuid4().hex
    started = time.perf_counter()
    method = event.get("httpMethod") if isinstance(event, Mapping) else None

    try:
        parsed = FunctionEvent.model_validate(event)
        method = parsed.method
        result = await build_handler()(parsed)
    except Exception:  # noqa: BLE001 - we must log unexpected exceptions with stack trace
        logger.exception(
            "Unhandled exception while invoking function",
            extra={
                "request_id": request_id,
                "function": function_name,
                "http_method": method,
                "status_code": 500,
            },
        )
        result = Failure(status_code=500, error="Internal server error.")

    response = render_result(result)
    duration = time.perf_counter() - started
    observe_function_invocation(
        function_name=function_name,
        status_code=response.status_code,
        duration_seconds=duration,
    )
    logger.info(
        "Function invocation completed",
        extra={
            "request_id": request_id,
            "function": function_name,
            "http_method": method,
            "status_code": response.status_code,
            "duration_ms": round(duration * 1000.0, 2),
        },
    )
    return response
