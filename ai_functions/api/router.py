from __future__ import annotations

import base64
from typing import Any

from fastapi import APIRouter, Depends, Request
from starlette.responses import Response

from ai_functions.analysis.handler import ANALYSIS_FUNCTION, AnalysisHandler
from ai_functions.api.schemas import ErrorOut, ResultOut
from ai_functions.core.llm.deps import get_openai_client
from ai_functions.core.llm.openai_client import OpenAIClient
from ai_functions.core.runtime import invoke
from ai_functions.proxy.handler import PROXY_FUNCTION, ProxyHandler

router = APIRouter(prefix="/.netlify/functions", tags=["functions"])

# Handlers answer 405 themselves, so every method is routed through.
_ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

_RESPONSES: dict[int | str, dict[str, Any]] = {
    200: {"model": ResultOut},
    400: {"model": ErrorOut},
    405: {"model": ErrorOut},
    500: {"model": ErrorOut},
}


async def _to_event(request: Request) -> dict[str, Any]:
    """Convert an HTTP request into the event shape the serverless runtime would deliver."""

    raw = await request.body()
    body: str | None = None
    is_base64_encoded = False
    if raw:
        try:
            body = raw.decode("utf-8")
        except UnicodeDecodeError:
            # Same as a binary body on the hosting platform; the handler fails to decode it.
            body = base64.b64encode(raw).decode("ascii")
            is_base64_encoded = True
    return {
        "httpMethod": request.method,
        "path": request.url.path,
        "headers": dict(request.headers),
        "body": body,
        "isBase64Encoded": is_base64_encoded,
    }


def _as_response(*, status_code: int, headers: dict[str, str], body: str) -> Response:
    return Response(content=body, status_code=status_code, headers=headers)


@router.api_route(
    f"/{PROXY_FUNCTION}",
    methods=_ALL_METHODS,
    responses=_RESPONSES,
    summary="Relay a prompt to the chat-completion API",
    description=(
        'POST `{"prompt": "..."}`. Returns `{"result": "..."}` with the first completion, '
        "or an error envelope. Upstream error statuses are passed through unchanged."
    ),
)
async def ai_proxy(
    request: Request,
    llm_client: OpenAIClient | None = Depends(get_openai_client),
) -> Response:
    def build_handler() -> ProxyHandler:
        return ProxyHandler(llm_client=llm_client)

    response = await invoke(
        function_name=PROXY_FUNCTION,
        build_handler=build_handler,
        event=await _to_event(request),
        request_id=getattr(request.state, "request_id", None),
    )
    return _as_response(**response.model_dump())


@router.api_route(
    f"/{ANALYSIS_FUNCTION}",
    methods=_ALL_METHODS,
    responses=_RESPONSES,
    summary="Analyze text for networking/security keywords",
    description='POST `{"input": "..."}`. Returns `{"result": "<summary>"}` or an error envelope.',
)
async def ai_handler(request: Request) -> Response:
    response = await invoke(
        function_name=ANALYSIS_FUNCTION,
        build_handler=AnalysisHandler,
        event=await _to_event(request),
        request_id=getattr(request.state, "request_id", None),
    )
    return _as_response(**response.model_dump())
