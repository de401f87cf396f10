"""Serverless entry points.

Deploy each as its own function:
- `ai_functions.entrypoints.proxy_handler`    -> ai-proxy
- `ai_functions.entrypoints.analysis_handler` -> ai-handler

Both take the runtime event (`httpMethod`, `body`, ...) and return
`{"statusCode": ..., "headers": ..., "body": "<json>"}`.
"""

from __future__ import annotations

import asyncio
from typing import Any

from ai_functions.analysis.handler import ANALYSIS_FUNCTION, AnalysisHandler
from ai_functions.core.llm.deps import build_openai_client
from ai_functions.core.llm.openai_client import OpenAIClient
from ai_functions.core.logging import setup_logging
from ai_functions.core.runtime import invoke
from ai_functions.core.settings import Settings
from ai_functions.proxy.handler import PROXY_FUNCTION, ProxyHandler

setup_logging()


def _request_id(context: Any) -> str | None:
    request_id = getattr(context, "aws_request_id", None)
    return request_id if isinstance(request_id, str) and request_id else None


def _load_openai_client() -> OpenAIClient | None:
    # Settings are read per invocation so the secret is never held between requests.
    return build_openai_client(settings=Settings())


def _build_proxy_handler() -> ProxyHandler:
    return ProxyHandler(load_client=_load_openai_client)


def proxy_handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    response = asyncio.run(
        invoke(
            function_name=PROXY_FUNCTION,
            build_handler=_build_proxy_handler,
            event=event,
            request_id=_request_id(context),
        )
    )
    return response.to_event_dict()


def analysis_handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    response = asyncio.run(
        invoke(
            function_name=ANALYSIS_FUNCTION,
            build_handler=AnalysisHandler,
            event=event,
            request_id=_request_id(context),
        )
    )
    return response.to_event_dict()
