"""ai-proxy: relay a user prompt to the chat-completion API.

Request:  POST {"prompt": "..."}
Response: 200 {"result": "..."} or {"error": "..."} with 400/405/500 or the upstream status.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Protocol

from pydantic import ValidationError

from ai_functions.api.schemas import FunctionEvent
from ai_functions.core.llm.openai_client import OpenAIUpstreamStatusError
from ai_functions.domain.exceptions import (
    ConfigurationError,
    FunctionError,
    InvalidRequestError,
    MethodNotAllowedError,
)
from ai_functions.domain.results import Failure, HandlerResult, Success
from ai_functions.proxy.prompt import NO_RESPONSE_FALLBACK, SYSTEM_PROMPT

PROXY_FUNCTION = "ai-proxy"

logger = logging.getLogger("ai_functions.proxy")


class ChatCompletionClient(Protocol):
    async def complete(self, *, system_prompt: str, user_prompt: str) -> str | None: ...


def _ensure_post(event: FunctionEvent) -> None:
    if event.method != "POST":
        raise MethodNotAllowedError("Method Not Allowed. Use POST.")


def _parse_prompt(event: FunctionEvent) -> str:
    try:
        payload = json.loads(event.decoded_body() or "")
    except (ValueError, RecursionError) as exc:
        raise InvalidRequestError("Invalid JSON format in request body.") from exc

    prompt = payload.get("prompt") if isinstance(payload, dict) else None
    if not isinstance(prompt, str) or not prompt:
        raise InvalidRequestError("Missing 'prompt' in request body.")
    return prompt


class ProxyHandler:
    """
    Forward one prompt upstream and relay the first completion.

    The client is injected either already configured (`llm_client`) or as a loader that
    reads settings once the method has been accepted (`load_client`). A missing client
    means the API key is missing.
    """

    def __init__(
        self,
        *,
        llm_client: ChatCompletionClient | None = None,
        load_client: Callable[[], ChatCompletionClient | None] | None = None,
    ):
        self._llm = llm_client
        self._load_client = load_client

    async def __call__(self, event: FunctionEvent) -> HandlerResult:
        try:
            _ensure_post(event)
            llm = self._require_client()
            prompt = _parse_prompt(event)
        except FunctionError as exc:
            return Failure(status_code=exc.status_code, error=exc.message)

        try:
            content = await llm.complete(system_prompt=SYSTEM_PROMPT, user_prompt=prompt)
        except OpenAIUpstreamStatusError as exc:
            logger.error(
                "OpenAI API error",
                extra={"function": PROXY_FUNCTION, "status_code": exc.status_code},
            )
            return Failure(status_code=exc.status_code, error=f"AI API failed: {exc.text}")
        except Exception:  # noqa: BLE001 - every failure must end in an error envelope
            logger.exception(
                "Unhandled error during upstream call", extra={"function": PROXY_FUNCTION}
            )
            return Failure(status_code=500, error="Internal Server Error during API call.")

        return Success(result=content or NO_RESPONSE_FALLBACK)

    def _require_client(self) -> ChatCompletionClient:
        llm = self._llm
        if self._load_client is not None:
            try:
                llm = self._load_client()
            except ValidationError as exc:
                # The validation message may echo configured values; log field names only.
                logger.error(
                    "Invalid OpenAI settings: %s",
                    ", ".join(".".join(map(str, e["loc"])) for e in exc.errors()),
                    extra={"function": PROXY_FUNCTION, "status_code": 500},
                )
                raise ConfigurationError("Server configuration error: invalid settings.") from exc
        if llm is None:
            logger.error(
                "OPENAI_API_KEY is not set in environment variables.",
                extra={"function": PROXY_FUNCTION, "status_code": 500},
            )
            raise ConfigurationError("Server configuration error: API Key missing.")
        return llm
