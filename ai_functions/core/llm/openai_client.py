from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx


class OpenAIError(Exception):
    """Base error for OpenAI client failures."""


class OpenAIUpstreamError(OpenAIError):
    """Raised when the request fails or OpenAI returns an unexpected response."""


class OpenAIUpstreamStatusError(OpenAIUpstreamError):
    """Raised when OpenAI answers with a non-success status code."""

    def __init__(self, *, status_code: int, text: str):
        super().__init__(f"LLM service returned status {status_code}")
        self.status_code = status_code
        self.text = text


@dataclass(frozen=True)
class OpenAIConfig:
    api_key: str
    base_url: str
    model: str
    max_tokens: int
    timeout_seconds: float | None = None


def _first_choice_content(data: Any) -> str | None:
    """Return `choices[0].message.content`, or None when any step is absent."""

    if not isinstance(data, dict):
        raise OpenAIUpstreamError("LLM response JSON must be an object")

    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    return content if isinstance(content, str) else None


class OpenAIClient:
    """
    Minimal OpenAI chat-completions client.

    Design notes:
    - No logging in this module (prompts/outputs are user content).
    - Upstream error bodies are surfaced on `OpenAIUpstreamStatusError.text` so the caller
      decides what to relay.
    - `transport` is only meant for tests (e.g. `httpx.MockTransport`).
    """

    def __init__(
        self,
        *,
        config: OpenAIConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._transport = transport

    @property
    def config(self) -> OpenAIConfig:
        return self._config

    async def complete(self, *, system_prompt: str, user_prompt: str) -> str | None:
        url = f"{self._config.base_url.rstrip('/')}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }
        payload: dict[str, Any] = {
            "model": self._config.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "max_tokens": self._config.max_tokens,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds, transport=self._transport
            ) as client:
                resp = await client.post(url, headers=headers, json=payload)
        except httpx.TimeoutException as exc:
            raise OpenAIUpstreamError("LLM request timed out") from exc
        except httpx.HTTPError as exc:
            raise OpenAIUpstreamError("LLM request failed") from exc

        if not resp.is_success:
            raise OpenAIUpstreamStatusError(status_code=resp.status_code, text=resp.text)

        try:
            data = resp.json()
        except ValueError as exc:
            raise OpenAIUpstreamError("LLM response was not valid JSON") from exc

        return _first_choice_content(data)
