"""Shared test helpers: runtime events and fake chat-completion clients."""

from __future__ import annotations

import json
from typing import Any

_UNSET = object()


def make_event(*, method: str = "POST", payload: Any = _UNSET, body: str | None = None) -> dict:
    """Build a runtime event. `payload` is JSON-encoded into the body; `body` is used verbatim."""
    if payload is not _UNSET:
        body = json.dumps(payload)
    return {"httpMethod": method, "path": "/.netlify/functions/test", "body": body}


class FakeChatClient:
    """Records calls and returns a canned completion (or raises `error`)."""

    def __init__(self, *, content: str | None = "hello", error: Exception | None = None):
        self.content = content
        self.error = error
        self.calls: list[dict[str, str]] = []

    async def complete(self, *, system_prompt: str, user_prompt: str) -> str | None:
        self.calls.append({"system_prompt": system_prompt, "user_prompt": user_prompt})
        if self.error is not None:
            raise self.error
        return self.content
