from __future__ import annotations

from ai_functions.core.llm.openai_client import OpenAIClient, OpenAIConfig
from ai_functions.core.settings import Settings, get_settings


def build_openai_client(*, settings: Settings) -> OpenAIClient | None:
    """Return a configured client, or None when the API key is missing."""

    if not settings.openai_api_key:
        return None

    config = OpenAIConfig(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        model=settings.openai_model,
        max_tokens=int(settings.openai_max_tokens),
        timeout_seconds=settings.openai_timeout_seconds,
    )
    return OpenAIClient(config=config)


def get_openai_client() -> OpenAIClient | None:
    """
    Dependency provider for OpenAIClient.

    Returns None when not configured so the proxy function can answer with its
    configuration-error envelope instead of failing during dependency resolution.
    """

    return build_openai_client(settings=get_settings())
