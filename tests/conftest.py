from __future__ import annotations

import pytest

_OPENAI_ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_BASE_URL",
    "OPENAI_MAX_TOKENS",
    "OPENAI_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch, tmp_path):
    for name in _OPENAI_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Settings read `.env` from the working directory; keep a developer's local file out of tests.
    monkeypatch.chdir(tmp_path)

    from ai_functions.core.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from ai_functions.main import create_app

    app = create_app()
    with TestClient(app) as c:
        yield c
