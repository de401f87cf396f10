"""The dev server routes call the same handlers as the serverless entry points."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from ai_functions.core.llm.deps import get_openai_client
from ai_functions.core.llm.openai_client import OpenAIUpstreamStatusError
from ai_functions.main import create_app
from tests._helpers import FakeChatClient

PROXY_PATH = "/.netlify/functions/ai-proxy"
ANALYSIS_PATH = "/.netlify/functions/ai-handler"


def _client_with(llm: FakeChatClient | None) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_openai_client] = lambda: llm
    return TestClient(app)


@pytest.fixture
def fake_llm() -> FakeChatClient:
    return FakeChatClient(content="hello")


@pytest.fixture
def proxy_client(fake_llm: FakeChatClient) -> TestClient:
    with _client_with(fake_llm) as c:
        yield c


def test_proxy_success(proxy_client: TestClient, fake_llm: FakeChatClient) -> None:
    res = proxy_client.post(PROXY_PATH, json={"prompt": "hi"})

    assert res.status_code == 200, res.text
    assert res.json() == {"result": "hello"}
    assert res.headers["content-type"] == "application/json"
    assert "X-Request-ID" in res.headers
    assert [c["user_prompt"] for c in fake_llm.calls] == ["hi"]


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
def test_proxy_rejects_non_post(proxy_client: TestClient, method: str) -> None:
    res = proxy_client.request(method, PROXY_PATH)

    assert res.status_code == 405
    assert res.json() == {"error": "Method Not Allowed. Use POST."}


def test_proxy_invalid_json_returns_400(proxy_client: TestClient) -> None:
    res = proxy_client.post(
        PROXY_PATH, content=b"{not json", headers={"Content-Type": "application/json"}
    )

    assert res.status_code == 400
    assert res.json() == {"error": "Invalid JSON format in request body."}


def test_proxy_empty_prompt_returns_400(proxy_client: TestClient) -> None:
    res = proxy_client.post(PROXY_PATH, json={"prompt": ""})

    assert res.status_code == 400
    assert res.json() == {"error": "Missing 'prompt' in request body."}


def test_proxy_without_api_key_returns_500(client: TestClient) -> None:
    res = client.post(PROXY_PATH, json={"prompt": "hi"})

    assert res.status_code == 500
    assert res.json() == {"error": "Server configuration error: API Key missing."}


def test_proxy_passes_upstream_status_through() -> None:
    llm = FakeChatClient(error=OpenAIUpstreamStatusError(status_code=429, text="slow down"))
    with _client_with(llm) as c:
        res = c.post(PROXY_PATH, json={"prompt": "hi"})

    assert res.status_code == 429
    assert res.json() == {"error": "AI API failed: slow down"}


def test_analysis_success(client: TestClient) -> None:
    res = client.post(ANALYSIS_PATH, json={"input": "hello world"})

    assert res.status_code == 200
    assert res.json() == {
        "result": "Generic input with 2 word(s). No networking/security keywords detected."
    }


def test_analysis_rejects_get(client: TestClient) -> None:
    res = client.get(ANALYSIS_PATH)

    assert res.status_code == 405
    assert res.json() == {"error": "Method not allowed. Use POST."}


@pytest.mark.parametrize("content", [b"", b"not json", b'{"input": "   "}'])
def test_analysis_bad_input_returns_400(client: TestClient, content: bytes) -> None:
    res = client.post(ANALYSIS_PATH, content=content)

    assert res.status_code == 400
    assert "error" in res.json()


def test_metrics_count_function_invocations(client: TestClient) -> None:
    client.post(ANALYSIS_PATH, json={"input": "hello"})

    res = client.get("/metrics")

    assert res.status_code == 200
    assert 'function_invocations_total{function="ai-handler",status_code="200"}' in res.text


def test_invalid_utf8_body_is_unparsable(
    proxy_client: TestClient, fake_llm: FakeChatClient
) -> None:
    proxy_res = proxy_client.post(PROXY_PATH, content=b'{"prompt": "caf\xe9"}')
    analysis_res = proxy_client.post(ANALYSIS_PATH, content=b'{"input": "caf\xe9"}')

    assert proxy_res.status_code == 400
    assert proxy_res.json() == {"error": "Invalid JSON format in request body."}
    assert analysis_res.status_code == 400
    assert fake_llm.calls == []
