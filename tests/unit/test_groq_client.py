# tests/unit/test_groq_client.py
"""GroqClient over an httpx.MockTransport."""
import json

import httpx
import pytest

from src.ax_agents.infrastructure.groq_client import GroqClient
from src.ax_common.errors import LLMUnavailableError


def _client(handler, api_key: str = "test-key") -> GroqClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GroqClient(
        api_key=api_key, model="test-model",
        base_url="https://groq.test/openai/v1/", http_client=http,
    )


async def test_posts_chat_completion() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": "hello"}}]})

    text = await _client(handler).complete("be brief", "say hi", 100)

    assert text == "hello"
    assert seen["url"] == "https://groq.test/openai/v1/chat/completions"
    assert seen["auth"] == "Bearer test-key"
    assert seen["body"]["model"] == "test-model"
    assert seen["body"]["max_tokens"] == 100
    assert seen["body"]["messages"] == [
        {"role": "system", "content": "be brief"},
        {"role": "user", "content": "say hi"},
    ]


async def test_no_system_message_when_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        messages = json.loads(request.content)["messages"]
        assert [m["role"] for m in messages] == ["user"]
        return httpx.Response(200, json={"choices": [{"message": {"content": "42"}}]})

    assert await _client(handler).complete(None, "odds?", 10) == "42"


async def test_missing_api_key() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    with pytest.raises(LLMUnavailableError):
        await _client(handler, api_key="").complete(None, "hi", 10)


async def test_http_error_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"error": "rate limited"})

    with pytest.raises(LLMUnavailableError) as exc:
        await _client(handler).complete(None, "hi", 10)
    assert "429" in exc.value.message


async def test_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(LLMUnavailableError):
        await _client(handler).complete(None, "hi", 10)


async def test_unexpected_payload() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"choices": []})

    with pytest.raises(LLMUnavailableError):
        await _client(handler).complete(None, "hi", 10)
