"""Unit tests for the chat API client"""

import asyncio
import json
import httpx
import pytest
from finx_gateway.domain.exceptions import ChatAPIError
from finx_gateway.infrastructure.clients.chat import ChatClient

SYSTEM_PROMPT = "You are a test advisor."
MESSAGES = [{"role": "user", "content": "Can I afford a car?"}]


def make_client(handler) -> ChatClient:
    return ChatClient(
        base_url="http://chat.test/v1/",
        api_key="test-key",
        model="test-model",
        timeout=5,
        transport=httpx.MockTransport(handler),
    )


def test_complete_returns_reply():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": "Not yet."}}]})

    reply = asyncio.run(make_client(handler).complete(SYSTEM_PROMPT, MESSAGES))

    assert reply == "Not yet."
    assert seen["url"] == "http://chat.test/v1/chat/completions"
    assert seen["auth"] == "Bearer test-key"
    assert seen["body"]["model"] == "test-model"
    assert seen["body"]["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert seen["body"]["messages"][1:] == MESSAGES


def test_http_error_raises_chat_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "boom"})

    with pytest.raises(ChatAPIError, match="500"):
        asyncio.run(make_client(handler).complete(SYSTEM_PROMPT, MESSAGES))


def test_timeout_raises_chat_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(ChatAPIError, match="timeout"):
        asyncio.run(make_client(handler).complete(SYSTEM_PROMPT, MESSAGES))


def test_connection_error_raises_chat_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(ChatAPIError, match="unreachable"):
        asyncio.run(make_client(handler).complete(SYSTEM_PROMPT, MESSAGES))


def test_response_without_reply_raises_chat_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"choices": []})

    with pytest.raises(ChatAPIError, match="Invalid response"):
        asyncio.run(make_client(handler).complete(SYSTEM_PROMPT, MESSAGES))


def test_null_content_raises_chat_error():
    """Refusals and tool-call replies carry no text content"""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": None}}]})

    with pytest.raises(ChatAPIError, match="empty content"):
        asyncio.run(make_client(handler).complete(SYSTEM_PROMPT, MESSAGES))


def test_non_json_response_raises_chat_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>gateway</html>")

    with pytest.raises(ChatAPIError):
        asyncio.run(make_client(handler).complete(SYSTEM_PROMPT, MESSAGES))
