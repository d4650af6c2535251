import json

import httpx
import pytest

from career_graph.chat.llm import (
    FALLBACK_REPLY,
    SYSTEM_PROMPT,
    ChatMessage,
    DeepSeekChatEngine,
    system_message,
)
from career_graph.errors import UpstreamError
from career_graph.http import USER_AGENT


def make_engine(handler):
    return DeepSeekChatEngine(
        api_key="sk-test",
        base_url="https://llm.test",
        model="deepseek-chat",
        transport=httpx.MockTransport(handler),
    )


def test_system_message_appends_context():
    assert system_message(None) == SYSTEM_PROMPT
    assert system_message("画像").endswith("\n\n当前学生信息：\n画像")


async def test_complete_sends_system_prompt_first():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": "建议先学 Python"}}]})

    engine = make_engine(handler)
    try:
        reply = await engine.complete([ChatMessage(role="user", content="学什么")], "画像")
    finally:
        await engine.aclose()

    assert reply == "建议先学 Python"
    assert seen["url"] == "https://llm.test/chat/completions"
    assert seen["auth"] == "Bearer sk-test"
    body = seen["body"]
    assert body["model"] == "deepseek-chat"
    assert body["max_tokens"] == 2000
    assert body["messages"][0]["role"] == "system"
    assert "画像" in body["messages"][0]["content"]
    assert body["messages"][1] == {"role": "user", "content": "学什么"}


async def test_empty_completion_uses_fallback():
    engine = make_engine(lambda request: httpx.Response(200, json={"choices": []}))
    try:
        assert await engine.complete([ChatMessage(role="user", content="hi")]) == FALLBACK_REPLY
    finally:
        await engine.aclose()


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "down"}),
        httpx.Response(401, json={"error": "bad key"}),
        httpx.Response(200, content=b"not json"),
        httpx.Response(200, json=[]),
        httpx.Response(200, json={"choices": ["x"]}),
        httpx.Response(200, json={"choices": [{"message": "hi"}]}),
        httpx.Response(200, json={"choices": {"message": {"content": "hi"}}}),
    ],
)
async def test_failures_become_upstream_errors(response):
    engine = make_engine(lambda request: response)
    try:
        with pytest.raises(UpstreamError):
            await engine.complete([ChatMessage(role="user", content="hi")])
    finally:
        await engine.aclose()


async def test_transport_error_becomes_upstream_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    engine = make_engine(handler)
    try:
        with pytest.raises(UpstreamError):
            await engine.complete([ChatMessage(role="user", content="hi")])
    finally:
        await engine.aclose()


async def test_requests_carry_user_agent():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["ua"] = request.headers.get("user-agent")
        return httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]})

    engine = make_engine(handler)
    try:
        await engine.complete([ChatMessage(role="user", content="hi")])
    finally:
        await engine.aclose()
    assert seen["ua"] == USER_AGENT


def test_system_prompt_lists_seeded_careers():
    assert "你了解以下 AI 职业方向：" in SYSTEM_PROMPT
    assert "- AI 研究员：" in SYSTEM_PROMPT
    assert "适合 ENFP、INFP、ISFP、ESFP" in SYSTEM_PROMPT
    assert "{careers}" not in SYSTEM_PROMPT
