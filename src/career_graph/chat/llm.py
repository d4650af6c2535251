from __future__ import annotations

import logging
from typing import Any, Literal, Protocol, Sequence

import httpx
from pydantic import BaseModel

from career_graph.errors import UpstreamError
from career_graph.http import HttpClientFactory
from career_graph.knowledge_graph.seed import CAREER_PERSONALITIES, CAREERS

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.deepseek.com"

FALLBACK_REPLY = "抱歉，我暂时无法回答这个问题。"

_PROMPT_TEMPLATE = """你是一个专业的 AI 教育顾问，专门帮助学生规划人工智能领域的学习路径。

你的职责：
1. 根据学生的性格类型（16 种四字母类型），推荐最适合的 AI 职业方向
2. 根据学生的目标职业和当前技能，推荐个性化的学习课程
3. 解答学生关于 AI 领域的技术问题和职业困惑
4. 提供具体、可执行的学习建议

你了解以下 AI 职业方向：
{careers}

回复时请：
- 使用中文回复
- 结构清晰，使用 markdown 格式
- 给出具体的学习资源和时间规划建议
- 鼓励学生，保持积极友好的态度
"""


def career_directions() -> str:
    """One line per seeded career: `- {name}：{description}，适合 {codes}`."""
    lines = []
    for career in CAREERS:
        codes = "、".join(CAREER_PERSONALITIES.get(career["id"], []))
        lines.append(f"- {career['name']}：{career['description']}，适合 {codes}")
    return "\n".join(lines)


SYSTEM_PROMPT = _PROMPT_TEMPLATE.format(careers=career_directions())


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatEngine(Protocol):
    async def complete(self, messages: Sequence[ChatMessage], context: str | None = None) -> str: ...


def system_message(context: str | None) -> str:
    if context:
        return f"{SYSTEM_PROMPT}\n\n当前学生信息：\n{context}"
    return SYSTEM_PROMPT


def completion_content(data: Any) -> str | None:
    """Text of the first choice; None when the model returned nothing.

    Raises UpstreamError when the body is not a chat completion.
    """
    if not isinstance(data, dict):
        raise UpstreamError("malformed chat completion")
    choices = data.get("choices") or []
    if not isinstance(choices, list):
        raise UpstreamError("malformed chat completion")
    if not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        raise UpstreamError("malformed chat completion")
    message = first.get("message") or {}
    if not isinstance(message, dict):
        raise UpstreamError("malformed chat completion")
    content = message.get("content")
    if content is not None and not isinstance(content, str):
        raise UpstreamError("malformed chat completion")
    return content


class DeepSeekChatEngine:
    """OpenAI-compatible chat completion client (DeepSeek by default)."""

    def __init__(
        self,
        *,
        api_key: str | None,
        base_url: str | None = None,
        model: str = "deepseek-chat",
        temperature: float = 0.7,
        max_tokens: int = 2000,
        timeout_s: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = HttpClientFactory.client(
            base_url=base_url or DEFAULT_BASE_URL,
            headers=headers,
            read_timeout=timeout_s,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def complete(self, messages: Sequence[ChatMessage], context: str | None = None) -> str:
        body = {
            "model": self.model,
            "messages": [{"role": "system", "content": system_message(context)}]
            + [m.model_dump() for m in messages],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        try:
            r = await self._client.post("/chat/completions", json=body)
            r.raise_for_status()
            data = r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamError(f"chat completion failed: {e}") from e

        content = completion_content(data)
        if not content:
            logger.info("chat completion returned no content; using fallback reply")
            return FALLBACK_REPLY
        return content
