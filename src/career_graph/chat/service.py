from __future__ import annotations

import logging
from typing import Any, Sequence

from career_graph.errors import ValidationError
from career_graph.knowledge_graph.store import GraphStore

from .context import ContextBuilder, window_history
from .llm import ChatEngine, ChatMessage

logger = logging.getLogger(__name__)

GENERIC_SUGGESTIONS: tuple[str, ...] = (
    "我应该学习哪些 AI 技能？",
    "推荐适合我的学习路径",
    "如何成为 AI 工程师？",
    "有哪些好的深度学习课程？",
)

PERSONALITY_SUGGESTIONS: tuple[str, ...] = (
    "作为 {code} 型人格，我适合什么 AI 职业？",
    "根据我的性格推荐学习路径",
    "我应该先学什么课程？",
    "如何规划我的 AI 学习计划？",
)

STUDENT_CODE_CYPHER = """
MATCH (:Student {id: $studentId})-[:HAS_PERSONALITY]->(p:PersonalityType)
RETURN p.code AS code
"""


class ChatService:
    def __init__(self, store: GraphStore, engine: ChatEngine, context: ContextBuilder | None = None):
        self.store = store
        self.engine = engine
        self.context = context or ContextBuilder(store)

    async def chat(
        self,
        message: str | None,
        student_id: str | None = None,
        history: Sequence[ChatMessage] | None = None,
    ) -> dict[str, Any]:
        if not message or not message.strip():
            raise ValidationError("message is required")

        ctx = await self.context.build(message, student_id)
        messages = window_history(history, ChatMessage(role="user", content=message))
        logger.debug(
            "chat: %d messages, profile=%s, graph=%s", len(messages), ctx.has_profile, ctx.used_graph_data
        )
        reply = await self.engine.complete(messages, ctx.text or None)
        return {
            "message": reply,
            "context": {
                "hasStudentProfile": ctx.has_profile,
                "usedGraphData": ctx.used_graph_data,
            },
        }

    async def suggestions(self, student_id: str | None = None) -> list[str]:
        if student_id:
            row = await self.store.run_single_query(STUDENT_CODE_CYPHER, {"studentId": student_id})
            code = (row or {}).get("code")
            if code:
                return [s.format(code=code) for s in PERSONALITY_SUGGESTIONS]
        return list(GENERIC_SUGGESTIONS)
