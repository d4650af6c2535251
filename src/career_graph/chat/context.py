"""Builds the context block prepended to a chat request.

Two parts: a profile summary for a known student, and topical facts pulled
from the graph when the message mentions careers, courses or skills. Intent
detection is plain substring matching against fixed keyword sets.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Sequence, TypeVar

from career_graph.knowledge_graph.store import GraphStore

logger = logging.getLogger(__name__)

HISTORY_WINDOW = 10

CAREER_TRIGGERS: tuple[str, ...] = ("职业", "工作", "岗位")
COURSE_TRIGGERS: tuple[str, ...] = ("课程", "推荐")
SKILL_TRIGGERS: tuple[str, ...] = ("技能", "能力")

PROFILE_CYPHER = """
MATCH (st:Student {id: $studentId})
OPTIONAL MATCH (st)-[:HAS_PERSONALITY]->(p:PersonalityType)
OPTIONAL MATCH (co:Course) WHERE co.id IN coalesce(st.completedCourses, [])
OPTIONAL MATCH (c:Career) WHERE c.id IN coalesce(st.targetCareers, [])
RETURN p {.code, .name} AS personality,
       collect(DISTINCT co.name) AS completedCourses,
       collect(DISTINCT c.name) AS targetCareers
"""

CAREERS_CYPHER = "MATCH (c:Career) RETURN c {.name, .description} AS career LIMIT 5"
COURSES_CYPHER = (
    "MATCH (c:Course) RETURN c {.name, .provider, .description} AS course "
    "ORDER BY c.rating DESC LIMIT 5"
)
SKILLS_CYPHER = "MATCH (s:Skill) RETURN s {.name, .category} AS skill LIMIT 10"

T = TypeVar("T")


@dataclass(frozen=True)
class ChatContext:
    profile: str = ""
    topical: str = ""

    @property
    def text(self) -> str:
        return self.profile + self.topical

    @property
    def has_profile(self) -> bool:
        return bool(self.profile)

    @property
    def used_graph_data(self) -> bool:
        return bool(self.topical)


def mentions(message: str, triggers: Sequence[str]) -> bool:
    return any(t in message for t in triggers)


def window_history(history: Sequence[T] | None, message: T, *, size: int = HISTORY_WINDOW) -> list[T]:
    """The last `size` history entries followed by the new message."""
    prior = list(history or [])
    return (prior[-size:] if size > 0 else []) + [message]


def render_profile(row: dict[str, Any]) -> str:
    personality = row.get("personality") or {}
    completed = [c for c in row.get("completedCourses") or [] if c]
    targets = [c for c in row.get("targetCareers") or [] if c]
    return (
        f"\n学生性格类型: {personality.get('code') or '未测试'} ({personality.get('name') or ''})\n"
        f"已完成课程: {', '.join(completed) if completed else '无'}\n"
        f"目标职业: {', '.join(targets) if targets else '未设置'}\n"
    )


def _block(title: str, lines: list[str]) -> str:
    if not lines:
        return ""
    return f"\n{title}\n" + "".join(f"- {line}\n" for line in lines)


class ContextBuilder:
    def __init__(self, store: GraphStore):
        self.store = store

    async def profile_context(self, student_id: str | None) -> str:
        if not student_id:
            return ""
        row = await self.store.run_single_query(PROFILE_CYPHER, {"studentId": student_id})
        if not row:
            logger.debug("no profile for student %s", student_id)
            return ""
        return render_profile(row)

    async def topical_context(self, message: str) -> str:
        # order matters: career, course, skill
        sections: list[tuple[Sequence[str], Callable[[], Awaitable[str]]]] = [
            (CAREER_TRIGGERS, self._careers_block),
            (COURSE_TRIGGERS, self._courses_block),
            (SKILL_TRIGGERS, self._skills_block),
        ]
        out = ""
        for triggers, fetch in sections:
            if mentions(message, triggers):
                out += await fetch()
        return out

    async def build(self, message: str, student_id: str | None = None) -> ChatContext:
        return ChatContext(
            profile=await self.profile_context(student_id),
            topical=await self.topical_context(message),
        )

    async def _careers_block(self) -> str:
        rows = (await self.store.run_query(CAREERS_CYPHER))[:5]
        lines = [f"{r['career'].get('name')}: {r['career'].get('description') or ''}" for r in rows if r.get("career")]
        return _block("可推荐的 AI 职业方向：", lines)

    async def _courses_block(self) -> str:
        rows = (await self.store.run_query(COURSES_CYPHER))[:5]
        lines = [
            f"{r['course'].get('name')} ({r['course'].get('provider') or ''}): {r['course'].get('description') or ''}"
            for r in rows
            if r.get("course")
        ]
        return _block("推荐课程：", lines)

    async def _skills_block(self) -> str:
        rows = (await self.store.run_query(SKILLS_CYPHER))[:10]
        lines = [f"{r['skill'].get('name')} ({r['skill'].get('category') or ''})" for r in rows if r.get("skill")]
        return _block("AI 领域关键技能：", lines)
