from __future__ import annotations

from typing import Any, Sequence

import pytest

from career_graph.chat.llm import ChatMessage


class FakeGraphStore:
    """In-memory GraphStore that replays canned results in call order.

    Each queued item answers one `run_query` / `run_single_query` call. An
    exception instance is raised instead of returned.
    """

    def __init__(self, *results: Any, healthy: bool = True):
        self.results = list(results)
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.healthy = healthy
        self.schema_ensured = False
        self.closed = False

    def _next(self, cypher: str, params: dict[str, Any] | None) -> Any:
        self.calls.append((cypher, dict(params or {})))
        if not self.results:
            return None
        out = self.results.pop(0)
        if isinstance(out, Exception):
            raise out
        return out

    async def run_query(self, cypher: str, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        out = self._next(cypher, params)
        return list(out or [])

    async def run_single_query(self, cypher: str, params: dict[str, Any] | None = None) -> dict[str, Any] | None:
        out = self._next(cypher, params)
        if isinstance(out, list):
            return out[0] if out else None
        return out

    async def ensure_schema(self) -> None:
        self.schema_ensured = True

    async def ping(self) -> bool:
        return self.healthy

    async def close(self) -> None:
        self.closed = True


class FakeChatEngine:
    def __init__(self, reply: str = "好的"):
        self.reply = reply
        self.calls: list[tuple[list[ChatMessage], str | None]] = []

    async def complete(self, messages: Sequence[ChatMessage], context: str | None = None) -> str:
        self.calls.append((list(messages), context))
        return self.reply


@pytest.fixture
def engine() -> FakeChatEngine:
    return FakeChatEngine()


def career(cid: str, growth: float, **extra: Any) -> dict[str, Any]:
    return {"id": cid, "name": cid.title(), "growthPotential": growth, **extra}


def course(cid: str, **extra: Any) -> dict[str, Any]:
    return {"id": cid, "name": f"Course {cid}", **extra}
