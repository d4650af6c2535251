from __future__ import annotations

from typing import Any, Protocol


class GraphStore(Protocol):
    """Abstraction for the backing graph database.

    Every call acquires its own session and releases it before returning.
    """

    async def ensure_schema(self) -> None: ...

    async def run_query(
        self, cypher: str, params: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]: ...

    async def run_single_query(
        self, cypher: str, params: dict[str, Any] | None = None
    ) -> dict[str, Any] | None: ...

    async def ping(self) -> bool: ...

    async def close(self) -> None: ...
