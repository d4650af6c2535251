from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from neo4j import AsyncGraphDatabase, Query
from neo4j.exceptions import DriverError, Neo4jError

from career_graph.errors import UpstreamError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Neo4jConfig:
    uri: str
    user: str
    password: str
    database: str = "neo4j"
    # per-transaction timeout enforced by the server
    query_timeout_s: float | None = 30.0


class Neo4jGraphStore:
    """Neo4j-backed graph store.

    One async driver per process; one session per query.

    Dependency: neo4j>=5.
    """

    def __init__(self, cfg: Neo4jConfig):
        self.cfg = cfg
        # Driver is safe to share across tasks; sessions are not.
        self._driver = AsyncGraphDatabase.driver(cfg.uri, auth=(cfg.user, cfg.password))

    @classmethod
    async def connect(cls, cfg: Neo4jConfig) -> "Neo4jGraphStore":
        store = cls(cfg)
        try:
            await store._driver.verify_connectivity()
        except (Neo4jError, DriverError, OSError) as e:
            await store.close()
            raise UpstreamError(f"cannot reach neo4j at {cfg.uri}") from e
        return store

    async def close(self) -> None:
        await self._driver.close()

    async def ensure_schema(self) -> None:
        stmts = [
            "CREATE CONSTRAINT personality_code IF NOT EXISTS FOR (n:PersonalityType) REQUIRE n.code IS UNIQUE",
            "CREATE CONSTRAINT career_id IF NOT EXISTS FOR (n:Career) REQUIRE n.id IS UNIQUE",
            "CREATE CONSTRAINT skill_id IF NOT EXISTS FOR (n:Skill) REQUIRE n.id IS UNIQUE",
            "CREATE CONSTRAINT course_id IF NOT EXISTS FOR (n:Course) REQUIRE n.id IS UNIQUE",
            "CREATE CONSTRAINT student_id IF NOT EXISTS FOR (n:Student) REQUIRE n.id IS UNIQUE",
            "CREATE CONSTRAINT learning_path_id IF NOT EXISTS FOR (n:LearningPath) REQUIRE n.id IS UNIQUE",
        ]
        for q in stmts:
            await self.run_query(q)

    async def run_query(self, cypher: str, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        query = Query(cypher, timeout=self.cfg.query_timeout_s)
        try:
            async with self._driver.session(database=self.cfg.database) as s:
                res = await s.run(query, params or {})
                return await res.data()
        except (Neo4jError, DriverError) as e:
            raise UpstreamError(f"graph query failed: {e}") from e

    async def run_single_query(
        self, cypher: str, params: dict[str, Any] | None = None
    ) -> dict[str, Any] | None:
        rows = await self.run_query(cypher, params)
        return rows[0] if rows else None

    async def ping(self) -> bool:
        try:
            await self.run_query("RETURN 1 AS ok")
        except UpstreamError as e:
            logger.warning("neo4j ping failed: %s", e)
            return False
        return True
