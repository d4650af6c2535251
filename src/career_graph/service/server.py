from __future__ import annotations

import asyncio
import logging
import os

import uvicorn

from career_graph.chat.llm import DeepSeekChatEngine
from career_graph.knowledge_graph.neo4j_store import Neo4jConfig, Neo4jGraphStore
from career_graph.settings import CareerGraphSettings, settings

from .app import create_app

logger = logging.getLogger(__name__)


def neo4j_config(cfg: CareerGraphSettings = settings) -> Neo4jConfig:
    # Prefer settings (pydantic) but allow plain NEO4J_* env vars for quick deploy.
    uri = cfg.neo4j_uri or os.getenv("NEO4J_URI") or "bolt://localhost:7687"
    user = cfg.neo4j_user or os.getenv("NEO4J_USER") or "neo4j"
    password = cfg.neo4j_password or os.getenv("NEO4J_PASSWORD") or ""
    database = cfg.neo4j_database or os.getenv("NEO4J_DATABASE") or "neo4j"
    return Neo4jConfig(
        uri=uri,
        user=user,
        password=password,
        database=database,
        query_timeout_s=cfg.query_timeout_s,
    )


def chat_engine(cfg: CareerGraphSettings = settings) -> DeepSeekChatEngine:
    api_key = cfg.llm_api_key or os.getenv("DEEPSEEK_API_KEY")
    if not api_key:
        logger.warning("no LLM api key configured; chat requests will fail upstream")
    return DeepSeekChatEngine(
        api_key=api_key,
        base_url=cfg.llm_base_url or os.getenv("DEEPSEEK_BASE_URL"),
        model=cfg.llm_model,
        temperature=cfg.llm_temperature,
        max_tokens=cfg.llm_max_tokens,
        timeout_s=cfg.llm_timeout_s,
    )


async def _main() -> None:
    neo = neo4j_config()
    store = await Neo4jGraphStore.connect(neo)
    engine = chat_engine()
    app = create_app(store, engine)
    logger.info("neo4j: %s (database %s)", neo.uri, neo.database)

    config = uvicorn.Config(
        app,
        host=settings.bind_host,
        port=settings.bind_port,
        log_level=(settings.log_level or "info").lower(),
        loop="uvloop",
        http="httptools",
    )
    server = uvicorn.Server(config)

    try:
        await server.serve()
    finally:
        await engine.aclose()
        await store.close()


def main() -> None:
    asyncio.run(_main())


if __name__ == "__main__":
    main()
