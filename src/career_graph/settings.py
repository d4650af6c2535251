from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CareerGraphSettings(BaseSettings):
    """Unified configuration for career-graph.

    Environment variables are prefixed with CAREER_GRAPH_.
    """

    model_config = SettingsConfigDict(env_prefix="CAREER_GRAPH_", extra="ignore")

    # --- Core ---
    log_level: str = Field(default="INFO", description="Python logging level")

    # --- HTTP ---
    bind_host: str = "0.0.0.0"
    bind_port: int = 3001
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # --- Graph DB (Neo4j) ---
    neo4j_uri: str | None = None
    neo4j_user: str | None = None
    neo4j_password: str | None = None
    neo4j_database: str | None = None
    query_timeout_s: float = Field(default=30.0, description="Server-side transaction timeout")

    # --- Conversational engine (OpenAI-compatible, DeepSeek by default) ---
    llm_api_key: str | None = None
    llm_base_url: str | None = None
    llm_model: str = "deepseek-chat"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 2000
    llm_timeout_s: float = 60.0

    # --- Graph views ---
    full_graph_limit: int = Field(default=50, description="Fallback node budget for the full graph")
    full_graph_max_limit: int = Field(default=1000, description="Upper bound for a caller-supplied limit")


settings = CareerGraphSettings()
