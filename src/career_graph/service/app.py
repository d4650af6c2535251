from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from career_graph import __version__
from career_graph.chat.llm import ChatEngine
from career_graph.chat.service import ChatService
from career_graph.knowledge_graph.assembler import GraphAssembler
from career_graph.knowledge_graph.query_engine import CareerQueryEngine
from career_graph.knowledge_graph.store import GraphStore
from career_graph.knowledge_graph.students import StudentRegistry
from career_graph.reco.recommender import Recommender
from career_graph.settings import settings

from .catalog_api import build_career_router, build_learning_path_router, build_personality_router
from .chat_api import build_chat_router
from .envelope import install_error_handlers
from .graph_api import build_graph_router


def create_app(
    store: GraphStore,
    engine: ChatEngine,
    *,
    full_graph_limit: int | None = None,
    full_graph_max_limit: int | None = None,
) -> FastAPI:
    app = FastAPI(title="career-graph - AI Career Advisor", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)

    # shared components; the store is owned by the caller
    queries = CareerQueryEngine(store)
    students = StudentRegistry(store)
    recommender = Recommender(store)
    assembler = GraphAssembler(
        store,
        default_limit=full_graph_limit or settings.full_graph_limit,
        max_limit=full_graph_max_limit or settings.full_graph_max_limit,
    )
    chat = ChatService(store, engine)

    @app.get("/api/health")
    async def health():
        if await store.ping():
            return {"status": "ok", "neo4j": "connected"}
        return JSONResponse(status_code=503, content={"status": "error", "neo4j": "disconnected"})

    app.include_router(build_personality_router(queries, students))
    app.include_router(build_career_router(queries, recommender))
    app.include_router(build_learning_path_router(queries, recommender))
    app.include_router(build_graph_router(assembler))
    app.include_router(build_chat_router(chat))

    return app
