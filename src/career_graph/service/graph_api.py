from __future__ import annotations

from fastapi import APIRouter

from career_graph.knowledge_graph.assembler import GraphAssembler

from .envelope import ok


def build_graph_router(assembler: GraphAssembler) -> APIRouter:
    r = APIRouter(prefix="/api/graph", tags=["graph"])

    @r.get("/student/{student_id}")
    async def student_graph(student_id: str):
        graph = await assembler.student_graph(student_id)
        return ok(graph.to_dict())

    # `limit` stays a string so that junk input falls back to the default
    # instead of failing validation.
    @r.get("/full")
    async def full_graph(limit: str | None = None):
        graph = await assembler.full_graph(limit)
        return ok(graph.to_dict())

    @r.get("/career/{career_id}")
    async def career_subgraph(career_id: str):
        graph = await assembler.career_subgraph(career_id)
        return ok(graph.to_dict())

    return r
