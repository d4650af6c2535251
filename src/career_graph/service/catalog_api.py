from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel, Field

from career_graph.knowledge_graph.query_engine import CareerQueryEngine
from career_graph.knowledge_graph.students import StudentRegistry
from career_graph.reco.recommender import Recommender

from .envelope import ok


class PersonalitySubmitIn(BaseModel):
    # Presence is checked by the registry so missing fields map to a 400.
    code: str | None = None
    scores: dict[str, float] | None = None
    student_id: str | None = Field(default=None, alias="studentId")

    model_config = {"populate_by_name": True}


class ProgressIn(BaseModel):
    completed_courses: list[str] = Field(default_factory=list, alias="completedCourses")
    target_careers: list[str] = Field(default_factory=list, alias="targetCareers")

    model_config = {"populate_by_name": True}


def build_personality_router(queries: CareerQueryEngine, students: StudentRegistry) -> APIRouter:
    r = APIRouter(tags=["personality"])

    @r.post("/api/personality/submit")
    async def submit(payload: PersonalitySubmitIn):
        return ok(await students.submit_personality(payload.code, payload.scores, payload.student_id))

    @r.get("/api/personality/types")
    async def personality_types():
        return ok(await queries.personality_types())

    @r.get("/api/personality/types/{code}")
    async def personality_type(code: str):
        return ok(await queries.personality_type(code))

    @r.get("/api/students/{student_id}")
    async def get_student(student_id: str):
        return ok(await students.get_student(student_id))

    @r.put("/api/students/{student_id}/progress")
    async def update_progress(student_id: str, payload: ProgressIn):
        return ok(await students.update_progress(student_id, payload.completed_courses, payload.target_careers))

    return r


def build_career_router(queries: CareerQueryEngine, recommender: Recommender) -> APIRouter:
    r = APIRouter(prefix="/api/careers", tags=["careers"])

    @r.get("")
    async def careers():
        return ok(await queries.careers())

    @r.get("/recommend/{code}")
    async def recommend(code: str):
        return ok(await recommender.recommend_careers_for_personality(code))

    @r.get("/{career_id}")
    async def career(career_id: str):
        return ok(await queries.career(career_id))

    return r


def build_learning_path_router(queries: CareerQueryEngine, recommender: Recommender) -> APIRouter:
    r = APIRouter(prefix="/api/learning-paths", tags=["learning-paths"])

    @r.get("/career/{career_id}")
    async def paths_for_career(career_id: str):
        return ok(await queries.learning_paths_for_career(career_id))

    @r.get("/recommend/{student_id}")
    async def recommend(student_id: str):
        recs = await recommender.recommend_learning_paths(student_id)
        return ok([x.to_dict() for x in recs])

    @r.get("/{path_id}")
    async def learning_path(path_id: str):
        return ok(await queries.learning_path(path_id))

    return r
