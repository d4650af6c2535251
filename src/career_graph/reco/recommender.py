from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from career_graph.knowledge_graph.catalog import EntityCategory, cypher_projection
from career_graph.knowledge_graph.store import GraphStore

MAX_PATH_RECOMMENDATIONS = 3

_C = cypher_projection(EntityCategory.CAREER, "c")
_S = cypher_projection(EntityCategory.SKILL, "s")
_CO = cypher_projection(EntityCategory.COURSE, "co")

PATHS_FOR_STUDENT_CYPHER = f"""
MATCH (st:Student {{id: $studentId}})-[:HAS_PERSONALITY]->(p:PersonalityType)
MATCH (c:Career)-[:SUITS]->(p)
MATCH (lp:LearningPath)-[:TARGETS]->(c)
OPTIONAL MATCH (lp)-[inc:INCLUDES]->(co:Course)
WITH st, c, lp, co, inc ORDER BY inc.order
RETURN st.completedCourses AS completedCourses,
       lp {{.id, .name, .description, .estimatedDuration}} AS learningPath,
       {_C} AS career,
       collect({_CO}) AS courses
"""

CAREERS_FOR_PERSONALITY_CYPHER = f"""
MATCH (c:Career)-[:SUITS]->(:PersonalityType {{code: $code}})
OPTIONAL MATCH (c)-[:REQUIRES]->(s:Skill)
RETURN {_C} AS career, collect(DISTINCT {_S}) AS requiredSkills
"""


@dataclass(frozen=True)
class PathRecommendation:
    learning_path: dict[str, Any]
    target_career: dict[str, Any]
    remaining_courses: list[dict[str, Any]] = field(default_factory=list)

    @property
    def growth_potential(self) -> float:
        return growth_potential(self.target_career)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.learning_path,
            "targetCareer": self.target_career,
            "remainingCourses": self.remaining_courses,
        }


def growth_potential(career: Mapping[str, Any] | None) -> float:
    value = (career or {}).get("growthPotential")
    try:
        return float(value)
    except (TypeError, ValueError):
        return float("-inf")


def remaining_courses(
    courses: Iterable[Mapping[str, Any] | None], completed: Iterable[str] | None
) -> list[dict[str, Any]]:
    """Courses not in `completed`, keeping path order. Courses without an id are dropped."""
    done = {str(c) for c in completed or []}
    out: list[dict[str, Any]] = []
    seen: set[str] = set()
    for course in courses or []:
        if not course or course.get("id") is None:
            continue
        cid = str(course["id"])
        if cid in done or cid in seen:
            continue
        seen.add(cid)
        out.append(dict(course))
    return out


def rank_learning_paths(
    rows: Iterable[Mapping[str, Any]], *, limit: int = MAX_PATH_RECOMMENDATIONS
) -> list[PathRecommendation]:
    """Turn traversal rows into recommendations.

    Sorting is stable on target-career growth potential (descending), so ties
    keep the order the rows arrived in.
    """
    recs = [
        PathRecommendation(
            learning_path=dict(r["learningPath"]),
            target_career=dict(r.get("career") or {}),
            remaining_courses=remaining_courses(r.get("courses"), r.get("completedCourses")),
        )
        for r in rows
        if r.get("learningPath")
    ]
    recs.sort(key=lambda x: x.growth_potential, reverse=True)
    return recs[:limit]


def rank_careers(rows: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    careers = [
        {**r["career"], "requiredSkills": [s for s in r.get("requiredSkills") or [] if s]}
        for r in rows
        if r.get("career")
    ]
    careers.sort(key=growth_potential, reverse=True)
    return careers


class Recommender:
    """Personality-driven recommendations.

    A student without a personality classification gets nothing back; there
    is no fallback heuristic.
    """

    def __init__(self, store: GraphStore):
        self.store = store

    async def recommend_learning_paths(self, student_id: str) -> list[PathRecommendation]:
        rows = await self.store.run_query(PATHS_FOR_STUDENT_CYPHER, {"studentId": student_id})
        return rank_learning_paths(rows)

    async def recommend_careers_for_personality(self, code: str) -> list[dict[str, Any]]:
        rows = await self.store.run_query(
            CAREERS_FOR_PERSONALITY_CYPHER, {"code": (code or "").strip().upper()}
        )
        return rank_careers(rows)
