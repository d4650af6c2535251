from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from career_graph.errors import NotFoundError

from .catalog import EntityCategory, cypher_projection
from .store import GraphStore

_P = cypher_projection(EntityCategory.PERSONALITY, "p")
_C = cypher_projection(EntityCategory.CAREER, "c")
_S = cypher_projection(EntityCategory.SKILL, "s")
_CO = cypher_projection(EntityCategory.COURSE, "co")
_CO_WITH_SKILLS = cypher_projection(EntityCategory.COURSE, "co", skills="skills")
_LP = "lp {.id, .name, .description, .estimatedDuration}"


@dataclass(slots=True)
class CareerQueryEngine:
    """Read-only lookups over the reference data.

    Records are plain dicts restricted to the allowlisted fields of each
    entity, with relation-derived lists merged in under camelCase keys.
    """

    store: GraphStore

    async def personality_type(self, code: str) -> dict[str, Any]:
        q = f"""
        MATCH (p:PersonalityType {{code: $code}})
        OPTIONAL MATCH (c:Career)-[:SUITS]->(p)
        WITH p, c ORDER BY c.growthPotential DESC
        RETURN {_P} AS personalityType, collect({_C}) AS suitableCareers
        """
        row = await self.store.run_single_query(q, {"code": code.strip().upper()})
        if not row or not row.get("personalityType"):
            raise NotFoundError(f"personality type {code!r} not found")
        return {
            "personalityType": row["personalityType"],
            "suitableCareers": row.get("suitableCareers") or [],
        }

    async def personality_types(self) -> list[dict[str, Any]]:
        q = f"MATCH (p:PersonalityType) RETURN {_P} AS personalityType ORDER BY p.code"
        rows = await self.store.run_query(q)
        return [r["personalityType"] for r in rows]

    async def career(self, career_id: str) -> dict[str, Any]:
        q = f"""
        MATCH (c:Career {{id: $careerId}})
        OPTIONAL MATCH (c)-[:REQUIRES]->(s:Skill)
        OPTIONAL MATCH (c)-[:SUITS]->(p:PersonalityType)
        OPTIONAL MATCH (lp:LearningPath)-[:TARGETS]->(c)
        RETURN {_C} AS career,
               collect(DISTINCT {_S}) AS requiredSkills,
               collect(DISTINCT p.code) AS suitablePersonalities,
               collect(DISTINCT {_LP}) AS learningPaths
        """
        row = await self.store.run_single_query(q, {"careerId": career_id})
        if not row or not row.get("career"):
            raise NotFoundError(f"career {career_id!r} not found")
        return {
            **row["career"],
            "requiredSkills": row.get("requiredSkills") or [],
            "suitablePersonalities": sorted(row.get("suitablePersonalities") or []),
            "learningPaths": row.get("learningPaths") or [],
        }

    async def careers(self) -> list[dict[str, Any]]:
        q = f"""
        MATCH (c:Career)
        OPTIONAL MATCH (c)-[:SUITS]->(p:PersonalityType)
        RETURN {_C} AS career, collect(p.code) AS suitablePersonalities
        ORDER BY c.name
        """
        rows = await self.store.run_query(q)
        return [
            {**r["career"], "suitablePersonalities": sorted(r.get("suitablePersonalities") or [])}
            for r in rows
        ]

    async def learning_paths_for_career(self, career_id: str) -> list[dict[str, Any]]:
        q = f"""
        MATCH (lp:LearningPath)-[:TARGETS]->(:Career {{id: $careerId}})
        OPTIONAL MATCH (lp)-[inc:INCLUDES]->(co:Course)
        WITH lp, co, inc ORDER BY inc.order
        RETURN {_LP} AS learningPath, collect({_CO}) AS courses
        ORDER BY lp.name
        """
        rows = await self.store.run_query(q, {"careerId": career_id})
        return [{**r["learningPath"], "courses": r.get("courses") or []} for r in rows]

    async def learning_path(self, path_id: str) -> dict[str, Any]:
        q = f"""
        MATCH (lp:LearningPath {{id: $pathId}})
        OPTIONAL MATCH (lp)-[:TARGETS]->(c:Career)
        OPTIONAL MATCH (lp)-[inc:INCLUDES]->(co:Course)
        OPTIONAL MATCH (co)-[:TEACHES]->(s:Skill)
        WITH lp, c, co, inc, collect(s.name) AS skills
        ORDER BY inc.order
        WITH lp, c, collect({_CO_WITH_SKILLS}) AS courses
        RETURN {_LP} AS learningPath, courses, {_C} AS targetCareer
        """
        row = await self.store.run_single_query(q, {"pathId": path_id})
        if not row or not row.get("learningPath"):
            raise NotFoundError(f"learning path {path_id!r} not found")
        return {
            **row["learningPath"],
            "courses": row.get("courses") or [],
            "targetCareer": row.get("targetCareer"),
        }
