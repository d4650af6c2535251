from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from career_graph.errors import NotFoundError, ValidationError

from .catalog import PERSONALITY_CODES, SCORE_AXES
from .store import GraphStore

logger = logging.getLogger(__name__)

_STUDENT = (
    "st {.id, .personalityCode, .personalityScores, .completedCourses, "
    ".targetCareers, .createdAt, .updatedAt}"
)

SUBMIT_CYPHER = f"""
MERGE (st:Student {{id: $id}})
ON CREATE SET st.createdAt = $now, st.completedCourses = [], st.targetCareers = []
SET st.personalityCode = $code,
    st.personalityScores = $scores,
    st.updatedAt = $now
WITH st
OPTIONAL MATCH (st)-[old:HAS_PERSONALITY]->(:PersonalityType)
DELETE old
WITH DISTINCT st
OPTIONAL MATCH (p:PersonalityType {{code: $code}})
FOREACH (_ IN CASE WHEN p IS NULL THEN [] ELSE [1] END | MERGE (st)-[:HAS_PERSONALITY]->(p))
RETURN {_STUDENT} AS student, p.name AS personalityName
"""

GET_CYPHER = f"""
MATCH (st:Student {{id: $id}})
OPTIONAL MATCH (st)-[:HAS_PERSONALITY]->(p:PersonalityType)
RETURN {_STUDENT} AS student, p.name AS personalityName
"""

PROGRESS_CYPHER = f"""
MATCH (st:Student {{id: $id}})
SET st.completedCourses = $completed,
    st.targetCareers = $targets,
    st.updatedAt = $now
WITH st
OPTIONAL MATCH (st)-[:HAS_PERSONALITY]->(p:PersonalityType)
RETURN {_STUDENT} AS student, p.name AS personalityName
"""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _unique(ids: Iterable[str] | None) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for x in ids or []:
        x = str(x).strip()
        if x and x not in seen:
            seen.add(x)
            out.append(x)
    return out


def normalize_code(code: str | None) -> str:
    if not code or not str(code).strip():
        raise ValidationError("personality code is required")
    norm = str(code).strip().upper()
    if norm not in PERSONALITY_CODES:
        raise ValidationError(f"unknown personality code {code!r}")
    return norm


def normalize_scores(scores: Mapping[str, Any] | None) -> dict[str, float]:
    if not scores:
        raise ValidationError("personality scores are required")
    missing = [a for a in SCORE_AXES if scores.get(a) is None]
    if missing:
        raise ValidationError(f"personality scores missing axes: {', '.join(missing)}")
    try:
        return {a: float(scores[a]) for a in SCORE_AXES}
    except (TypeError, ValueError) as e:
        raise ValidationError(f"personality scores must be numeric: {e}") from e


def _to_profile(row: Mapping[str, Any]) -> dict[str, Any]:
    student = dict(row["student"])
    raw = student.get("personalityScores")
    if isinstance(raw, str):
        try:
            student["personalityScores"] = json.loads(raw)
        except ValueError:
            logger.warning("student %s has unreadable scores", student.get("id"))
            student["personalityScores"] = None
    student["completedCourses"] = list(student.get("completedCourses") or [])
    student["targetCareers"] = list(student.get("targetCareers") or [])
    student["personalityName"] = row.get("personalityName")
    return student


class StudentRegistry:
    """Creates and updates student profiles.

    Students are created on first submission and never deleted here.
    """

    def __init__(self, store: GraphStore):
        self.store = store

    async def submit_personality(
        self,
        code: str | None,
        scores: Mapping[str, Any] | None,
        student_id: str | None = None,
    ) -> dict[str, Any]:
        norm = normalize_code(code)
        axes = normalize_scores(scores)
        sid = (student_id or "").strip() or str(uuid.uuid4())

        row = await self.store.run_single_query(
            SUBMIT_CYPHER,
            {"id": sid, "code": norm, "scores": json.dumps(axes), "now": _now()},
        )
        logger.info("stored personality %s for student %s", norm, sid)
        return {
            "studentId": sid,
            "personalityCode": norm,
            "student": _to_profile(row) if row else None,
        }

    async def get_student(self, student_id: str) -> dict[str, Any]:
        row = await self.store.run_single_query(GET_CYPHER, {"id": student_id})
        if not row:
            raise NotFoundError(f"student {student_id!r} not found")
        return _to_profile(row)

    async def update_progress(
        self,
        student_id: str,
        completed_courses: Iterable[str] | None,
        target_careers: Iterable[str] | None,
    ) -> dict[str, Any]:
        row = await self.store.run_single_query(
            PROGRESS_CYPHER,
            {
                "id": student_id,
                "completed": _unique(completed_courses),
                "targets": _unique(target_careers),
                "now": _now(),
            },
        )
        if not row:
            raise NotFoundError(f"student {student_id!r} not found")
        return _to_profile(row)
