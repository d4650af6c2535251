"""Static lookup tables for the entity categories rendered in a graph.

Every category carries its styling, the natural-key field used to namespace
node ids, the field used as display label and the allowlist of record fields
copied into node properties.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class NodeStyle:
    color: str
    size: int


@dataclass(frozen=True, slots=True)
class CategoryInfo:
    style: NodeStyle
    key_field: str
    label_field: str
    fields: tuple[str, ...]


class EntityCategory(str, Enum):
    PERSONALITY = "personality"
    CAREER = "career"
    SKILL = "skill"
    COURSE = "course"
    STUDENT = "student"

    @property
    def info(self) -> CategoryInfo:
        return _CATEGORIES[self]

    @property
    def style(self) -> NodeStyle:
        return _CATEGORIES[self].style

    @property
    def key_field(self) -> str:
        return _CATEGORIES[self].key_field

    def natural_key(self, record: Mapping[str, Any]) -> str | None:
        """Return the record's natural key, or None when it cannot be namespaced."""
        value = record.get(self.key_field)
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    def node_id(self, key: str) -> str:
        return f"{self.value}-{key}"

    def properties(self, record: Mapping[str, Any]) -> dict[str, Any]:
        return {f: record[f] for f in _CATEGORIES[self].fields if record.get(f) is not None}

    def label(self, record: Mapping[str, Any]) -> str:
        value = record.get(_CATEGORIES[self].label_field)
        return str(value) if value is not None else ""


# Size of the centre node in a career subgraph.
CENTER_NODE_SIZE = 25

_CATEGORIES: dict[EntityCategory, CategoryInfo] = {
    EntityCategory.PERSONALITY: CategoryInfo(
        style=NodeStyle(color="#8B5CF6", size=20),
        key_field="code",
        label_field="code",
        fields=("code", "name", "nickname", "description", "category"),
    ),
    EntityCategory.CAREER: CategoryInfo(
        style=NodeStyle(color="#3B82F6", size=18),
        key_field="id",
        label_field="name",
        fields=(
            "id",
            "name",
            "description",
            "icon",
            "category",
            "salaryRange",
            "demandLevel",
            "growthPotential",
        ),
    ),
    EntityCategory.SKILL: CategoryInfo(
        style=NodeStyle(color="#10B981", size=12),
        key_field="id",
        label_field="name",
        fields=("id", "name", "category", "level", "description"),
    ),
    EntityCategory.COURSE: CategoryInfo(
        style=NodeStyle(color="#F59E0B", size=14),
        key_field="id",
        label_field="name",
        fields=("id", "name", "description", "provider", "duration", "difficulty", "rating", "url"),
    ),
    EntityCategory.STUDENT: CategoryInfo(
        style=NodeStyle(color="#EF4444", size=22),
        key_field="id",
        label_field="id",
        fields=("id", "personalityCode"),
    ),
}


def cypher_projection(category: EntityCategory, var: str, **extra: str) -> str:
    """Map projection of the allowlisted fields, e.g. `c {.id, .name}`.

    `extra` adds computed entries: `skills="skills"` -> `..., skills: skills`.
    """
    items = ["." + f for f in category.info.fields]
    items += [f"{k}: {v}" for k, v in extra.items()]
    return f"{var} {{{', '.join(items)}}}"


PERSONALITY_CODES: frozenset[str] = frozenset(
    {
        "INTJ", "INTP", "ENTJ", "ENTP",
        "INFJ", "INFP", "ENFJ", "ENFP",
        "ISTJ", "ISFJ", "ESTJ", "ESFJ",
        "ISTP", "ISFP", "ESTP", "ESFP",
    }
)

SCORE_AXES: tuple[str, ...] = ("E", "I", "S", "N", "T", "F", "J", "P")
