from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class GraphNode:
    """A renderable node.

    `id` is namespaced as `{category}-{natural key}` and unique within one graph.
    """

    id: str
    label: str
    category: str
    properties: dict[str, Any] = field(default_factory=dict)
    color: str = ""
    size: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "type": self.category,
            "properties": dict(self.properties),
            "color": self.color,
            "size": self.size,
        }


@dataclass(frozen=True, slots=True)
class GraphEdge:
    """A directed edge between two nodes of the same graph."""

    id: str
    source: str
    target: str
    relation_type: str
    label: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "type": self.relation_type,
        }
        if self.label is not None:
            out["label"] = self.label
        return out


@dataclass(frozen=True, slots=True)
class RelationTriple:
    """A `(source, target, relation_type)` link between two namespaced node ids."""

    source: str
    target: str
    relation_type: str


@dataclass(slots=True)
class KnowledgeGraph:
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    def node_ids(self) -> set[str]:
        return {n.id for n in self.nodes}

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }
