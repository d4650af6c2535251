"""Turns query rows into renderable knowledge graphs.

Each view has a pure `assemble_*` function operating on the rows returned by
the graph store, and an async method on `GraphAssembler` that issues the
Cypher and feeds the rows through it.

Conventions shared by all views:
- entities are deduplicated by natural key before a node is created;
  a record without a natural key is skipped,
- an edge is only emitted when both endpoints are nodes of the same graph,
- edge ids are `edge-{context}-{ordinal}` with a zero-based ordinal taken from
  the loop that synthesizes them.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from career_graph.errors import NotFoundError

from .catalog import CENTER_NODE_SIZE, EntityCategory, cypher_projection
from .models import GraphEdge, GraphNode, KnowledgeGraph, RelationTriple
from .store import GraphStore

logger = logging.getLogger(__name__)

DEFAULT_FULL_GRAPH_LIMIT = 50
MAX_FULL_GRAPH_LIMIT = 1000

STUDENT_LABEL = "我"

P = EntityCategory.PERSONALITY
C = EntityCategory.CAREER
S = EntityCategory.SKILL
CO = EntityCategory.COURSE
ST = EntityCategory.STUDENT

# relation type -> (source category, target category)
RELATION_ENDPOINTS: dict[str, tuple[EntityCategory, EntityCategory]] = {
    "SUITS": (C, P),
    "REQUIRES": (C, S),
    "TEACHES": (CO, S),
}

STUDENT_GRAPH_CYPHER = f"""
MATCH (st:Student {{id: $studentId}})
OPTIONAL MATCH (st)-[:HAS_PERSONALITY]->(p:PersonalityType)
OPTIONAL MATCH (c:Career)-[:SUITS]->(p)
OPTIONAL MATCH (c)-[:REQUIRES]->(s:Skill)
OPTIONAL MATCH (co:Course)-[:TEACHES]->(s)
WITH st, p,
     collect(DISTINCT c) AS careers,
     collect(DISTINCT s) AS skills,
     collect(DISTINCT co) AS courses
RETURN {cypher_projection(ST, "st")} AS student,
       {cypher_projection(P, "p")} AS personality,
       [x IN careers | {cypher_projection(C, "x")}] AS careers,
       [x IN skills | {cypher_projection(S, "x")}] AS skills,
       [x IN courses | {cypher_projection(CO, "x")}] AS courses
"""

FULL_GRAPH_CYPHER = f"""
OPTIONAL MATCH (p:PersonalityType)
WITH p ORDER BY p.code
WITH collect({cypher_projection(P, "p")}) AS personalities
OPTIONAL MATCH (c:Career)
WITH personalities, c ORDER BY c.id
WITH personalities, collect({cypher_projection(C, "c")}) AS careers
OPTIONAL MATCH (s:Skill)
WITH personalities, careers, s ORDER BY s.id
WITH personalities, careers, collect({cypher_projection(S, "s")})[0..$limit] AS skills
OPTIONAL MATCH (co:Course)
WITH personalities, careers, skills, co ORDER BY co.id
RETURN personalities, careers, skills,
       collect({cypher_projection(CO, "co")})[0..$limit] AS courses
"""

RELATIONS_CYPHER = """
MATCH (c:Career)-[:SUITS]->(p:PersonalityType)
RETURN c.id AS source, p.code AS target, 'SUITS' AS type
UNION
MATCH (c:Career)-[:REQUIRES]->(s:Skill)
RETURN c.id AS source, s.id AS target, 'REQUIRES' AS type
UNION
MATCH (co:Course)-[:TEACHES]->(s:Skill)
RETURN co.id AS source, s.id AS target, 'TEACHES' AS type
"""

CAREER_SUBGRAPH_CYPHER = f"""
MATCH (c:Career {{id: $careerId}})
OPTIONAL MATCH (c)-[:SUITS]->(p:PersonalityType)
OPTIONAL MATCH (c)-[:REQUIRES]->(s:Skill)
OPTIONAL MATCH (co:Course)-[:TEACHES]->(s)
RETURN {cypher_projection(C, "c")} AS career,
       collect(DISTINCT {cypher_projection(P, "p")}) AS personalities,
       collect(DISTINCT {cypher_projection(S, "s")}) AS skills,
       collect(DISTINCT {cypher_projection(CO, "co")}) AS courses
"""


def coerce_limit(
    value: Any, default: int = DEFAULT_FULL_GRAPH_LIMIT, maximum: int = MAX_FULL_GRAPH_LIMIT
) -> int:
    """Positive integer limit capped at `maximum`; anything else falls back to `default`."""
    if value is None or isinstance(value, bool):
        return default
    try:
        n = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    if n <= 0:
        return default
    return min(n, maximum)


def unique_records(
    category: EntityCategory, records: Iterable[Mapping[str, Any] | None] | None
) -> list[tuple[str, Mapping[str, Any]]]:
    """(natural key, record) pairs in first-seen order, one per key."""
    seen: set[str] = set()
    out: list[tuple[str, Mapping[str, Any]]] = []
    for rec in records or []:
        if not rec:
            continue
        key = category.natural_key(rec)
        if key is None or key in seen:
            continue
        seen.add(key)
        out.append((key, rec))
    return out


class GraphBuilder:
    """Accumulates nodes and edges while enforcing id uniqueness and endpoint presence."""

    def __init__(self) -> None:
        self._nodes: dict[str, GraphNode] = {}
        self._edges: dict[str, GraphEdge] = {}

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._nodes

    def add_node(
        self,
        category: EntityCategory,
        key: str,
        record: Mapping[str, Any],
        *,
        label: str | None = None,
        size: int | None = None,
    ) -> str:
        node_id = category.node_id(key)
        if node_id not in self._nodes:
            style = category.style
            self._nodes[node_id] = GraphNode(
                id=node_id,
                label=label if label is not None else category.label(record),
                category=category.value,
                properties=category.properties(record),
                color=style.color,
                size=size if size is not None else style.size,
            )
        return node_id

    def add_edge(
        self, edge_id: str, source: str, target: str, relation_type: str, label: str | None = None
    ) -> bool:
        if source not in self._nodes or target not in self._nodes:
            return False
        if edge_id in self._edges:
            return False
        self._edges[edge_id] = GraphEdge(
            id=edge_id, source=source, target=target, relation_type=relation_type, label=label
        )
        return True

    def build(self) -> KnowledgeGraph:
        return KnowledgeGraph(nodes=list(self._nodes.values()), edges=list(self._edges.values()))


def assemble_student_graph(student_id: str, row: Mapping[str, Any] | None) -> KnowledgeGraph:
    student = (row or {}).get("student")
    if not student:
        raise NotFoundError(f"student {student_id!r} not found")

    g = GraphBuilder()
    student_node = g.add_node(ST, ST.natural_key(student) or student_id, student, label=STUDENT_LABEL)

    personality_node: str | None = None
    personality = row.get("personality")
    key = P.natural_key(personality) if personality else None
    if key is not None:
        personality_node = g.add_node(P, key, personality)
        g.add_edge("edge-student-personality-0", student_node, personality_node, "HAS_PERSONALITY", "性格类型")

    for i, (key, career) in enumerate(unique_records(C, row.get("careers"))):
        career_node = g.add_node(C, key, career)
        if personality_node is not None:
            g.add_edge(f"edge-personality-career-{i}", personality_node, career_node, "SUITS", "适合")

    # skills and courses are informational leaves in this view
    for key, skill in unique_records(S, row.get("skills")):
        g.add_node(S, key, skill)
    for key, course in unique_records(CO, row.get("courses")):
        g.add_node(CO, key, course)

    return g.build()


def relation_triple(row: Mapping[str, Any]) -> RelationTriple | None:
    rel_type = row["type"]
    src_cat, dst_cat = RELATION_ENDPOINTS[rel_type]
    src, dst = row.get("source"), row.get("target")
    if src is None or dst is None or str(src) == "" or str(dst) == "":
        return None
    return RelationTriple(src_cat.node_id(str(src)), dst_cat.node_id(str(dst)), rel_type)


def assemble_full_graph(
    row: Mapping[str, Any] | None,
    relations: Iterable[Mapping[str, Any]],
    limit: int = DEFAULT_FULL_GRAPH_LIMIT,
) -> KnowledgeGraph:
    """Overview graph.

    Skills and courses are bounded to the first `limit` records. Relations are
    bounded independently, so an edge pointing at a truncated entity is dropped.
    """
    if not row:
        return KnowledgeGraph()

    g = GraphBuilder()
    for key, rec in unique_records(P, row.get("personalities")):
        g.add_node(P, key, rec)
    for key, rec in unique_records(C, row.get("careers")):
        g.add_node(C, key, rec)
    for key, rec in unique_records(S, row.get("skills"))[:limit]:
        g.add_node(S, key, rec)
    for key, rec in unique_records(CO, row.get("courses"))[:limit]:
        g.add_node(CO, key, rec)

    for i, rel in enumerate(relations):
        triple = relation_triple(rel)
        if triple is None:
            continue
        g.add_edge(f"edge-{triple.relation_type.lower()}-{i}", triple.source, triple.target, triple.relation_type)

    return g.build()


def assemble_career_subgraph(career_id: str, row: Mapping[str, Any] | None) -> KnowledgeGraph:
    career = (row or {}).get("career")
    key = C.natural_key(career) if career else None
    if key is None:
        raise NotFoundError(f"career {career_id!r} not found")

    g = GraphBuilder()
    center = g.add_node(C, key, career, size=CENTER_NODE_SIZE)

    for i, (pkey, rec) in enumerate(unique_records(P, row.get("personalities"))):
        node = g.add_node(P, pkey, rec)
        g.add_edge(f"edge-career-personality-{i}", center, node, "SUITS", "适合")

    for i, (skey, rec) in enumerate(unique_records(S, row.get("skills"))):
        node = g.add_node(S, skey, rec)
        g.add_edge(f"edge-career-skill-{i}", center, node, "REQUIRES", "需要")

    for ckey, rec in unique_records(CO, row.get("courses")):
        g.add_node(CO, ckey, rec)

    return g.build()


class GraphAssembler:
    def __init__(
        self,
        store: GraphStore,
        *,
        default_limit: int = DEFAULT_FULL_GRAPH_LIMIT,
        max_limit: int = MAX_FULL_GRAPH_LIMIT,
    ):
        self.store = store
        self.max_limit = max_limit
        self.default_limit = min(default_limit, max_limit)

    async def student_graph(self, student_id: str) -> KnowledgeGraph:
        row = await self.store.run_single_query(STUDENT_GRAPH_CYPHER, {"studentId": student_id})
        graph = assemble_student_graph(student_id, row)
        logger.debug("student graph %s: %d nodes, %d edges", student_id, len(graph.nodes), len(graph.edges))
        return graph

    async def full_graph(self, limit: Any = None) -> KnowledgeGraph:
        n = coerce_limit(limit, self.default_limit, self.max_limit)
        row = await self.store.run_single_query(FULL_GRAPH_CYPHER, {"limit": n})
        if not row:
            return KnowledgeGraph()
        relations = await self.store.run_query(RELATIONS_CYPHER)
        graph = assemble_full_graph(row, relations, n)
        logger.debug(
            "full graph (limit=%d): %d nodes, %d of %d relations kept",
            n,
            len(graph.nodes),
            len(graph.edges),
            len(relations),
        )
        return graph

    async def career_subgraph(self, career_id: str) -> KnowledgeGraph:
        row = await self.store.run_single_query(CAREER_SUBGRAPH_CYPHER, {"careerId": career_id})
        return assemble_career_subgraph(career_id, row)
