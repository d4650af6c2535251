import pytest

from conftest import FakeGraphStore

from career_graph.errors import NotFoundError
from career_graph.knowledge_graph.assembler import (
    GraphAssembler,
    assemble_career_subgraph,
    assemble_full_graph,
    assemble_student_graph,
    coerce_limit,
)
from career_graph.knowledge_graph.catalog import CENTER_NODE_SIZE


def assert_well_formed(graph):
    ids = [n.id for n in graph.nodes]
    assert len(ids) == len(set(ids))
    edge_ids = [e.id for e in graph.edges]
    assert len(edge_ids) == len(set(edge_ids))
    for e in graph.edges:
        assert e.source in ids
        assert e.target in ids


def student_row(**overrides):
    row = {
        "student": {"id": "s1", "personalityCode": "INTJ"},
        "personality": {"code": "INTJ", "name": "建筑师"},
        "careers": [
            {"id": "ml-engineer", "name": "AI 算法工程师", "growthPotential": 8},
            {"id": "ai-researcher", "name": "AI 研究员", "growthPotential": 9},
        ],
        "skills": [{"id": "python", "name": "Python"}, {"id": "pytorch", "name": "PyTorch"}],
        "courses": [{"id": "python-basics", "name": "Python 编程基础"}],
    }
    row.update(overrides)
    return row


def test_student_graph_nodes_and_edges():
    g = assemble_student_graph("s1", student_row())
    assert_well_formed(g)

    by_id = {n.id: n for n in g.nodes}
    assert by_id["student-s1"].label == "我"
    assert by_id["personality-INTJ"].category == "personality"
    assert {"career-ml-engineer", "career-ai-researcher", "skill-python", "course-python-basics"} <= set(by_id)

    types = sorted(e.relation_type for e in g.edges)
    assert types == ["HAS_PERSONALITY", "SUITS", "SUITS"]
    suits = [e for e in g.edges if e.relation_type == "SUITS"]
    assert [e.id for e in suits] == ["edge-personality-career-0", "edge-personality-career-1"]
    assert all(e.source == "personality-INTJ" for e in suits)


def test_student_graph_without_personality_has_no_edges():
    g = assemble_student_graph("s1", student_row(personality=None))
    assert g.edges == []
    assert "personality-INTJ" not in g.node_ids()
    assert "career-ml-engineer" in g.node_ids()


def test_student_graph_dedups_and_skips_keyless_records():
    row = student_row(
        careers=[{"id": "c1", "name": "A"}, {"id": "c1", "name": "A again"}, {"name": "no id"}, None],
        skills=[{"id": "python"}, {"id": "python"}, {"id": ""}],
    )
    g = assemble_student_graph("s1", row)
    assert_well_formed(g)
    careers = [n for n in g.nodes if n.category == "career"]
    assert [n.label for n in careers] == ["A"]
    assert len([n for n in g.nodes if n.category == "skill"]) == 1
    assert len([e for e in g.edges if e.relation_type == "SUITS"]) == 1


def test_student_graph_properties_are_allowlisted():
    row = student_row(courses=[{"id": "c1", "name": "X", "internal": "leak"}])
    g = assemble_student_graph("s1", row)
    node = next(n for n in g.nodes if n.id == "course-c1")
    assert "internal" not in node.properties


@pytest.mark.parametrize("row", [None, {}, {"student": None}])
def test_student_graph_missing_student(row):
    with pytest.raises(NotFoundError):
        assemble_student_graph("nobody", row)


def full_row(n_skills=5, n_courses=5):
    return {
        "personalities": [{"code": "INTJ"}, {"code": "ENFP"}],
        "careers": [{"id": "c1", "name": "One"}, {"id": "c2", "name": "Two"}],
        "skills": [{"id": f"s{i}", "name": f"S{i}"} for i in range(n_skills)],
        "courses": [{"id": f"co{i}", "name": f"CO{i}"} for i in range(n_courses)],
    }


def test_full_graph_limit_bounds_skills_and_courses_only():
    g = assemble_full_graph(full_row(), [], limit=2)
    counts = {}
    for n in g.nodes:
        counts[n.category] = counts.get(n.category, 0) + 1
    assert counts == {"personality": 2, "career": 2, "skill": 2, "course": 2}


def test_full_graph_prunes_edges_to_truncated_nodes():
    relations = [
        {"source": "c1", "target": "INTJ", "type": "SUITS"},
        {"source": "c1", "target": "s0", "type": "REQUIRES"},
        {"source": "c2", "target": "s4", "type": "REQUIRES"},  # s4 truncated
        {"source": "co3", "target": "s1", "type": "TEACHES"},  # co3 truncated
        {"source": "co1", "target": "s1", "type": "TEACHES"},
    ]
    g = assemble_full_graph(full_row(), relations, limit=2)
    assert_well_formed(g)
    assert [e.id for e in g.edges] == ["edge-suits-0", "edge-requires-1", "edge-teaches-4"]
    assert g.edges[0].source == "career-c1"
    assert g.edges[0].target == "personality-INTJ"


def test_full_graph_empty_row():
    g = assemble_full_graph(None, [{"source": "c1", "target": "INTJ", "type": "SUITS"}])
    assert g.nodes == [] and g.edges == []


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, 50),
        ("abc", 50),
        ("0", 50),
        (-3, 50),
        ("2", 2),
        (7, 7),
        ("2.5", 50),
        (True, 50),
        (" 12 ", 12),
        (5000, 1000),
        ("99999999999999999999", 1000),
    ],
)
def test_coerce_limit(value, expected):
    assert coerce_limit(value) == expected


def career_row():
    return {
        "career": {"id": "nlp-engineer", "name": "NLP 工程师", "growthPotential": 9},
        "personalities": [{"code": "INTJ"}, {"code": "INTP"}, {"code": "INTJ"}],
        "skills": [{"id": "nlp", "name": "自然语言处理"}, {"id": "python", "name": "Python"}],
        "courses": [{"id": "nlp-stanford", "name": "NLP"}, {"id": None}],
    }


def test_career_subgraph_centre_and_edges():
    g = assemble_career_subgraph("nlp-engineer", career_row())
    assert_well_formed(g)
    centre = next(n for n in g.nodes if n.id == "career-nlp-engineer")
    assert centre.size == CENTER_NODE_SIZE
    assert centre.size > max(n.size for n in g.nodes if n is not centre)

    suits = [e for e in g.edges if e.relation_type == "SUITS"]
    requires = [e for e in g.edges if e.relation_type == "REQUIRES"]
    assert len(suits) == 2 and len(requires) == 2
    assert all(e.source == "career-nlp-engineer" for e in g.edges)
    assert [n.id for n in g.nodes if n.category == "course"] == ["course-nlp-stanford"]


def test_career_subgraph_unknown_career():
    with pytest.raises(NotFoundError):
        assemble_career_subgraph("nope", None)


async def test_assembler_career_subgraph_not_found():
    store = FakeGraphStore(None)
    with pytest.raises(NotFoundError):
        await GraphAssembler(store).career_subgraph("nope")
    assert store.calls[0][1] == {"careerId": "nope"}


async def test_assembler_full_graph_uses_coerced_limit():
    relations = [{"source": "c1", "target": "s0", "type": "REQUIRES"}]
    store = FakeGraphStore(full_row(), relations)
    g = await GraphAssembler(store).full_graph("junk")
    assert store.calls[0][1] == {"limit": 50}
    assert len(g.edges) == 1


async def test_assembler_full_graph_nothing_found_skips_relations():
    store = FakeGraphStore(None)
    g = await GraphAssembler(store).full_graph(2)
    assert g.to_dict() == {"nodes": [], "edges": []}
    assert len(store.calls) == 1


async def test_assembler_student_graph_serializes():
    store = FakeGraphStore(student_row())
    data = (await GraphAssembler(store).student_graph("s1")).to_dict()
    edge = next(e for e in data["edges"] if e["type"] == "HAS_PERSONALITY")
    assert edge == {
        "id": "edge-student-personality-0",
        "source": "student-s1",
        "target": "personality-INTJ",
        "type": "HAS_PERSONALITY",
        "label": "性格类型",
    }
    node = next(n for n in data["nodes"] if n["id"] == "skill-python")
    assert node["type"] == "skill" and node["color"] == "#10B981"


async def test_assembler_full_graph_caps_limit():
    store = FakeGraphStore(None)
    await GraphAssembler(store, max_limit=20).full_graph("99999999999999999999")
    assert store.calls[0][1] == {"limit": 20}
