import pytest

from conftest import FakeGraphStore, career, course

from career_graph.errors import NotFoundError
from career_graph.knowledge_graph.query_engine import CareerQueryEngine


async def test_personality_type_normalizes_code():
    row = {"personalityType": {"code": "INTJ"}, "suitableCareers": [career("ml", 8)]}
    store = FakeGraphStore(row)
    out = await CareerQueryEngine(store).personality_type("intj")
    assert store.calls[0][1] == {"code": "INTJ"}
    assert out["suitableCareers"][0]["id"] == "ml"


async def test_personality_type_not_found():
    with pytest.raises(NotFoundError):
        await CareerQueryEngine(FakeGraphStore(None)).personality_type("XXXX")


async def test_personality_types():
    rows = [{"personalityType": {"code": "ENFP"}}, {"personalityType": {"code": "INTJ"}}]
    out = await CareerQueryEngine(FakeGraphStore(rows)).personality_types()
    assert [p["code"] for p in out] == ["ENFP", "INTJ"]


async def test_career_detail_merges_relations():
    row = {
        "career": career("ml", 8),
        "requiredSkills": [{"id": "python"}],
        "suitablePersonalities": ["INTP", "INTJ"],
        "learningPaths": None,
    }
    out = await CareerQueryEngine(FakeGraphStore(row)).career("ml")
    assert out["id"] == "ml"
    assert out["suitablePersonalities"] == ["INTJ", "INTP"]
    assert out["learningPaths"] == []


async def test_career_not_found():
    with pytest.raises(NotFoundError):
        await CareerQueryEngine(FakeGraphStore({"career": None})).career("nope")


async def test_careers_list():
    rows = [{"career": career("a", 1), "suitablePersonalities": ["ISTJ", "ENTJ"]}]
    out = await CareerQueryEngine(FakeGraphStore(rows)).careers()
    assert out[0]["suitablePersonalities"] == ["ENTJ", "ISTJ"]


async def test_learning_paths_for_career():
    rows = [{"learningPath": {"id": "lp1"}, "courses": [course("c1")]}]
    store = FakeGraphStore(rows)
    out = await CareerQueryEngine(store).learning_paths_for_career("ml")
    assert out == [{"id": "lp1", "courses": [course("c1")]}]
    assert store.calls[0][1] == {"careerId": "ml"}


async def test_learning_path_detail():
    row = {
        "learningPath": {"id": "lp1", "name": "ML"},
        "courses": [course("c1", skills=["Python"])],
        "targetCareer": career("ml", 8),
    }
    out = await CareerQueryEngine(FakeGraphStore(row)).learning_path("lp1")
    assert out["targetCareer"]["id"] == "ml"
    assert out["courses"][0]["skills"] == ["Python"]


async def test_learning_path_not_found():
    with pytest.raises(NotFoundError):
        await CareerQueryEngine(FakeGraphStore(None)).learning_path("nope")
