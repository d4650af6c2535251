import math

from conftest import FakeGraphStore, career, course

from career_graph.reco.recommender import (
    Recommender,
    growth_potential,
    rank_careers,
    rank_learning_paths,
    remaining_courses,
)


def path_row(path_id, target, courses, completed=()):
    return {
        "completedCourses": list(completed),
        "learningPath": {"id": path_id, "name": path_id.upper()},
        "career": target,
        "courses": courses,
    }


async def test_remaining_courses_for_intj_student():
    rows = [path_row("lp1", career("ml", 8), [course("c1"), course("c2"), course("c3")], completed=["c1"])]
    store = FakeGraphStore(rows)

    recs = await Recommender(store).recommend_learning_paths("s1")

    assert len(recs) == 1
    assert [c["id"] for c in recs[0].remaining_courses] == ["c2", "c3"]
    assert store.calls[0][1] == {"studentId": "s1"}
    data = recs[0].to_dict()
    assert data["id"] == "lp1"
    assert data["targetCareer"]["id"] == "ml"
    assert [c["id"] for c in data["remainingCourses"]] == ["c2", "c3"]


def test_paths_sorted_by_growth_and_capped():
    rows = [
        path_row("low", career("a", 6), []),
        path_row("high", career("b", 9), []),
        path_row("mid", career("c", 8), []),
        path_row("top", career("d", 10), []),
    ]
    recs = rank_learning_paths(rows)
    assert [r.learning_path["id"] for r in recs] == ["top", "high", "mid"]


def test_ties_keep_arrival_order():
    rows = [path_row(f"p{i}", career("x", 7), []) for i in range(3)]
    assert [r.learning_path["id"] for r in rank_learning_paths(rows)] == ["p0", "p1", "p2"]


def test_fully_completed_path_is_still_listed():
    rows = [path_row("done", career("a", 5), [course("c1")], completed=["c1"])]
    recs = rank_learning_paths(rows)
    assert len(recs) == 1
    assert recs[0].remaining_courses == []


def test_remaining_courses_is_order_independent_of_completed():
    courses = [course("c1"), course("c2"), course("c3"), course("c4")]
    a = remaining_courses(courses, ["c3", "c1"])
    b = remaining_courses(courses, ["c1", "c3"])
    assert a == b
    assert [c["id"] for c in a] == ["c2", "c4"]


def test_remaining_courses_skips_missing_and_duplicates():
    courses = [course("c1"), None, {"name": "no id"}, course("c1"), course("c2")]
    assert [c["id"] for c in remaining_courses(courses, None)] == ["c1", "c2"]


def test_growth_potential_non_numeric_sinks():
    assert growth_potential({"growthPotential": "8"}) == 8.0
    assert growth_potential({}) == -math.inf
    assert growth_potential(None) == -math.inf


async def test_no_personality_means_no_recommendations():
    recs = await Recommender(FakeGraphStore([])).recommend_learning_paths("s-new")
    assert recs == []


async def test_careers_for_personality():
    rows = [
        {"career": career("a", 6), "requiredSkills": [{"id": "python"}, None]},
        {"career": career("b", 9), "requiredSkills": []},
    ]
    store = FakeGraphStore(rows)
    out = await Recommender(store).recommend_careers_for_personality(" intj ")
    assert store.calls[0][1] == {"code": "INTJ"}
    assert [c["id"] for c in out] == ["b", "a"]
    assert out[1]["requiredSkills"] == [{"id": "python"}]


def test_rank_careers_skips_empty_rows():
    assert rank_careers([{"career": None}, {}]) == []
