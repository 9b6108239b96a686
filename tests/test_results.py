# tests/test_results.py
from conftest import make_results
from mastery_engine.db import init_db
from mastery_engine.models import AttemptRecord, QuestionsRequirement, Skill
from mastery_engine.results import delete_results, get_results, save_result, save_results
from mastery_engine.skills import get_skill, get_skills, save_skill


def test_save_and_get_results(tmp_db):
    init_db(tmp_db)
    save_result(tmp_db, AttemptRecord("late", "s1", "k1", 100, 2000, question_id="q1"))
    save_result(tmp_db, AttemptRecord("early", "s1", "k1", 0, 1000))
    results = get_results(tmp_db)
    assert [r.id for r in results] == ["early", "late"]
    assert results[1].question_id == "q1"


def test_get_results_filters(tmp_db):
    init_db(tmp_db)
    save_results(tmp_db, make_results(2, student_id="a", prefix="a") + make_results(3, student_id="b", prefix="b"))
    save_results(tmp_db, make_results(1, student_id="a", skill_id="other", prefix="o"))
    assert len(get_results(tmp_db, student_id="a")) == 3
    assert len(get_results(tmp_db, student_id="a", skill_id="skill-123")) == 2
    assert len(get_results(tmp_db, skill_id="skill-123")) == 5


def test_save_results_skips_known_ids(tmp_db):
    init_db(tmp_db)
    batch = make_results(3)
    assert save_results(tmp_db, batch) == 3
    assert save_results(tmp_db, batch) == 0
    assert len(get_results(tmp_db)) == 3


def test_delete_results_only_touches_pair(tmp_db):
    init_db(tmp_db)
    save_results(tmp_db, make_results(3) + make_results(2, skill_id="other", prefix="o"))
    assert delete_results(tmp_db, "student-1", "skill-123") == 3
    remaining = get_results(tmp_db)
    assert [r.skill_id for r in remaining] == ["other", "other"]


def test_skill_storage(tmp_db):
    init_db(tmp_db)
    save_skill(tmp_db, Skill("k2", "Subtraction", grade="Grade 2", subject="Math"))
    save_skill(tmp_db, Skill("k1", "Addition", grade="Grade 1", subject="Math",
                             mastery_requirements=QuestionsRequirement(5, min_accuracy=70)))
    assert [s.id for s in get_skills(tmp_db)] == ["k1", "k2"]
    assert [s.id for s in get_skills(tmp_db, grade="Grade 2")] == ["k2"]
    assert get_skill(tmp_db, "k1").mastery_requirements == QuestionsRequirement(5, min_accuracy=70)
    assert get_skill(tmp_db, "k2").mastery_requirements is None
    assert get_skill(tmp_db, "nope") is None
