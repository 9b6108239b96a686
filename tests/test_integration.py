# tests/test_integration.py
"""End-to-end test of the core workflow."""
from datetime import date, timedelta

from conftest import ts
from mastery_engine.dashboard import get_student_dashboard
from mastery_engine.db import init_db
from mastery_engine.importer import import_data
from mastery_engine.leaderboard import rank_students, student_rank
from mastery_engine.results import get_results
from mastery_engine.seed import seed_all
from mastery_engine.settings import get_skill_ranks, get_system_config
from mastery_engine.skills import get_skills
from mastery_engine.students import get_students, recalculate_stats, submit_attempt

DAY = date(2024, 10, 7)


def test_full_class_workflow(tmp_db):
    """Import a class, practice over several days, then read the views."""
    init_db(tmp_db)
    seed_all(tmp_db)
    import_data(tmp_db, {
        "skills": [
            {"id": "add", "skillName": "Addition", "grade": "Grade 1", "subject": "Math"},
            {"id": "sub", "skillName": "Subtraction", "grade": "Grade 1", "subject": "Math",
             "masteryRequirements": {"type": "QUESTIONS", "value": 3}},
        ],
        "students": [
            {"id": "ana", "name": "Ana", "grades": ["Grade 1"]},
            {"id": "ben", "name": "Ben", "grades": ["Grade 1"]},
            {"id": "cy", "name": "Cy", "grades": ["Grade 2"]},
        ],
    })

    # Ana: 10 correct on Addition over three days and 3 on Subtraction
    for i in range(10):
        day = DAY + timedelta(days=i // 4)
        submit_attempt(tmp_db, "ana", "add", True, question_id=f"a{i}", now_ms=ts(day, 9) + i)
    for i in range(3):
        submit_attempt(tmp_db, "ana", "sub", True, question_id=f"s{i}", now_ms=ts(DAY + timedelta(days=2), 15) + i)

    # Ben: 10 correct and 10 wrong on Addition, below the 60% accuracy bar
    for i in range(20):
        submit_attempt(tmp_db, "ben", "add", i % 2 == 0, question_id=f"b{i}", now_ms=ts(DAY, 10) + i)

    ana = get_student_dashboard(tmp_db, "ana", today=DAY + timedelta(days=2))
    assert ana["skills_mastered"] == 2
    assert ana["streak"] == 3
    assert ana["questions_answered"] == 13

    ben_rows = {row["skill_id"]: row for row in get_student_dashboard(tmp_db, "ben", today=DAY)["skills"]}
    assert ben_rows["add"]["progress"] == 100
    assert ben_rows["add"]["is_mastered"] is False
    assert ben_rows["add"]["rank"].name == "Scholar"

    entries = rank_students(
        get_students(tmp_db), "Grade 1", get_skills(tmp_db),
        get_system_config(tmp_db), get_skill_ranks(tmp_db),
        lambda sid: get_results(tmp_db, student_id=sid),
    )
    assert [(e.user_id, e.mastered_count, e.rank) for e in entries] == [("ana", 2, 1), ("ben", 0, 2)]
    assert student_rank(entries, "ben").rank == 2
    assert student_rank(entries, "cy") is None

    # The cached aggregate agrees with a rebuild from the log
    cached = get_student_dashboard(tmp_db, "ana", today=DAY + timedelta(days=2))
    rebuilt = recalculate_stats(tmp_db, "ana")
    assert rebuilt.total_questions == cached["questions_answered"]
    assert rebuilt.skills_mastered == cached["skills_mastered"]
    assert rebuilt.streak == cached["streak"]
