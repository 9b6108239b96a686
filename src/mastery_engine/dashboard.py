"""Student profile dashboard: skill progress, XP, streak, rank and badges."""
import dataclasses
from datetime import date
from typing import Optional

from mastery_engine.badges import unlocked_badges
from mastery_engine.errors import UnknownStudentError
from mastery_engine.mastery import evaluate
from mastery_engine.ranks import next_rank, rank_for_xp
from mastery_engine.results import get_results
from mastery_engine.settings import get_badges, get_skill_ranks, get_system_config
from mastery_engine.skills import get_skills
from mastery_engine.stats import accuracy, recompute_stats, total_xp
from mastery_engine.streak import current_streak
from mastery_engine.students import get_student


def get_progress_color(progress: float, is_mastered: bool = False) -> str:
    if is_mastered:
        return "green"
    elif progress >= 65:
        return "yellow"
    elif progress >= 30:
        return "dark_orange"
    return "red"


def get_skill_rows(db_path: str, student_id: str, grade: Optional[str] = None) -> list[dict]:
    system_config = get_system_config(db_path)
    ranks = get_skill_ranks(db_path)
    results = get_results(db_path, student_id=student_id)
    rows = []
    for skill in get_skills(db_path, grade=grade):
        status = evaluate(skill, student_id, results, system_config, ranks)
        rows.append({
            "skill_id": skill.id,
            "name": skill.skill_name,
            "subject": skill.subject,
            "progress": round(status.progress, 1),
            "label": status.progress_label,
            "is_mastered": status.is_mastered,
            "rank": status.rank,
        })
    return rows


def get_student_dashboard(db_path: str, student_id: str, today: Optional[date] = None) -> dict:
    """Everything the profile view shows, keyed by section.

    Uses the cached stats on the student record when present and falls back
    to a full recompute from the attempt log.
    """
    student = get_student(db_path, student_id)
    if student is None:
        raise UnknownStudentError(student_id)
    ranks = get_skill_ranks(db_path)
    results = get_results(db_path, student_id=student_id)
    stats = student.stats or recompute_stats(
        student_id, results, get_skills(db_path), get_system_config(db_path), ranks,
    )
    xp = total_xp(student_id, results)
    streak = current_streak(stats.streak, stats.last_activity_date, today)
    return {
        "student": student,
        "total_xp": xp,
        "streak": streak,
        "skills_mastered": stats.skills_mastered,
        "questions_answered": stats.total_questions,
        "accuracy": accuracy(stats),
        "rank": rank_for_xp(xp, ranks),
        "next_rank": next_rank(xp, ranks),
        "badges": unlocked_badges(get_badges(db_path), dataclasses.replace(stats, streak=streak), xp),
        "skills": get_skill_rows(db_path, student_id),
    }
