"""Student records, attempt submission and the cached stats aggregate."""
import json
import logging
import sqlite3
import time
import uuid
from dataclasses import dataclass, field
from typing import Optional

from mastery_engine.db import get_connection
from mastery_engine.errors import UnknownSkillError, UnknownStudentError
from mastery_engine.mastery import count_mastered, evaluate, filter_results
from mastery_engine.models import AttemptRecord, MasteryStatus, Student, StudentStats
from mastery_engine.results import delete_results, get_results, save_result
from mastery_engine.rewards import RewardContext, TriggeredEffect, evaluate_rules, total_adjustment
from mastery_engine.scoring import score_answer
from mastery_engine.settings import get_reward_rules, get_skill_ranks, get_system_config
from mastery_engine.skills import get_skill, get_skills
from mastery_engine.stats import apply_attempt, merge_stats, recompute_stats

logger = logging.getLogger(__name__)

# Raw score fed to SCORE reward rules: a right answer is a perfect score
CORRECT_RAW_SCORE = 100


def _row_to_student(row: sqlite3.Row) -> Student:
    return Student(
        id=row["id"],
        name=row["name"],
        role=row["role"],
        grades=json.loads(row["grades"] or "[]"),
        display_name=row["display_name"],
        avatar=row["avatar"],
        stats=StudentStats.from_dict(json.loads(row["stats"])) if row["stats"] else None,
    )


def save_student(db_path: str, student: Student) -> None:
    conn = get_connection(db_path)
    conn.execute(
        """INSERT OR REPLACE INTO students (id, name, role, grades, display_name, avatar, stats)
        VALUES (?, ?, ?, ?, ?, ?, ?)""",
        (student.id, student.name, student.role, json.dumps(student.grades),
         student.display_name, student.avatar,
         json.dumps(student.stats.to_dict()) if student.stats else None),
    )
    conn.commit()
    conn.close()


def get_students(db_path: str) -> list[Student]:
    conn = get_connection(db_path)
    rows = conn.execute("SELECT * FROM students ORDER BY name").fetchall()
    conn.close()
    return [_row_to_student(r) for r in rows]


def get_student(db_path: str, student_id: str) -> Optional[Student]:
    conn = get_connection(db_path)
    row = conn.execute("SELECT * FROM students WHERE id = ?", (student_id,)).fetchone()
    conn.close()
    return _row_to_student(row) if row else None


def save_student_stats(db_path: str, student_id: str, stats: StudentStats) -> None:
    conn = get_connection(db_path)
    conn.execute(
        "UPDATE students SET stats = ? WHERE id = ?", (json.dumps(stats.to_dict()), student_id)
    )
    conn.commit()
    conn.close()


def merge_attempt_stats(db_path: str, student_id: str, stats: StudentStats) -> StudentStats:
    """Read-modify-write of the cached stats.

    Merging with whatever is stored now keeps a concurrent submission for
    the same student from rolling the cache back.
    """
    current = get_student(db_path, student_id)
    merged = merge_stats(current.stats if current else None, stats)
    save_student_stats(db_path, student_id, merged)
    return merged


def answer_streak(previous: list[AttemptRecord], correct: bool) -> int:
    """Consecutive correct answers ending with this one."""
    if not correct:
        return 0
    run = 1
    for r in reversed(previous):
        if not r.is_correct:
            break
        run += 1
    return run


def running_accuracy(previous: list[AttemptRecord], correct: bool) -> float:
    """Skill accuracy including the answer being submitted."""
    raw_correct = sum(1 for r in previous if r.is_correct) + (1 if correct else 0)
    return raw_correct / (len(previous) + 1) * 100


def final_score(correct: bool, points: int) -> int:
    """Stored score, kept on the same side of zero as the answer's correctness."""
    if correct:
        return max(1, points)
    return min(0, points)


@dataclass
class AttemptOutcome:
    record: AttemptRecord
    base_points: int
    breakdown: list[tuple[str, int]]
    effects: list[TriggeredEffect]
    status: MasteryStatus
    newly_mastered: bool
    stats: StudentStats
    messages: list[str] = field(default_factory=list)


def submit_attempt(
    db_path: str,
    student_id: str,
    skill_id: str,
    correct: bool,
    question_id: Optional[str] = None,
    duration_seconds: Optional[float] = None,
    now_ms: Optional[int] = None,
) -> AttemptOutcome:
    """Score one answer, log it and refresh the student's cached stats.

    The final score stored on the AttemptRecord is the base points for the
    answer plus every triggered reward rule (penalties subtract).
    """
    student = get_student(db_path, student_id)
    if student is None:
        raise UnknownStudentError(student_id)
    skill = get_skill(db_path, skill_id)
    if skill is None:
        raise UnknownSkillError(skill_id)

    system_config = get_system_config(db_path)
    ranks = get_skill_ranks(db_path)
    history = get_results(db_path, student_id=student_id)
    skill_history = filter_results(history, skill_id, student_id)
    before = evaluate(skill, student_id, skill_history, system_config, ranks)

    streak = answer_streak(skill_history, correct)
    base = score_answer(correct, skill.difficulty, streak, duration_seconds, system_config)
    context = RewardContext(
        score=CORRECT_RAW_SCORE if correct else 0,
        streak=streak,
        # Difficulty rewards only apply to right answers
        difficulty=skill.difficulty if correct else None,
        accuracy=running_accuracy(skill_history, correct),
    )
    effects = evaluate_rules(context, get_reward_rules(db_path))

    record = AttemptRecord(
        id=uuid.uuid4().hex,
        student_id=student_id,
        skill_id=skill_id,
        score=final_score(correct, base.points + total_adjustment(effects)),
        timestamp=now_ms if now_ms is not None else int(time.time() * 1000),
        question_id=question_id,
    )
    save_result(db_path, record)

    history.append(record)
    after = evaluate(skill, student_id, history, system_config, ranks)
    skills = get_skills(db_path)
    mastered = count_mastered(skills, student_id, history, system_config, ranks)
    cached = student.stats
    if cached is None and len(history) > 1:
        # Imported history with no cache yet: start from the log, not from zero
        cached = recompute_stats(student_id, history[:-1], skills, system_config, ranks)
    stats = merge_attempt_stats(db_path, student_id, apply_attempt(cached, record, mastered))
    logger.debug("student %s scored %d on skill %s", student_id, record.score, skill_id)

    return AttemptOutcome(
        record=record,
        base_points=base.points,
        breakdown=base.breakdown,
        effects=effects,
        status=after,
        newly_mastered=after.is_mastered and not before.is_mastered,
        stats=stats,
        messages=[e.message for e in effects if e.message],
    )


def recalculate_stats(db_path: str, student_id: str) -> StudentStats:
    """Rebuild a student's cached stats from the full attempt log."""
    if get_student(db_path, student_id) is None:
        raise UnknownStudentError(student_id)
    stats = recompute_stats(
        student_id,
        get_results(db_path, student_id=student_id),
        get_skills(db_path),
        get_system_config(db_path),
        get_skill_ranks(db_path),
    )
    save_student_stats(db_path, student_id, stats)
    logger.info("recalculated stats for student %s", student_id)
    return stats


def reset_skill_progress(db_path: str, student_id: str, skill_id: str) -> StudentStats:
    """Delete every attempt for the pair, then repair the cache."""
    delete_results(db_path, student_id, skill_id)
    return recalculate_stats(db_path, student_id)
