"""Grade leaderboards ranked by skills mastered or by progress on one skill."""
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

from mastery_engine.mastery import count_mastered, evaluate
from mastery_engine.models import (
    STUDENT_ROLE, AttemptRecord, LeaderboardEntry, RankTier, Skill, Student, SystemConfig,
)

logger = logging.getLogger(__name__)

ResultsProvider = Callable[[str], Sequence[AttemptRecord]]


@dataclass(frozen=True)
class StudentRank:
    rank: int
    total: int
    mastered_count: int


def students_in_grade(students: Iterable[Student], grade: str) -> list[Student]:
    return [s for s in students if s.role == STUDENT_ROLE and grade in s.grades]


def _entry(student: Student, mastered_count: int, progress_percent: Optional[float] = None) -> LeaderboardEntry:
    return LeaderboardEntry(
        user_id=student.id,
        name=student.name,
        display_name=student.display_name,
        avatar=student.avatar,
        mastered_count=mastered_count,
        progress_percent=progress_percent,
    )


def rank_students(
    students: Iterable[Student],
    grade: str,
    skills: Sequence[Skill],
    config: Optional[SystemConfig],
    ranks: Optional[Sequence[RankTier]],
    results_provider: ResultsProvider,
    skill_id: Optional[str] = None,
) -> list[LeaderboardEntry]:
    """Rank the students enrolled in `grade`.

    Without `skill_id` students are ordered by how many skills they have
    mastered; with it, by their progress on that one skill. Ranks are the
    1-based position after a stable sort, so tied students get consecutive
    ranks in input order.
    """
    entries = []
    if skill_id:
        skill = next((s for s in skills if s.id == skill_id), None)
        if skill is None:
            logger.debug("leaderboard: unknown skill %s, all progress is 0", skill_id)
        for student in students_in_grade(students, grade):
            if skill is None:
                entries.append(_entry(student, 0, 0.0))
                continue
            status = evaluate(skill, student.id, list(results_provider(student.id)), config, ranks)
            entries.append(_entry(student, 1 if status.is_mastered else 0, status.progress))
        entries.sort(key=lambda e: e.progress_percent or 0, reverse=True)
    else:
        for student in students_in_grade(students, grade):
            mastered = count_mastered(skills, student.id, list(results_provider(student.id)), config, ranks)
            entries.append(_entry(student, mastered))
        entries.sort(key=lambda e: e.mastered_count, reverse=True)

    for position, entry in enumerate(entries, 1):
        entry.rank = position
    return entries


def student_rank(entries: Sequence[LeaderboardEntry], student_id: str) -> Optional[StudentRank]:
    for entry in entries:
        if entry.user_id == student_id:
            return StudentRank(rank=entry.rank, total=len(entries), mastered_count=entry.mastered_count)
    return None
