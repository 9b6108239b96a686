"""Per-student cached aggregate over the attempt log.

The attempt log is authoritative. StudentStats is a cache kept on the
student record for latency-sensitive views; it can always be rebuilt with
recompute_stats, and two diverging copies reconcile with merge_stats.
"""
from typing import Iterable, Optional, Sequence

from mastery_engine.mastery import count_mastered
from mastery_engine.models import AttemptRecord, RankTier, Skill, StudentStats, SystemConfig
from mastery_engine.streak import compute_streak, day_key, update_streak


def apply_attempt(stats: Optional[StudentStats], result: AttemptRecord, skills_mastered: int) -> StudentStats:
    """Fold one new attempt into the cache."""
    stats = stats or StudentStats()
    return StudentStats(
        total_questions=stats.total_questions + 1,
        correct_questions=stats.correct_questions + (1 if result.is_correct else 0),
        skills_mastered=skills_mastered,
        streak=update_streak(stats.streak, stats.last_activity_date, result.timestamp),
        last_activity_date=max(stats.last_activity_date, result.timestamp),
    )


def recompute_stats(
    student_id: str,
    results: Iterable[AttemptRecord],
    skills: Sequence[Skill],
    config: Optional[SystemConfig] = None,
    ranks: Optional[Sequence[RankTier]] = None,
) -> StudentStats:
    """Rebuild the cache from the full log.

    The streak is the run of consecutive days ending on the most recent
    active day, matching what apply_attempt accumulates; lapsed streaks are
    zeroed at display time by streak.current_streak.
    """
    own = [r for r in results if r.student_id == student_id]
    if not own:
        return StudentStats()
    last = max(r.timestamp for r in own)
    return StudentStats(
        total_questions=len(own),
        correct_questions=sum(1 for r in own if r.is_correct),
        skills_mastered=count_mastered(skills, student_id, own, config, ranks),
        streak=compute_streak((r.timestamp for r in own), today=day_key(last)),
        last_activity_date=last,
    )


def merge_stats(a: Optional[StudentStats], b: Optional[StudentStats]) -> StudentStats:
    """Reconcile two snapshots of the same student's cache.

    Idempotent and commutative, so concurrent writers can both merge and
    converge. Counters only grow on an append-only log, so the larger wins;
    the streak follows the snapshot that saw the later activity.
    """
    if a is None or b is None:
        return a or b or StudentStats()
    if a.last_activity_date != b.last_activity_date:
        streak = (a if a.last_activity_date > b.last_activity_date else b).streak
    else:
        streak = max(a.streak, b.streak)
    if a.total_questions != b.total_questions:
        mastered = (a if a.total_questions > b.total_questions else b).skills_mastered
    else:
        mastered = max(a.skills_mastered, b.skills_mastered)
    return StudentStats(
        total_questions=max(a.total_questions, b.total_questions),
        correct_questions=max(a.correct_questions, b.correct_questions),
        skills_mastered=mastered,
        streak=streak,
        last_activity_date=max(a.last_activity_date, b.last_activity_date),
    )


def total_xp(student_id: str, results: Iterable[AttemptRecord]) -> int:
    """Signed sum of every score the student earned."""
    return sum(r.score or 0 for r in results if r.student_id == student_id)


def accuracy(stats: StudentStats) -> float:
    if not stats.total_questions:
        return 0.0
    return round(stats.correct_questions / stats.total_questions * 100, 1)
