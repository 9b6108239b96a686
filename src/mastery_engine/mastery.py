"""Skill mastery evaluation.

A skill is mastered when the learner satisfies its requirement: either a
number of distinct correctly answered questions (QUESTIONS) or a cumulative
XP total (SCORE, the legacy strategy). The result also carries the learner's
rank tier on the skill, derived from the rank ladder.
"""
import logging
import math
from typing import Iterable, Optional, Sequence

from mastery_engine.defaults import DEFAULT_SYSTEM_CONFIG
from mastery_engine.models import (
    AttemptRecord, MasteryRequirement, MasteryStatus, QuestionsRequirement,
    RankTier, ScoreRequirement, Skill, SystemConfig,
)
from mastery_engine.ranks import descending_ladder, master_threshold, rank_for_xp, rank_index, sort_ladder

logger = logging.getLogger(__name__)


def resolve_requirement(skill: Skill, config: Optional[SystemConfig] = None) -> MasteryRequirement:
    """Skill-level override if present, else the system default."""
    if skill.mastery_requirements is not None:
        return skill.mastery_requirements
    config = config or DEFAULT_SYSTEM_CONFIG
    return config.default_mastery_requirements


def filter_results(
    results: Iterable[AttemptRecord], skill_id: str, student_id: Optional[str] = None,
) -> list[AttemptRecord]:
    skill_results = [r for r in results if r.skill_id == skill_id]
    if student_id:
        skill_results = [r for r in skill_results if r.student_id == student_id]
    return skill_results


def completed_question_ids(results: Iterable[AttemptRecord]) -> list[str]:
    """Unique ids of correctly answered questions, in first-seen order.

    Attempts without a question id get a synthetic `legacy-{id}` key so
    they still count once each.
    """
    seen = {}
    for r in results:
        if r.is_correct:
            seen.setdefault(r.question_id or f"legacy-{r.id}", None)
    return list(seen)


def count_correct(results: Sequence[AttemptRecord]) -> int:
    """Distinct correct answers.

    Dedupes by question id once any correct attempt carries one; otherwise
    every correct record counts.
    """
    correct = [r for r in results if r.is_correct]
    if any(r.question_id for r in correct):
        return len(completed_question_ids(correct))
    return len(correct)


def accuracy_percent(results: Sequence[AttemptRecord]) -> Optional[float]:
    """Raw share of correct attempts (not deduped), or None with no attempts."""
    if not results:
        return None
    raw_correct = sum(1 for r in results if r.is_correct)
    return raw_correct / len(results) * 100


def question_target(requirement: QuestionsRequirement, skill: Skill) -> int:
    target = requirement.value
    if requirement.is_percentage and skill.question_bank_size > 0:
        target = max(1, math.ceil(requirement.value / 100 * skill.question_bank_size))
    return max(1, target)


def _evaluate_questions(requirement, skill, results, ranks):
    correct_count = count_correct(results)
    target = question_target(requirement, skill)
    progress = min(100.0, correct_count / target * 100)
    is_mastered = correct_count >= target
    equivalent_xp = progress / 100 * master_threshold(ranks)
    rank = rank_for_xp(equivalent_xp, ranks)

    accuracy = accuracy_percent(results)
    if requirement.min_accuracy and accuracy is not None and accuracy < requirement.min_accuracy:
        is_mastered = False
        descending = descending_ladder(ranks)
        if rank.threshold >= descending[0].threshold and len(descending) > 1:
            rank = descending[1]
        logger.debug(
            "skill %s: accuracy %.1f%% below %s%%, mastery withheld",
            skill.id, accuracy, requirement.min_accuracy,
        )

    return MasteryStatus(
        total_score=sum(r.score for r in results),
        progress=progress,
        progress_label=f"{correct_count} / {target} Questions",
        is_mastered=is_mastered,
        rank_index=rank_index(rank, ranks),
        rank=rank,
        completed_question_ids=tuple(completed_question_ids(results)),
    )


def _evaluate_score(requirement, skill, results, ranks):
    total_score = sum(r.score for r in results)
    target = max(1, requirement.value)
    progress = max(0.0, min(100.0, total_score / target * 100))
    rank = rank_for_xp(total_score, ranks)
    return MasteryStatus(
        total_score=total_score,
        progress=progress,
        progress_label=f"{total_score} / {requirement.value} XP",
        is_mastered=total_score >= requirement.value,
        rank_index=rank_index(rank, ranks),
        rank=rank,
    )


def evaluate(
    skill: Skill,
    student_id: Optional[str],
    results: Iterable[AttemptRecord],
    config: Optional[SystemConfig] = None,
    ranks: Optional[Sequence[RankTier]] = None,
) -> MasteryStatus:
    """Evaluate one learner's mastery of one skill.

    Args:
        skill: Skill definition, possibly carrying its own requirement.
        student_id: Restrict the log to this student. None evaluates the
            whole log for the skill.
        results: Attempt log; records for other skills are ignored.
        config: System config supplying the default requirement.
        ranks: Rank ladder in any order. Empty falls back to the defaults.

    Returns:
        MasteryStatus with progress (0-100), label, mastery flag and rank.
    """
    ladder = sort_ladder(ranks)
    requirement = resolve_requirement(skill, config)
    skill_results = filter_results(results, skill.id, student_id)
    if isinstance(requirement, ScoreRequirement):
        return _evaluate_score(requirement, skill, skill_results, ladder)
    return _evaluate_questions(requirement, skill, skill_results, ladder)


def count_mastered(
    skills: Iterable[Skill],
    student_id: str,
    results: Sequence[AttemptRecord],
    config: Optional[SystemConfig] = None,
    ranks: Optional[Sequence[RankTier]] = None,
) -> int:
    return sum(1 for skill in skills if evaluate(skill, student_id, results, config, ranks).is_mastered)
