"""Base XP awarded for a single answer."""
import math
from dataclasses import dataclass, field
from typing import Optional

from mastery_engine.models import HARD, MEDIUM, SystemConfig

FAST_ANSWER_SECONDS = 5
STANDARD_ANSWER_SECONDS = 10


@dataclass
class AttemptScore:
    points: int = 0
    breakdown: list[tuple[str, int]] = field(default_factory=list)


def difficulty_multiplier(difficulty: str, settings: SystemConfig) -> float:
    if difficulty == MEDIUM:
        return settings.medium_multiplier
    if difficulty == HARD:
        return settings.hard_multiplier
    return 1.0


def score_answer(
    correct: bool,
    difficulty: str,
    streak: int,
    duration_seconds: Optional[float],
    settings: SystemConfig,
) -> AttemptScore:
    """Points for one answer before reward rules are applied.

    Args:
        correct: Whether the answer was right. Wrong answers score 0.
        difficulty: Skill difficulty label (Easy, Medium, Hard).
        streak: Consecutive correct answers including this one.
        duration_seconds: Time taken to answer, None when unknown.
        settings: Point settings from the system config.

    Returns:
        AttemptScore with the total and a (label, points) breakdown.
    """
    result = AttemptScore()
    if not correct:
        return result

    points = settings.base_mastery_points
    result.breakdown.append(("Base", points))

    multiplier = difficulty_multiplier(difficulty, settings)
    if multiplier > 1:
        bonus = math.floor(points * (multiplier - 1))
        result.breakdown.append((f"{difficulty} x{multiplier:g}", bonus))
        points += bonus

    if streak > 1 and settings.streak_bonus > 0:
        bonus = settings.streak_bonus * streak
        result.breakdown.append((f"Streak x{streak}", bonus))
        points += bonus

    if duration_seconds is not None:
        if duration_seconds < FAST_ANSWER_SECONDS:
            result.breakdown.append(("Speed", settings.speed_bonus_fast))
            points += settings.speed_bonus_fast
        elif duration_seconds < STANDARD_ANSWER_SECONDS:
            result.breakdown.append(("Speed", settings.speed_bonus_standard))
            points += settings.speed_bonus_standard

    result.points = points
    return result
