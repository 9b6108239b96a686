"""Achievement badge unlocking."""
from typing import Iterable

from mastery_engine.models import Badge, StudentStats


def is_unlocked(badge: Badge, stats: StudentStats, total_xp: int) -> bool:
    if badge.unlock_type == "MASTERY_COUNT":
        return stats.skills_mastered >= badge.unlock_value
    if badge.unlock_type == "STREAK_DAYS":
        return stats.streak >= badge.unlock_value
    if badge.unlock_type == "XP_THRESHOLD":
        return total_xp >= badge.unlock_value
    # CUSTOM badges are awarded by hand
    return False


def unlocked_badges(badges: Iterable[Badge], stats: StudentStats, total_xp: int) -> list[Badge]:
    active = sorted((b for b in badges if b.is_active), key=lambda b: b.order)
    return [b for b in active if is_unlocked(b, stats, total_xp)]
