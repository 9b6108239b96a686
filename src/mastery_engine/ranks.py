"""Rank ladder lookups."""
from typing import Optional, Sequence

from mastery_engine.defaults import DEFAULT_SKILL_RANKS, FALLBACK_MASTER_THRESHOLD
from mastery_engine.models import RankTier


def sort_ladder(ranks: Optional[Sequence[RankTier]]) -> list[RankTier]:
    """Return the ladder sorted by threshold, falling back to the default ladder."""
    if not ranks:
        ranks = DEFAULT_SKILL_RANKS
    return sorted(ranks, key=lambda r: r.threshold)


def master_threshold(ranks: Sequence[RankTier]) -> float:
    """Threshold of the top tier; the XP ceiling for percentage progress."""
    ladder = sort_ladder(ranks)
    return ladder[-1].threshold if ladder else FALLBACK_MASTER_THRESHOLD


def rank_for_xp(xp: float, ranks: Sequence[RankTier]) -> RankTier:
    """Highest tier whose threshold is at or below `xp`, else the lowest tier."""
    ladder = sort_ladder(ranks)
    for tier in descending_ladder(ladder):
        if xp >= tier.threshold:
            return tier
    return ladder[0]


def descending_ladder(ranks: Sequence[RankTier]) -> list[RankTier]:
    # Stable: tiers sharing a threshold keep their ladder order
    return sorted(sort_ladder(ranks), key=lambda r: r.threshold, reverse=True)


def rank_index(tier: RankTier, ranks: Sequence[RankTier]) -> int:
    ladder = sort_ladder(ranks)
    for i, r in enumerate(ladder):
        if r.name == tier.name:
            return i
    return -1


def next_rank(xp: float, ranks: Sequence[RankTier]) -> Optional[RankTier]:
    """First tier above `xp`, or None once the top tier is reached."""
    for tier in sort_ladder(ranks):
        if tier.threshold > xp:
            return tier
    return None
