"""Factory defaults for the rank ladder, system config, reward rules and badges."""
from mastery_engine.models import Badge, RankTier, RewardRule, SystemConfig

DEFAULT_SKILL_RANKS = [
    RankTier("Beginner", 0, "🌱", "emerald", "Just starting out"),
    RankTier("Novice", 100, "🥉", "amber", "Getting the hang of it"),
    RankTier("Apprentice", 300, "🥈", "slate", "Consistent practice"),
    RankTier("Scholar", 600, "🥇", "yellow", "High proficiency"),
    RankTier("Master", 1000, "👑", "indigo", "True expert status"),
]

# Used as the XP ceiling when no ladder is available at all
FALLBACK_MASTER_THRESHOLD = 1000

DEFAULT_SYSTEM_CONFIG = SystemConfig()

INITIAL_REWARDS = [
    RewardRule("r1", "Perfect Score Bonus", "SCORE", "EQUALS", 100, "REWARD", 50, "Perfect Score Bonus!"),
    RewardRule("r2", "Low Effort Penalty", "SCORE", "LESS_THAN", 40, "PENALTY", 10, "Needs Improvement"),
    RewardRule("r3", "Streak Master", "STREAK", "GREATER_THAN", 4, "REWARD", 100, "5x Streak Bonus!"),
]

INITIAL_BADGES = [
    Badge("b1", "First Skill", "MASTERY", "MASTERY_COUNT", 1, "Master 1 skill", "🌟", order=1),
    Badge("b2", "Rising Star", "MASTERY", "MASTERY_COUNT", 5, "Master 5 skills", "⭐", order=2),
    Badge("b3", "Champion", "MASTERY", "MASTERY_COUNT", 10, "Master 10 skills", "🏆", order=3),
    Badge("b4", "On Fire", "STREAK", "STREAK_DAYS", 3, "3 day streak", "🔥", order=4),
    Badge("b5", "Dedicated", "STREAK", "STREAK_DAYS", 7, "7 day streak", "💪", order=5),
    Badge("b6", "Unstoppable", "STREAK", "STREAK_DAYS", 14, "14 day streak", "🚀", order=6),
    Badge("b7", "Starter", "XP", "XP_THRESHOLD", 1000, "1,000 XP", "🎯", order=7),
    Badge("b8", "Explorer", "XP", "XP_THRESHOLD", 5000, "5,000 XP", "🎖️", order=8),
    Badge("b9", "Achiever", "XP", "XP_THRESHOLD", 10000, "10,000 XP", "🥇", order=9),
]
