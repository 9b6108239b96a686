# tests/test_badges.py
from mastery_engine.badges import is_unlocked, unlocked_badges
from mastery_engine.defaults import INITIAL_BADGES
from mastery_engine.models import Badge, StudentStats


def test_mastery_badge():
    first = INITIAL_BADGES[0]
    assert not is_unlocked(first, StudentStats(skills_mastered=0), 0)
    assert is_unlocked(first, StudentStats(skills_mastered=1), 0)


def test_streak_and_xp_badges():
    on_fire = next(b for b in INITIAL_BADGES if b.id == "b4")
    starter = next(b for b in INITIAL_BADGES if b.id == "b7")
    assert is_unlocked(on_fire, StudentStats(streak=3), 0)
    assert not is_unlocked(on_fire, StudentStats(streak=2), 0)
    assert is_unlocked(starter, StudentStats(), 1000)
    assert not is_unlocked(starter, StudentStats(), 999)


def test_custom_badges_are_never_automatic():
    badge = Badge("c1", "Helper", "CUSTOM", "CUSTOM", 0)
    assert not is_unlocked(badge, StudentStats(skills_mastered=99, streak=99), 99999)


def test_unlocked_badges_skips_inactive_and_sorts():
    badges = [
        Badge("x", "Later", "XP", "XP_THRESHOLD", 10, order=5),
        Badge("y", "Hidden", "XP", "XP_THRESHOLD", 10, is_active=False, order=1),
        Badge("z", "Sooner", "STREAK", "STREAK_DAYS", 1, order=2),
    ]
    unlocked = unlocked_badges(badges, StudentStats(streak=1), 50)
    assert [b.id for b in unlocked] == ["z", "x"]


def test_starter_set_for_new_student():
    assert unlocked_badges(INITIAL_BADGES, StudentStats(), 0) == []
