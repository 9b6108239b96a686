# tests/test_settings.py
import pytest

from mastery_engine.db import get_connection, init_db
from mastery_engine.defaults import DEFAULT_SKILL_RANKS
from mastery_engine.errors import RuleValidationError
from mastery_engine.models import Badge, RankTier, RewardRule, ScoreRequirement, SystemConfig
from mastery_engine.settings import (
    SKILL_RANKS_KEY, delete_badge, delete_reward_rule, get_badges, get_reward_rule,
    get_reward_rules, get_setting, get_skill_ranks, get_system_config, save_badge,
    save_reward_rule, save_skill_ranks, save_system_config, set_setting,
)


def test_setting_round_trip(tmp_db):
    init_db(tmp_db)
    assert get_setting(tmp_db, "missing", default=7) == 7
    set_setting(tmp_db, "theme", {"dark": True})
    assert get_setting(tmp_db, "theme") == {"dark": True}
    set_setting(tmp_db, "theme", {"dark": False})
    assert get_setting(tmp_db, "theme") == {"dark": False}


def test_malformed_setting_falls_back(tmp_db):
    init_db(tmp_db)
    conn = get_connection(tmp_db)
    conn.execute("INSERT INTO settings (key, value) VALUES (?, ?)", (SKILL_RANKS_KEY, "{not json"))
    conn.commit()
    conn.close()
    assert get_setting(tmp_db, SKILL_RANKS_KEY, default="fallback") == "fallback"
    assert get_skill_ranks(tmp_db) == DEFAULT_SKILL_RANKS


def test_system_config_defaults_and_save(tmp_db):
    init_db(tmp_db)
    assert get_system_config(tmp_db) == SystemConfig()
    custom = SystemConfig(default_mastery_requirements=ScoreRequirement(400), streak_bonus=2)
    save_system_config(tmp_db, custom)
    assert get_system_config(tmp_db) == custom


def test_skill_ranks_are_stored_sorted(tmp_db):
    init_db(tmp_db)
    save_skill_ranks(tmp_db, [RankTier("Gold", 500), RankTier("Bronze", 0), RankTier("Silver", 200)])
    assert [r.name for r in get_skill_ranks(tmp_db)] == ["Bronze", "Silver", "Gold"]


def test_empty_ladder_reads_as_defaults(tmp_db):
    init_db(tmp_db)
    set_setting(tmp_db, SKILL_RANKS_KEY, [])
    assert get_skill_ranks(tmp_db) == DEFAULT_SKILL_RANKS


def test_reward_rule_crud(tmp_db):
    init_db(tmp_db)
    stored = save_reward_rule(tmp_db, RewardRule("x", "Hard bonus", "DIFFICULTY", "LESS_THAN", "Hard", "REWARD", 20))
    assert stored.condition_operator == "EQUALS"
    assert get_reward_rule(tmp_db, "x") == stored

    save_reward_rule(tmp_db, RewardRule("x", "Hard bonus", "DIFFICULTY", "EQUALS", "Hard", "REWARD", 30))
    assert get_reward_rule(tmp_db, "x").points == 30
    assert len(get_reward_rules(tmp_db)) == 1

    delete_reward_rule(tmp_db, "x")
    assert get_reward_rule(tmp_db, "x") is None


def test_invalid_rule_is_not_stored(tmp_db):
    init_db(tmp_db)
    with pytest.raises(RuleValidationError):
        save_reward_rule(tmp_db, RewardRule("bad", "Bad", "SCORE", "ABOUT", 5, "REWARD", 1))
    assert get_reward_rules(tmp_db) == []


def test_badge_crud(tmp_db):
    init_db(tmp_db)
    save_badge(tmp_db, Badge("b2", "Second", "XP", "XP_THRESHOLD", 50, order=2))
    save_badge(tmp_db, Badge("b1", "First", "MASTERY", "MASTERY_COUNT", 1, is_active=False, order=1))
    badges = get_badges(tmp_db)
    assert [b.id for b in badges] == ["b1", "b2"]
    assert badges[0].is_active is False
    delete_badge(tmp_db, "b1")
    assert [b.id for b in get_badges(tmp_db)] == ["b2"]
