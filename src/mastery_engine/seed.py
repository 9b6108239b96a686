"""Seed the database with the default ladder, system config, reward rules and badges."""
from mastery_engine.db import get_connection
from mastery_engine.defaults import DEFAULT_SKILL_RANKS, DEFAULT_SYSTEM_CONFIG, INITIAL_BADGES, INITIAL_REWARDS
from mastery_engine.settings import (
    SKILL_RANKS_KEY, SYSTEM_CONFIG_KEY, get_setting, save_badge, save_reward_rule,
    save_skill_ranks, save_system_config,
)


def is_seeded(db_path: str) -> bool:
    """Check whether the default documents have been installed."""
    return get_setting(db_path, SKILL_RANKS_KEY) is not None


def seed_settings(db_path: str) -> None:
    """Install the default ladder and config where no document exists yet."""
    if get_setting(db_path, SYSTEM_CONFIG_KEY) is None:
        save_system_config(db_path, DEFAULT_SYSTEM_CONFIG)
    if get_setting(db_path, SKILL_RANKS_KEY) is None:
        save_skill_ranks(db_path, DEFAULT_SKILL_RANKS)


def seed_reward_rules(db_path: str) -> None:
    """Insert the starter reward rules if the rule list is empty."""
    conn = get_connection(db_path)
    count = conn.execute("SELECT COUNT(*) FROM reward_rules").fetchone()[0]
    conn.close()
    if count:
        return
    for rule in INITIAL_REWARDS:
        save_reward_rule(db_path, rule)


def seed_badges(db_path: str) -> None:
    """Insert the starter badges if no badges exist."""
    conn = get_connection(db_path)
    count = conn.execute("SELECT COUNT(*) FROM badges").fetchone()[0]
    conn.close()
    if count:
        return
    for badge in INITIAL_BADGES:
        save_badge(db_path, badge)


def seed_all(db_path: str) -> None:
    """Run all seed functions in order."""
    if is_seeded(db_path):
        return
    seed_settings(db_path)
    seed_reward_rules(db_path)
    seed_badges(db_path)
