"""Admin-owned documents: system config, rank ladder, reward rules and badges.

Every document is last-write-wins with no versioning; a change reinterprets
all historical attempts the next time they are evaluated.
"""
import json
import logging
from typing import Optional

from mastery_engine.db import get_connection
from mastery_engine.defaults import DEFAULT_SKILL_RANKS, DEFAULT_SYSTEM_CONFIG
from mastery_engine.models import Badge, RankTier, RewardRule, SystemConfig
from mastery_engine.rewards import validate_rule

logger = logging.getLogger(__name__)

SYSTEM_CONFIG_KEY = "system_config"
SKILL_RANKS_KEY = "skill_ranks"


def get_setting(db_path: str, key: str, default=None):
    """Decoded JSON document stored under `key`, or `default`."""
    conn = get_connection(db_path)
    row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
    conn.close()
    if row is None or row["value"] is None:
        return default
    try:
        return json.loads(row["value"])
    except json.JSONDecodeError:
        logger.warning("setting %r holds malformed JSON, using default", key)
        return default


def set_setting(db_path: str, key: str, value) -> None:
    payload = json.dumps(value)
    conn = get_connection(db_path)
    conn.execute(
        "INSERT INTO settings (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=?",
        (key, payload, payload),
    )
    conn.commit()
    conn.close()


def get_system_config(db_path: str) -> SystemConfig:
    data = get_setting(db_path, SYSTEM_CONFIG_KEY)
    if not isinstance(data, dict):
        return DEFAULT_SYSTEM_CONFIG
    return SystemConfig.from_dict(data)


def save_system_config(db_path: str, system_config: SystemConfig) -> None:
    set_setting(db_path, SYSTEM_CONFIG_KEY, system_config.to_dict())
    logger.info("system config saved")


def get_skill_ranks(db_path: str) -> list[RankTier]:
    """Stored rank ladder sorted by threshold, or the default ladder."""
    data = get_setting(db_path, SKILL_RANKS_KEY)
    if not isinstance(data, list) or not data:
        return list(DEFAULT_SKILL_RANKS)
    try:
        ranks = [RankTier.from_dict(r) for r in data]
    except (KeyError, TypeError):
        logger.warning("stored rank ladder is malformed, using defaults")
        return list(DEFAULT_SKILL_RANKS)
    return sorted(ranks, key=lambda r: r.threshold)


def save_skill_ranks(db_path: str, ranks: list[RankTier]) -> None:
    ladder = sorted(ranks, key=lambda r: r.threshold)
    set_setting(db_path, SKILL_RANKS_KEY, [r.to_dict() for r in ladder])
    logger.info("rank ladder saved (%d tiers)", len(ladder))


# --- Reward rules ---

def get_reward_rules(db_path: str) -> list[RewardRule]:
    conn = get_connection(db_path)
    rows = conn.execute("SELECT * FROM reward_rules ORDER BY rowid").fetchall()
    conn.close()
    return [
        RewardRule(
            id=r["id"],
            name=r["name"],
            trigger_type=r["trigger_type"],
            condition_operator=r["condition_operator"],
            condition_value=json.loads(r["condition_value"]) if r["condition_value"] else None,
            effect_type=r["effect_type"],
            points=r["points"],
            message=r["message"] or "",
        )
        for r in rows
    ]


def get_reward_rule(db_path: str, rule_id: str) -> Optional[RewardRule]:
    return next((r for r in get_reward_rules(db_path) if r.id == rule_id), None)


def save_reward_rule(db_path: str, rule: RewardRule) -> RewardRule:
    """Insert or replace a rule by id. Returns the normalized rule that was stored."""
    rule = validate_rule(rule)
    conn = get_connection(db_path)
    conn.execute(
        """INSERT INTO reward_rules
        (id, name, trigger_type, condition_operator, condition_value, effect_type, points, message)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        ON CONFLICT(id) DO UPDATE SET name=excluded.name, trigger_type=excluded.trigger_type,
            condition_operator=excluded.condition_operator, condition_value=excluded.condition_value,
            effect_type=excluded.effect_type, points=excluded.points, message=excluded.message""",
        (rule.id, rule.name, rule.trigger_type, rule.condition_operator,
         json.dumps(rule.condition_value), rule.effect_type, rule.points, rule.message),
    )
    conn.commit()
    conn.close()
    return rule


def delete_reward_rule(db_path: str, rule_id: str) -> None:
    conn = get_connection(db_path)
    conn.execute("DELETE FROM reward_rules WHERE id = ?", (rule_id,))
    conn.commit()
    conn.close()


# --- Badges ---

def get_badges(db_path: str) -> list[Badge]:
    conn = get_connection(db_path)
    rows = conn.execute("SELECT * FROM badges ORDER BY sort_order, rowid").fetchall()
    conn.close()
    return [
        Badge(
            id=r["id"],
            name=r["name"],
            description=r["description"] or "",
            icon=r["icon"] or "",
            category=r["category"],
            unlock_type=r["unlock_type"],
            unlock_value=r["unlock_value"],
            is_active=bool(r["is_active"]),
            order=r["sort_order"],
        )
        for r in rows
    ]


def save_badge(db_path: str, badge: Badge) -> None:
    conn = get_connection(db_path)
    conn.execute(
        """INSERT OR REPLACE INTO badges
        (id, name, description, icon, category, unlock_type, unlock_value, is_active, sort_order)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
        (badge.id, badge.name, badge.description, badge.icon, badge.category,
         badge.unlock_type, badge.unlock_value, int(badge.is_active), badge.order),
    )
    conn.commit()
    conn.close()


def delete_badge(db_path: str, badge_id: str) -> None:
    conn = get_connection(db_path)
    conn.execute("DELETE FROM badges WHERE id = ?", (badge_id,))
    conn.commit()
    conn.close()
