"""Reward and penalty rule evaluation for a single attempt."""
import dataclasses
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from mastery_engine.errors import RuleValidationError
from mastery_engine.models import RewardRule

logger = logging.getLogger(__name__)

TRIGGER_FIELDS = {
    "SCORE": "score",
    "STREAK": "streak",
    "DIFFICULTY": "difficulty",
    "ACCURACY": "accuracy",
}
OPERATORS = ("GREATER_THAN", "LESS_THAN", "EQUALS")
EFFECT_TYPES = ("REWARD", "PENALTY")


@dataclass(frozen=True)
class RewardContext:
    score: Optional[float] = None
    streak: Optional[int] = None
    difficulty: Optional[str] = None
    accuracy: Optional[float] = None


@dataclass(frozen=True)
class TriggeredEffect:
    rule: RewardRule
    effect_points: int

    @property
    def message(self) -> str:
        return self.rule.message


def _matches(operator: str, actual: Union[float, str], expected: Union[float, str]) -> bool:
    if operator == "EQUALS":
        return actual == expected
    if operator == "GREATER_THAN":
        return actual > expected
    if operator == "LESS_THAN":
        return actual < expected
    return False


def rule_matches(rule: RewardRule, context: RewardContext) -> bool:
    field_name = TRIGGER_FIELDS.get(rule.trigger_type)
    if field_name is None:
        logger.debug("rule %s: unknown trigger %r", rule.id, rule.trigger_type)
        return False
    actual = getattr(context, field_name)
    if actual is None or rule.condition_value is None:
        return False
    operator = "EQUALS" if rule.trigger_type == "DIFFICULTY" else rule.condition_operator
    try:
        return _matches(operator, actual, rule.condition_value)
    except TypeError:
        logger.debug("rule %s: cannot compare %r with %r", rule.id, actual, rule.condition_value)
        return False


def effect_points(rule: RewardRule) -> int:
    return rule.points if rule.effect_type == "REWARD" else -rule.points


def evaluate_rules(context: RewardContext, rules: Iterable[RewardRule]) -> list[TriggeredEffect]:
    """Every rule whose condition holds for the attempt, in input order.

    Pure; safe to call for a live preview while a rule is being edited.
    """
    return [TriggeredEffect(rule, effect_points(rule)) for rule in rules if rule_matches(rule, context)]


def total_adjustment(effects: Iterable[TriggeredEffect]) -> int:
    return sum(e.effect_points for e in effects)


def normalize_rule(rule: RewardRule) -> RewardRule:
    """Difficulty rules only support equality."""
    if rule.trigger_type == "DIFFICULTY" and rule.condition_operator != "EQUALS":
        return dataclasses.replace(rule, condition_operator="EQUALS")
    return rule


def validate_rule(rule: RewardRule) -> RewardRule:
    """Check an authored rule and return its normalized form."""
    if rule.trigger_type not in TRIGGER_FIELDS:
        raise RuleValidationError(f"Unknown trigger type: {rule.trigger_type}")
    if rule.condition_operator not in OPERATORS:
        raise RuleValidationError(f"Unknown operator: {rule.condition_operator}")
    if rule.effect_type not in EFFECT_TYPES:
        raise RuleValidationError(f"Unknown effect type: {rule.effect_type}")
    if rule.points < 0:
        raise RuleValidationError("Rule points must not be negative")
    if rule.trigger_type != "DIFFICULTY" and isinstance(rule.condition_value, str):
        try:
            rule = dataclasses.replace(rule, condition_value=float(rule.condition_value))
        except ValueError:
            raise RuleValidationError(
                f"{rule.trigger_type} rules need a numeric condition, got {rule.condition_value!r}"
            ) from None
    return normalize_rule(rule)
