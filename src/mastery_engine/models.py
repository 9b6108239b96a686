"""Data classes for the mastery domain model."""
from dataclasses import dataclass, field
from typing import Optional, Union

QUESTIONS = "QUESTIONS"
SCORE = "SCORE"

STUDENT_ROLE = "STUDENT"

EASY = "Easy"
MEDIUM = "Medium"
HARD = "Hard"


@dataclass(frozen=True)
class AttemptRecord:
    id: str
    student_id: str
    skill_id: str
    score: int
    timestamp: int  # epoch ms
    attempts: int = 1
    question_id: Optional[str] = None

    @property
    def is_correct(self) -> bool:
        return self.score > 0

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "studentId": self.student_id,
            "skillId": self.skill_id,
            "score": self.score,
            "timestamp": self.timestamp,
            "attempts": self.attempts,
        }
        if self.question_id is not None:
            data["questionId"] = self.question_id
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "AttemptRecord":
        return cls(
            id=str(data["id"]),
            student_id=str(data["studentId"]),
            skill_id=str(data["skillId"]),
            score=int(data.get("score") or 0),
            timestamp=int(data.get("timestamp") or 0),
            attempts=int(data.get("attempts") or 1),
            question_id=data.get("questionId"),
        )


@dataclass(frozen=True)
class QuestionsRequirement:
    """Master a skill by answering `value` distinct questions correctly."""
    value: int
    min_accuracy: Optional[float] = None
    is_percentage: bool = False

    type = QUESTIONS


@dataclass(frozen=True)
class ScoreRequirement:
    """Master a skill by accumulating `value` XP (legacy)."""
    value: int
    min_accuracy: Optional[float] = None

    type = SCORE


MasteryRequirement = Union[QuestionsRequirement, ScoreRequirement]


def requirement_from_dict(data: Optional[dict]) -> Optional[MasteryRequirement]:
    """Parse a `{type, value, minAccuracy?, isPercentage?}` document.

    Returns None for a missing or unrecognised document so callers can fall
    back to the system default.
    """
    if not data:
        return None
    kind = data.get("type")
    value = data.get("value")
    if value is None:
        return None
    min_accuracy = data.get("minAccuracy")
    if min_accuracy is not None:
        min_accuracy = float(min_accuracy)
    if kind == QUESTIONS:
        return QuestionsRequirement(
            value=int(value),
            min_accuracy=min_accuracy,
            is_percentage=bool(data.get("isPercentage", False)),
        )
    if kind == SCORE:
        return ScoreRequirement(value=int(value), min_accuracy=min_accuracy)
    return None


def requirement_to_dict(requirement: MasteryRequirement) -> dict:
    data = {"type": requirement.type, "value": requirement.value}
    if requirement.min_accuracy is not None:
        data["minAccuracy"] = requirement.min_accuracy
    if isinstance(requirement, QuestionsRequirement) and requirement.is_percentage:
        data["isPercentage"] = True
    return data


@dataclass(frozen=True)
class RankTier:
    name: str
    threshold: float
    icon: str = ""
    color: str = ""
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "threshold": self.threshold,
            "icon": self.icon,
            "color": self.color,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RankTier":
        return cls(
            name=data["name"],
            threshold=data.get("threshold", 0),
            icon=data.get("icon", ""),
            color=data.get("color", ""),
            description=data.get("description", ""),
        )


@dataclass(frozen=True)
class RewardRule:
    id: str
    name: str
    trigger_type: str  # SCORE, STREAK, DIFFICULTY, ACCURACY
    condition_operator: str  # GREATER_THAN, LESS_THAN, EQUALS
    condition_value: Union[float, str]
    effect_type: str  # REWARD, PENALTY
    points: int
    message: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "triggerType": self.trigger_type,
            "conditionOperator": self.condition_operator,
            "conditionValue": self.condition_value,
            "effectType": self.effect_type,
            "points": self.points,
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RewardRule":
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            trigger_type=data["triggerType"],
            condition_operator=data.get("conditionOperator", "EQUALS"),
            condition_value=data.get("conditionValue"),
            effect_type=data.get("effectType", "REWARD"),
            points=int(data.get("points") or 0),
            message=data.get("message", ""),
        )


@dataclass
class Skill:
    id: str
    skill_name: str
    grade: str = ""
    subject: str = ""
    difficulty: str = EASY
    mastery_requirements: Optional[MasteryRequirement] = None
    question_bank_size: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "Skill":
        bank = data.get("questionBank")
        bank_size = len(bank) if isinstance(bank, list) else int(data.get("questionBankSize") or 0)
        return cls(
            id=str(data["id"]),
            skill_name=data.get("skillName", data.get("name", "")),
            grade=data.get("grade", ""),
            subject=data.get("subject", ""),
            difficulty=data.get("difficulty", EASY),
            mastery_requirements=requirement_from_dict(data.get("masteryRequirements")),
            question_bank_size=bank_size,
        )

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "skillName": self.skill_name,
            "grade": self.grade,
            "subject": self.subject,
            "difficulty": self.difficulty,
            "questionBankSize": self.question_bank_size,
        }
        if self.mastery_requirements is not None:
            data["masteryRequirements"] = requirement_to_dict(self.mastery_requirements)
        return data


@dataclass(frozen=True)
class StudentStats:
    total_questions: int = 0
    correct_questions: int = 0
    skills_mastered: int = 0
    streak: int = 0
    last_activity_date: int = 0  # epoch ms, 0 = never active

    def to_dict(self) -> dict:
        return {
            "totalQuestions": self.total_questions,
            "correctQuestions": self.correct_questions,
            "skillsMastered": self.skills_mastered,
            "streak": self.streak,
            "lastActivityDate": self.last_activity_date,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StudentStats":
        return cls(
            total_questions=int(data.get("totalQuestions") or 0),
            correct_questions=int(data.get("correctQuestions") or 0),
            skills_mastered=int(data.get("skillsMastered") or 0),
            streak=int(data.get("streak") or 0),
            last_activity_date=int(data.get("lastActivityDate") or 0),
        )


@dataclass
class Student:
    id: str
    name: str
    role: str = STUDENT_ROLE
    grades: list[str] = field(default_factory=list)
    display_name: Optional[str] = None
    avatar: Optional[str] = None
    stats: Optional[StudentStats] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Student":
        grades = data.get("grades")
        if grades is None:
            # Older profiles carry a single grade
            grades = [data["grade"]] if data.get("grade") else []
        stats = data.get("stats")
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            role=data.get("role", STUDENT_ROLE),
            grades=list(grades),
            display_name=data.get("displayName"),
            avatar=data.get("avatar"),
            stats=StudentStats.from_dict(stats) if stats else None,
        )

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "role": self.role,
            "grades": list(self.grades),
        }
        if self.display_name is not None:
            data["displayName"] = self.display_name
        if self.avatar is not None:
            data["avatar"] = self.avatar
        if self.stats is not None:
            data["stats"] = self.stats.to_dict()
        return data


@dataclass(frozen=True)
class SystemConfig:
    default_mastery_requirements: MasteryRequirement = QuestionsRequirement(value=10, min_accuracy=60)
    base_mastery_points: int = 100
    standard_penalty_points: int = 10
    streak_bonus: int = 5
    medium_multiplier: float = 1.5
    hard_multiplier: float = 2.0
    speed_bonus_fast: int = 25
    speed_bonus_standard: int = 10

    def to_dict(self) -> dict:
        return {
            "defaultMasteryRequirements": requirement_to_dict(self.default_mastery_requirements),
            "baseMasteryPoints": self.base_mastery_points,
            "standardPenaltyPoints": self.standard_penalty_points,
            "streakBonus": self.streak_bonus,
            "mediumMultiplier": self.medium_multiplier,
            "hardMultiplier": self.hard_multiplier,
            "speedBonusFast": self.speed_bonus_fast,
            "speedBonusStandard": self.speed_bonus_standard,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SystemConfig":
        """Build a config from a stored document, keeping defaults for missing keys."""
        defaults = cls()
        requirement = requirement_from_dict(data.get("defaultMasteryRequirements"))
        return cls(
            default_mastery_requirements=requirement or defaults.default_mastery_requirements,
            base_mastery_points=data.get("baseMasteryPoints", defaults.base_mastery_points),
            standard_penalty_points=data.get("standardPenaltyPoints", defaults.standard_penalty_points),
            streak_bonus=data.get("streakBonus", defaults.streak_bonus),
            medium_multiplier=data.get("mediumMultiplier", defaults.medium_multiplier),
            hard_multiplier=data.get("hardMultiplier", defaults.hard_multiplier),
            speed_bonus_fast=data.get("speedBonusFast", defaults.speed_bonus_fast),
            speed_bonus_standard=data.get("speedBonusStandard", defaults.speed_bonus_standard),
        )


@dataclass(frozen=True)
class Badge:
    id: str
    name: str
    category: str  # MASTERY, STREAK, XP, CUSTOM
    unlock_type: str  # MASTERY_COUNT, STREAK_DAYS, XP_THRESHOLD, CUSTOM
    unlock_value: int
    description: str = ""
    icon: str = ""
    is_active: bool = True
    order: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "category": self.category,
            "unlockCriteria": {"type": self.unlock_type, "value": self.unlock_value},
            "isActive": self.is_active,
            "order": self.order,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Badge":
        criteria = data.get("unlockCriteria") or {}
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            description=data.get("description", ""),
            icon=data.get("icon", ""),
            category=data.get("category", "CUSTOM"),
            unlock_type=criteria.get("type", "CUSTOM"),
            unlock_value=int(criteria.get("value") or 0),
            is_active=bool(data.get("isActive", True)),
            order=int(data.get("order") or 0),
        )


@dataclass(frozen=True)
class MasteryStatus:
    total_score: int
    progress: float
    progress_label: str
    is_mastered: bool
    rank_index: int
    rank: RankTier
    completed_question_ids: tuple[str, ...] = ()


@dataclass
class LeaderboardEntry:
    user_id: str
    name: str
    mastered_count: int
    rank: int = 0
    display_name: Optional[str] = None
    avatar: Optional[str] = None
    progress_percent: Optional[float] = None
