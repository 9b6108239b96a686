# tests/test_models.py
from mastery_engine.models import (
    AttemptRecord, Badge, QuestionsRequirement, RankTier, RewardRule, ScoreRequirement, Skill,
    Student, StudentStats, SystemConfig, requirement_from_dict, requirement_to_dict,
)


def test_attempt_record_correctness():
    assert AttemptRecord("1", "s", "k", 100, 0).is_correct
    assert not AttemptRecord("1", "s", "k", 0, 0).is_correct
    assert not AttemptRecord("1", "s", "k", -10, 0).is_correct


def test_attempt_record_from_dict():
    record = AttemptRecord.from_dict({
        "id": "r1", "studentId": "s1", "skillId": "k1", "score": 50,
        "timestamp": 1700000000000, "questionId": "q7",
    })
    assert record == AttemptRecord("r1", "s1", "k1", 50, 1700000000000, 1, "q7")
    assert record.to_dict()["questionId"] == "q7"
    assert "questionId" not in AttemptRecord("r2", "s1", "k1", 0, 1).to_dict()


def test_requirement_parsing():
    assert requirement_from_dict({"type": "QUESTIONS", "value": 5, "minAccuracy": 80}) == \
        QuestionsRequirement(5, min_accuracy=80)
    assert requirement_from_dict({"type": "SCORE", "value": 500}) == ScoreRequirement(500)
    assert requirement_from_dict({"type": "QUESTIONS", "value": 50, "isPercentage": True}).is_percentage


def test_requirement_parsing_rejects_unknown():
    assert requirement_from_dict(None) is None
    assert requirement_from_dict({}) is None
    assert requirement_from_dict({"type": "TIME", "value": 5}) is None
    assert requirement_from_dict({"type": "QUESTIONS"}) is None


def test_requirement_to_dict():
    assert requirement_to_dict(ScoreRequirement(500)) == {"type": "SCORE", "value": 500}
    assert requirement_to_dict(QuestionsRequirement(10, 60, True)) == {
        "type": "QUESTIONS", "value": 10, "minAccuracy": 60, "isPercentage": True,
    }


def test_skill_from_dict_counts_question_bank():
    skill = Skill.from_dict({
        "id": "k1", "skillName": "Fractions", "grade": "Grade 4", "difficulty": "Hard",
        "questionBank": [{"id": "q1"}, {"id": "q2"}],
        "masteryRequirements": {"type": "SCORE", "value": 300},
    })
    assert skill.question_bank_size == 2
    assert skill.mastery_requirements == ScoreRequirement(300)
    assert skill.difficulty == "Hard"
    assert Skill.from_dict({"id": 7, "skillName": "X", "questionBankSize": 4}).question_bank_size == 4


def test_student_from_dict_legacy_grade():
    student = Student.from_dict({"id": "s1", "name": "Ana", "grade": "Grade 3"})
    assert student.grades == ["Grade 3"]
    assert student.role == "STUDENT"
    assert student.stats is None


def test_student_round_trip_with_stats():
    student = Student("s1", "Ana", grades=["Grade 3"], display_name="Ana B.",
                      stats=StudentStats(4, 3, 1, 2, 1700000000000))
    assert Student.from_dict(student.to_dict()) == student


def test_system_config_defaults_fill_missing_keys():
    cfg = SystemConfig.from_dict({"streakBonus": 7})
    assert cfg.streak_bonus == 7
    assert cfg.base_mastery_points == 100
    assert cfg.default_mastery_requirements == QuestionsRequirement(10, min_accuracy=60)


def test_reward_rule_from_dict_defaults():
    rule = RewardRule.from_dict({"id": 3, "triggerType": "SCORE", "conditionValue": 90})
    assert rule.id == "3"
    assert rule.condition_operator == "EQUALS"
    assert rule.effect_type == "REWARD"
    assert rule.points == 0


def test_badge_unlock_criteria():
    badge = Badge.from_dict({
        "id": "b1", "name": "First", "category": "MASTERY",
        "unlockCriteria": {"type": "MASTERY_COUNT", "value": 1}, "order": 1,
    })
    assert badge.unlock_type == "MASTERY_COUNT"
    assert badge.unlock_value == 1
    assert badge.to_dict()["unlockCriteria"] == {"type": "MASTERY_COUNT", "value": 1}


def test_rank_tier_from_dict():
    tier = RankTier.from_dict({"name": "Gold", "threshold": 500})
    assert tier == RankTier("Gold", 500)


def test_requirement_min_accuracy_from_text():
    requirement = requirement_from_dict({"type": "QUESTIONS", "value": "10", "minAccuracy": "60"})
    assert requirement.value == 10
    assert requirement.min_accuracy == 60.0
