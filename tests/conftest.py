from datetime import date, datetime

import pytest

from mastery_engine.models import AttemptRecord


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_mastery.db")
    return db_path


def ts(day: date, hour: int = 12) -> int:
    """Epoch ms for a local wall-clock time on `day`."""
    return int(datetime(day.year, day.month, day.day, hour).timestamp() * 1000)


def make_results(count, score=100, student_id="student-1", skill_id="skill-123", prefix="r", question_ids=False):
    return [
        AttemptRecord(
            id=f"{prefix}-{i}",
            student_id=student_id,
            skill_id=skill_id,
            score=score,
            timestamp=1_700_000_000_000 + i,
            question_id=f"q-{prefix}-{i}" if question_ids else None,
        )
        for i in range(count)
    ]
