"""Append-only attempt log."""
import logging
import sqlite3
from typing import Optional

from mastery_engine.db import get_connection
from mastery_engine.models import AttemptRecord

logger = logging.getLogger(__name__)


def _row_to_record(row: sqlite3.Row) -> AttemptRecord:
    return AttemptRecord(
        id=row["id"],
        student_id=row["student_id"],
        skill_id=row["skill_id"],
        score=row["score"],
        timestamp=row["timestamp"],
        attempts=row["attempts"],
        question_id=row["question_id"],
    )


def save_result(db_path: str, result: AttemptRecord) -> None:
    """Append one attempt. Records are never updated once written."""
    conn = get_connection(db_path)
    conn.execute(
        """INSERT INTO results (id, student_id, skill_id, score, timestamp, attempts, question_id)
        VALUES (?, ?, ?, ?, ?, ?, ?)""",
        (result.id, result.student_id, result.skill_id, result.score,
         result.timestamp, result.attempts, result.question_id),
    )
    conn.commit()
    conn.close()


def save_results(db_path: str, results: list[AttemptRecord]) -> int:
    """Bulk append, skipping ids already in the log. Returns rows inserted."""
    conn = get_connection(db_path)
    before = conn.total_changes
    conn.executemany(
        """INSERT OR IGNORE INTO results (id, student_id, skill_id, score, timestamp, attempts, question_id)
        VALUES (?, ?, ?, ?, ?, ?, ?)""",
        [(r.id, r.student_id, r.skill_id, r.score, r.timestamp, r.attempts, r.question_id) for r in results],
    )
    conn.commit()
    inserted = conn.total_changes - before
    conn.close()
    return inserted


def get_results(db_path: str, student_id: Optional[str] = None, skill_id: Optional[str] = None) -> list[AttemptRecord]:
    """Attempts in timestamp order, optionally narrowed to a student and/or skill."""
    clauses, params = [], []
    if student_id is not None:
        clauses.append("student_id = ?")
        params.append(student_id)
    if skill_id is not None:
        clauses.append("skill_id = ?")
        params.append(skill_id)
    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    conn = get_connection(db_path)
    rows = conn.execute(f"SELECT * FROM results {where} ORDER BY timestamp, rowid", params).fetchall()
    conn.close()
    return [_row_to_record(r) for r in rows]


def delete_results(db_path: str, student_id: str, skill_id: str) -> int:
    """Remove every attempt for a (student, skill) pair. Returns rows deleted."""
    conn = get_connection(db_path)
    cursor = conn.execute(
        "DELETE FROM results WHERE student_id = ? AND skill_id = ?", (student_id, skill_id)
    )
    conn.commit()
    conn.close()
    logger.info("reset %d attempts for student %s on skill %s", cursor.rowcount, student_id, skill_id)
    return cursor.rowcount
