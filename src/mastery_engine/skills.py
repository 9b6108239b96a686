"""Skill catalog storage."""
import json
import sqlite3
from typing import Optional

from mastery_engine.db import get_connection
from mastery_engine.models import Skill, requirement_from_dict, requirement_to_dict


def _row_to_skill(row: sqlite3.Row) -> Skill:
    requirement = json.loads(row["mastery_requirements"]) if row["mastery_requirements"] else None
    return Skill(
        id=row["id"],
        skill_name=row["skill_name"],
        grade=row["grade"] or "",
        subject=row["subject"] or "",
        difficulty=row["difficulty"],
        mastery_requirements=requirement_from_dict(requirement),
        question_bank_size=row["question_bank_size"] or 0,
    )


def save_skill(db_path: str, skill: Skill) -> None:
    requirement = skill.mastery_requirements
    conn = get_connection(db_path)
    conn.execute(
        """INSERT OR REPLACE INTO skills
        (id, skill_name, grade, subject, difficulty, mastery_requirements, question_bank_size)
        VALUES (?, ?, ?, ?, ?, ?, ?)""",
        (skill.id, skill.skill_name, skill.grade, skill.subject, skill.difficulty,
         json.dumps(requirement_to_dict(requirement)) if requirement else None,
         skill.question_bank_size),
    )
    conn.commit()
    conn.close()


def get_skills(db_path: str, grade: Optional[str] = None) -> list[Skill]:
    conn = get_connection(db_path)
    if grade is None:
        rows = conn.execute("SELECT * FROM skills ORDER BY subject, skill_name").fetchall()
    else:
        rows = conn.execute(
            "SELECT * FROM skills WHERE grade = ? ORDER BY subject, skill_name", (grade,)
        ).fetchall()
    conn.close()
    return [_row_to_skill(r) for r in rows]


def get_skill(db_path: str, skill_id: str) -> Optional[Skill]:
    conn = get_connection(db_path)
    row = conn.execute("SELECT * FROM skills WHERE id = ?", (skill_id,)).fetchone()
    conn.close()
    return _row_to_skill(row) if row else None
