"""Database initialization and connection management."""
import sqlite3
from pathlib import Path

from mastery_engine.config import config

DEFAULT_DB_PATH = config.DB_PATH

SCHEMA = """
CREATE TABLE IF NOT EXISTS skills (
    id TEXT PRIMARY KEY,
    skill_name TEXT NOT NULL,
    grade TEXT,
    subject TEXT,
    difficulty TEXT DEFAULT 'Easy',
    mastery_requirements TEXT,  -- JSON
    question_bank_size INTEGER DEFAULT 0
);

CREATE TABLE IF NOT EXISTS students (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    role TEXT DEFAULT 'STUDENT',
    grades TEXT DEFAULT '[]',  -- JSON
    display_name TEXT,
    avatar TEXT,
    stats TEXT  -- JSON, cached aggregate
);

CREATE TABLE IF NOT EXISTS results (
    id TEXT PRIMARY KEY,
    student_id TEXT NOT NULL,
    skill_id TEXT NOT NULL,
    score INTEGER NOT NULL,
    timestamp INTEGER NOT NULL,
    attempts INTEGER DEFAULT 1,
    question_id TEXT
);

CREATE INDEX IF NOT EXISTS idx_results_student_skill ON results (student_id, skill_id);

CREATE TABLE IF NOT EXISTS settings (
    key TEXT PRIMARY KEY,
    value TEXT  -- JSON document
);

CREATE TABLE IF NOT EXISTS reward_rules (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    trigger_type TEXT NOT NULL,
    condition_operator TEXT NOT NULL,
    condition_value TEXT,  -- JSON, number or difficulty label
    effect_type TEXT NOT NULL,
    points INTEGER NOT NULL,
    message TEXT
);

CREATE TABLE IF NOT EXISTS badges (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    description TEXT,
    icon TEXT,
    category TEXT NOT NULL,
    unlock_type TEXT NOT NULL,
    unlock_value INTEGER NOT NULL,
    is_active INTEGER DEFAULT 1,
    sort_order INTEGER DEFAULT 0
);
"""


def get_connection(db_path: str = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Return a SQLite connection with row factory enabled."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: str = DEFAULT_DB_PATH) -> None:
    """Initialize the database, creating all tables if they don't exist."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = get_connection(db_path)
    conn.executescript(SCHEMA)
    conn.commit()
    conn.close()
