"""Import skills, students, attempt logs and admin documents from JSON or YAML."""
import json
import logging
from pathlib import Path

import yaml

from mastery_engine.errors import ImportFormatError
from mastery_engine.models import AttemptRecord, Badge, RankTier, RewardRule, Skill, Student, SystemConfig
from mastery_engine.results import save_results
from mastery_engine.settings import save_badge, save_reward_rule, save_skill_ranks, save_system_config
from mastery_engine.skills import save_skill
from mastery_engine.students import save_student

logger = logging.getLogger(__name__)

# Top-level keys understood in an import document
SECTIONS = ("systemConfig", "ranks", "rewardRules", "badges", "skills", "students", "results")


def read_file_content(file_path: str):
    """Parse a JSON or YAML file into Python data."""
    path = Path(file_path)
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    try:
        if suffix == ".json":
            return json.loads(text)
        elif suffix in (".yaml", ".yml"):
            return yaml.safe_load(text)
    except (ValueError, yaml.YAMLError) as e:
        raise ImportFormatError(f"{path.name}: {e}") from e
    raise ImportFormatError(f"{path.name}: unsupported file type {suffix or '(none)'}")


def detect_sections(data) -> list[str]:
    if not isinstance(data, dict):
        raise ImportFormatError("Import document must be a mapping of sections")
    found = [key for key in SECTIONS if key in data]
    if not found:
        raise ImportFormatError(f"No known sections; expected any of {', '.join(SECTIONS)}")
    return found


def import_data(db_path: str, data: dict) -> dict:
    """Write every recognised section to the store. Returns counts per section."""
    counts = {}
    try:
        for section in detect_sections(data):
            payload = data[section]
            if section == "systemConfig":
                save_system_config(db_path, SystemConfig.from_dict(payload or {}))
                counts[section] = 1
            elif section == "ranks":
                save_skill_ranks(db_path, [RankTier.from_dict(r) for r in payload])
                counts[section] = len(payload)
            elif section == "rewardRules":
                for rule in payload:
                    save_reward_rule(db_path, RewardRule.from_dict(rule))
                counts[section] = len(payload)
            elif section == "badges":
                for badge in payload:
                    save_badge(db_path, Badge.from_dict(badge))
                counts[section] = len(payload)
            elif section == "skills":
                for skill in payload:
                    save_skill(db_path, Skill.from_dict(skill))
                counts[section] = len(payload)
            elif section == "students":
                for student in payload:
                    save_student(db_path, Student.from_dict(student))
                counts[section] = len(payload)
            elif section == "results":
                counts[section] = save_results(db_path, [AttemptRecord.from_dict(r) for r in payload])
    except (KeyError, TypeError, ValueError) as e:
        raise ImportFormatError(f"Malformed {section} entry: {e!r}") from e
    logger.info("imported %s", ", ".join(f"{n} {k}" for k, n in counts.items()))
    return counts


def import_file(db_path: str, file_path: str) -> dict:
    """Import a file into the database."""
    data = read_file_content(file_path)
    counts = import_data(db_path, data)
    return {"filename": Path(file_path).name, "counts": counts}
