# Area: Shared
"""
quiz_judge._config — Runner Configuration
==========================================

Loads the runner config from an optional JSON file, overlays
environment variables (``.env`` is read first via python-dotenv) and
validates the result.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger("quiz_judge")

DEFAULT_CONFIG: Dict[str, Any] = {
    "store": "sqlite",
    "scorer": "gemini",
    "identity": "local",
    "db_path": "quiz_judge.db",
    "app_id": "year-end-ai-game-v1",
    "firebase_project_id": None,
    "display_delay_seconds": 4.0,
    "max_attempts": 5,
    "base_delay_seconds": 1.0,
    "fallback_points": 50,
    "fallback_feedback": "Network busy, have some points!",
    "group_by": "question_text",
    "questions_path": None,
    "log_file": "quiz_judge.log",
    "demo_mode": False,
}

# Environment variable → (config key, type)
ENV_MAPPINGS = {
    "QUIZ_STORE": ("store", str),
    "QUIZ_SCORER": ("scorer", str),
    "QUIZ_IDENTITY": ("identity", str),
    "QUIZ_DB_PATH": ("db_path", str),
    "QUIZ_APP_ID": ("app_id", str),
    "FIREBASE_PROJECT_ID": ("firebase_project_id", str),
    "QUIZ_DISPLAY_DELAY": ("display_delay_seconds", float),
    "QUIZ_MAX_ATTEMPTS": ("max_attempts", int),
    "QUIZ_FALLBACK_POINTS": ("fallback_points", int),
    "QUIZ_QUESTIONS": ("questions_path", str),
    "QUIZ_LOG_FILE": ("log_file", str),
    "GEMINI_API_KEY": ("gemini_api_key", str),
    "GEMINI_MODEL": ("gemini_model", str),
    "ANTHROPIC_MODEL": ("anthropic_model", str),
}

VALID_CHOICES = {
    "store": ("memory", "sqlite", "firestore"),
    "scorer": ("mock", "demo", "anthropic", "gemini"),
    "identity": ("local", "firebase"),
    "group_by": ("question_text", "question_id"),
}


def env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("true", "1", "yes")


def load_config(config_path: Optional[str] = None, use_dotenv: bool = True) -> Dict[str, Any]:
    """
    Build the runner config: defaults, then JSON file, then environment.

    Args:
        config_path: Optional JSON config file
        use_dotenv: Read a ``.env`` file into the environment first

    Raises:
        ValueError: If an environment value has the wrong type
    """
    if use_dotenv:
        load_dotenv()

    config: Dict[str, Any] = dict(DEFAULT_CONFIG)

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                config.update(json.load(f))
        else:
            logger.warning(f"Config file not found: {config_path}")

    for env_key, (config_key, cast) in ENV_MAPPINGS.items():
        if env_key in os.environ:
            raw = os.environ[env_key]
            try:
                config[config_key] = cast(raw)
            except ValueError as e:
                raise ValueError(f"Invalid value for {env_key}: {raw!r}") from e

    if env_flag("DEMO_MODE"):
        config["demo_mode"] = True

    return config


def apply_demo_mode(config: Dict[str, Any]) -> Dict[str, Any]:
    """Demo mode plays offline: heuristic scorer, in-memory store."""
    config = dict(config)
    config["demo_mode"] = True
    config["scorer"] = "demo"
    config["store"] = "memory"
    config["identity"] = "local"
    return config


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate config values.

    Raises:
        ValueError: Naming every invalid key
    """
    problems = []
    for key, choices in VALID_CHOICES.items():
        if config.get(key) not in choices:
            problems.append(f"{key} must be one of {list(choices)}, got {config.get(key)!r}")

    if not isinstance(config.get("max_attempts"), int) or config["max_attempts"] < 1:
        problems.append("max_attempts must be an integer >= 1")
    if not isinstance(config.get("fallback_points"), int) or not 0 <= config["fallback_points"] <= 100:
        problems.append("fallback_points must be an integer between 0 and 100")
    for key in ("display_delay_seconds", "base_delay_seconds"):
        value = config.get(key)
        if not isinstance(value, (int, float)) or value < 0:
            problems.append(f"{key} must be a non-negative number")

    if problems:
        raise ValueError("Invalid config: " + "; ".join(problems))
