# league_api/config.py
from __future__ import annotations

import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()

KNOWN_PRESETS = ("limited-overs", "multi-day")
KNOWN_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _get_env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, str(default))
    try:
        return int(raw)
    except ValueError:
        return default


# -------------------------
# Scoring defaults
# -------------------------
# Preset that partial configurations are merged over
DEFAULT_SCORING_PRESET: str = _get_env("DEFAULT_SCORING_PRESET", "limited-overs").lower()


# -------------------------
# Service
# -------------------------
LOG_LEVEL: str = _get_env("LOG_LEVEL", "INFO").upper()

# Upper bound on rows accepted from a single CSV match log
MATCH_LOG_MAX_ROWS: int = _get_env_int("MATCH_LOG_MAX_ROWS", 5000)


def validate_config() -> None:
    if DEFAULT_SCORING_PRESET not in KNOWN_PRESETS:
        raise RuntimeError(
            f"DEFAULT_SCORING_PRESET must be one of {', '.join(KNOWN_PRESETS)} (got {DEFAULT_SCORING_PRESET!r})"
        )

    if LOG_LEVEL not in KNOWN_LOG_LEVELS:
        raise RuntimeError(f"LOG_LEVEL must be one of {', '.join(KNOWN_LOG_LEVELS)}")

    if MATCH_LOG_MAX_ROWS <= 0:
        raise RuntimeError("MATCH_LOG_MAX_ROWS must be positive")
