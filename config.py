"""
Centralized configuration for the Crease team builder bot.
"""

from __future__ import annotations

import os
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _parse_int(env_var: str, default: int) -> int:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_float(env_var: str, default: float) -> float:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _parse_bool(env_var: str, default: bool) -> bool:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


DB_PATH = os.getenv("DB_PATH", "crease_team_builder.db")
DISCORD_BOT_TOKEN = os.getenv("DISCORD_BOT_TOKEN")

# Player ratings are whole numbers on a 1-5 scale
RATING_MIN = 1
RATING_MAX = 5
DEFAULT_PLAYER_RATING = _parse_int("DEFAULT_PLAYER_RATING", 3)

MIN_TEAMS = 2
MAX_TEAMS = _parse_int("TEAM_BUILDER_MAX_TEAMS", 10)
MAX_ROSTER_SIZE = _parse_int("TEAM_BUILDER_MAX_ROSTER_SIZE", 100)
PLAYER_NAME_MAX_LENGTH = _parse_int("PLAYER_NAME_MAX_LENGTH", 32)
PLAYER_NOTES_MAX_LENGTH = _parse_int("PLAYER_NOTES_MAX_LENGTH", 200)

DEFAULT_SESSION_NAME = os.getenv("DEFAULT_SESSION_NAME", "My Team Session")
# Session names appear in embed titles and field names (Discord limit 256)
SESSION_NAME_MAX_LENGTH = _parse_int("SESSION_NAME_MAX_LENGTH", 64)
SESSION_LIST_LIMIT = _parse_int("SESSION_LIST_LIMIT", 10)

TEAM_BUILDER_SETTINGS: dict[str, Any] = {
    "team_name_prefix": os.getenv("TEAM_NAME_PREFIX", "Team"),
    # Average batting/bowling at or above this counts as a strength in descriptions
    "strength_threshold": _parse_float("TEAM_STRENGTH_THRESHOLD", 3.5),
}

# Attach a PNG team sheet to /buildteams replies
TEAM_SHEET_IMAGES_ENABLED = _parse_bool("TEAM_SHEET_IMAGES_ENABLED", True)
