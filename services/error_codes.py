"""
Standard error codes for service layer.

These error codes allow command handlers to programmatically handle
specific error conditions without parsing error message text.

Usage:
    from services.error_codes import EMPTY_ROSTER, INVALID_TEAM_COUNT
    from services.result import Result

    if not players:
        return Result.fail("Add some players first", code=EMPTY_ROSTER)
"""

# General errors
VALIDATION_ERROR = "validation_error"

# Roster errors
PLAYER_NOT_FOUND = "player_not_found"
INVALID_RATING = "invalid_rating"
INVALID_PLAYER_NAME = "invalid_player_name"
ROSTER_FULL = "roster_full"

# Team generation errors
EMPTY_ROSTER = "empty_roster"
INVALID_TEAM_COUNT = "invalid_team_count"
NO_TEAMS_GENERATED = "no_teams_generated"

# Session errors
SESSION_NOT_FOUND = "session_not_found"
INVALID_SESSION_NAME = "invalid_session_name"
