"""
Shared formatting helpers and role constants.
"""

from collections.abc import Iterable

from domain.models.player import Player
from domain.models.team import Team
from domain.services.team_description_service import round_half_up

# Team role configuration with emojis
ROLE_EMOJIS = {
    "Captain": "👑",
    "Vice-Captain": "🥈",
    "Wicketkeeper": "🧤",
}

SKILL_EMOJIS = {
    "batting": "🏏",
    "bowling": "⚾",
    "captaincy": "👑",
}


def get_rating_emoji(rating: int) -> str:
    """Emoji tier for a 1-5 rating."""
    if rating >= 4:
        return "⭐"
    if rating >= 3:
        return "👍"
    if rating >= 2:
        return "👌"
    return "📈"


def get_overall_rating(player: Player) -> int:
    """Mean of the three ratings, rounded half up."""
    return int((player.batting + player.bowling + player.captaincy) / 3 + 0.5)


def format_role_display(role: str) -> str:
    """Return role string with emoji (e.g., '👑 Captain')."""
    emoji = ROLE_EMOJIS.get(role, "")
    return f"{emoji} {role}".strip()


def format_roles_list(roles: Iterable[str]) -> str:
    """Return comma-separated roles with emoji display."""
    return ", ".join(format_role_display(r) for r in roles)


def format_player_ratings(player: Player) -> str:
    """Compact rating line, e.g. '🏏 4 ⚾ 3 👑 5 ⭐'."""
    return (
        f"{SKILL_EMOJIS['batting']} {player.batting} "
        f"{SKILL_EMOJIS['bowling']} {player.bowling} "
        f"{SKILL_EMOJIS['captaincy']} {player.captaincy} "
        f"{get_rating_emoji(get_overall_rating(player))}"
    )


def format_roster_line(player: Player) -> str:
    """One roster entry: name, wicketkeeper badge, ratings, notes."""
    line = f"**{player.name}**"
    if player.is_wicketkeeper:
        line += f" {ROLE_EMOJIS['Wicketkeeper']}"
    line += f" · {format_player_ratings(player)}"
    if player.has_notes():
        line += f" · _{player.notes}_"
    return line


def format_team_member_line(player: Player, team: Team) -> str:
    """One team member: name, role badges, ratings."""
    roles = team.get_player_roles(player.id)
    line = f"**{player.name}**"
    if roles:
        line += f" ({format_roles_list(roles)})"
    line += f" · {format_player_ratings(player)}"
    return line


def sort_for_display(players: list[Player]) -> list[Player]:
    """Strongest overall first; ties keep membership order."""
    return sorted(players, key=lambda p: p.batting + p.bowling + p.captaincy, reverse=True)


def format_one_decimal(value: float) -> str:
    """One decimal place, exact halves rounded up."""
    return f"{round_half_up(value):.1f}"


def format_fairness_rating(team: Team) -> str:
    return f"{format_one_decimal(team.get_fairness_rating())}/5"


def format_averages(team: Team) -> str:
    """Per-team averages, recomputed from membership."""
    return (
        f"Avg Batting {format_one_decimal(team.get_average_batting())} · "
        f"Avg Bowling {format_one_decimal(team.get_average_bowling())} · "
        f"Avg Leadership {format_one_decimal(team.get_average_captaincy())}"
    )


def format_range(value_range: tuple[float, float] | None) -> str:
    if value_range is None:
        return "—"
    low, high = value_range
    return f"{format_one_decimal(low)} - {format_one_decimal(high)} avg"


def truncate(text: str, limit: int) -> str:
    """Trim text to a Discord field limit, marking the cut with an ellipsis."""
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "…"
