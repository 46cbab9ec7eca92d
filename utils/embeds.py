"""
Reusable Discord embed builders.
"""

import discord

from domain.models.session import TeamBuilderSession
from domain.models.team import Team
from utils.formatting import (
    ROLE_EMOJIS,
    format_averages,
    format_fairness_rating,
    format_one_decimal,
    format_range,
    format_roster_line,
    format_team_member_line,
    sort_for_display,
    truncate,
)

# Discord limits
TITLE_LIMIT = 256
FIELD_NAME_LIMIT = 256
FIELD_VALUE_LIMIT = 1024
DESCRIPTION_LIMIT = 4096
MAX_FIELDS = 25

# Per message: embed count and combined characters across all embeds
EMBEDS_PER_MESSAGE = 10
MESSAGE_TOTAL_LIMIT = 6000


def create_roster_embed(session: TeamBuilderSession, max_teams: int) -> discord.Embed:
    """Create the roster embed with player list and team count status."""
    player_count = session.get_player_count()
    can_generate = player_count >= session.number_of_teams and player_count > 0

    embed = discord.Embed(
        title=truncate(f"👥 {session.session_name}", TITLE_LIMIT),
        description=f"Players: {player_count} · Teams: {session.number_of_teams} · Max teams: {max_teams}",
        color=discord.Color.green() if can_generate else discord.Color.orange(),
    )

    if session.players:
        lines = [format_roster_line(p) for p in session.players]
        embed.add_field(
            name=f"Players ({player_count})",
            value=truncate("\n".join(lines), FIELD_VALUE_LIMIT),
            inline=False,
        )
    else:
        embed.add_field(name="Players (0)", value="No players yet. Use `/addplayer`.", inline=False)

    if not can_generate:
        embed.add_field(
            name="⚠️ Not enough players",
            value=(
                f"You need at least {session.number_of_teams} players to generate "
                f"{session.number_of_teams} teams. Currently you have {player_count} players."
            ),
            inline=False,
        )

    return embed


def _leadership_text(team: Team) -> str:
    captain = team.captain.name if team.captain else "Not assigned"
    vice = team.vice_captain.name if team.vice_captain else "Not assigned"
    keeper = team.wicketkeeper.name if team.wicketkeeper else "Not assigned"
    return (
        f"{ROLE_EMOJIS['Captain']} Captain: {captain}\n"
        f"{ROLE_EMOJIS['Vice-Captain']} Vice-Captain: {vice}\n"
        f"{ROLE_EMOJIS['Wicketkeeper']} Wicketkeeper: {keeper}"
    )


def create_team_embed(team: Team) -> discord.Embed:
    """Create the embed for one team: description verbatim, leadership, members, averages."""
    title = f"{team.name} · Fairness Rating {format_fairness_rating(team)}"
    if team.wicketkeeper_count:
        title += f" · {ROLE_EMOJIS['Wicketkeeper']} {team.wicketkeeper_count} WK"

    embed = discord.Embed(
        title=truncate(title, TITLE_LIMIT),
        description=truncate(team.description, DESCRIPTION_LIMIT),
        color=discord.Color.blue(),
    )
    embed.add_field(name="Leadership", value=_leadership_text(team), inline=False)

    members = "\n".join(format_team_member_line(p, team) for p in sort_for_display(team.players))
    embed.add_field(
        name=f"Players ({team.get_size()})",
        value=truncate(members, FIELD_VALUE_LIMIT) if members else "No players",
        inline=False,
    )
    embed.set_footer(text=format_averages(team))
    return embed


def create_fairness_embed(teams: list[Team], summary: dict) -> discord.Embed:
    """Create the fairness analysis embed shown above the generated teams."""
    embed = discord.Embed(
        title="🎯 Fairness Analysis",
        description="Lower range difference = more balanced teams",
        color=discord.Color.gold(),
    )
    embed.add_field(name="Batting Range", value=format_range(summary.get("batting_range")), inline=True)
    embed.add_field(name="Bowling Range", value=format_range(summary.get("bowling_range")), inline=True)

    ratings = summary.get("fairness_ratings") or {}
    if ratings:
        embed.add_field(
            name="Fairness Ratings",
            value=truncate(
                "\n".join(
                    f"{name}: {format_one_decimal(rating)}/5" for name, rating in ratings.items()
                ),
                FIELD_VALUE_LIMIT,
            ),
            inline=False,
        )
    embed.set_footer(
        text=f"{len(teams)} teams · Captain selection by leadership → Snake draft → Role assignments"
    )
    return embed


def create_teams_embeds(teams: list[Team], summary: dict) -> list[discord.Embed]:
    """Fairness embed followed by one embed per team; send them with batch_embeds."""
    return [create_fairness_embed(teams, summary)] + [create_team_embed(t) for t in teams]


def batch_embeds(embeds: list[discord.Embed]) -> list[list[discord.Embed]]:
    """
    Group embeds into messages Discord will accept.

    A batch closes when it holds EMBEDS_PER_MESSAGE embeds or when the next
    embed would push its combined length past MESSAGE_TOTAL_LIMIT. Order is
    kept.
    """
    batches: list[list[discord.Embed]] = []
    current: list[discord.Embed] = []
    current_chars = 0

    for embed in embeds:
        size = len(embed)
        if current and (len(current) >= EMBEDS_PER_MESSAGE or current_chars + size > MESSAGE_TOTAL_LIMIT):
            batches.append(current)
            current, current_chars = [], 0
        current.append(embed)
        current_chars += size

    if current:
        batches.append(current)
    return batches


def create_session_list_embed(sessions: list[dict]) -> discord.Embed:
    """Create the embed listing a user's saved sessions."""
    embed = discord.Embed(title="💾 Saved Sessions", color=discord.Color.blurple())
    if not sessions:
        embed.description = "No saved sessions yet. Use `/saveteams` after building teams."
        return embed

    for session in sessions[:MAX_FIELDS]:
        embed.add_field(
            name=truncate(session["session_name"], FIELD_NAME_LIMIT),
            value=(
                f"{session['player_count']} players · {session['number_of_teams']} teams\n"
                f"Saved {session['updated_at']}"
            ),
            inline=False,
        )
    return embed
