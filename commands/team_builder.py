"""
Team builder commands: roster management, /buildteams, and saved sessions.
"""

import logging
from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands

from config import RATING_MAX, RATING_MIN, TEAM_SHEET_IMAGES_ENABLED
from utils.drawing import draw_team_balance_chart, draw_team_sheet
from utils.embeds import (
    batch_embeds,
    create_roster_embed,
    create_session_list_embed,
    create_teams_embeds,
)
from utils.interaction_safety import safe_defer, safe_followup

logger = logging.getLogger("crease_bot.commands.team_builder")

Rating = app_commands.Range[int, RATING_MIN, RATING_MAX]


def _guild_id(interaction: discord.Interaction) -> int | None:
    return interaction.guild.id if interaction.guild else None


class TeamBuilderCommands(commands.Cog):
    """Commands for building balanced cricket teams from a roster."""

    def __init__(self, bot: commands.Bot, team_builder_service):
        self.bot = bot
        self.team_builder_service = team_builder_service

    async def _reply_error(self, interaction: discord.Interaction, message: str) -> None:
        await safe_followup(interaction, content=f"❌ {message}", ephemeral=True)

    async def _resolve_player(self, interaction: discord.Interaction, player: str):
        found = self.team_builder_service.find_player(_guild_id(interaction), interaction.user.id, player)
        if found is None:
            await self._reply_error(interaction, f"No player named '{player}' on your roster.")
        return found

    # --- Roster ---

    @app_commands.command(name="addplayer", description="Add a player to your team builder roster")
    @app_commands.describe(
        name="Player name",
        batting="Batting rating (1-5)",
        bowling="Bowling rating (1-5)",
        captaincy="Captaincy / leadership rating (1-5)",
        wicketkeeper="Can keep wicket",
        notes="Optional notes shown in the team description",
    )
    async def addplayer(
        self,
        interaction: discord.Interaction,
        name: str,
        batting: Rating = 3,
        bowling: Rating = 3,
        captaincy: Rating = 3,
        wicketkeeper: bool = False,
        notes: str = "",
    ):
        """Add a player to the roster."""
        logger.info(f"Addplayer command: User {interaction.user.id} adding {name}")
        if not await safe_defer(interaction, ephemeral=True):
            return

        result = self.team_builder_service.add_player(
            _guild_id(interaction),
            interaction.user.id,
            name,
            batting=batting,
            bowling=bowling,
            captaincy=captaincy,
            is_wicketkeeper=wicketkeeper,
            notes=notes,
        )
        if not result:
            await self._reply_error(interaction, result.error)
            return

        player = result.value
        workspace = self.team_builder_service.get_workspace(_guild_id(interaction), interaction.user.id)
        await safe_followup(
            interaction,
            content=f"✅ Added **{player.name}**. Roster now has {workspace.get_player_count()} players.",
            ephemeral=True,
        )

    @app_commands.command(name="editplayer", description="Change a roster player's ratings or notes")
    @app_commands.describe(
        player="Player name",
        new_name="New name",
        batting="Batting rating (1-5)",
        bowling="Bowling rating (1-5)",
        captaincy="Captaincy / leadership rating (1-5)",
        wicketkeeper="Can keep wicket",
        notes="Notes (send a single space to clear)",
    )
    async def editplayer(
        self,
        interaction: discord.Interaction,
        player: str,
        new_name: str | None = None,
        batting: Optional[Rating] = None,
        bowling: Optional[Rating] = None,
        captaincy: Optional[Rating] = None,
        wicketkeeper: bool | None = None,
        notes: str | None = None,
    ):
        """Edit an existing roster player."""
        if not await safe_defer(interaction, ephemeral=True):
            return

        found = await self._resolve_player(interaction, player)
        if found is None:
            return

        changes = {
            "name": new_name,
            "batting": batting,
            "bowling": bowling,
            "captaincy": captaincy,
            "is_wicketkeeper": wicketkeeper,
            "notes": notes,
        }
        changes = {k: v for k, v in changes.items() if v is not None}
        if not changes:
            await self._reply_error(interaction, "Nothing to change.")
            return

        result = self.team_builder_service.update_player(
            _guild_id(interaction), interaction.user.id, found.id, **changes
        )
        if not result:
            await self._reply_error(interaction, result.error)
            return

        await safe_followup(interaction, content=f"✅ Updated **{result.value.name}**.", ephemeral=True)

    @app_commands.command(name="removeplayer", description="Remove a player from your roster")
    @app_commands.describe(player="Player name")
    async def removeplayer(self, interaction: discord.Interaction, player: str):
        """Remove a roster player. Generated teams are cleared."""
        if not await safe_defer(interaction, ephemeral=True):
            return

        found = await self._resolve_player(interaction, player)
        if found is None:
            return

        result = self.team_builder_service.remove_player(_guild_id(interaction), interaction.user.id, found.id)
        if not result:
            await self._reply_error(interaction, result.error)
            return

        await safe_followup(
            interaction,
            content=f"🗑️ Removed **{found.name}**. Generated teams were cleared.",
            ephemeral=True,
        )

    @app_commands.command(name="roster", description="Show your team builder roster")
    async def roster(self, interaction: discord.Interaction):
        """Show the working roster."""
        if not await safe_defer(interaction, ephemeral=True):
            return

        guild_id = _guild_id(interaction)
        workspace = self.team_builder_service.get_workspace(guild_id, interaction.user.id)
        max_teams = self.team_builder_service.get_max_teams(guild_id, interaction.user.id)
        await safe_followup(interaction, embed=create_roster_embed(workspace, max_teams), ephemeral=True)

    @app_commands.command(name="setteams", description="Set how many teams to build")
    @app_commands.describe(count="Number of teams (at least 2, at most your roster size)")
    async def setteams(self, interaction: discord.Interaction, count: int):
        """Change the requested team count."""
        if not await safe_defer(interaction, ephemeral=True):
            return

        result = self.team_builder_service.set_number_of_teams(_guild_id(interaction), interaction.user.id, count)
        if not result:
            await self._reply_error(interaction, result.error)
            return

        await safe_followup(interaction, content=f"✅ Will build {result.value} teams.", ephemeral=True)

    @app_commands.command(name="sessionname", description="Name your team builder session")
    @app_commands.describe(name="Session name used when saving")
    async def sessionname(self, interaction: discord.Interaction, name: str):
        if not await safe_defer(interaction, ephemeral=True):
            return

        result = self.team_builder_service.set_session_name(_guild_id(interaction), interaction.user.id, name)
        if not result:
            await self._reply_error(interaction, result.error)
            return

        await safe_followup(interaction, content=f"✅ Session renamed to **{result.value}**.", ephemeral=True)

    # --- Teams ---

    @app_commands.command(name="buildteams", description="Generate fair teams from your roster")
    async def buildteams(self, interaction: discord.Interaction):
        """Balance the roster and post the teams."""
        logger.info(f"Buildteams command: User {interaction.user.id} ({interaction.user})")
        if not await safe_defer(interaction, ephemeral=False):
            return

        guild_id = _guild_id(interaction)
        try:
            result = self.team_builder_service.generate_teams(guild_id, interaction.user.id)
        except Exception as e:
            logger.error(f"Error building teams for user {interaction.user.id}: {e}", exc_info=True)
            await self._reply_error(interaction, "Unexpected error building teams. Try again later.")
            return

        if not result:
            await self._reply_error(interaction, result.error)
            return

        teams = result.value
        summary = self.team_builder_service.get_fairness_summary(guild_id, interaction.user.id).unwrap()
        embeds = create_teams_embeds(teams, summary)

        # Discord caps each message at 10 embeds and 6000 characters
        for index, batch in enumerate(batch_embeds(embeds)):
            kwargs = {"embeds": batch}
            if index == 0 and TEAM_SHEET_IMAGES_ENABLED:
                kwargs["file"] = discord.File(draw_team_sheet(teams), filename="team_sheet.png")
            await safe_followup(interaction, **kwargs)

    @app_commands.command(name="teamchart", description="Chart batting, bowling and leadership per team")
    async def teamchart(self, interaction: discord.Interaction):
        if not await safe_defer(interaction, ephemeral=False):
            return

        workspace = self.team_builder_service.get_workspace(_guild_id(interaction), interaction.user.id)
        if not workspace.has_teams():
            await self._reply_error(interaction, "No teams generated yet. Use `/buildteams`.")
            return

        chart = draw_team_balance_chart(workspace.teams)
        await safe_followup(interaction, file=discord.File(chart, filename="team_balance.png"))

    # --- Sessions ---

    @app_commands.command(name="saveteams", description="Save your roster and generated teams")
    async def saveteams(self, interaction: discord.Interaction):
        if not await safe_defer(interaction, ephemeral=True):
            return

        guild_id = _guild_id(interaction)
        try:
            result = self.team_builder_service.save_session(guild_id, interaction.user.id)
        except Exception as e:
            logger.error(f"Error saving session for user {interaction.user.id}: {e}", exc_info=True)
            await self._reply_error(interaction, "Unexpected error saving your session. Try again later.")
            return

        if not result:
            await self._reply_error(interaction, result.error)
            return

        workspace = self.team_builder_service.get_workspace(guild_id, interaction.user.id)
        await safe_followup(
            interaction,
            content=f"💾 Saved **{workspace.session_name}**.",
            ephemeral=True,
        )

    @app_commands.command(name="loadteams", description="Load a saved team builder session")
    @app_commands.describe(name="Session name (defaults to your most recent save)")
    async def loadteams(self, interaction: discord.Interaction, name: str | None = None):
        if not await safe_defer(interaction, ephemeral=True):
            return

        guild_id = _guild_id(interaction)
        try:
            result = self.team_builder_service.load_session(guild_id, interaction.user.id, name)
        except Exception as e:
            logger.error(f"Error loading session for user {interaction.user.id}: {e}", exc_info=True)
            await self._reply_error(interaction, "Unexpected error loading your session. Try again later.")
            return

        if not result:
            await self._reply_error(interaction, result.error)
            return

        session = result.value
        max_teams = self.team_builder_service.get_max_teams(guild_id, interaction.user.id)
        await safe_followup(
            interaction,
            content=f"📂 Loaded **{session.session_name}** with {len(session.teams)} teams.",
            embed=create_roster_embed(session, max_teams),
            ephemeral=True,
        )

    @app_commands.command(name="sessions", description="List your saved team builder sessions")
    async def sessions(self, interaction: discord.Interaction):
        if not await safe_defer(interaction, ephemeral=True):
            return

        result = self.team_builder_service.list_sessions(_guild_id(interaction), interaction.user.id)
        await safe_followup(interaction, embed=create_session_list_embed(result.value or []), ephemeral=True)

    @app_commands.command(name="deletesession", description="Delete a saved team builder session")
    @app_commands.describe(name="Session name")
    async def deletesession(self, interaction: discord.Interaction, name: str):
        if not await safe_defer(interaction, ephemeral=True):
            return

        result = self.team_builder_service.delete_session(_guild_id(interaction), interaction.user.id, name)
        if not result:
            await self._reply_error(interaction, result.error)
            return

        await safe_followup(interaction, content=f"🗑️ Deleted **{name}**.", ephemeral=True)


async def setup(bot: commands.Bot):
    """Setup function called when loading the cog."""
    team_builder_service = getattr(bot, "team_builder_service", None)
    await bot.add_cog(TeamBuilderCommands(bot, team_builder_service))
