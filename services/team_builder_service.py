"""
Team builder application service.

Owns each user's working roster, validates input before it reaches the
balancer, and saves/loads sessions through the repository.
"""

import dataclasses
import logging
import uuid

from config import (
    DEFAULT_PLAYER_RATING,
    DEFAULT_SESSION_NAME,
    MAX_ROSTER_SIZE,
    MAX_TEAMS,
    MIN_TEAMS,
    PLAYER_NAME_MAX_LENGTH,
    PLAYER_NOTES_MAX_LENGTH,
    RATING_MAX,
    RATING_MIN,
    SESSION_LIST_LIMIT,
    SESSION_NAME_MAX_LENGTH,
)
from domain.models.player import Player
from domain.models.session import TeamBuilderSession
from domain.models.team import Team
from domain.services.team_balancing_service import TeamBalancingService
from repositories.interfaces import ITeamBuilderRepository
from services import error_codes
from services.interfaces import ITeamBuilderService
from services.result import Result

logger = logging.getLogger("crease_bot.services.team_builder")

_UNSET = object()


class TeamBuilderService(ITeamBuilderService):
    """
    Roster management, team generation and session persistence.

    Working sessions live in memory, one per (guild, user), until saved.
    Any roster or team count change discards previously generated teams.
    """

    def __init__(
        self,
        team_builder_repo: ITeamBuilderRepository,
        balancing_service: TeamBalancingService | None = None,
        max_teams: int = MAX_TEAMS,
        max_roster_size: int = MAX_ROSTER_SIZE,
    ):
        self.team_builder_repo = team_builder_repo
        self.balancing_service = balancing_service or TeamBalancingService()
        self.max_teams = max_teams
        self.max_roster_size = max_roster_size
        self._workspaces: dict[tuple[int, int], TeamBuilderSession] = {}

    # --- Workspace ---

    @staticmethod
    def _key(guild_id: int | None, user_id: int) -> tuple[int, int]:
        return (guild_id if guild_id is not None else 0, user_id)

    def get_workspace(self, guild_id: int | None, user_id: int) -> TeamBuilderSession:
        """Get (or start) the user's working session."""
        key = self._key(guild_id, user_id)
        workspace = self._workspaces.get(key)
        if workspace is None:
            workspace = TeamBuilderSession(
                guild_id=key[0],
                user_id=user_id,
                session_name=DEFAULT_SESSION_NAME,
                number_of_teams=MIN_TEAMS,
            )
            self._workspaces[key] = workspace
        return workspace

    def reset_workspace(self, guild_id: int | None, user_id: int) -> TeamBuilderSession:
        """Discard the working session and start a fresh one."""
        self._workspaces.pop(self._key(guild_id, user_id), None)
        return self.get_workspace(guild_id, user_id)

    # --- Validation ---

    @staticmethod
    def _validate_rating(label: str, value) -> str | None:
        if isinstance(value, bool) or not isinstance(value, int):
            return f"{label} rating must be a whole number."
        if value < RATING_MIN or value > RATING_MAX:
            return f"{label} rating must be between {RATING_MIN} and {RATING_MAX}."
        return None

    @staticmethod
    def _clean_name(name: str | None) -> str:
        return (name or "").strip()

    def _validate_player_fields(self, name: str, batting, bowling, captaincy, notes: str) -> Result:
        if not name:
            return Result.fail("Player name cannot be empty.", code=error_codes.INVALID_PLAYER_NAME)
        if len(name) > PLAYER_NAME_MAX_LENGTH:
            return Result.fail(
                f"Player name must be at most {PLAYER_NAME_MAX_LENGTH} characters.",
                code=error_codes.INVALID_PLAYER_NAME,
            )
        for label, value in (("Batting", batting), ("Bowling", bowling), ("Captaincy", captaincy)):
            error = self._validate_rating(label, value)
            if error:
                return Result.fail(error, code=error_codes.INVALID_RATING)
        if notes and len(notes) > PLAYER_NOTES_MAX_LENGTH:
            return Result.fail(
                f"Notes must be at most {PLAYER_NOTES_MAX_LENGTH} characters.",
                code=error_codes.VALIDATION_ERROR,
            )
        return Result.ok()

    @staticmethod
    def _new_player_id(workspace: TeamBuilderSession) -> str:
        while True:
            player_id = uuid.uuid4().hex[:12]
            if workspace.get_player(player_id) is None:
                return player_id

    # --- Roster ---

    def add_player(
        self,
        guild_id: int | None,
        user_id: int,
        name: str,
        batting: int = DEFAULT_PLAYER_RATING,
        bowling: int = DEFAULT_PLAYER_RATING,
        captaincy: int = DEFAULT_PLAYER_RATING,
        is_wicketkeeper: bool = False,
        notes: str = "",
    ) -> Result[Player]:
        """Add a player to the working roster."""
        workspace = self.get_workspace(guild_id, user_id)
        name = self._clean_name(name)
        notes = (notes or "").strip()

        if workspace.get_player_count() >= self.max_roster_size:
            return Result.fail(
                f"Roster is full ({self.max_roster_size} players).", code=error_codes.ROSTER_FULL
            )

        validation = self._validate_player_fields(name, batting, bowling, captaincy, notes)
        if not validation:
            return validation

        player = Player(
            id=self._new_player_id(workspace),
            name=name,
            batting=batting,
            bowling=bowling,
            captaincy=captaincy,
            is_wicketkeeper=bool(is_wicketkeeper),
            notes=notes,
        )
        workspace.players.append(player)
        workspace.clear_teams()
        logger.info(f"User {user_id} added player {player.name} ({player.id})")
        return Result.ok(player)

    def find_player(self, guild_id: int | None, user_id: int, name_or_id: str) -> Player | None:
        """Look a player up by id, then by case-insensitive name."""
        workspace = self.get_workspace(guild_id, user_id)
        player = workspace.get_player(name_or_id)
        if player:
            return player
        wanted = self._clean_name(name_or_id).lower()
        for candidate in workspace.players:
            if candidate.name.lower() == wanted:
                return candidate
        return None

    def update_player(
        self,
        guild_id: int | None,
        user_id: int,
        player_id: str,
        *,
        name=_UNSET,
        batting=_UNSET,
        bowling=_UNSET,
        captaincy=_UNSET,
        is_wicketkeeper=_UNSET,
        notes=_UNSET,
    ) -> Result[Player]:
        """Replace a roster player with an edited copy. Only given fields change."""
        workspace = self.get_workspace(guild_id, user_id)
        current = workspace.get_player(player_id)
        if current is None:
            return Result.fail("Player not found on your roster.", code=error_codes.PLAYER_NOT_FOUND)

        changes = {}
        if name is not _UNSET:
            changes["name"] = self._clean_name(name)
        if batting is not _UNSET:
            changes["batting"] = batting
        if bowling is not _UNSET:
            changes["bowling"] = bowling
        if captaincy is not _UNSET:
            changes["captaincy"] = captaincy
        if is_wicketkeeper is not _UNSET:
            changes["is_wicketkeeper"] = bool(is_wicketkeeper)
        if notes is not _UNSET:
            changes["notes"] = (notes or "").strip()

        updated = dataclasses.replace(current, **changes)
        validation = self._validate_player_fields(
            updated.name, updated.batting, updated.bowling, updated.captaincy, updated.notes
        )
        if not validation:
            return validation

        workspace.players = [updated if p.id == player_id else p for p in workspace.players]
        workspace.clear_teams()
        logger.info(f"User {user_id} updated player {updated.name} ({player_id}): {changes}")
        return Result.ok(updated)

    def remove_player(self, guild_id: int | None, user_id: int, player_id: str) -> Result[Player]:
        """Remove a player from the working roster."""
        workspace = self.get_workspace(guild_id, user_id)
        player = workspace.get_player(player_id)
        if player is None:
            return Result.fail("Player not found on your roster.", code=error_codes.PLAYER_NOT_FOUND)

        workspace.players = [p for p in workspace.players if p.id != player_id]
        workspace.clear_teams()
        logger.info(f"User {user_id} removed player {player.name} ({player_id})")
        return Result.ok(player)

    def get_max_teams(self, guild_id: int | None, user_id: int) -> int:
        """Largest team count currently allowed for the roster."""
        return min(self.get_workspace(guild_id, user_id).get_player_count(), self.max_teams)

    def set_number_of_teams(self, guild_id: int | None, user_id: int, number_of_teams: int) -> Result[int]:
        """Change the requested team count."""
        workspace = self.get_workspace(guild_id, user_id)
        max_teams = self.get_max_teams(guild_id, user_id)
        if number_of_teams < MIN_TEAMS or number_of_teams > max_teams:
            return Result.fail(
                f"Number of teams must be between {MIN_TEAMS} and {max(max_teams, MIN_TEAMS)} "
                f"(you have {workspace.get_player_count()} players).",
                code=error_codes.INVALID_TEAM_COUNT,
            )
        workspace.number_of_teams = number_of_teams
        workspace.clear_teams()
        return Result.ok(number_of_teams)

    def set_session_name(self, guild_id: int | None, user_id: int, session_name: str) -> Result[str]:
        """Rename the working session."""
        session_name = (session_name or "").strip()
        if not session_name:
            return Result.fail("Session name cannot be empty.", code=error_codes.INVALID_SESSION_NAME)
        if len(session_name) > SESSION_NAME_MAX_LENGTH:
            return Result.fail(
                f"Session name must be at most {SESSION_NAME_MAX_LENGTH} characters.",
                code=error_codes.INVALID_SESSION_NAME,
            )
        self.get_workspace(guild_id, user_id).session_name = session_name
        return Result.ok(session_name)

    # --- Teams ---

    def generate_teams(self, guild_id: int | None, user_id: int) -> Result[list[Team]]:
        """Balance the working roster into the requested number of teams."""
        workspace = self.get_workspace(guild_id, user_id)
        player_count = workspace.get_player_count()
        number_of_teams = workspace.number_of_teams

        if player_count == 0:
            return Result.fail("Add some players before generating teams.", code=error_codes.EMPTY_ROSTER)
        if number_of_teams < MIN_TEAMS or number_of_teams > player_count:
            return Result.fail(
                f"You need at least {number_of_teams} players to generate {number_of_teams} teams. "
                f"Currently you have {player_count} players.",
                code=error_codes.INVALID_TEAM_COUNT,
            )

        teams = self.balancing_service.balance(list(workspace.players), number_of_teams)
        workspace.teams = teams
        logger.info(
            f"User {user_id} generated {len(teams)} teams from {player_count} players"
        )
        return Result.ok(teams)

    def get_fairness_summary(self, guild_id: int | None, user_id: int) -> Result[dict]:
        """Batting/bowling spread across the generated teams."""
        workspace = self.get_workspace(guild_id, user_id)
        if not workspace.has_teams():
            return Result.fail("No teams generated yet.", code=error_codes.NO_TEAMS_GENERATED)
        return Result.ok(self.balancing_service.get_fairness_summary(workspace.teams))

    # --- Sessions ---

    def save_session(self, guild_id: int | None, user_id: int) -> Result[int]:
        """Persist the working session, replacing a saved session with the same name."""
        workspace = self.get_workspace(guild_id, user_id)
        if not workspace.has_teams():
            return Result.fail("Generate teams before saving.", code=error_codes.NO_TEAMS_GENERATED)

        session_id = self.team_builder_repo.save_session(
            guild_id=workspace.guild_id,
            user_id=user_id,
            session_name=workspace.session_name,
            number_of_teams=workspace.number_of_teams,
            players=workspace.players,
            teams=workspace.teams,
        )
        workspace.session_id = session_id
        return Result.ok(session_id)

    def load_session(
        self, guild_id: int | None, user_id: int, session_name: str | None = None
    ) -> Result[TeamBuilderSession]:
        """Restore a saved session (the most recent one unless a name is given) into the workspace."""
        if session_name:
            session = self.team_builder_repo.get_session_by_name(guild_id, user_id, session_name.strip())
        else:
            session = self.team_builder_repo.get_latest_session(guild_id, user_id)

        if session is None:
            return Result.fail("No saved session found.", code=error_codes.SESSION_NOT_FOUND)

        self._workspaces[self._key(guild_id, user_id)] = session
        logger.info(f"User {user_id} loaded session '{session.session_name}' ({session.session_id})")
        return Result.ok(session)

    def list_sessions(self, guild_id: int | None, user_id: int) -> Result[list[dict]]:
        return Result.ok(self.team_builder_repo.list_sessions(guild_id, user_id, limit=SESSION_LIST_LIMIT))

    def delete_session(self, guild_id: int | None, user_id: int, session_name: str) -> Result[None]:
        if not self.team_builder_repo.delete_session(guild_id, user_id, session_name.strip()):
            return Result.fail(f"No saved session named '{session_name}'.", code=error_codes.SESSION_NOT_FOUND)
        return Result.ok()
