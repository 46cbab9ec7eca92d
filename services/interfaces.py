"""
Service layer interfaces (ABCs).

These abstract base classes define the contracts for services in the
application, so commands can be tested against fakes.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from domain.models.player import Player
    from domain.models.session import TeamBuilderSession
    from domain.models.team import Team
    from services.result import Result


class ITeamBuilderService(ABC):
    """Interface for roster management, team generation and saved sessions."""

    @abstractmethod
    def get_workspace(self, guild_id: int | None, user_id: int) -> "TeamBuilderSession":
        """Get the user's working session."""
        ...

    @abstractmethod
    def add_player(
        self,
        guild_id: int | None,
        user_id: int,
        name: str,
        batting: int = 3,
        bowling: int = 3,
        captaincy: int = 3,
        is_wicketkeeper: bool = False,
        notes: str = "",
    ) -> "Result[Player]":
        """Add a player to the working roster."""
        ...

    @abstractmethod
    def find_player(self, guild_id: int | None, user_id: int, name_or_id: str) -> "Player | None":
        """Look a roster player up by id or name."""
        ...

    @abstractmethod
    def remove_player(self, guild_id: int | None, user_id: int, player_id: str) -> "Result[Player]":
        """Remove a player from the working roster."""
        ...

    @abstractmethod
    def set_number_of_teams(
        self, guild_id: int | None, user_id: int, number_of_teams: int
    ) -> "Result[int]":
        """Change the requested team count."""
        ...

    @abstractmethod
    def generate_teams(self, guild_id: int | None, user_id: int) -> "Result[list[Team]]":
        """Balance the working roster."""
        ...

    @abstractmethod
    def save_session(self, guild_id: int | None, user_id: int) -> "Result[int]":
        """Persist the working session."""
        ...

    @abstractmethod
    def load_session(
        self, guild_id: int | None, user_id: int, session_name: str | None = None
    ) -> "Result[TeamBuilderSession]":
        """Restore a saved session."""
        ...
