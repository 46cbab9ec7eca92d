"""
Abstract repository interfaces for data access.

These interfaces define the contracts implemented by concrete repositories.
"""

from abc import ABC, abstractmethod

from domain.models.player import Player
from domain.models.session import TeamBuilderSession
from domain.models.team import Team


class ITeamBuilderRepository(ABC):
    @abstractmethod
    def save_session(
        self,
        guild_id: int | None,
        user_id: int,
        session_name: str,
        number_of_teams: int,
        players: list[Player],
        teams: list[Team],
    ) -> int: ...

    @abstractmethod
    def get_latest_session(self, guild_id: int | None, user_id: int) -> TeamBuilderSession | None: ...

    @abstractmethod
    def get_session_by_name(
        self, guild_id: int | None, user_id: int, session_name: str
    ) -> TeamBuilderSession | None: ...

    @abstractmethod
    def list_sessions(self, guild_id: int | None, user_id: int, limit: int = 10) -> list[dict]: ...

    @abstractmethod
    def delete_session(self, guild_id: int | None, user_id: int, session_name: str) -> bool: ...
