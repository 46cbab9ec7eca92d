"""
Team builder session domain model.
"""

from dataclasses import dataclass, field
from datetime import datetime

from domain.models.player import Player
from domain.models.team import Team


@dataclass
class TeamBuilderSession:
    """A user's working roster, requested team count, and last generated teams."""

    guild_id: int
    user_id: int
    session_name: str
    number_of_teams: int = 2
    players: list[Player] = field(default_factory=list)
    teams: list[Team] = field(default_factory=list)
    session_id: int | None = None  # Set once persisted
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def get_player(self, player_id: str) -> Player | None:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def get_player_count(self) -> int:
        return len(self.players)

    def has_teams(self) -> bool:
        return bool(self.teams)

    def clear_teams(self) -> None:
        self.teams = []
