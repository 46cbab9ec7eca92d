"""
Team domain model.
"""

from domain.models.player import Player


class Team:
    """
    A team produced by one balancing run.

    Members are kept in assignment order. Captain, vice-captain and
    wicketkeeper are stored as player ids and resolved against the member
    index, so they always refer to a member of this team.

    This is a pure domain model with no infrastructure dependencies.
    """

    def __init__(self, name: str, players: list[Player] | None = None):
        self.name = name
        self.players: list[Player] = []
        self.total_rating = 0
        self.wicketkeeper_count = 0
        self.captain_id: str | None = None
        self.vice_captain_id: str | None = None
        self.wicketkeeper_id: str | None = None
        self.description = ""
        self._index: dict[str, Player] = {}
        for player in players or []:
            self.add_player(player)

    def add_player(self, player: Player) -> None:
        """Add a member, keeping total rating and wicketkeeper count current."""
        if player.id in self._index:
            raise ValueError(f"Player {player.id} is already on {self.name}")
        self.players.append(player)
        self._index[player.id] = player
        self.total_rating += player.skill_total
        if player.is_wicketkeeper:
            self.wicketkeeper_count += 1

    def has_player(self, player_id: str) -> bool:
        return player_id in self._index

    def get_player(self, player_id: str | None) -> Player | None:
        if player_id is None:
            return None
        return self._index.get(player_id)

    def _check_member(self, player_id: str | None) -> None:
        if player_id is not None and player_id not in self._index:
            raise ValueError(f"Player {player_id} is not a member of {self.name}")

    def set_captain(self, player_id: str | None) -> None:
        self._check_member(player_id)
        self.captain_id = player_id

    def set_vice_captain(self, player_id: str | None) -> None:
        self._check_member(player_id)
        self.vice_captain_id = player_id

    def set_wicketkeeper(self, player_id: str | None) -> None:
        self._check_member(player_id)
        self.wicketkeeper_id = player_id

    @property
    def captain(self) -> Player | None:
        return self.get_player(self.captain_id)

    @property
    def vice_captain(self) -> Player | None:
        return self.get_player(self.vice_captain_id)

    @property
    def wicketkeeper(self) -> Player | None:
        return self.get_player(self.wicketkeeper_id)

    @property
    def player_ids(self) -> list[str]:
        return [p.id for p in self.players]

    def get_size(self) -> int:
        return len(self.players)

    def _average(self, attr: str) -> float:
        if not self.players:
            return 0.0
        return sum(getattr(p, attr) for p in self.players) / len(self.players)

    def get_average_batting(self) -> float:
        return self._average("batting")

    def get_average_bowling(self) -> float:
        return self._average("bowling")

    def get_average_captaincy(self) -> float:
        return self._average("captaincy")

    def get_fairness_rating(self) -> float:
        """Total rating normalised to the 1-5 scale (total / (2 * members))."""
        if not self.players:
            return 0.0
        return self.total_rating / (len(self.players) * 2)

    def get_player_roles(self, player_id: str) -> list[str]:
        """Role labels held by a member, in display order."""
        roles = []
        if player_id == self.captain_id:
            roles.append("Captain")
        if player_id == self.vice_captain_id:
            roles.append("Vice-Captain")
        if player_id == self.wicketkeeper_id:
            roles.append("Wicketkeeper")
        return roles

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "player_ids": self.player_ids,
            "total_rating": self.total_rating,
            "wicketkeepers": self.wicketkeeper_count,
            "captain_id": self.captain_id,
            "vice_captain_id": self.vice_captain_id,
            "wicketkeeper_id": self.wicketkeeper_id,
            "description": self.description,
        }

    def __str__(self) -> str:
        player_names = ", ".join(p.name for p in self.players)
        return f"{self.name}: {player_names}"
