"""
Role assignment domain service.

Picks the vice-captain and designated wicketkeeper for a balanced team.
"""

from domain.models.player import Player
from domain.models.team import Team


class RoleAssignmentService:
    """
    Pure domain service for leadership and keeping roles.

    The captain is fixed by the draft; this service fills the other two
    roles from the team's own members. Ties are resolved by membership
    order (Python's sort is stable).
    """

    @staticmethod
    def _best_leader(candidates: list[Player]) -> Player | None:
        if not candidates:
            return None
        return sorted(candidates, key=lambda p: p.captaincy, reverse=True)[0]

    def pick_vice_captain(self, team: Team) -> Player | None:
        """Highest-captaincy member other than the captain, or None for a one-player team."""
        candidates = [p for p in team.players if p.id != team.captain_id]
        return self._best_leader(candidates)

    def pick_wicketkeeper(self, team: Team) -> Player | None:
        """Highest-captaincy member flagged as a wicketkeeper, or None."""
        candidates = [p for p in team.players if p.is_wicketkeeper]
        return self._best_leader(candidates)

    def assign_roles(self, team: Team) -> None:
        """Set vice-captain and wicketkeeper on the team in place."""
        vice_captain = self.pick_vice_captain(team)
        team.set_vice_captain(vice_captain.id if vice_captain else None)

        wicketkeeper = self.pick_wicketkeeper(team)
        team.set_wicketkeeper(wicketkeeper.id if wicketkeeper else None)
