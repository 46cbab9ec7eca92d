"""
Team balancing domain service.

Splits a roster into N teams with a captain-seeded snake draft:

1. Captains: the N best leaders, one per team.
2. Wicketkeepers: remaining keepers dealt round-robin.
3. Everyone else: dealt by batting + bowling in snake order.
4. Vice-captain, wicketkeeper role and description per team.
"""

import logging

from domain.models.player import Player
from domain.models.team import Team
from domain.services.role_assignment_service import RoleAssignmentService
from domain.services.team_description_service import TeamDescriptionService, round_half_up

logger = logging.getLogger("crease_bot.team_balancing")


class TeamBalancingService:
    """
    Pure domain service for the team balancing algorithm.

    Responsibilities:
    - Partition a roster into balanced teams
    - Assign captain, vice-captain and wicketkeeper roles
    - Summarise how even the resulting teams are
    """

    def __init__(
        self,
        team_name_prefix: str = "Team",
        strength_threshold: float = 3.5,
        role_service: RoleAssignmentService | None = None,
        description_service: TeamDescriptionService | None = None,
    ):
        """
        Initialize team balancing service.

        Args:
            team_name_prefix: Teams are named "<prefix> 1", "<prefix> 2", ...
            strength_threshold: Passed to the default description service
            role_service: Optional role assignment service override
            description_service: Optional description service override
        """
        self.team_name_prefix = team_name_prefix
        self.role_service = role_service or RoleAssignmentService()
        self.description_service = description_service or TeamDescriptionService(
            strength_threshold=strength_threshold
        )

    def balance(self, players: list[Player], number_of_teams: int) -> list[Team]:
        """
        Build balanced teams from a roster.

        Deterministic for a given input order: every sort is stable, so ties
        keep the order players were supplied in.

        Args:
            players: Roster snapshot (non-empty, unique ids)
            number_of_teams: Between 2 and len(players) inclusive

        Returns:
            Exactly number_of_teams teams partitioning the roster

        Raises:
            ValueError: If the preconditions are violated
        """
        if not players:
            raise ValueError("Cannot balance an empty roster")
        if number_of_teams < 2 or number_of_teams > len(players):
            raise ValueError(
                f"Number of teams must be between 2 and {len(players)}, got {number_of_teams}"
            )

        logger.debug(f"Balancing {len(players)} players into {number_of_teams} teams")

        teams, non_captains = self._seed_captains(players, number_of_teams)
        captain_ids = {team.captain_id for team in teams}

        wicketkeepers = [p for p in non_captains if p.is_wicketkeeper]
        # Roster order, so equal-skill regulars are drafted in the order supplied
        regulars = [p for p in players if p.id not in captain_ids and not p.is_wicketkeeper]

        self._distribute_wicketkeepers(teams, wicketkeepers)
        self._snake_draft(teams, regulars)

        for team in teams:
            self.role_service.assign_roles(team)
            team.description = self.description_service.describe(team)

        for team in teams:
            logger.info(
                f"{team.name}: {team.get_size()} players, "
                f"avg batting {team.get_average_batting():.1f}, "
                f"avg bowling {team.get_average_bowling():.1f}, "
                f"total rating {team.total_rating}"
            )

        return teams

    def _seed_captains(
        self, players: list[Player], number_of_teams: int
    ) -> tuple[list[Team], list[Player]]:
        """Create one team per captain; return the teams and the non-captains in captaincy order."""
        by_captaincy = sorted(players, key=lambda p: p.captaincy, reverse=True)
        captains = by_captaincy[:number_of_teams]

        teams = []
        for index, captain in enumerate(captains):
            team = Team(f"{self.team_name_prefix} {index + 1}", [captain])
            team.set_captain(captain.id)
            teams.append(team)
            logger.debug(f"{team.name} captain: {captain.name} (captaincy {captain.captaincy})")

        return teams, by_captaincy[number_of_teams:]

    def _distribute_wicketkeepers(self, teams: list[Team], wicketkeepers: list[Player]) -> None:
        """Deal keepers round-robin by team index, ignoring current team strength."""
        for index, keeper in enumerate(wicketkeepers):
            team = teams[index % len(teams)]
            team.add_player(keeper)
            logger.debug(f"Assigned wicketkeeper {keeper.name} to {team.name}")

    def _snake_draft(self, teams: list[Team], players: list[Player]) -> None:
        """
        Deal players strongest first, forward then backward through the teams.

        The pointer starts at the first team and does not continue from the
        wicketkeeper round.
        """
        ordered = sorted(players, key=lambda p: p.skill_total, reverse=True)
        current = 0
        direction = 1

        for player in ordered:
            teams[current].add_player(player)
            logger.debug(
                f"Snake draft: {player.name} (skill {player.skill_total}) -> {teams[current].name}"
            )

            current += direction
            if current >= len(teams):
                current = len(teams) - 1
                direction = -1
            elif current < 0:
                current = 0
                direction = 1

    def get_fairness_summary(self, teams: list[Team]) -> dict:
        """
        Summarise how even a set of teams is.

        Per-team averages are rounded to one decimal before taking ranges.
        Lower spread means more balanced teams.

        Args:
            teams: Teams from a balancing run

        Returns:
            Dictionary with batting/bowling ranges and per-team fairness ratings
        """
        populated = [t for t in teams if t.players]
        if not populated:
            return {
                "batting_range": None,
                "bowling_range": None,
                "batting_spread": 0.0,
                "bowling_spread": 0.0,
                "fairness_ratings": {},
            }

        batting = [round_half_up(t.get_average_batting()) for t in populated]
        bowling = [round_half_up(t.get_average_bowling()) for t in populated]

        return {
            "batting_range": (min(batting), max(batting)),
            "bowling_range": (min(bowling), max(bowling)),
            "batting_spread": round_half_up(max(batting) - min(batting)),
            "bowling_spread": round_half_up(max(bowling) - min(bowling)),
            "fairness_ratings": {t.name: round_half_up(t.get_fairness_rating()) for t in populated},
        }


def balance_teams(players: list[Player], number_of_teams: int) -> list[Team]:
    """Balance with default settings."""
    return TeamBalancingService().balance(players, number_of_teams)
