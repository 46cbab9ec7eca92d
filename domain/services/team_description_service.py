"""
Team description domain service.

Builds the human-readable summary shown under each generated team.
"""

from decimal import ROUND_HALF_UP, Decimal

from domain.models.team import Team

WELL_BALANCED = "Well-balanced team with strong batting and bowling."
STRONG_BATTING = "Strong batting lineup with developing bowling attack."
SOLID_BOWLING = "Solid bowling attack with developing batting order."
DEVELOPING = "Developing team with growth potential in all areas."


def round_half_up(value: float, places: int = 1) -> float:
    """Round to `places` decimals with exact halves going up (3.25 -> 3.3)."""
    step = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(step, rounding=ROUND_HALF_UP))


class TeamDescriptionService:
    """Pure domain service producing team descriptions."""

    def __init__(self, strength_threshold: float = 3.5):
        """
        Args:
            strength_threshold: Average batting/bowling at or above which a
                dimension is described as strong
        """
        self.strength_threshold = strength_threshold

    def assess_balance(self, avg_batting: float, avg_bowling: float) -> str:
        """Return the closing balance phrase for the given averages."""
        strong_batting = avg_batting >= self.strength_threshold
        strong_bowling = avg_bowling >= self.strength_threshold

        if strong_batting and strong_bowling:
            return WELL_BALANCED
        if strong_batting:
            return STRONG_BATTING
        if strong_bowling:
            return SOLID_BOWLING
        return DEVELOPING

    def describe(self, team: Team) -> str:
        """
        Generate the description for a team.

        Averages are shown to one decimal place, and the balance assessment
        uses those rounded values.

        Args:
            team: Team with roles already assigned

        Returns:
            Description string
        """
        if not team.players:
            return ""

        avg_batting = round_half_up(team.get_average_batting())
        avg_bowling = round_half_up(team.get_average_bowling())
        avg_captaincy = round_half_up(team.get_average_captaincy())

        parts = [
            f"Balanced team with {team.get_size()} players. ",
            f"Batting average: {avg_batting:.1f}/5, Bowling average: {avg_bowling:.1f}/5, "
            f"Leadership average: {avg_captaincy:.1f}/5. ",
        ]

        captain = team.captain
        if captain:
            leadership = f"Led by {captain.name} (Captain, {captain.captaincy}/5 leadership)"
            vice_captain = team.vice_captain
            if vice_captain and vice_captain.id != captain.id:
                leadership += (
                    f" and {vice_captain.name} (Vice-Captain, {vice_captain.captaincy}/5 leadership)"
                )
            parts.append(leadership + ". ")

        wicketkeeper = team.wicketkeeper
        if wicketkeeper:
            parts.append(f"{wicketkeeper.name} keeps wickets. ")

        noted = [p for p in team.players if p.has_notes()]
        if noted:
            notes = ", ".join(f"{p.name} ({p.notes.lower()})" for p in noted)
            parts.append(f"Special notes: {notes}. ")

        parts.append(self.assess_balance(avg_batting, avg_bowling))

        return "".join(parts).strip()
