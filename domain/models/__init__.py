"""
Domain models - pure data structures representing business entities.
"""

from domain.models.player import Player
from domain.models.session import TeamBuilderSession
from domain.models.team import Team

__all__ = ["Player", "Team", "TeamBuilderSession"]
