"""
Repository layer for data access abstraction.
"""

from repositories.base_repository import BaseRepository
from repositories.interfaces import ITeamBuilderRepository
from repositories.team_builder_repository import TeamBuilderRepository

__all__ = [
    "BaseRepository",
    "TeamBuilderRepository",
    "ITeamBuilderRepository",
]
