"""
Application services layer.

Services orchestrate business operations using repositories and domain services.
"""

from services.interfaces import ITeamBuilderService
from services.result import Result
from services.team_builder_service import TeamBuilderService

__all__ = [
    "TeamBuilderService",
    "Result",
    "ITeamBuilderService",
]
