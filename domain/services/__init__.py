"""
Domain services containing pure business logic.
"""

from domain.services.role_assignment_service import RoleAssignmentService
from domain.services.team_balancing_service import TeamBalancingService, balance_teams
from domain.services.team_description_service import TeamDescriptionService

__all__ = [
    "RoleAssignmentService",
    "TeamBalancingService",
    "TeamDescriptionService",
    "balance_teams",
]
