"""
Service container for dependency injection and initialization.

This module centralizes service creation and wiring for bot.py.

Usage:
    container = ServiceContainer(ServiceConfig(db_path="crease.db"))
    container.initialize()

    team_builder_service = container.team_builder_service
"""

import logging
from dataclasses import dataclass

from config import (
    DB_PATH,
    MAX_ROSTER_SIZE,
    MAX_TEAMS,
    TEAM_BUILDER_SETTINGS,
)
from domain.services.team_balancing_service import TeamBalancingService
from infrastructure.schema_manager import SchemaManager
from repositories.team_builder_repository import TeamBuilderRepository
from services.team_builder_service import TeamBuilderService

logger = logging.getLogger("crease_bot.infrastructure.container")


@dataclass
class ServiceConfig:
    """Configuration for service initialization."""

    # Database
    db_path: str = DB_PATH

    # Team builder limits
    max_teams: int = MAX_TEAMS
    max_roster_size: int = MAX_ROSTER_SIZE

    # Balancing
    team_name_prefix: str = TEAM_BUILDER_SETTINGS["team_name_prefix"]
    strength_threshold: float = TEAM_BUILDER_SETTINGS["strength_threshold"]


class ServiceContainer:
    """
    Central container for all application services.

    Handles proper initialization order and dependency injection.
    """

    def __init__(self, config: ServiceConfig | None = None):
        """
        Initialize the container with configuration.

        Args:
            config: Service configuration (uses defaults if None)
        """
        self.config = config or ServiceConfig()
        self._initialized = False
        self._team_builder_repo: TeamBuilderRepository | None = None
        self._balancing_service: TeamBalancingService | None = None
        self._team_builder_service: TeamBuilderService | None = None

    @property
    def is_initialized(self) -> bool:
        """Check if container has been initialized."""
        return self._initialized

    def initialize(self) -> None:
        """
        Initialize all services in correct order.

        This method is idempotent - calling it multiple times has no effect.
        """
        if self._initialized:
            logger.debug("ServiceContainer already initialized, skipping")
            return

        logger.info("Initializing ServiceContainer...")

        logger.debug(f"Initializing database at {self.config.db_path}")
        SchemaManager(self.config.db_path).initialize()

        self._team_builder_repo = TeamBuilderRepository(self.config.db_path)
        self._balancing_service = TeamBalancingService(
            team_name_prefix=self.config.team_name_prefix,
            strength_threshold=self.config.strength_threshold,
        )
        self._team_builder_service = TeamBuilderService(
            team_builder_repo=self._team_builder_repo,
            balancing_service=self._balancing_service,
            max_teams=self.config.max_teams,
            max_roster_size=self.config.max_roster_size,
        )

        self._initialized = True
        logger.info("ServiceContainer initialization complete")

    # =========================================================================
    # Service accessors
    # =========================================================================

    @property
    def team_builder_repo(self) -> TeamBuilderRepository | None:
        """Get team builder repository."""
        return self._team_builder_repo

    @property
    def balancing_service(self) -> TeamBalancingService | None:
        """Get team balancing domain service."""
        return self._balancing_service

    @property
    def team_builder_service(self) -> TeamBuilderService | None:
        """Get team builder service."""
        return self._team_builder_service

    def expose_to_bot(self, bot) -> None:
        """
        Expose services to a Discord bot object so cogs can read them
        via bot.<service_name>.

        Args:
            bot: The Discord bot instance
        """
        bot.team_builder_repo = self.team_builder_repo
        bot.balancing_service = self.balancing_service
        bot.team_builder_service = self.team_builder_service

        logger.info("Services exposed to bot object")
