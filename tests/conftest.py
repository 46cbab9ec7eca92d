"""
Pytest fixtures for tests.

Performance optimization: Uses a session-scoped schema template so migrations
run once; repository tests copy the template file instead of re-initializing.

Import TEST_GUILD_ID / TEST_USER_ID from here instead of defining them locally.
"""

import shutil

import pytest

from domain.models.player import Player
from infrastructure.schema_manager import SchemaManager
from repositories.base_repository import BaseRepository
from repositories.team_builder_repository import TeamBuilderRepository
from services.team_builder_service import TeamBuilderService

# =============================================================================
# CENTRALIZED CONSTANTS
# =============================================================================

TEST_GUILD_ID = 12345
"""Standard guild ID for single-guild tests."""

TEST_GUILD_ID_SECONDARY = 67890
"""Secondary guild ID for multi-guild isolation tests."""

TEST_USER_ID = 1001


def make_player(
    player_id: str,
    batting: int = 3,
    bowling: int = 3,
    captaincy: int = 3,
    is_wicketkeeper: bool = False,
    name: str | None = None,
    notes: str = "",
) -> Player:
    """Build a Player with sensible defaults for tests."""
    return Player(
        id=player_id,
        name=name or f"Player {player_id}",
        batting=batting,
        bowling=bowling,
        captaincy=captaincy,
        is_wicketkeeper=is_wicketkeeper,
        notes=notes,
    )


@pytest.fixture(scope="session")
def _schema_template_path(tmp_path_factory):
    """Create a schema template database once per test session."""
    template_dir = tmp_path_factory.mktemp("schema_template")
    template_path = str(template_dir / "template.db")
    SchemaManager(template_path).initialize()
    yield template_path


@pytest.fixture
def repo_db_path(_schema_template_path, tmp_path):
    """
    Create a temporary database with initialized schema for repository tests.

    Fast: file copy instead of schema initialization.
    """
    test_db_path = str(tmp_path / "test.db")
    shutil.copy2(_schema_template_path, test_db_path)
    yield test_db_path
    BaseRepository._schema_initialized_paths.discard(test_db_path)


@pytest.fixture
def team_builder_repository(repo_db_path):
    return TeamBuilderRepository(repo_db_path)


@pytest.fixture
def team_builder_service(team_builder_repository):
    return TeamBuilderService(team_builder_repository)


@pytest.fixture
def sample_roster():
    """Six players: two strong leaders, one keeper, mixed skills."""
    return [
        make_player("a", batting=5, bowling=2, captaincy=5, name="Asha"),
        make_player("b", batting=2, bowling=5, captaincy=4, name="Ben"),
        make_player("c", batting=4, bowling=1, captaincy=2, is_wicketkeeper=True, name="Cara"),
        make_player("d", batting=3, bowling=3, captaincy=3, name="Dev"),
        make_player("e", batting=1, bowling=4, captaincy=1, name="Eli"),
        make_player("f", batting=2, bowling=2, captaincy=2, name="Fay"),
    ]


@pytest.fixture
def large_roster():
    """Twenty-two players with varied ratings and four keepers."""
    players = []
    for i in range(22):
        players.append(
            make_player(
                f"p{i}",
                batting=(i % 5) + 1,
                bowling=((i * 3) % 5) + 1,
                captaincy=((i * 7) % 5) + 1,
                is_wicketkeeper=i in (2, 9, 15, 20),
            )
        )
    return players
