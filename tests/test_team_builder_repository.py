"""
Tests for TeamBuilderRepository session persistence.
"""

import sqlite3

import pytest

from domain.models.team import Team
from domain.services.team_balancing_service import TeamBalancingService
from tests.conftest import TEST_GUILD_ID, TEST_GUILD_ID_SECONDARY, TEST_USER_ID, make_player


def _save(repo, players, teams, name="Sunday", guild_id=TEST_GUILD_ID, user_id=TEST_USER_ID):
    return repo.save_session(
        guild_id=guild_id,
        user_id=user_id,
        session_name=name,
        number_of_teams=len(teams),
        players=players,
        teams=teams,
    )


class TestSaveAndLoad:
    def test_round_trip_preserves_roster_and_teams(self, team_builder_repository, sample_roster):
        teams = TeamBalancingService().balance(sample_roster, 2)
        session_id = _save(team_builder_repository, sample_roster, teams)

        loaded = team_builder_repository.get_session_by_name(TEST_GUILD_ID, TEST_USER_ID, "Sunday")

        assert loaded.session_id == session_id
        assert loaded.number_of_teams == 2
        assert [p.name for p in loaded.players] == [p.name for p in sample_roster]
        assert [p.is_wicketkeeper for p in loaded.players] == [p.is_wicketkeeper for p in sample_roster]

        assert [t.name for t in loaded.teams] == ["Team 1", "Team 2"]
        for original, restored in zip(teams, loaded.teams):
            assert [p.name for p in restored.players] == [p.name for p in original.players]
            assert restored.captain.name == original.captain.name
            assert restored.description == original.description
            assert restored.total_rating == original.total_rating
        assert loaded.teams[0].vice_captain.name == "Dev"
        assert loaded.teams[0].wicketkeeper.name == "Cara"
        assert loaded.teams[1].wicketkeeper is None

    def test_loaded_players_use_row_ids(self, team_builder_repository, sample_roster):
        teams = TeamBalancingService().balance(sample_roster, 2)
        _save(team_builder_repository, sample_roster, teams)

        loaded = team_builder_repository.get_latest_session(TEST_GUILD_ID, TEST_USER_ID)

        assert all(p.id.isdigit() for p in loaded.players)
        member_ids = {pid for t in loaded.teams for pid in t.player_ids}
        assert member_ids == {p.id for p in loaded.players}

    def test_notes_survive_round_trip(self, team_builder_repository):
        players = [make_player("a", captaincy=5, notes="Opening bat"), make_player("b")]
        teams = TeamBalancingService().balance(players, 2)
        _save(team_builder_repository, players, teams)

        loaded = team_builder_repository.get_latest_session(TEST_GUILD_ID, TEST_USER_ID)

        assert loaded.players[0].notes == "Opening bat"

    def test_same_name_replaces_existing(self, team_builder_repository, sample_roster):
        teams = TeamBalancingService().balance(sample_roster, 2)
        first_id = _save(team_builder_repository, sample_roster, teams)

        smaller = sample_roster[:4]
        second_id = _save(team_builder_repository, smaller, TeamBalancingService().balance(smaller, 2))

        assert second_id != first_id
        sessions = team_builder_repository.list_sessions(TEST_GUILD_ID, TEST_USER_ID)
        assert len(sessions) == 1
        assert sessions[0]["player_count"] == 4

    def test_member_missing_from_roster_rolls_back(self, team_builder_repository, sample_roster):
        stray = Team("Team 1", [make_player("ghost")])
        with pytest.raises(ValueError):
            _save(team_builder_repository, sample_roster, [stray])

        assert team_builder_repository.get_latest_session(TEST_GUILD_ID, TEST_USER_ID) is None

    def test_dm_sessions_use_guild_zero(self, team_builder_repository, sample_roster):
        teams = TeamBalancingService().balance(sample_roster, 2)
        _save(team_builder_repository, sample_roster, teams, guild_id=None)

        assert team_builder_repository.get_latest_session(None, TEST_USER_ID) is not None
        assert team_builder_repository.get_latest_session(0, TEST_USER_ID).guild_id == 0


class TestQueries:
    def test_latest_session_is_most_recent_save(self, team_builder_repository, sample_roster):
        teams = TeamBalancingService().balance(sample_roster, 2)
        _save(team_builder_repository, sample_roster, teams, name="First")
        _save(team_builder_repository, sample_roster, teams, name="Second")

        latest = team_builder_repository.get_latest_session(TEST_GUILD_ID, TEST_USER_ID)

        assert latest.session_name == "Second"

    def test_sessions_are_isolated_by_guild_and_user(self, team_builder_repository, sample_roster):
        teams = TeamBalancingService().balance(sample_roster, 2)
        _save(team_builder_repository, sample_roster, teams)

        assert team_builder_repository.get_latest_session(TEST_GUILD_ID_SECONDARY, TEST_USER_ID) is None
        assert team_builder_repository.get_latest_session(TEST_GUILD_ID, TEST_USER_ID + 1) is None

    def test_missing_session_returns_none(self, team_builder_repository):
        assert team_builder_repository.get_session_by_name(TEST_GUILD_ID, TEST_USER_ID, "nope") is None

    def test_list_sessions_respects_limit(self, team_builder_repository, sample_roster):
        teams = TeamBalancingService().balance(sample_roster, 2)
        for i in range(3):
            _save(team_builder_repository, sample_roster, teams, name=f"S{i}")

        sessions = team_builder_repository.list_sessions(TEST_GUILD_ID, TEST_USER_ID, limit=2)

        assert [s["session_name"] for s in sessions] == ["S2", "S1"]
        assert sessions[0]["number_of_teams"] == 2
        assert sessions[0]["player_count"] == len(sample_roster)

    def test_delete_session_removes_all_rows(self, team_builder_repository, repo_db_path, sample_roster):
        teams = TeamBalancingService().balance(sample_roster, 2)
        _save(team_builder_repository, sample_roster, teams)

        assert team_builder_repository.delete_session(TEST_GUILD_ID, TEST_USER_ID, "Sunday") is True
        assert team_builder_repository.delete_session(TEST_GUILD_ID, TEST_USER_ID, "Sunday") is False

        with sqlite3.connect(repo_db_path) as conn:
            for table in (
                "team_builder_sessions",
                "team_builder_players",
                "team_builder_teams",
                "team_builder_team_players",
            ):
                assert conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0] == 0
