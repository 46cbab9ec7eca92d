"""
Tests for TeamBuilderService: roster validation, team generation, sessions.
"""

import pytest

from config import DEFAULT_SESSION_NAME, MAX_TEAMS, SESSION_NAME_MAX_LENGTH
from services import error_codes
from services.team_builder_service import TeamBuilderService
from tests.conftest import TEST_GUILD_ID, TEST_USER_ID

G, U = TEST_GUILD_ID, TEST_USER_ID


def _add_players(service, count, guild_id=G, user_id=U):
    return [
        service.add_player(guild_id, user_id, f"Player {i}", batting=(i % 5) + 1).unwrap()
        for i in range(count)
    ]


class TestRoster:
    def test_add_player_with_defaults(self, team_builder_service):
        result = team_builder_service.add_player(G, U, "  Sam  ")

        assert result.success
        player = result.value
        assert player.name == "Sam"
        assert (player.batting, player.bowling, player.captaincy) == (3, 3, 3)
        assert len(player.id) == 12
        assert team_builder_service.get_workspace(G, U).get_player_count() == 1

    @pytest.mark.parametrize("field", ["batting", "bowling", "captaincy"])
    @pytest.mark.parametrize("value", [0, 6, 2.5, True])
    def test_invalid_ratings_rejected(self, team_builder_service, field, value):
        result = team_builder_service.add_player(G, U, "Sam", **{field: value})

        assert not result
        assert result.error_code == error_codes.INVALID_RATING
        assert team_builder_service.get_workspace(G, U).get_player_count() == 0

    def test_blank_name_rejected(self, team_builder_service):
        result = team_builder_service.add_player(G, U, "   ")
        assert result.error_code == error_codes.INVALID_PLAYER_NAME

    def test_long_name_rejected(self, team_builder_service):
        result = team_builder_service.add_player(G, U, "x" * 100)
        assert result.error_code == error_codes.INVALID_PLAYER_NAME

    def test_long_notes_rejected(self, team_builder_service):
        result = team_builder_service.add_player(G, U, "Sam", notes="n" * 500)
        assert result.error_code == error_codes.VALIDATION_ERROR

    def test_roster_limit(self, team_builder_repository):
        service = TeamBuilderService(team_builder_repository, max_roster_size=2)
        _add_players(service, 2)

        result = service.add_player(G, U, "Extra")

        assert result.error_code == error_codes.ROSTER_FULL

    def test_find_player_by_id_or_name(self, team_builder_service):
        player = team_builder_service.add_player(G, U, "Sam Curran").unwrap()

        assert team_builder_service.find_player(G, U, player.id) == player
        assert team_builder_service.find_player(G, U, "sam curran") == player
        assert team_builder_service.find_player(G, U, "nobody") is None

    def test_update_player_changes_only_given_fields(self, team_builder_service):
        player = team_builder_service.add_player(G, U, "Sam", batting=2, notes="quick").unwrap()

        result = team_builder_service.update_player(G, U, player.id, bowling=5, is_wicketkeeper=True)

        updated = result.unwrap()
        assert updated.id == player.id
        assert (updated.batting, updated.bowling) == (2, 5)
        assert updated.is_wicketkeeper is True
        assert updated.notes == "quick"
        assert team_builder_service.get_workspace(G, U).players == [updated]

    def test_update_player_validates(self, team_builder_service):
        player = team_builder_service.add_player(G, U, "Sam").unwrap()

        result = team_builder_service.update_player(G, U, player.id, captaincy=9)

        assert result.error_code == error_codes.INVALID_RATING
        assert team_builder_service.get_workspace(G, U).players == [player]

    def test_update_unknown_player(self, team_builder_service):
        result = team_builder_service.update_player(G, U, "missing", batting=4)
        assert result.error_code == error_codes.PLAYER_NOT_FOUND

    def test_remove_player(self, team_builder_service):
        players = _add_players(team_builder_service, 3)

        result = team_builder_service.remove_player(G, U, players[1].id)

        assert result.value == players[1]
        assert team_builder_service.get_workspace(G, U).players == [players[0], players[2]]
        assert team_builder_service.remove_player(G, U, players[1].id).error_code == error_codes.PLAYER_NOT_FOUND

    @pytest.mark.parametrize(
        "change",
        [
            lambda s, p: s.add_player(G, U, "Late arrival"),
            lambda s, p: s.update_player(G, U, p.id, batting=1),
            lambda s, p: s.remove_player(G, U, p.id),
            lambda s, p: s.set_number_of_teams(G, U, 3),
        ],
    )
    def test_roster_changes_clear_generated_teams(self, team_builder_service, change):
        players = _add_players(team_builder_service, 6)
        team_builder_service.generate_teams(G, U).unwrap()

        change(team_builder_service, players[-1])

        assert not team_builder_service.get_workspace(G, U).has_teams()

    def test_workspaces_are_per_guild_and_user(self, team_builder_service):
        team_builder_service.add_player(G, U, "Sam")

        assert team_builder_service.get_workspace(G, U + 1).get_player_count() == 0
        assert team_builder_service.get_workspace(G + 1, U).get_player_count() == 0
        assert team_builder_service.get_workspace(None, U).get_player_count() == 0

    def test_reset_workspace(self, team_builder_service):
        team_builder_service.add_player(G, U, "Sam")

        workspace = team_builder_service.reset_workspace(G, U)

        assert workspace.get_player_count() == 0


class TestTeamCount:
    def test_max_teams_limited_by_roster(self, team_builder_service):
        _add_players(team_builder_service, 3)
        assert team_builder_service.get_max_teams(G, U) == 3

    def test_max_teams_capped(self, team_builder_service):
        _add_players(team_builder_service, MAX_TEAMS + 5)
        assert team_builder_service.get_max_teams(G, U) == MAX_TEAMS

    @pytest.mark.parametrize("count", [1, 5])
    def test_out_of_range_count_rejected(self, team_builder_service, count):
        _add_players(team_builder_service, 4)

        result = team_builder_service.set_number_of_teams(G, U, count)

        assert result.error_code == error_codes.INVALID_TEAM_COUNT
        assert team_builder_service.get_workspace(G, U).number_of_teams == 2

    def test_set_number_of_teams(self, team_builder_service):
        _add_players(team_builder_service, 4)

        assert team_builder_service.set_number_of_teams(G, U, 4).value == 4
        assert team_builder_service.get_workspace(G, U).number_of_teams == 4

    def test_session_name(self, team_builder_service):
        assert team_builder_service.set_session_name(G, U, "  Sunday XI ").value == "Sunday XI"
        assert team_builder_service.set_session_name(G, U, " ").error_code == error_codes.INVALID_SESSION_NAME

    def test_session_name_too_long(self, team_builder_service):
        result = team_builder_service.set_session_name(G, U, "S" * (SESSION_NAME_MAX_LENGTH + 1))

        assert result.error_code == error_codes.INVALID_SESSION_NAME
        assert team_builder_service.get_workspace(G, U).session_name == DEFAULT_SESSION_NAME
        assert team_builder_service.set_session_name(G, U, "S" * SESSION_NAME_MAX_LENGTH)


class TestGenerateTeams:
    def test_empty_roster(self, team_builder_service):
        result = team_builder_service.generate_teams(G, U)
        assert result.error_code == error_codes.EMPTY_ROSTER

    def test_not_enough_players(self, team_builder_service):
        _add_players(team_builder_service, 3)
        team_builder_service.set_number_of_teams(G, U, 3).unwrap()
        team_builder_service.remove_player(G, U, team_builder_service.get_workspace(G, U).players[0].id)

        result = team_builder_service.generate_teams(G, U)

        assert result.error_code == error_codes.INVALID_TEAM_COUNT
        assert result.error == (
            "You need at least 3 players to generate 3 teams. Currently you have 2 players."
        )

    def test_generate_teams_stores_teams(self, team_builder_service):
        _add_players(team_builder_service, 7)

        teams = team_builder_service.generate_teams(G, U).unwrap()

        assert len(teams) == 2
        assert team_builder_service.get_workspace(G, U).teams is teams
        assert sum(t.get_size() for t in teams) == 7

    def test_fairness_summary_requires_teams(self, team_builder_service):
        result = team_builder_service.get_fairness_summary(G, U)
        assert result.error_code == error_codes.NO_TEAMS_GENERATED

    def test_fairness_summary(self, team_builder_service):
        _add_players(team_builder_service, 6)
        team_builder_service.generate_teams(G, U)

        summary = team_builder_service.get_fairness_summary(G, U).unwrap()

        assert set(summary["fairness_ratings"]) == {"Team 1", "Team 2"}


class TestSessions:
    def test_save_requires_teams(self, team_builder_service):
        _add_players(team_builder_service, 4)
        result = team_builder_service.save_session(G, U)
        assert result.error_code == error_codes.NO_TEAMS_GENERATED

    def test_save_and_load_latest(self, team_builder_service):
        _add_players(team_builder_service, 6)
        team_builder_service.set_session_name(G, U, "Sunday")
        original = team_builder_service.generate_teams(G, U).unwrap()

        session_id = team_builder_service.save_session(G, U).unwrap()
        team_builder_service.reset_workspace(G, U)
        loaded = team_builder_service.load_session(G, U).unwrap()

        assert loaded.session_id == session_id
        assert loaded.session_name == "Sunday"
        assert [t.get_size() for t in loaded.teams] == [t.get_size() for t in original]
        assert team_builder_service.get_workspace(G, U) is loaded

    def test_load_by_name(self, team_builder_service):
        _add_players(team_builder_service, 4)
        team_builder_service.generate_teams(G, U)
        team_builder_service.set_session_name(G, U, "First")
        team_builder_service.save_session(G, U)
        team_builder_service.set_session_name(G, U, "Second")
        team_builder_service.save_session(G, U)

        loaded = team_builder_service.load_session(G, U, "First").unwrap()

        assert loaded.session_name == "First"

    def test_load_missing_session(self, team_builder_service):
        result = team_builder_service.load_session(G, U)
        assert result.error_code == error_codes.SESSION_NOT_FOUND

    def test_loaded_session_can_be_edited_and_resaved(self, team_builder_service):
        _add_players(team_builder_service, 4)
        team_builder_service.generate_teams(G, U)
        team_builder_service.save_session(G, U)
        loaded = team_builder_service.load_session(G, U).unwrap()

        team_builder_service.add_player(G, U, "Late arrival")
        team_builder_service.generate_teams(G, U).unwrap()
        team_builder_service.save_session(G, U).unwrap()

        sessions = team_builder_service.list_sessions(G, U).unwrap()
        assert len(sessions) == 1
        assert sessions[0]["session_name"] == loaded.session_name
        assert sessions[0]["player_count"] == 5

    def test_delete_session(self, team_builder_service):
        _add_players(team_builder_service, 4)
        team_builder_service.generate_teams(G, U)
        team_builder_service.set_session_name(G, U, "Sunday")
        team_builder_service.save_session(G, U)

        assert team_builder_service.delete_session(G, U, "Sunday").success
        result = team_builder_service.delete_session(G, U, "Sunday")
        assert result.error_code == error_codes.SESSION_NOT_FOUND
