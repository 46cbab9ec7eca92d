import sqlite3

from infrastructure.schema_manager import SchemaManager


def _tables(db_path):
    with sqlite3.connect(db_path) as conn:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
    return {row[0] for row in rows}


def test_schema_manager_initializes_tables(tmp_path):
    """SchemaManager creates all team builder tables."""
    db_path = str(tmp_path / "test.db")
    SchemaManager(db_path).initialize()

    assert {
        "team_builder_sessions",
        "team_builder_players",
        "team_builder_teams",
        "team_builder_team_players",
        "schema_migrations",
    }.issubset(_tables(db_path))


def test_migrations_recorded_once(tmp_path):
    db_path = str(tmp_path / "test.db")
    SchemaManager(db_path).initialize()
    SchemaManager(db_path).initialize()

    with sqlite3.connect(db_path) as conn:
        names = [row[0] for row in conn.execute("SELECT name FROM schema_migrations")]

    assert sorted(names) == ["add_team_builder_indexes_v1", "add_team_player_position"]


def test_position_columns_added(tmp_path):
    db_path = str(tmp_path / "test.db")
    SchemaManager(db_path).initialize()

    with sqlite3.connect(db_path) as conn:
        team_player_cols = {row[1] for row in conn.execute("PRAGMA table_info(team_builder_team_players)")}
        player_cols = {row[1] for row in conn.execute("PRAGMA table_info(team_builder_players)")}

    assert "position" in team_player_cols
    assert "position" in player_cols


def test_session_names_unique_per_owner(tmp_path):
    db_path = str(tmp_path / "test.db")
    SchemaManager(db_path).initialize()

    with sqlite3.connect(db_path) as conn:
        conn.execute(
            "INSERT INTO team_builder_sessions (guild_id, user_id, session_name, number_of_teams) "
            "VALUES (1, 2, 'Sunday', 2)"
        )
        try:
            conn.execute(
                "INSERT INTO team_builder_sessions (guild_id, user_id, session_name, number_of_teams) "
                "VALUES (1, 2, 'Sunday', 3)"
            )
            duplicate_allowed = True
        except sqlite3.IntegrityError:
            duplicate_allowed = False
        # Same name for a different user is fine
        conn.execute(
            "INSERT INTO team_builder_sessions (guild_id, user_id, session_name, number_of_teams) "
            "VALUES (1, 3, 'Sunday', 2)"
        )

    assert duplicate_allowed is False


def test_in_memory_uri_database():
    SchemaManager("file:schema_test?mode=memory&cache=shared", use_uri=True).initialize()
