"""
Repository for saved team builder sessions.
"""

import logging
from datetime import datetime

from domain.models.player import Player
from domain.models.session import TeamBuilderSession
from domain.models.team import Team
from repositories.base_repository import BaseRepository
from repositories.interfaces import ITeamBuilderRepository

logger = logging.getLogger("crease_bot.repositories.team_builder")


def _parse_timestamp(value) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        return None


class TeamBuilderRepository(BaseRepository, ITeamBuilderRepository):
    """
    Persists roster, team count and generated teams per (guild, user).

    Saved player ids are database row ids; on load they come back as
    strings so they can be used as Player ids directly.
    """

    def save_session(
        self,
        guild_id: int | None,
        user_id: int,
        session_name: str,
        number_of_teams: int,
        players: list[Player],
        teams: list[Team],
    ) -> int:
        """
        Save a session, replacing any existing session with the same name.

        Returns:
            The new session id
        """
        normalized_guild = self.normalize_guild_id(guild_id)

        with self.atomic_transaction() as conn:
            cursor = conn.cursor()
            self._delete_session_rows(cursor, normalized_guild, user_id, session_name)

            cursor.execute(
                """
                INSERT INTO team_builder_sessions (guild_id, user_id, session_name, number_of_teams)
                VALUES (?, ?, ?, ?)
                """,
                (normalized_guild, user_id, session_name, number_of_teams),
            )
            session_id = cursor.lastrowid

            # Workspace player id -> saved row id
            player_map: dict[str, int] = {}
            for position, player in enumerate(players):
                cursor.execute(
                    """
                    INSERT INTO team_builder_players
                        (session_id, name, batting, bowling, captaincy, is_wicketkeeper, notes, position)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        session_id,
                        player.name,
                        player.batting,
                        player.bowling,
                        player.captaincy,
                        1 if player.is_wicketkeeper else 0,
                        player.notes or "",
                        position,
                    ),
                )
                player_map[player.id] = cursor.lastrowid

            for team in teams:
                cursor.execute(
                    """
                    INSERT INTO team_builder_teams
                        (session_id, team_name, captain_player_id, vice_captain_player_id,
                         wicketkeeper_player_id, total_rating, description)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        session_id,
                        team.name,
                        player_map.get(team.captain_id) if team.captain_id else None,
                        player_map.get(team.vice_captain_id) if team.vice_captain_id else None,
                        player_map.get(team.wicketkeeper_id) if team.wicketkeeper_id else None,
                        team.total_rating,
                        team.description,
                    ),
                )
                team_id = cursor.lastrowid

                for position, player in enumerate(team.players):
                    if player.id not in player_map:
                        raise ValueError(f"Team member {player.name} is not on the saved roster")
                    cursor.execute(
                        """
                        INSERT INTO team_builder_team_players (team_id, player_id, position)
                        VALUES (?, ?, ?)
                        """,
                        (team_id, player_map[player.id], position),
                    )

        logger.info(
            f"Saved session '{session_name}' for user {user_id} in guild {normalized_guild}: "
            f"{len(players)} players, {len(teams)} teams"
        )
        return session_id

    def _delete_session_rows(self, cursor, guild_id: int, user_id: int, session_name: str) -> bool:
        cursor.execute(
            """
            SELECT id FROM team_builder_sessions
            WHERE guild_id = ? AND user_id = ? AND session_name = ?
            """,
            (guild_id, user_id, session_name),
        )
        row = cursor.fetchone()
        if not row:
            return False

        session_id = row["id"]
        cursor.execute(
            """
            DELETE FROM team_builder_team_players
            WHERE team_id IN (SELECT id FROM team_builder_teams WHERE session_id = ?)
            """,
            (session_id,),
        )
        cursor.execute("DELETE FROM team_builder_teams WHERE session_id = ?", (session_id,))
        cursor.execute("DELETE FROM team_builder_players WHERE session_id = ?", (session_id,))
        cursor.execute("DELETE FROM team_builder_sessions WHERE id = ?", (session_id,))
        return True

    def get_latest_session(self, guild_id: int | None, user_id: int) -> TeamBuilderSession | None:
        """Get the most recently saved session for a user."""
        normalized_guild = self.normalize_guild_id(guild_id)
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT * FROM team_builder_sessions
                WHERE guild_id = ? AND user_id = ?
                ORDER BY updated_at DESC, id DESC
                LIMIT 1
                """,
                (normalized_guild, user_id),
            )
            row = cursor.fetchone()
            if not row:
                return None
            return self._load_session(cursor, row)

    def get_session_by_name(
        self, guild_id: int | None, user_id: int, session_name: str
    ) -> TeamBuilderSession | None:
        """Get a saved session by name."""
        normalized_guild = self.normalize_guild_id(guild_id)
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT * FROM team_builder_sessions
                WHERE guild_id = ? AND user_id = ? AND session_name = ?
                """,
                (normalized_guild, user_id, session_name),
            )
            row = cursor.fetchone()
            if not row:
                return None
            return self._load_session(cursor, row)

    def _load_session(self, cursor, session_row) -> TeamBuilderSession:
        session_id = session_row["id"]

        cursor.execute(
            """
            SELECT id, name, batting, bowling, captaincy, is_wicketkeeper, notes
            FROM team_builder_players
            WHERE session_id = ?
            ORDER BY position, id
            """,
            (session_id,),
        )
        players = [self._row_to_player(r) for r in cursor.fetchall()]
        players_by_id = {p.id: p for p in players}

        cursor.execute(
            """
            SELECT * FROM team_builder_teams
            WHERE session_id = ?
            ORDER BY id
            """,
            (session_id,),
        )
        team_rows = cursor.fetchall()

        teams = []
        for team_row in team_rows:
            cursor.execute(
                """
                SELECT player_id FROM team_builder_team_players
                WHERE team_id = ?
                ORDER BY position, id
                """,
                (team_row["id"],),
            )
            members = [players_by_id[str(r["player_id"])] for r in cursor.fetchall()]
            team = Team(team_row["team_name"], members)
            team.set_captain(self._member_ref(team, team_row["captain_player_id"]))
            team.set_vice_captain(self._member_ref(team, team_row["vice_captain_player_id"]))
            team.set_wicketkeeper(self._member_ref(team, team_row["wicketkeeper_player_id"]))
            team.description = team_row["description"] or ""
            teams.append(team)

        return TeamBuilderSession(
            guild_id=session_row["guild_id"],
            user_id=session_row["user_id"],
            session_name=session_row["session_name"],
            number_of_teams=session_row["number_of_teams"],
            players=players,
            teams=teams,
            session_id=session_id,
            created_at=_parse_timestamp(session_row["created_at"]),
            updated_at=_parse_timestamp(session_row["updated_at"]),
        )

    @staticmethod
    def _member_ref(team: Team, player_row_id: int | None) -> str | None:
        """Resolve a stored role reference, dropping it if it no longer points at a member."""
        if player_row_id is None:
            return None
        player_id = str(player_row_id)
        if not team.has_player(player_id):
            logger.warning(f"{team.name} role references non-member player {player_id}; ignoring")
            return None
        return player_id

    @staticmethod
    def _row_to_player(row) -> Player:
        return Player(
            id=str(row["id"]),
            name=row["name"],
            batting=row["batting"],
            bowling=row["bowling"],
            captaincy=row["captaincy"],
            is_wicketkeeper=row["is_wicketkeeper"] == 1,
            notes=row["notes"] or "",
        )

    def list_sessions(self, guild_id: int | None, user_id: int, limit: int = 10) -> list[dict]:
        """List a user's saved sessions, newest first."""
        normalized_guild = self.normalize_guild_id(guild_id)
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT s.id, s.session_name, s.number_of_teams, s.updated_at,
                       (SELECT COUNT(*) FROM team_builder_players p WHERE p.session_id = s.id)
                           AS player_count
                FROM team_builder_sessions s
                WHERE s.guild_id = ? AND s.user_id = ?
                ORDER BY s.updated_at DESC, s.id DESC
                LIMIT ?
                """,
                (normalized_guild, user_id, limit),
            )
            return [dict(row) for row in cursor.fetchall()]

    def delete_session(self, guild_id: int | None, user_id: int, session_name: str) -> bool:
        """Delete a saved session. Returns False if it did not exist."""
        normalized_guild = self.normalize_guild_id(guild_id)
        with self.atomic_transaction() as conn:
            cursor = conn.cursor()
            return self._delete_session_rows(cursor, normalized_guild, user_id, session_name)
