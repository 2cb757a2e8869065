"""Read access to the group roster.

Members and memberships belong to the community subsystem. The tables
are created here so a standalone deployment (and the test suite) has
somewhere to read the roster from; ``add_member`` exists for seeding.
"""

from uuid import UUID

from hive_meetings.db.turso import TursoClient
from hive_meetings.models.member import Member


class MemberRepository:
    """Repository for the read-only member roster."""

    def __init__(self, db_client: TursoClient):
        """Initialize repository with database client.

        Args:
            db_client: TursoClient instance for database operations
        """
        self._db = db_client

    async def initialize(self) -> None:
        """Create members and memberships tables if not exists."""
        await self._db.execute_batch(
            [
                """
            CREATE TABLE IF NOT EXISTS members (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL
            )
            """,
                """
            CREATE TABLE IF NOT EXISTS group_memberships (
                group_id TEXT NOT NULL,
                member_id TEXT NOT NULL,
                PRIMARY KEY (group_id, member_id)
            )
            """,
            ]
        )

    async def add_member(self, member: Member, group_id: UUID) -> None:
        """Insert a member (if new) and add them to a group."""
        await self._db.execute_batch(
            [
                (
                    "INSERT OR IGNORE INTO members (id, name) VALUES (?, ?)",
                    [str(member.id), member.name],
                ),
                (
                    """
                    INSERT OR IGNORE INTO group_memberships (group_id, member_id)
                    VALUES (?, ?)
                    """,
                    [str(group_id), str(member.id)],
                ),
            ]
        )

    async def roster_for_group(self, group_id: UUID) -> list[Member]:
        """Get every member of a group, ordered by name."""
        result = await self._db.execute(
            """
            SELECT m.id, m.name
            FROM members m
            JOIN group_memberships gm ON gm.member_id = m.id
            WHERE gm.group_id = ?
            ORDER BY m.name
            """,
            [str(group_id)],
        )
        return [Member(id=row[0], name=row[1]) for row in result.rows]
