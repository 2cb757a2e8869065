"""Repository for subject cycles and their highlights.

Highlights are written per meeting: each summarization pass deletes the
rows that meeting contributed earlier and inserts the new set in the same
batch, so reprocessing a meeting never grows the list.
"""

import logging
from uuid import UUID

from hive_meetings.db.turso import TursoClient
from hive_meetings.models.highlight import CycleStatus, Highlight, SubjectCycle

logger = logging.getLogger(__name__)

_CYCLE_COLUMNS = (
    "id",
    "group_id",
    "holder_id",
    "period",
    "title",
    "status",
    "created_at",
    "updated_at",
)
_HIGHLIGHT_COLUMNS = (
    "id",
    "cycle_id",
    "meeting_id",
    "group_id",
    "content",
    "display_order",
    "created_at",
    "updated_at",
)
_SELECT_HIGHLIGHTS = f"SELECT {', '.join(_HIGHLIGHT_COLUMNS)} FROM highlights"
_INSERT_HIGHLIGHT = f"""
    INSERT INTO highlights ({", ".join(_HIGHLIGHT_COLUMNS)})
    VALUES ({", ".join("?" for _ in _HIGHLIGHT_COLUMNS)})
"""


class HighlightRepository:
    """Repository for SubjectCycle and Highlight persistence."""

    def __init__(self, db_client: TursoClient):
        """Initialize repository with database client.

        Args:
            db_client: TursoClient instance for database operations
        """
        self._db = db_client

    async def initialize(self) -> None:
        """Create subject_cycles and highlights tables if not exists."""
        await self._db.execute_batch(
            [
                """
            CREATE TABLE IF NOT EXISTS subject_cycles (
                id TEXT PRIMARY KEY,
                group_id TEXT NOT NULL,
                holder_id TEXT NOT NULL,
                period TEXT NOT NULL,
                title TEXT NOT NULL,
                status TEXT NOT NULL DEFAULT 'upcoming',
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                UNIQUE(group_id, period)
            )
            """,
                """
            CREATE TABLE IF NOT EXISTS highlights (
                id TEXT PRIMARY KEY,
                cycle_id TEXT NOT NULL,
                meeting_id TEXT NOT NULL,
                group_id TEXT NOT NULL,
                content TEXT NOT NULL,
                display_order INTEGER NOT NULL DEFAULT 0,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """,
                """
            CREATE INDEX IF NOT EXISTS idx_highlights_cycle
            ON highlights(cycle_id)
            """,
                """
            CREATE INDEX IF NOT EXISTS idx_highlights_meeting
            ON highlights(meeting_id)
            """,
            ]
        )

    async def create_cycle(self, cycle: SubjectCycle) -> SubjectCycle:
        """Insert a subject cycle."""
        await self._db.execute(
            f"""
            INSERT INTO subject_cycles ({", ".join(_CYCLE_COLUMNS)})
            VALUES ({", ".join("?" for _ in _CYCLE_COLUMNS)})
            """,
            [
                str(cycle.id),
                str(cycle.group_id),
                str(cycle.holder_id),
                cycle.period,
                cycle.title,
                cycle.status.value,
                *cycle.stamps(),
            ],
        )
        return cycle

    async def get_active_cycle(self, group_id: UUID) -> SubjectCycle | None:
        """Get the group's currently active subject cycle.

        Args:
            group_id: Owning group

        Returns:
            The active cycle, or None if no cycle is active. If several are
            marked active, the one with the latest period wins.
        """
        result = await self._db.execute(
            f"""
            SELECT {", ".join(_CYCLE_COLUMNS)}
            FROM subject_cycles
            WHERE group_id = ? AND status = ?
            ORDER BY period DESC
            """,
            [str(group_id), CycleStatus.ACTIVE.value],
        )
        if not result.rows:
            return None
        if len(result.rows) > 1:
            logger.warning(
                f"{len(result.rows)} active cycles for group {group_id}; using latest"
            )
        row = result.rows[0]
        return SubjectCycle(**{name: row[i] for i, name in enumerate(_CYCLE_COLUMNS)})

    async def replace_for_meeting(
        self,
        cycle_id: UUID,
        meeting_id: UUID,
        group_id: UUID,
        contents: list[str],
    ) -> list[Highlight]:
        """Replace a meeting's highlights with a new ordered set.

        Only rows from ``meeting_id`` are removed; highlights other meetings
        contributed to the same cycle are left alone. Delete and inserts run
        in one batch.

        Args:
            cycle_id: Cycle the highlights are about
            meeting_id: Meeting the highlights come from
            group_id: Owning group
            contents: Highlight texts in display order

        Returns:
            The inserted highlights with display_order 0..n-1
        """
        highlights = [
            Highlight(
                cycle_id=cycle_id,
                meeting_id=meeting_id,
                group_id=group_id,
                content=content,
                display_order=index,
            )
            for index, content in enumerate(contents)
        ]
        statements: list = [
            ("DELETE FROM highlights WHERE meeting_id = ?", [str(meeting_id)])
        ]
        statements.extend(
            (
                _INSERT_HIGHLIGHT,
                [
                    str(h.id),
                    str(h.cycle_id),
                    str(h.meeting_id),
                    str(h.group_id),
                    h.content,
                    h.display_order,
                    *h.stamps(),
                ],
            )
            for h in highlights
        )
        await self._db.execute_batch(statements)
        return highlights

    async def list_for_cycle(self, cycle_id: UUID) -> list[Highlight]:
        """List a cycle's highlights grouped by meeting in display order."""
        result = await self._db.execute(
            f"""
            {_SELECT_HIGHLIGHTS}
            WHERE cycle_id = ?
            ORDER BY meeting_id, display_order
            """,
            [str(cycle_id)],
        )
        return [self._from_row(row) for row in result.rows]

    async def list_for_meeting(self, meeting_id: UUID) -> list[Highlight]:
        """List the highlights a meeting contributed, in display order."""
        result = await self._db.execute(
            f"{_SELECT_HIGHLIGHTS} WHERE meeting_id = ? ORDER BY display_order",
            [str(meeting_id)],
        )
        return [self._from_row(row) for row in result.rows]

    @staticmethod
    def _from_row(row) -> Highlight:
        return Highlight(**{name: row[i] for i, name in enumerate(_HIGHLIGHT_COLUMNS)})
