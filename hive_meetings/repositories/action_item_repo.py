"""Repository for action items extracted from meetings."""

from uuid import UUID

from hive_meetings.db.turso import TursoClient
from hive_meetings.models.action_item import ActionItem

_COLUMNS = (
    "id",
    "meeting_id",
    "group_id",
    "description",
    "assignee_id",
    "due_date",
    "completed",
    "completed_at",
    "created_at",
    "updated_at",
)
_SELECT = f"SELECT {', '.join(_COLUMNS)} FROM action_items"
_INSERT = f"""
    INSERT INTO action_items ({", ".join(_COLUMNS)})
    VALUES ({", ".join("?" for _ in _COLUMNS)})
"""


class ActionItemRepository:
    """Repository for ActionItem persistence.

    Items are inserted as a batch per summarization pass. They are not
    deduplicated: reprocessing a meeting adds a fresh set alongside any
    earlier items, which keeps completion flags on the earlier ones.
    """

    def __init__(self, db_client: TursoClient):
        """Initialize repository with database client.

        Args:
            db_client: TursoClient instance for database operations
        """
        self._db = db_client

    async def initialize(self) -> None:
        """Create action_items table if not exists."""
        await self._db.execute_batch(
            [
                """
            CREATE TABLE IF NOT EXISTS action_items (
                id TEXT PRIMARY KEY,
                meeting_id TEXT NOT NULL,
                group_id TEXT NOT NULL,
                description TEXT NOT NULL,
                assignee_id TEXT,
                due_date TEXT,
                completed INTEGER NOT NULL DEFAULT 0,
                completed_at TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """,
                """
            CREATE INDEX IF NOT EXISTS idx_action_items_meeting
            ON action_items(meeting_id)
            """,
            ]
        )

    async def create_many(self, items: list[ActionItem]) -> list[ActionItem]:
        """Insert action items atomically.

        Args:
            items: Items to insert

        Returns:
            The inserted items
        """
        if not items:
            return []
        await self._db.execute_batch(
            [(_INSERT, self._to_params(item)) for item in items]
        )
        return items

    async def get(self, item_id: UUID) -> ActionItem | None:
        """Get an action item by id."""
        result = await self._db.execute(f"{_SELECT} WHERE id = ?", [str(item_id)])
        return self._from_row(result.rows[0]) if result.rows else None

    async def list_for_meeting(self, meeting_id: UUID) -> list[ActionItem]:
        """List a meeting's action items, soonest due date first."""
        result = await self._db.execute(
            f"""
            {_SELECT}
            WHERE meeting_id = ?
            ORDER BY due_date IS NULL, due_date, created_at
            """,
            [str(meeting_id)],
        )
        return [self._from_row(row) for row in result.rows]

    async def set_completed(self, item_id: UUID, completed: bool) -> ActionItem | None:
        """Set or clear an item's completion flag.

        Args:
            item_id: Action item id
            completed: New completion state

        Returns:
            Updated item, or None if it does not exist
        """
        item = await self.get(item_id)
        if item is None:
            return None
        item.set_completed(completed)
        await self._db.execute(
            """
            UPDATE action_items
            SET completed = ?, completed_at = ?, updated_at = ?
            WHERE id = ?
            """,
            [
                1 if item.completed else 0,
                item.completed_at.isoformat() if item.completed_at else None,
                item.updated_at.isoformat(),
                str(item.id),
            ],
        )
        return item

    @staticmethod
    def _to_params(item: ActionItem) -> list:
        return [
            str(item.id),
            str(item.meeting_id),
            str(item.group_id),
            item.description,
            str(item.assignee_id) if item.assignee_id else None,
            item.due_date.isoformat() if item.due_date else None,
            1 if item.completed else 0,
            item.completed_at.isoformat() if item.completed_at else None,
            *item.stamps(),
        ]

    @staticmethod
    def _from_row(row) -> ActionItem:
        data = {name: row[i] for i, name in enumerate(_COLUMNS)}
        data["completed"] = bool(data["completed"])
        return ActionItem(**data)
