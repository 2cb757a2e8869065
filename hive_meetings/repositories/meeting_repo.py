"""Repository for meeting records.

Meetings are looked up by internal id from the API and by transcriber job
id from the completion webhook. The job id column carries a unique index
so that lookup is a single indexed read and can never be ambiguous.
"""

from uuid import UUID

from hive_meetings.db.turso import TursoClient
from hive_meetings.models.meeting import MeetingRecord, ProcessingState
from hive_meetings.summarization.schemas import MeetingAnalysis

_COLUMNS = (
    "id",
    "group_id",
    "meeting_date",
    "title",
    "audio_path",
    "recorded_by",
    "transcript_raw",
    "transcript_attributed",
    "summary",
    "processing_state",
    "provider_job_id",
    "created_at",
    "updated_at",
)
_SELECT = f"SELECT {', '.join(_COLUMNS)} FROM meetings"


class MeetingRepository:
    """Repository for MeetingRecord persistence."""

    def __init__(self, db_client: TursoClient):
        """Initialize repository with database client.

        Args:
            db_client: TursoClient instance for database operations
        """
        self._db = db_client

    async def initialize(self) -> None:
        """Create meetings table and indexes if not exists."""
        await self._db.execute_batch(
            [
                """
            CREATE TABLE IF NOT EXISTS meetings (
                id TEXT PRIMARY KEY,
                group_id TEXT NOT NULL,
                meeting_date TEXT NOT NULL,
                title TEXT,
                audio_path TEXT,
                recorded_by TEXT,
                transcript_raw TEXT,
                transcript_attributed TEXT,
                summary TEXT,
                processing_state TEXT NOT NULL DEFAULT 'pending',
                provider_job_id TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """,
                """
            CREATE UNIQUE INDEX IF NOT EXISTS idx_meetings_provider_job_id
            ON meetings(provider_job_id)
            """,
                """
            CREATE INDEX IF NOT EXISTS idx_meetings_group
            ON meetings(group_id, meeting_date)
            """,
            ]
        )

    async def create(self, meeting: MeetingRecord) -> MeetingRecord:
        """Insert a new meeting record.

        Args:
            meeting: Meeting to insert (normally in pending state)

        Returns:
            The same meeting, for chaining
        """
        await self._db.execute(
            f"""
            INSERT INTO meetings ({", ".join(_COLUMNS)})
            VALUES ({", ".join("?" for _ in _COLUMNS)})
            """,
            self._to_params(meeting),
        )
        return meeting

    async def get(self, meeting_id: UUID) -> MeetingRecord | None:
        """Get a meeting by internal id."""
        result = await self._db.execute(f"{_SELECT} WHERE id = ?", [str(meeting_id)])
        return self._from_row(result.rows[0]) if result.rows else None

    async def get_by_provider_job_id(self, job_id: str) -> MeetingRecord | None:
        """Get the meeting a transcriber job belongs to.

        Args:
            job_id: Transcriber job identifier from the webhook

        Returns:
            Matching meeting or None if no meeting carries this job id
        """
        result = await self._db.execute(
            f"{_SELECT} WHERE provider_job_id = ?",
            [job_id],
        )
        return self._from_row(result.rows[0]) if result.rows else None

    async def list_for_group(
        self,
        group_id: UUID,
        states: list[ProcessingState] | None = None,
    ) -> list[MeetingRecord]:
        """List a group's meetings, newest first.

        Args:
            group_id: Owning group
            states: Optional filter on processing state

        Returns:
            Meetings ordered by meeting date then creation time, descending
        """
        sql = f"{_SELECT} WHERE group_id = ?"
        params: list = [str(group_id)]
        if states:
            sql += f" AND processing_state IN ({', '.join('?' for _ in states)})"
            params.extend(s.value for s in states)
        sql += " ORDER BY meeting_date DESC, created_at DESC"
        result = await self._db.execute(sql, params)
        return [self._from_row(row) for row in result.rows]

    async def update(self, meeting: MeetingRecord) -> MeetingRecord:
        """Write every mutable column of a meeting in one statement.

        Raises:
            LookupError: If the meeting does not exist
        """
        meeting.touch()
        result = await self._db.execute(
            """
            UPDATE meetings SET
                title = ?,
                audio_path = ?,
                transcript_raw = ?,
                transcript_attributed = ?,
                summary = ?,
                processing_state = ?,
                provider_job_id = ?,
                updated_at = ?
            WHERE id = ?
            """,
            [
                meeting.title,
                meeting.audio_path,
                meeting.transcript_raw,
                meeting.transcript_attributed,
                meeting.summary.model_dump_json() if meeting.summary else None,
                meeting.processing_state.value,
                meeting.provider_job_id,
                meeting.updated_at.isoformat(),
                str(meeting.id),
            ],
        )
        if result.rows_affected == 0:
            raise LookupError(f"Meeting {meeting.id} does not exist")
        return meeting

    @staticmethod
    def _to_params(meeting: MeetingRecord) -> list:
        return [
            str(meeting.id),
            str(meeting.group_id),
            meeting.meeting_date.isoformat(),
            meeting.title,
            meeting.audio_path,
            str(meeting.recorded_by) if meeting.recorded_by else None,
            meeting.transcript_raw,
            meeting.transcript_attributed,
            meeting.summary.model_dump_json() if meeting.summary else None,
            meeting.processing_state.value,
            meeting.provider_job_id,
            *meeting.stamps(),
        ]

    @staticmethod
    def _from_row(row) -> MeetingRecord:
        data = {name: row[i] for i, name in enumerate(_COLUMNS)}
        summary = data.pop("summary")
        return MeetingRecord(
            **data,
            summary=MeetingAnalysis.model_validate_json(summary) if summary else None,
        )
