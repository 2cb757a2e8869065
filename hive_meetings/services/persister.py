"""Derived-record persister.

Turns a MeetingAnalysis into stored records: action items with resolved
assignees, the spotlight highlights for the group's active cycle, and the
summary payload on the meeting itself. Resolution problems (unknown
assignee, no active cycle) degrade to unassigned items or skipped
highlights rather than failing the batch.
"""

from dataclasses import dataclass, field
from uuid import UUID

import structlog

from hive_meetings.identity.fuzzy_matcher import FuzzyMatcher
from hive_meetings.models.action_item import ActionItem
from hive_meetings.models.highlight import Highlight
from hive_meetings.models.meeting import MeetingRecord, ProcessingState
from hive_meetings.models.member import Member
from hive_meetings.repositories.action_item_repo import ActionItemRepository
from hive_meetings.repositories.highlight_repo import HighlightRepository
from hive_meetings.repositories.meeting_repo import MeetingRepository
from hive_meetings.summarization.date_normalizer import normalize_due_date
from hive_meetings.summarization.schemas import MeetingAnalysis

logger = structlog.get_logger()


@dataclass
class PersistResult:
    """Records written for one summarization pass."""

    action_items: list[ActionItem] = field(default_factory=list)
    highlights: list[Highlight] = field(default_factory=list)
    cycle_id: UUID | None = None


class DerivedRecordPersister:
    """Writes the records derived from a meeting analysis."""

    def __init__(
        self,
        meeting_repo: MeetingRepository,
        action_item_repo: ActionItemRepository,
        highlight_repo: HighlightRepository,
        matcher: FuzzyMatcher | None = None,
    ):
        """Initialize persister with repositories.

        Args:
            meeting_repo: Meeting persistence
            action_item_repo: Action item persistence
            highlight_repo: Cycle and highlight persistence
            matcher: Assignee name matcher (default FuzzyMatcher)
        """
        self._meetings = meeting_repo
        self._action_items = action_item_repo
        self._highlights = highlight_repo
        self._matcher = matcher or FuzzyMatcher()

    def build_action_items(
        self,
        meeting: MeetingRecord,
        analysis: MeetingAnalysis,
        roster: list[Member],
    ) -> list[ActionItem]:
        """Convert extracted action items into domain models.

        Args:
            meeting: Source meeting (for ids and date reference)
            analysis: Parsed summarizer output
            roster: Group members for assignee resolution

        Returns:
            One ActionItem per extracted item
        """
        items: list[ActionItem] = []
        for extracted in analysis.action_items:
            assignee = self._matcher.resolve(extracted.assignee_name, roster)
            if extracted.assignee_name and assignee is None:
                logger.info(
                    "assignee not resolved",
                    meeting_id=str(meeting.id),
                    assignee_name=extracted.assignee_name,
                )
            items.append(
                ActionItem(
                    meeting_id=meeting.id,
                    group_id=meeting.group_id,
                    description=extracted.description,
                    assignee_id=assignee.id if assignee else None,
                    due_date=normalize_due_date(extracted.due_date, meeting.meeting_date),
                )
            )
        return items

    async def persist(
        self,
        meeting: MeetingRecord,
        analysis: MeetingAnalysis,
        roster: list[Member],
    ) -> PersistResult:
        """Store everything derived from an analysis and complete the meeting.

        Action items are appended. Highlights for this meeting are replaced
        when the group has an active cycle and skipped otherwise. The
        summary is saved last together with the complete state.

        Args:
            meeting: Meeting being summarized (normally in summarizing state)
            analysis: Parsed summarizer output
            roster: Group members for assignee resolution

        Returns:
            PersistResult with the written records
        """
        result = PersistResult()

        result.action_items = await self._action_items.create_many(
            self.build_action_items(meeting, analysis, roster)
        )

        cycle = await self._highlights.get_active_cycle(meeting.group_id)
        if cycle is None:
            logger.info(
                "no active cycle, skipping highlights",
                meeting_id=str(meeting.id),
                highlights=len(analysis.highlights),
            )
        else:
            result.cycle_id = cycle.id
            result.highlights = await self._highlights.replace_for_meeting(
                cycle_id=cycle.id,
                meeting_id=meeting.id,
                group_id=meeting.group_id,
                contents=analysis.highlights,
            )

        meeting.summary = analysis
        # Re-persisting a complete meeting refreshes its records in place
        if meeting.processing_state != ProcessingState.COMPLETE:
            meeting.transition_to(ProcessingState.COMPLETE)
        await self._meetings.update(meeting)

        logger.info(
            "derived records persisted",
            meeting_id=str(meeting.id),
            action_items=len(result.action_items),
            highlights=len(result.highlights),
        )
        return result
