"""Tests for DerivedRecordPersister."""

from datetime import date

import pytest

from hive_meetings.models.meeting import ProcessingState
from hive_meetings.services.persister import DerivedRecordPersister
from hive_meetings.summarization.schemas import ExtractedActionItem, MeetingAnalysis


@pytest.fixture
def persister(meeting_repo, action_item_repo, highlight_repo) -> DerivedRecordPersister:
    return DerivedRecordPersister(meeting_repo, action_item_repo, highlight_repo)


@pytest.fixture
async def summarizing_meeting(meeting_repo, pending_meeting):
    pending_meeting.provider_job_id = "job-123"
    pending_meeting.transcript_raw = "Speaker A: Hello"
    pending_meeting.transition_to(ProcessingState.TRANSCRIBING)
    pending_meeting.transition_to(ProcessingState.SUMMARIZING)
    return await meeting_repo.update(pending_meeting)


@pytest.fixture
async def roster(member_repo, group_id):
    return await member_repo.roster_for_group(group_id)


def make_analysis(**overrides) -> MeetingAnalysis:
    data = {
        "summary": "Garden update.",
        "action_items": [
            ExtractedActionItem(
                description="Send the seed order", assignee_name="alice", due_date="2025-03-14"
            ),
            ExtractedActionItem(description="Find a venue", assignee_name="Nobody"),
        ],
        "highlights": ["Beds built", "Compost booked"],
    }
    data.update(overrides)
    return MeetingAnalysis(**data)


class TestBuildActionItems:
    """Tests for action item conversion."""

    def test_assignee_and_due_date(self, persister, pending_meeting, roster, alice):
        items = persister.build_action_items(pending_meeting, make_analysis(), roster)

        assert items[0].assignee_id == alice.id
        assert items[0].due_date == date(2025, 3, 14)
        assert items[0].meeting_id == pending_meeting.id
        assert items[0].group_id == pending_meeting.group_id

    def test_unresolved_assignee_left_unassigned(self, persister, pending_meeting, roster):
        items = persister.build_action_items(pending_meeting, make_analysis(), roster)

        assert items[1].description == "Find a venue"
        assert items[1].assignee_id is None
        assert items[1].due_date is None

    def test_unparseable_due_date_dropped(self, persister, pending_meeting, roster):
        analysis = make_analysis(
            action_items=[ExtractedActionItem(description="Task", due_date="asdfghjkl")]
        )

        [item] = persister.build_action_items(pending_meeting, analysis, roster)

        assert item.due_date is None


class TestPersist:
    """Tests for DerivedRecordPersister.persist."""

    async def test_writes_everything_and_completes(
        self,
        persister,
        summarizing_meeting,
        roster,
        active_cycle,
        meeting_repo,
        action_item_repo,
        highlight_repo,
    ):
        result = await persister.persist(summarizing_meeting, make_analysis(), roster)

        assert len(result.action_items) == 2
        assert result.cycle_id == active_cycle.id
        assert [h.content for h in result.highlights] == ["Beds built", "Compost booked"]

        stored = await meeting_repo.get(summarizing_meeting.id)
        assert stored.processing_state == ProcessingState.COMPLETE
        assert stored.summary.summary == "Garden update."
        assert len(await action_item_repo.list_for_meeting(summarizing_meeting.id)) == 2
        assert len(await highlight_repo.list_for_cycle(active_cycle.id)) == 2

    async def test_no_active_cycle_skips_highlights(
        self, persister, summarizing_meeting, roster, meeting_repo, highlight_repo
    ):
        result = await persister.persist(summarizing_meeting, make_analysis(), roster)

        assert result.cycle_id is None
        assert result.highlights == []
        assert await highlight_repo.list_for_meeting(summarizing_meeting.id) == []
        stored = await meeting_repo.get(summarizing_meeting.id)
        assert stored.processing_state == ProcessingState.COMPLETE

    async def test_reprocessing_replaces_highlights(
        self, persister, summarizing_meeting, roster, active_cycle, highlight_repo
    ):
        """Persisting twice leaves one copy of the highlights."""
        analysis = make_analysis()

        await persister.persist(summarizing_meeting, analysis, roster)
        await persister.persist(summarizing_meeting, analysis, roster)

        highlights = await highlight_repo.list_for_cycle(active_cycle.id)
        assert [h.content for h in highlights] == ["Beds built", "Compost booked"]
        assert [h.display_order for h in highlights] == [0, 1]

    async def test_reprocessing_appends_action_items(
        self, persister, summarizing_meeting, roster, action_item_repo
    ):
        analysis = make_analysis()

        await persister.persist(summarizing_meeting, analysis, roster)
        await persister.persist(summarizing_meeting, analysis, roster)

        assert len(await action_item_repo.list_for_meeting(summarizing_meeting.id)) == 4

    async def test_text_only_analysis(
        self, persister, summarizing_meeting, roster, active_cycle, meeting_repo
    ):
        analysis = MeetingAnalysis.from_text("Plain prose recap.")

        result = await persister.persist(summarizing_meeting, analysis, roster)

        assert result.action_items == []
        assert result.highlights == []
        stored = await meeting_repo.get(summarizing_meeting.id)
        assert stored.summary.is_degraded
        assert stored.summary.summary == "Plain prose recap."
        assert stored.processing_state == ProcessingState.COMPLETE
