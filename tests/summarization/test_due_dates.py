"""Tests for due date normalization."""

from datetime import date

from hive_meetings.summarization.date_normalizer import normalize_due_date

# Saturday, January 18, 2026
MEETING_DATE = date(2026, 1, 18)


class TestNormalizeDueDate:
    """Tests for normalize_due_date function."""

    def test_none_input_returns_none(self):
        assert normalize_due_date(None, MEETING_DATE) is None

    def test_blank_returns_none(self):
        assert normalize_due_date("   ", MEETING_DATE) is None

    def test_null_literal_returns_none(self):
        """Models sometimes write the string 'null'."""
        assert normalize_due_date("null", MEETING_DATE) is None
        assert normalize_due_date("N/A", MEETING_DATE) is None

    def test_iso_date(self):
        """ISO dates are taken as-is."""
        assert normalize_due_date("2026-02-01", MEETING_DATE) == date(2026, 2, 1)

    def test_iso_date_in_past_kept(self):
        """ISO dates are not shifted even when before the meeting."""
        assert normalize_due_date("2025-12-01", MEETING_DATE) == date(2025, 12, 1)

    def test_unparseable_returns_none(self):
        assert normalize_due_date("asdfghjkl not a date", MEETING_DATE) is None

    def test_tomorrow_relative_to_meeting(self):
        assert normalize_due_date("tomorrow", MEETING_DATE) == date(2026, 1, 19)

    def test_weekday_relative_to_meeting(self):
        """A bare weekday resolves to the next occurrence after the meeting."""
        assert normalize_due_date("Friday", MEETING_DATE) == date(2026, 1, 23)

    def test_explicit_full_date(self):
        assert normalize_due_date("February 15, 2026", MEETING_DATE) == date(2026, 2, 15)
