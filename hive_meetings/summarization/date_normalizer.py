"""Due date normalization for summarizer output.

The prompt asks for ISO dates, but the model sometimes echoes the phrase
used in the meeting ("Friday", "March 3rd"). Those are parsed relative to
the meeting date.
"""

from datetime import date, datetime, time

import dateparser


def normalize_due_date(
    raw_date: str | None,
    meeting_date: date,
) -> date | None:
    """Convert a due date string to a date.

    Args:
        raw_date: ISO date or natural language date string
        meeting_date: Date of the meeting (reference for relative dates)

    Returns:
        Parsed date, or None if raw_date is empty or unparseable

    Examples:
        >>> normalize_due_date("2026-02-01", date(2026, 1, 18))
        datetime.date(2026, 2, 1)
        >>> normalize_due_date("null", date(2026, 1, 18))
    """
    if raw_date is None:
        return None

    raw_date = raw_date.strip()
    if not raw_date or raw_date.lower() in {"null", "none", "n/a"}:
        return None

    try:
        return date.fromisoformat(raw_date)
    except ValueError:
        pass

    settings: dict = {
        "RELATIVE_BASE": datetime.combine(meeting_date, time(12, 0)),
        "PREFER_DATES_FROM": "future",
        "RETURN_AS_TIMEZONE_AWARE": False,
    }

    try:
        parsed = dateparser.parse(raw_date, settings=settings)
        if parsed is None:
            return None
        return parsed.date()
    except Exception:
        # dateparser can raise various exceptions on malformed input
        return None
