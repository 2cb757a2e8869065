"""Lenient parser for summarizer output.

The provider is instructed to answer with a single JSON object, but in
practice the answer may be wrapped in a markdown code fence, encoded twice
(a JSON string whose content is the JSON object), or not be JSON at all.
``parse_analysis`` handles each of these and never raises: the worst case
is a text-only result carrying the response as the summary.
"""

import json
import re
from typing import Any

import structlog
from pydantic import ValidationError

from hive_meetings.summarization.schemas import (
    ExtractedActionItem,
    MeetingAnalysis,
    SurfacedWish,
)

logger = structlog.get_logger()

# Opening fence: any tag followed by a newline, or a json tag running into the content
_LEADING_FENCE = re.compile(r"^```[\w.+-]*[ \t]*\r?\n|^```(?:json|JSON)?[ \t]*")
_TRAILING_FENCE = re.compile(r"\r?\n?```\s*$")

_SUMMARY_KEYS = ("summary",)
_ACTION_ITEM_KEYS = ("action_items", "actions")
_WISH_KEYS = ("wishes_surfaced", "wishes")
_HIGHLIGHT_KEYS = ("queen_bee_highlights", "highlights")


def strip_code_fence(text: str) -> str:
    """Remove one leading and/or trailing markdown code fence."""
    text = _LEADING_FENCE.sub("", text, count=1)
    text = _TRAILING_FENCE.sub("", text, count=1)
    return text.strip()


def parse_analysis(raw: str | None) -> MeetingAnalysis:
    """Parse a raw summarizer response into a MeetingAnalysis.

    Steps:
    1. Trim the response.
    2. Strip an optional code fence.
    3. Parse as JSON.
    4. A JSON string is parsed a second time; if that fails, the decoded
       string becomes the summary.
    5. A JSON object is read field by field.
    6. Anything else falls back to the stripped text as the summary.

    Args:
        raw: Text returned by the provider (None is treated as empty)

    Returns:
        MeetingAnalysis, possibly degraded to text-only
    """
    text = strip_code_fence((raw or "").strip())

    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        logger.info("summary response is not json", length=len(text))
        return MeetingAnalysis.from_text(text)

    if isinstance(parsed, str):
        try:
            inner = json.loads(strip_code_fence(parsed.strip()))
        except (ValueError, RecursionError):
            return MeetingAnalysis.from_text(parsed.strip())
        if not isinstance(inner, dict):
            return MeetingAnalysis.from_text(parsed.strip())
        parsed = inner

    if not isinstance(parsed, dict):
        logger.info("summary response is not an object", kind=type(parsed).__name__)
        return MeetingAnalysis.from_text(text)

    try:
        return _analysis_from_object(parsed)
    except Exception as e:
        # Field-level coercion below is defensive already; this is the last resort
        logger.warning("could not read summary object", error=str(e))
        return MeetingAnalysis.from_text(text)


def _first_present(data: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _coerce_summary(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip() or None
    return json.dumps(value, ensure_ascii=False)


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, list):
        return value
    return []


def _coerce_action_items(value: Any) -> list[ExtractedActionItem]:
    items: list[ExtractedActionItem] = []
    for entry in _as_list(value):
        if isinstance(entry, str):
            entry = {"description": entry}
        if not isinstance(entry, dict):
            continue
        entry = {**entry, "due_date": _coerce_due_date(entry.get("due_date"))}
        try:
            items.append(ExtractedActionItem.model_validate(entry))
        except ValidationError as e:
            logger.info("dropping malformed action item", error_count=e.error_count())
    return items


def _coerce_due_date(value: Any) -> str | None:
    # Models sometimes answer 20250314 as a number
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value
    return None


def _coerce_wishes(value: Any) -> list[SurfacedWish]:
    wishes: list[SurfacedWish] = []
    for entry in _as_list(value):
        if isinstance(entry, str):
            entry = {"description": entry}
        if not isinstance(entry, dict):
            continue
        try:
            wishes.append(SurfacedWish.model_validate(entry))
        except ValidationError as e:
            logger.info("dropping malformed wish", error_count=e.error_count())
    return wishes


def _coerce_highlights(value: Any) -> list[str]:
    return [
        entry.strip()
        for entry in _as_list(value)
        if isinstance(entry, str) and entry.strip()
    ]


def _analysis_from_object(data: dict[str, Any]) -> MeetingAnalysis:
    return MeetingAnalysis(
        source="json",
        summary=_coerce_summary(_first_present(data, _SUMMARY_KEYS)),
        action_items=_coerce_action_items(_first_present(data, _ACTION_ITEM_KEYS)),
        wishes=_coerce_wishes(_first_present(data, _WISH_KEYS)),
        highlights=_coerce_highlights(_first_present(data, _HIGHLIGHT_KEYS)),
    )
