"""Pydantic models for summarization output.

The text-generation provider is asked for a JSON object, but nothing
guarantees it complies. These models are the single typed shape that the
rest of the pipeline sees; they are built by the lenient parser in
``parser.py`` and are also what gets stored on the meeting record.

Field aliases accept both the keys the prompt asks for
(``assigned_to_name``, ``wishes_surfaced``, ``queen_bee_highlights``) and
the plain field names used when the stored payload is read back.
"""

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# Longest action item description the database accepts
ACTION_ITEM_MAX_LENGTH = 2000


class ExtractedActionItem(BaseModel):
    """An action item as described by the summarizer."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    description: str = Field(min_length=1, description="What needs to be done")
    assignee_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("assignee_name", "assigned_to_name", "assignee"),
        description="Free-text name of the person assigned, if mentioned",
    )
    due_date: str | None = Field(
        default=None,
        description="Due date as returned by the model (expected YYYY-MM-DD)",
    )

    @field_validator("description")
    @classmethod
    def clip_description(cls, value: str) -> str:
        if len(value) > ACTION_ITEM_MAX_LENGTH:
            return value[: ACTION_ITEM_MAX_LENGTH - 1].rstrip() + "\u2026"
        return value


class SurfacedWish(BaseModel):
    """An informal request that came up during the meeting."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    person_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("person_name", "person", "name"),
        description="Who voiced the wish",
    )
    description: str = Field(min_length=1, description="What they asked for")


class MeetingAnalysis(BaseModel):
    """Structured result of summarizing one meeting transcript.

    ``source`` records how the result was obtained: ``json`` when the
    provider returned a usable JSON object, ``text`` when the raw response
    was kept as a plain summary.
    """

    model_config = ConfigDict(populate_by_name=True)

    source: Literal["json", "text"] = Field(default="json")
    summary: str | None = Field(default=None, description="Prose summary")
    action_items: list[ExtractedActionItem] = Field(default_factory=list)
    wishes: list[SurfacedWish] = Field(
        default_factory=list,
        validation_alias=AliasChoices("wishes", "wishes_surfaced"),
    )
    highlights: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("highlights", "queen_bee_highlights"),
    )

    @classmethod
    def from_text(cls, text: str) -> "MeetingAnalysis":
        """Build a degraded result that keeps the raw text as the summary."""
        return cls(source="text", summary=text or None)

    @property
    def is_degraded(self) -> bool:
        """True when the provider output could not be read as JSON."""
        return self.source == "text"
