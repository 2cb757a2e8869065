"""Member model for the read-only group roster."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class Member(BaseModel):
    """A group member as seen by the meeting pipeline.

    Members are owned by the community subsystem; this core only reads
    their identity and display name.
    """

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: UUID = Field(description="Member profile identifier")
    name: str = Field(min_length=1, description="Full display name")
