"""Meeting summarization: prompt, provider call and output parsing."""

from hive_meetings.summarization.engine import SummarizationEngine
from hive_meetings.summarization.parser import parse_analysis
from hive_meetings.summarization.schemas import (
    ExtractedActionItem,
    MeetingAnalysis,
    SurfacedWish,
)

__all__ = [
    "ExtractedActionItem",
    "MeetingAnalysis",
    "SummarizationEngine",
    "SurfacedWish",
    "parse_analysis",
]
