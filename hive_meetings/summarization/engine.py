"""Summarization engine: one provider call, lenient parsing."""

import structlog

from hive_meetings.services.llm_client import LLMClient
from hive_meetings.summarization.parser import parse_analysis
from hive_meetings.summarization.prompts import build_system_prompt, build_user_prompt
from hive_meetings.summarization.schemas import MeetingAnalysis

logger = structlog.get_logger()


class SummarizationEngine:
    """Summarizes a speaker-labeled transcript into a MeetingAnalysis.

    Provider errors propagate to the caller; only the response text is
    handled leniently.
    """

    def __init__(self, llm_client: LLMClient):
        """Initialize engine with an LLM client.

        Args:
            llm_client: Client used for the single completion call
        """
        self._llm_client = llm_client

    async def summarize(
        self,
        transcript: str,
        member_names: list[str],
    ) -> MeetingAnalysis:
        """Summarize a transcript.

        Args:
            transcript: Formatted transcript text
            member_names: Display names of the group roster

        Returns:
            Parsed analysis (degraded to text-only if the reply is not JSON)

        Raises:
            LLMClientError: If the provider call itself fails
        """
        raw = await self._llm_client.complete(
            system=build_system_prompt(member_names),
            prompt=build_user_prompt(transcript),
        )
        analysis = parse_analysis(raw)
        logger.info(
            "transcript summarized",
            source=analysis.source,
            action_items=len(analysis.action_items),
            wishes=len(analysis.wishes),
            highlights=len(analysis.highlights),
        )
        return analysis
