"""Formats provider transcripts as speaker-labeled text."""

from hive_meetings.adapters.assemblyai_adapter import ProviderTranscript
from hive_meetings.attribution.labels import speaker_marker

UTTERANCE_SEPARATOR = "\n\n"


def format_transcript(transcript: ProviderTranscript) -> str:
    """Render a finished transcript for storage and summarization.

    Each utterance becomes ``Speaker <label>: <text>``, separated by a
    blank line. When the provider returned no utterance breakdown the
    flat transcript text is used instead.

    Args:
        transcript: Provider transcript

    Returns:
        Formatted transcript text ("" if the provider returned nothing)
    """
    if transcript.utterances:
        return UTTERANCE_SEPARATOR.join(
            f"{speaker_marker(u.speaker)} {u.text.strip()}"
            for u in transcript.utterances
        )
    return transcript.text or ""
