"""Speaker label helpers for diarized transcripts.

The transcriber labels speakers with single uppercase letters and the
pipeline writes each utterance as ``Speaker <label>: <text>``. These pure
functions find those labels and rewrite them to member names.
"""

import re

SPEAKER_LABEL_PATTERN = re.compile(r"Speaker ([A-Z]):")


def speaker_marker(label: str) -> str:
    """Return the transcript marker for a speaker label."""
    return f"Speaker {label}:"


def extract_speaker_labels(transcript: str | None) -> list[str]:
    """Return the distinct speaker labels in a transcript, sorted."""
    if not transcript:
        return []
    return sorted(set(SPEAKER_LABEL_PATTERN.findall(transcript)))


def apply_attribution(transcript: str, names_by_label: dict[str, str]) -> str:
    """Replace ``Speaker <label>:`` markers with ``<name>:``.

    Substitution is literal and case-sensitive across the whole text.
    Labels missing from the mapping keep their anonymous marker.
    """
    attributed = transcript
    for label, name in names_by_label.items():
        attributed = attributed.replace(speaker_marker(label), f"{name}:")
    return attributed


def is_resolved(raw: str | None, attributed: str | None) -> bool:
    """Whether an attributed transcript has every speaker named.

    True only when the attributed text differs from the raw transcript and
    contains no remaining anonymous marker.
    """
    if not raw or not attributed:
        return False
    if attributed == raw:
        return False
    return SPEAKER_LABEL_PATTERN.search(attributed) is None
