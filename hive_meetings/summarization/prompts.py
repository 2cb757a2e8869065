"""Prompts for summarizing community meeting transcripts.

The system prompt carries the domain framing and the roster; the
transcript goes in the user turn. The output contract is a single JSON
object whose keys are read by ``parser.parse_analysis``.
"""

SUMMARY_SYSTEM_PROMPT = """You are summarizing a Hive community meeting. The Hive is a small group of people who practice "high-definition wishing" - helping each other articulate specific needs and matching them with skills.

Available members: {members}

Analyze the transcript and provide:
1. A concise summary (2-3 paragraphs)
2. Action items extracted with assigned person if mentioned
3. Any wishes that surfaced during the meeting
4. Queen Bee highlights - specific progress updates, accomplishments, or blockers mentioned about the current Queen Bee's project. Each highlight should be a concise bullet point (1-2 sentences max).

When naming a person, use their name exactly as it appears in the member list above.

Format your response as JSON:
{{
  "summary": "string",
  "action_items": [{{"description": "string", "assigned_to_name": "string or null", "due_date": "YYYY-MM-DD or null"}}],
  "wishes_surfaced": [{{"person_name": "string", "description": "string"}}],
  "queen_bee_highlights": ["string"]
}}

Respond with the JSON object only."""

SUMMARY_USER_PROMPT = """Please analyze this meeting transcript:

{transcript}"""


def build_system_prompt(member_names: list[str]) -> str:
    """Render the system prompt with the group's member names."""
    members = ", ".join(member_names) if member_names else "(none listed)"
    return SUMMARY_SYSTEM_PROMPT.format(members=members)


def build_user_prompt(transcript: str) -> str:
    """Render the user prompt carrying the transcript."""
    return SUMMARY_USER_PROMPT.format(transcript=transcript)
