"""Assignee name matching using RapidFuzz.

The summarizer names people as free text ("alice", "Bob J"). A name
matches a roster entry when, after RapidFuzz's default normalization
(lowercase, punctuation folded to spaces), it is contained in or equal to
the member's full name.
"""

from rapidfuzz import fuzz, utils

from hive_meetings.models.member import Member


class FuzzyMatcher:
    """Resolves free-text names to roster members by containment.

    Uses partial_ratio: a score of 100 with the query no longer than the
    candidate means the query appears verbatim inside the candidate.
    """

    def find_candidates(self, query: str, roster: list[Member]) -> list[Member]:
        """Return every roster member whose name contains the query.

        Args:
            query: Name as written by the summarizer
            roster: Group members to search

        Returns:
            Matching members in roster order (empty if none)
        """
        needle = utils.default_process(query or "")
        if not needle:
            return []

        matches: list[Member] = []
        for member in roster:
            haystack = utils.default_process(member.name)
            if len(needle) > len(haystack):
                continue
            if fuzz.partial_ratio(needle, haystack) == 100:
                matches.append(member)
        return matches

    def resolve(self, query: str | None, roster: list[Member]) -> Member | None:
        """Resolve a name to a single member.

        An exact (normalized) name match wins outright. Otherwise the name
        must be contained in exactly one member's name; no match or several
        matches leave it unresolved.

        Args:
            query: Name as written by the summarizer (None allowed)
            roster: Group members to search

        Returns:
            The resolved member, or None
        """
        if not query:
            return None

        candidates = self.find_candidates(query, roster)
        if len(candidates) == 1:
            return candidates[0]

        needle = utils.default_process(query)
        exact = [m for m in candidates if utils.default_process(m.name) == needle]
        if len(exact) == 1:
            return exact[0]
        return None
