"""Human-in-the-loop speaker attribution for diarized transcripts."""
