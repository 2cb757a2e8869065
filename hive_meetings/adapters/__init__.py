"""Adapters for external providers: transcription and object storage."""
