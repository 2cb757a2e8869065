"""Hive meeting recording, transcription and summarization pipeline."""
