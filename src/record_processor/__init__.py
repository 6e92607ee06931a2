"""Tingwu transcription pipeline for recordings uploaded by devices."""
