"""Snapshot reconstruction, playback timing and configuration."""
