"""Loading and logging helpers."""
