"""Stateless renderer and the optional pygame window."""
