"""Replay engine for counterfactual play predictions."""

__version__ = "0.1.0"
