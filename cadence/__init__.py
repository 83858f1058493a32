"""Cadence - Conversational pattern learning engine."""

__version__ = "0.1.0"
