"""Hippocampus module - Memory Formation & Retention.

The hippocampus consolidates what is seen repeatedly and lets the rest
fade. In Cadence, this module handles:
- The authoritative store of learned micro-patterns
- Merging repeated observations
- Decay of stale patterns and cleanup of poor ones
"""

from .store import PatternStore

__all__ = ["PatternStore"]
