"""Amygdala module - Emotional Valuation.

In Cadence, this module handles:
- Positive/negative user feedback on learned patterns
- Effectiveness scoring from the feedback ratio
"""

from .feedback import FeedbackTracker

__all__ = ["FeedbackTracker"]
