"""Domain Services Package.

This package contains the business logic layer for Cadence.

Main components:
- PatternLearningService: Main service class (facade/coordinator)
"""

from .learning import PatternLearningService

__all__ = ["PatternLearningService"]
