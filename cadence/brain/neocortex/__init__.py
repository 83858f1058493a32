"""Neocortex module - Pattern Recognition.

In Cadence, this module handles:
- Selecting role-specific fragments (opening, closing, ...)
- Two-token prefix frequency counting
- Lexical similarity between patterns
"""

from .extractors import CandidatePattern, MicroPatternExtractor, find_common_patterns
from .similarity import SimilarityMatcher

__all__ = [
    "CandidatePattern",
    "MicroPatternExtractor",
    "SimilarityMatcher",
    "find_common_patterns",
]
