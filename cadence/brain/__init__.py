"""Brain-inspired cognitive modules for Cadence.

This package organizes the learning engine using neuroscience-inspired naming:

## Module Structure

### temporal_lobe/ - Sequential Processing
- Sentence segmentation
- Rhythm analysis (sentence length, pauses, tempo)

### neocortex/ - Pattern Recognition
- Role-based micro-pattern extraction
- Two-token prefix frequency counting
- Lexical similarity between patterns

### hippocampus/ - Memory Formation & Retention
- Pattern store with merge, decay and cleanup policies

### amygdala/ - Emotional Valuation
- User feedback and effectiveness scoring
"""

from .amygdala import FeedbackTracker
from .hippocampus import PatternStore
from .neocortex import MicroPatternExtractor, SimilarityMatcher
from .temporal_lobe import RhythmAnalyzer

__all__ = [
    "FeedbackTracker",
    "MicroPatternExtractor",
    "PatternStore",
    "RhythmAnalyzer",
    "SimilarityMatcher",
]
