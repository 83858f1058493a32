"""Temporal lobe module - Sequential & Rhythmic Processing.

In Cadence, this module handles:
- Splitting transcripts into sentences
- Sentence length statistics, pacing and tempo
"""

from .rhythm import RhythmAnalyzer
from .segmenter import count_pauses, count_terminators, segment, segment_all

__all__ = [
    "RhythmAnalyzer",
    "segment",
    "segment_all",
    "count_pauses",
    "count_terminators",
]
