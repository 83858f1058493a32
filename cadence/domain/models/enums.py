"""Enumeration types for Cadence domain models."""

from enum import Enum


class PatternType(str, Enum):
    """Kind of micro-pattern learned from conversations."""

    LINGUISTIC = "linguistic"  # Word choice at fixed positions (openings, closings)
    TEMPORAL = "temporal"  # Timing and pacing
    EMOTIONAL = "emotional"  # Agreement seeking, intensifiers
    STRUCTURAL = "structural"  # Connectives that move an argument along


class SpeechTempo(str, Enum):
    """Tempo classification derived from average sentence length.

    Short sentences read fast, long sentences read slow.
    """

    SLOW = "slow"
    MEDIUM = "medium"
    FAST = "fast"
