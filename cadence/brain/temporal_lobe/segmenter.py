"""Sentence segmentation for conversation transcripts.

Splits on Chinese and Western sentence terminators. No word
segmentation is attempted: unspaced CJK text stays one token per
fragment as far as the pattern finder is concerned.
"""

from __future__ import annotations

import re

SENTENCE_TERMINATORS = "。！？.!?"
PAUSE_MARKS = "，,、"

_TERMINATOR_RE = re.compile(f"[{re.escape(SENTENCE_TERMINATORS)}]")
_PAUSE_RE = re.compile(f"[{re.escape(PAUSE_MARKS)}]")


def segment(text: str) -> list[str]:
    """Split a transcript into trimmed, non-empty fragments.

    Args:
        text: Raw transcript text.

    Returns:
        Fragments in encounter order. Empty for empty or whitespace input.
    """
    if not text:
        return []
    fragments = (part.strip() for part in _TERMINATOR_RE.split(text))
    return [fragment for fragment in fragments if fragment]


def segment_all(texts: list[str]) -> list[str]:
    """Segment several transcripts and pool the fragments in order."""
    return [fragment for text in texts for fragment in segment(text)]


def count_terminators(text: str) -> int:
    """Count sentence terminators in a transcript."""
    return len(_TERMINATOR_RE.findall(text))


def count_pauses(text: str) -> int:
    """Count pause marks (commas and enumeration commas) in a transcript."""
    return len(_PAUSE_RE.findall(text))
