"""Lexical similarity for recognizing the same pattern across rounds."""

from __future__ import annotations

from ...domain.models import MicroPattern


def word_set(text: str) -> set[str]:
    """Split on single spaces, matching how pattern keys are joined."""
    return set(text.split(" "))


class SimilarityMatcher:
    """Jaccard word-set overlap between pattern texts.

    A coarse heuristic: two patterns are the same when they share a type
    and their word sets overlap by at least the merge threshold.
    """

    def __init__(self, threshold: float = 0.8) -> None:
        self.threshold = threshold

    def similarity(self, a: str, b: str) -> float:
        """Compute |A ∩ B| / |A ∪ B| over the word sets of two texts."""
        words_a = word_set(a)
        words_b = word_set(b)
        return len(words_a & words_b) / len(words_a | words_b)

    def is_match(self, existing: MicroPattern, candidate: MicroPattern) -> bool:
        return (
            existing.type == candidate.type
            and self.similarity(existing.pattern, candidate.pattern) >= self.threshold
        )

    def find_match(
        self, candidate: MicroPattern, patterns: list[MicroPattern]
    ) -> MicroPattern | None:
        """Return the first pattern that matches the candidate, if any."""
        for pattern in patterns:
            if self.is_match(pattern, candidate):
                return pattern
        return None
