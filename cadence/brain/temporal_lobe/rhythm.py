"""Rhythm Analysis - Sentence length and pacing statistics."""

from __future__ import annotations

import math

from ...domain.models import CommunicationRhythm, SpeechTempo
from .segmenter import count_pauses, count_terminators, segment_all


class RhythmAnalyzer:
    """Computes communication rhythm from transcripts.

    Metrics:
    - Average sentence length (characters, rounded half up)
    - Pause frequency: pause marks per sentence terminator
    - Tempo: fast below 8 characters, slow above 15
    - Variability: coefficient of variation of sentence lengths
    """

    def __init__(
        self,
        fast_below: float = 8.0,
        slow_above: float = 15.0,
        pattern_length: int = 10,
    ) -> None:
        """Initialize rhythm analyzer.

        Args:
            fast_below: Average length under which tempo is fast
            slow_above: Average length over which tempo is slow
            pattern_length: Number of sentence lengths kept as the rhythm pattern
        """
        self.fast_below = fast_below
        self.slow_above = slow_above
        self.pattern_length = pattern_length

    def analyze(self, transcripts: list[str]) -> CommunicationRhythm:
        """Analyze the rhythm of a set of transcripts.

        Args:
            transcripts: Raw transcript texts.

        Returns:
            CommunicationRhythm. All-zero (medium tempo) when there are no
            sentences.
        """
        lengths = [len(fragment) for fragment in segment_all(transcripts)]
        if not lengths:
            return CommunicationRhythm()

        mean = sum(lengths) / len(lengths)
        return CommunicationRhythm(
            average_sentence_length=int(math.floor(mean + 0.5)),
            pause_frequency=self.estimate_pause_frequency(transcripts),
            speech_tempo=self.classify_tempo(mean),
            rhythm_pattern=lengths[: self.pattern_length],
            variability=self.calculate_variability(lengths),
        )

    def calculate_variability(self, lengths: list[int]) -> float:
        """Population standard deviation divided by the mean.

        Returns:
            0.0 for an empty list or a zero mean.
        """
        if not lengths:
            return 0.0
        mean = sum(lengths) / len(lengths)
        if mean == 0:
            return 0.0
        variance = sum((length - mean) ** 2 for length in lengths) / len(lengths)
        return math.sqrt(variance) / mean

    def estimate_pause_frequency(self, transcripts: list[str]) -> float:
        """Pause marks per sentence terminator across all transcripts."""
        pauses = sum(count_pauses(text) for text in transcripts)
        terminators = sum(count_terminators(text) for text in transcripts)
        return pauses / terminators if terminators > 0 else 0.0

    def classify_tempo(self, average_length: float) -> SpeechTempo:
        if average_length < self.fast_below:
            return SpeechTempo.FAST
        if average_length > self.slow_above:
            return SpeechTempo.SLOW
        return SpeechTempo.MEDIUM
