"""Unit tests for segmentation and rhythm analysis."""

from __future__ import annotations

import pytest

from cadence.brain.temporal_lobe import (
    RhythmAnalyzer,
    count_pauses,
    count_terminators,
    segment,
    segment_all,
)
from cadence.domain.models import CommunicationRhythm, SpeechTempo


class TestSegment:
    """Tests for sentence segmentation."""

    def test_chinese_terminators(self) -> None:
        assert segment("你好。我很好！你呢？") == ["你好", "我很好", "你呢"]

    def test_western_terminators(self) -> None:
        assert segment("Hello there. How are you? Fine!") == [
            "Hello there",
            "How are you",
            "Fine",
        ]

    def test_fragments_are_trimmed(self) -> None:
        assert segment("  first one .   second  ") == ["first one", "second"]

    def test_empty_and_whitespace_input(self) -> None:
        assert segment("") == []
        assert segment("   \n\t ") == []

    def test_terminators_only(self) -> None:
        assert segment("。。!?") == []

    def test_commas_do_not_split(self) -> None:
        assert segment("嗯，我觉得这个不错") == ["嗯，我觉得这个不错"]

    def test_segment_all_keeps_order(self) -> None:
        assert segment_all(["a。b", "c！"]) == ["a", "b", "c"]


class TestCounters:
    """Tests for terminator and pause counting."""

    def test_count_terminators(self) -> None:
        assert count_terminators("a。b！c?d.e？f!") == 6

    def test_count_pauses(self) -> None:
        assert count_pauses("嗯，好,对、是") == 3

    def test_no_marks(self) -> None:
        assert count_terminators("plain") == 0
        assert count_pauses("plain") == 0


class TestRhythmAnalyzer:
    """Tests for RhythmAnalyzer."""

    def test_empty_input_gives_zeroed_rhythm(self) -> None:
        rhythm = RhythmAnalyzer().analyze([])
        assert rhythm == CommunicationRhythm()
        assert rhythm.average_sentence_length == 0
        assert rhythm.variability == 0.0
        assert rhythm.pause_frequency == 0.0
        assert rhythm.rhythm_pattern == []

    def test_whitespace_input_gives_zeroed_rhythm(self) -> None:
        rhythm = RhythmAnalyzer().analyze(["   ", ""])
        assert rhythm.average_sentence_length == 0
        assert rhythm.variability == 0.0

    def test_basic_statistics(self) -> None:
        rhythm = RhythmAnalyzer().analyze(["abcd。abcdef。"])
        assert rhythm.average_sentence_length == 5
        assert rhythm.rhythm_pattern == [4, 6]
        # population std 1.0 over mean 5.0
        assert rhythm.variability == pytest.approx(0.2)
        assert rhythm.speech_tempo == SpeechTempo.FAST

    def test_average_rounds_half_up(self) -> None:
        rhythm = RhythmAnalyzer().analyze(["ab。abc。"])
        assert rhythm.average_sentence_length == 3

    def test_slow_tempo(self) -> None:
        rhythm = RhythmAnalyzer().analyze(["a" * 20 + "。"])
        assert rhythm.speech_tempo == SpeechTempo.SLOW

    def test_medium_tempo(self) -> None:
        rhythm = RhythmAnalyzer().analyze(["a" * 10 + "。"])
        assert rhythm.speech_tempo == SpeechTempo.MEDIUM

    def test_tempo_boundaries(self) -> None:
        analyzer = RhythmAnalyzer()
        assert analyzer.classify_tempo(7.9) == SpeechTempo.FAST
        assert analyzer.classify_tempo(8) == SpeechTempo.MEDIUM
        assert analyzer.classify_tempo(15) == SpeechTempo.MEDIUM
        assert analyzer.classify_tempo(15.1) == SpeechTempo.SLOW

    def test_pause_frequency(self) -> None:
        rhythm = RhythmAnalyzer().analyze(["嗯，好的，谢谢。再见。"])
        assert rhythm.pause_frequency == pytest.approx(1.0)

    def test_pause_frequency_without_terminators(self) -> None:
        rhythm = RhythmAnalyzer().analyze(["hello, world"])
        assert rhythm.pause_frequency == 0.0
        assert rhythm.rhythm_pattern == [12]

    def test_rhythm_pattern_keeps_first_ten_in_order(self) -> None:
        text = "".join("a" * n + "。" for n in range(12, 0, -1))
        rhythm = RhythmAnalyzer().analyze([text])
        assert rhythm.rhythm_pattern == list(range(12, 2, -1))

    def test_uniform_lengths_have_no_variability(self) -> None:
        rhythm = RhythmAnalyzer().analyze(["abc。def。ghi。"])
        assert rhythm.variability == 0.0

    def test_variability_guards(self) -> None:
        analyzer = RhythmAnalyzer()
        assert analyzer.calculate_variability([]) == 0.0
        assert analyzer.calculate_variability([0, 0]) == 0.0
