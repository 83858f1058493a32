"""Unit tests for pattern extraction and similarity."""

from __future__ import annotations

import pytest

from cadence.brain.neocortex import (
    MicroPatternExtractor,
    SimilarityMatcher,
    find_common_patterns,
)
from cadence.domain.models import PatternType


class TestFindCommonPatterns:
    """Tests for the two-token prefix frequency finder."""

    def test_minimum_support(self) -> None:
        texts = ["hello world foo", "hello world bar", "other thing"]
        candidates = find_common_patterns(texts)

        assert len(candidates) == 1
        candidate = candidates[0]
        assert candidate.text == "hello world"
        assert candidate.count == 2
        assert candidate.frequency == pytest.approx(2 / 3)
        assert candidate.confidence == pytest.approx(0.4)
        assert candidate.examples == ["hello world foo", "hello world bar"]

    def test_single_occurrences_are_discarded(self) -> None:
        assert find_common_patterns(["a b", "c d"]) == []

    def test_single_token_fragments_count_toward_total(self) -> None:
        candidates = find_common_patterns(["a b", "a b", "single"])
        assert candidates[0].frequency == pytest.approx(2 / 3)

    def test_examples_are_capped_at_three(self) -> None:
        texts = [f"go now {i}" for i in range(4)]
        candidate = find_common_patterns(texts)[0]
        assert len(candidate.examples) == 3
        assert candidate.confidence == pytest.approx(0.8)

    def test_confidence_saturates_at_five(self) -> None:
        candidate = find_common_patterns(["go now"] * 6)[0]
        assert candidate.confidence == 1.0
        assert candidate.frequency == 1.0

    def test_variations_are_previews(self) -> None:
        long_text = "hello world " + "x" * 30
        candidate = find_common_patterns([long_text, long_text])[0]
        assert candidate.variations == [long_text[:20] + "..."] * 2

    def test_sorted_by_frequency_and_limited_to_five(self) -> None:
        texts = []
        for i in range(6):
            texts.extend([f"key{i} token"] * (i + 2))
        candidates = find_common_patterns(texts)

        assert len(candidates) == 5
        assert [c.text for c in candidates] == [
            f"key{i} token" for i in range(5, 0, -1)
        ]

    def test_effectiveness_heuristic(self) -> None:
        candidate = find_common_patterns(["a b", "a b"])[0]
        # frequency 1.0, confidence 0.4
        assert candidate.effectiveness == pytest.approx(82.0)

    def test_empty_input(self) -> None:
        assert find_common_patterns([]) == []


class TestMicroPatternExtractor:
    """Tests for role-based extraction."""

    def test_opening_with_spaced_tokens(self) -> None:
        transcripts = ["嗯，我觉得 这个 产品真的很不错", "嗯，我觉得 这个 有点贵"]
        patterns = MicroPatternExtractor().extract_opening_patterns(transcripts)

        assert len(patterns) == 1
        pattern = patterns[0]
        assert pattern.pattern == "嗯，我觉得 这个"
        assert pattern.frequency == 1.0
        assert pattern.confidence == pytest.approx(0.4)
        assert pattern.type == PatternType.LINGUISTIC
        assert pattern.contexts == ["conversation_start"]
        assert pattern.id.startswith("opening_")
        assert pattern.examples == transcripts

    def test_unsegmented_cjk_yields_no_patterns(self) -> None:
        """Without spaces each fragment is a single token and is skipped."""
        transcripts = ["嗯，我觉得这个产品真的很不错", "嗯，我觉得这个有点贵"]
        assert MicroPatternExtractor().extract(transcripts) == []

    def test_confirmation(self) -> None:
        transcripts = ["this is good 对吧。something else", "this is fine 对吧？ ok"]
        patterns = MicroPatternExtractor().extract_confirmation_patterns(transcripts)

        assert [p.pattern for p in patterns] == ["this is"]
        assert patterns[0].type == PatternType.EMOTIONAL
        assert patterns[0].contexts == ["seeking_agreement", "validation"]
        assert patterns[0].frequency == 1.0

    def test_closing_uses_last_fragment(self) -> None:
        transcripts = ["Hi there. Thanks so much", "Hello. Thanks so much!"]
        patterns = MicroPatternExtractor().extract_closing_patterns(transcripts)

        assert [p.pattern for p in patterns] == ["Thanks so"]
        assert patterns[0].contexts == ["conversation_end"]

    def test_transition(self) -> None:
        transcripts = ["我 觉得 很好，但是 价格 贵。", "我 觉得 不错，但是 太远。"]
        patterns = MicroPatternExtractor().extract_transition_patterns(transcripts)

        assert [p.pattern for p in patterns] == ["我 觉得"]
        assert patterns[0].type == PatternType.STRUCTURAL
        assert patterns[0].contexts == ["topic_change", "argument_flow"]

    def test_emphasis(self) -> None:
        transcripts = ["这个 真的 好用。", "这个 真的 便宜。", "这个 一般。"]
        patterns = MicroPatternExtractor().extract_emphasis_patterns(transcripts)

        assert [p.pattern for p in patterns] == ["这个 真的"]
        assert patterns[0].type == PatternType.EMOTIONAL
        assert patterns[0].contexts == ["persuasion", "conviction"]
        assert patterns[0].frequency == 1.0

    def test_keyword_roles_ignore_other_fragments(self) -> None:
        transcripts = ["no keyword here。no keyword there"]
        extractor = MicroPatternExtractor()
        assert extractor.extract_transition_patterns(transcripts) == []
        assert extractor.extract_emphasis_patterns(transcripts) == []

    def test_extract_all_roles(self) -> None:
        transcripts = ["hi there. 这个 真的 好。bye now", "hi there. 这个 真的 棒。bye now"]
        patterns = MicroPatternExtractor().extract(transcripts)

        assert [p.id.split("_")[0] for p in patterns] == [
            "opening",
            "closing",
            "emphasis",
        ]
        assert len({p.id for p in patterns}) == len(patterns)
        for pattern in patterns:
            assert pattern.metadata.discovered == pattern.metadata.last_seen

    def test_effectiveness_assigned_from_heuristic(self) -> None:
        patterns = MicroPatternExtractor().extract_opening_patterns(["a b", "a b"])
        assert patterns[0].effectiveness == pytest.approx(82.0)

    def test_empty_input(self) -> None:
        extractor = MicroPatternExtractor()
        assert extractor.extract([]) == []
        assert extractor.extract(["   ", ""]) == []


class TestSimilarityMatcher:
    """Tests for SimilarityMatcher."""

    def test_identical(self) -> None:
        assert SimilarityMatcher().similarity("a b", "a b") == 1.0

    def test_order_does_not_matter(self) -> None:
        assert SimilarityMatcher().similarity("a b", "b a") == 1.0

    def test_partial_overlap(self) -> None:
        assert SimilarityMatcher().similarity("a b", "a c") == pytest.approx(1 / 3)

    def test_disjoint(self) -> None:
        assert SimilarityMatcher().similarity("a b", "c d") == 0.0

    def test_threshold_is_inclusive(self, make_pattern) -> None:
        matcher = SimilarityMatcher(threshold=0.8)
        existing = make_pattern(text="a b c d e")
        candidate = make_pattern(pattern_id="p2", text="a b c d")
        assert matcher.is_match(existing, candidate)

    def test_type_must_match(self, make_pattern) -> None:
        matcher = SimilarityMatcher()
        existing = make_pattern(pattern_type=PatternType.LINGUISTIC)
        candidate = make_pattern(pattern_id="p2", pattern_type=PatternType.EMOTIONAL)
        assert not matcher.is_match(existing, candidate)

    def test_find_match(self, make_pattern) -> None:
        matcher = SimilarityMatcher()
        first = make_pattern(pattern_id="p1", text="x y")
        second = make_pattern(pattern_id="p2", text="hello world")
        candidate = make_pattern(pattern_id="new", text="hello world")

        assert matcher.find_match(candidate, [first, second]) is second
        assert matcher.find_match(candidate, [first]) is None
