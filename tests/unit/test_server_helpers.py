"""Unit tests for server helper functions."""

from __future__ import annotations

from cadence.server import _format_pattern, _normalize_transcripts


class TestNormalizeTranscripts:
    """Tests for transcript normalization."""

    def test_list_passthrough(self) -> None:
        assert _normalize_transcripts(["a", "b"]) == ["a", "b"]

    def test_json_array_string(self) -> None:
        assert _normalize_transcripts('["hi there", "bye now"]') == ["hi there", "bye now"]

    def test_plain_string_split_by_line(self) -> None:
        assert _normalize_transcripts("first\n\n  \nsecond") == ["first", "second"]

    def test_invalid_json_falls_back_to_lines(self) -> None:
        assert _normalize_transcripts("[not json]") == ["[not json]"]

    def test_empty_string(self) -> None:
        assert _normalize_transcripts("") == []


class TestFormatPattern:
    def test_format(self, make_pattern) -> None:
        formatted = _format_pattern(make_pattern(confidence=0.123456))

        assert formatted["id"] == "p1"
        assert formatted["type"] == "linguistic"
        assert formatted["confidence"] == 0.1235
        assert formatted["discovered"].startswith("2024-06-01T11:00:00")
