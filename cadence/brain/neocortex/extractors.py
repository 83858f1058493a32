"""Micro-Pattern Extraction - Recurring phrases per conversational role.

Each role (opening, confirmation, closing, transition, emphasis) isolates
a sub-corpus of sentence fragments, then the frequency finder counts
two-token prefixes across that sub-corpus. Prefixes seen at least twice
become candidate patterns.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field

from ...domain.models import MicroPattern, PatternMetadata, PatternType
from ...domain.models.base import utc_now
from ..temporal_lobe.segmenter import segment

logger = logging.getLogger(__name__)

CONFIRMATION_KEYWORDS = ("对吧", "是吧", "对不对", "是这样吗", "你觉得呢", "怎么样")
TRANSITION_KEYWORDS = ("但是", "不过", "然而", "另外", "还有", "而且", "所以", "因此")
EMPHASIS_KEYWORDS = ("真的", "确实", "非常", "特别", "尤其", "绝对")


@dataclass
class CandidatePattern:
    """A two-token prefix that cleared the minimum-support threshold."""

    text: str
    count: int
    frequency: float
    confidence: float
    examples: list[str] = field(default_factory=list)
    variations: list[str] = field(default_factory=list)

    @property
    def effectiveness(self) -> float:
        """Extraction-time usefulness estimate (0-100)."""
        return min((self.frequency * 0.7 + self.confidence * 0.3) * 100, 100.0)


def find_common_patterns(
    texts: list[str],
    min_occurrences: int = 2,
    max_candidates: int = 5,
    max_examples: int = 3,
    preview_length: int = 20,
) -> list[CandidatePattern]:
    """Count two-token prefixes across the fragments of one role.

    Args:
        texts: Fragments belonging to one role.
        min_occurrences: Minimum count for a prefix to survive.
        max_candidates: Number of candidates kept after ranking.
        max_examples: Examples kept per prefix.
        preview_length: Characters kept in each variation preview.

    Returns:
        Candidates sorted by frequency, highest first.
    """
    counts: dict[str, int] = {}
    examples: dict[str, list[str]] = {}

    for text in texts:
        tokens = text.split()
        if len(tokens) < 2:
            continue
        key = " ".join(tokens[:2])
        counts[key] = counts.get(key, 0) + 1
        bucket = examples.setdefault(key, [])
        if len(bucket) < max_examples:
            bucket.append(text)

    total = len(texts)
    candidates = [
        CandidatePattern(
            text=key,
            count=count,
            frequency=count / total,
            confidence=min(count / 5, 1.0),  # 5 occurrences = full confidence
            examples=examples[key],
            variations=[ex[:preview_length] + "..." for ex in examples[key]],
        )
        for key, count in counts.items()
        if count >= min_occurrences
    ]
    candidates.sort(key=lambda c: c.frequency, reverse=True)
    return candidates[:max_candidates]


# =============================================================================
# Role selectors
# =============================================================================


def select_openings(transcripts: list[str]) -> list[str]:
    """First fragment of each transcript."""
    openings = []
    for transcript in transcripts:
        fragments = segment(transcript)
        if fragments:
            openings.append(fragments[0])
    return openings


def select_closings(transcripts: list[str]) -> list[str]:
    """Last non-empty fragment of each transcript."""
    closings = []
    for transcript in transcripts:
        fragments = segment(transcript)
        if fragments:
            closings.append(fragments[-1])
    return closings


def keyword_selector(keywords: tuple[str, ...]) -> Callable[[list[str]], list[str]]:
    """Build a selector keeping fragments that contain any keyword."""

    def select(transcripts: list[str]) -> list[str]:
        return [
            fragment
            for transcript in transcripts
            for fragment in segment(transcript)
            if any(keyword in fragment for keyword in keywords)
        ]

    return select


@dataclass(frozen=True)
class Role:
    """A structural position in a conversation that patterns are mined from."""

    name: str
    pattern_type: PatternType
    contexts: tuple[str, ...]
    select: Callable[[list[str]], list[str]]


OPENING = Role(
    name="opening",
    pattern_type=PatternType.LINGUISTIC,
    contexts=("conversation_start",),
    select=select_openings,
)
CONFIRMATION = Role(
    name="confirmation",
    pattern_type=PatternType.EMOTIONAL,
    contexts=("seeking_agreement", "validation"),
    select=keyword_selector(CONFIRMATION_KEYWORDS),
)
CLOSING = Role(
    name="closing",
    pattern_type=PatternType.LINGUISTIC,
    contexts=("conversation_end",),
    select=select_closings,
)
TRANSITION = Role(
    name="transition",
    pattern_type=PatternType.STRUCTURAL,
    contexts=("topic_change", "argument_flow"),
    select=keyword_selector(TRANSITION_KEYWORDS),
)
EMPHASIS = Role(
    name="emphasis",
    pattern_type=PatternType.EMOTIONAL,
    contexts=("persuasion", "conviction"),
    select=keyword_selector(EMPHASIS_KEYWORDS),
)

DEFAULT_ROLES = (OPENING, CONFIRMATION, CLOSING, TRANSITION, EMPHASIS)


class MicroPatternExtractor:
    """Extracts micro-patterns for every conversational role.

    Extraction is pure: it builds new MicroPattern objects and never
    touches a store.
    """

    def __init__(
        self,
        roles: tuple[Role, ...] = DEFAULT_ROLES,
        min_occurrences: int = 2,
        max_candidates: int = 5,
    ) -> None:
        """Initialize the extractor.

        Args:
            roles: Roles to mine, in output order
            min_occurrences: Minimum prefix count within a role
            max_candidates: Patterns kept per role
        """
        self.roles = roles
        self.min_occurrences = min_occurrences
        self.max_candidates = max_candidates

    def extract(self, transcripts: list[str]) -> list[MicroPattern]:
        """Extract patterns for all roles."""
        patterns: list[MicroPattern] = []
        for role in self.roles:
            patterns.extend(self.extract_role(role, transcripts))
        return patterns

    def extract_role(self, role: Role, transcripts: list[str]) -> list[MicroPattern]:
        """Extract patterns for a single role."""
        fragments = role.select(transcripts)
        candidates = find_common_patterns(
            fragments,
            min_occurrences=self.min_occurrences,
            max_candidates=self.max_candidates,
        )
        if candidates:
            logger.debug(
                f"Role '{role.name}': {len(candidates)} candidates "
                f"from {len(fragments)} fragments"
            )
        return [self._to_pattern(role, candidate) for candidate in candidates]

    def extract_opening_patterns(self, transcripts: list[str]) -> list[MicroPattern]:
        return self.extract_role(OPENING, transcripts)

    def extract_confirmation_patterns(
        self, transcripts: list[str]
    ) -> list[MicroPattern]:
        return self.extract_role(CONFIRMATION, transcripts)

    def extract_closing_patterns(self, transcripts: list[str]) -> list[MicroPattern]:
        return self.extract_role(CLOSING, transcripts)

    def extract_transition_patterns(
        self, transcripts: list[str]
    ) -> list[MicroPattern]:
        return self.extract_role(TRANSITION, transcripts)

    def extract_emphasis_patterns(self, transcripts: list[str]) -> list[MicroPattern]:
        return self.extract_role(EMPHASIS, transcripts)

    def _to_pattern(self, role: Role, candidate: CandidatePattern) -> MicroPattern:
        now = utc_now()
        return MicroPattern(
            id=f"{role.name}_{uuid.uuid4().hex}",
            type=role.pattern_type,
            pattern=candidate.text,
            frequency=candidate.frequency,
            confidence=candidate.confidence,
            effectiveness=candidate.effectiveness,
            contexts=list(role.contexts),
            examples=list(candidate.examples),
            metadata=PatternMetadata(
                discovered=now,
                last_seen=now,
                variations=list(candidate.variations),
            ),
        )
