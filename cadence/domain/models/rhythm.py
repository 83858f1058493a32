"""Communication rhythm model."""

from __future__ import annotations

from pydantic import Field

from .base import CamelModel
from .enums import SpeechTempo


class CommunicationRhythm(CamelModel):
    """Sentence-length statistics for a set of transcripts.

    Derived on every analysis call; not stored as an entity of its own.
    """

    average_sentence_length: int = Field(default=0, ge=0)
    pause_frequency: float = Field(
        default=0.0, ge=0.0, description="Pause marks per sentence terminator"
    )
    speech_tempo: SpeechTempo = SpeechTempo.MEDIUM
    rhythm_pattern: list[int] = Field(
        default_factory=list, description="Lengths of the first 10 sentences"
    )
    variability: float = Field(
        default=0.0, ge=0.0, description="Coefficient of variation of lengths"
    )
