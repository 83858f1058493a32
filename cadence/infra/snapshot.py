"""Snapshot codec - serialize and validate the complete learning state."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..domain.exceptions import SnapshotValidationError
from ..domain.models import CommunicationProfile, FeedbackRecord, MicroPattern, Snapshot
from ..domain.models.base import utc_now


class SnapshotCodec:
    """Converts learning state to and from the snapshot JSON shape.

    Decoding validates the whole payload before returning, so callers
    can swap state in only after a fully successful parse.
    """

    def encode(
        self,
        patterns: list[MicroPattern],
        feedback: dict[str, FeedbackRecord],
        profiles: list[CommunicationProfile] | None = None,
        export_date: datetime | None = None,
    ) -> dict[str, Any]:
        """Build a JSON-compatible snapshot dictionary."""
        snapshot = Snapshot(
            patterns=[(pattern.id, pattern) for pattern in patterns],
            profiles=[(profile.id, profile) for profile in profiles or []],
            feedback=list(feedback.items()),
            export_date=export_date or utc_now(),
        )
        return snapshot.to_dict()

    def decode(self, data: Any) -> Snapshot:
        """Validate a snapshot dictionary.

        Raises:
            SnapshotValidationError: If the data does not match the schema.
        """
        if isinstance(data, Snapshot):
            return data
        if not isinstance(data, dict):
            raise SnapshotValidationError(
                f"Snapshot must be an object, got {type(data).__name__}"
            )
        try:
            return Snapshot.model_validate(data)
        except PydanticValidationError as e:
            raise SnapshotValidationError(
                f"Invalid snapshot: {e.error_count()} validation errors",
                errors=e.errors(include_url=False),
            ) from e

    def dumps(self, data: dict[str, Any], indent: int | None = None) -> str:
        """Serialize an encoded snapshot to JSON text."""
        return json.dumps(data, ensure_ascii=False, indent=indent)

    def loads(self, text: str) -> Snapshot:
        """Parse and validate snapshot JSON text.

        Raises:
            SnapshotValidationError: If the text is not valid JSON or does
                not match the schema.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise SnapshotValidationError(f"Snapshot is not valid JSON: {e}") from e
        return self.decode(data)
