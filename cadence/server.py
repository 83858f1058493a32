"""MCP Server for Cadence."""

from __future__ import annotations

import json
import logging
from typing import Any

from filelock import Timeout
from mcp.server.fastmcp import FastMCP

from .container import get_container
from .domain.exceptions import SnapshotValidationError, ValidationError
from .domain.models import MicroPattern

logger = logging.getLogger(__name__)


# =============================================================================
# Helper Functions
# =============================================================================


def _normalize_transcripts(transcripts: list[str] | str) -> list[str]:
    """Normalize transcripts that may arrive as a single string.

    Some MCP clients send lists as a JSON-encoded string:
    '["first transcript", "second transcript"]'. Other strings are split
    into one transcript per non-blank line.

    Args:
        transcripts: A list of transcripts, or a string holding them.

    Returns:
        The transcripts as a list of strings.
    """
    if not isinstance(transcripts, str):
        return list(transcripts)

    stripped = transcripts.strip()
    if stripped.startswith("[") and stripped.endswith("]"):
        try:
            data = json.loads(stripped)
            if isinstance(data, list) and all(isinstance(t, str) for t in data):
                return data
        except json.JSONDecodeError:
            pass

    return [line for line in transcripts.splitlines() if line.strip()]


def _format_pattern(pattern: MicroPattern) -> dict[str, Any]:
    """Format a pattern for API response."""
    return {
        "id": pattern.id,
        "type": pattern.type.value,
        "pattern": pattern.pattern,
        "frequency": round(pattern.frequency, 4),
        "confidence": round(pattern.confidence, 4),
        "effectiveness": round(pattern.effectiveness, 2),
        "contexts": pattern.contexts,
        "examples": pattern.examples,
        "discovered": pattern.metadata.discovered.isoformat(),
        "last_seen": pattern.metadata.last_seen.isoformat(),
    }


def _lock_busy() -> dict[str, Any]:
    """Response for a tool call that could not get the snapshot lock."""
    logger.warning("Snapshot lock busy, request not applied")
    return {
        "success": False,
        "error": "Learning state is locked by another process, try again",
    }


SERVER_INSTRUCTIONS = """\
Cadence learns the conversational micro-patterns of a speaker: how they
open and close conversations, how they seek agreement, which connectives
and intensifiers they lean on.

Typical flow:
1. `cad_learn_conversation` with the speaker's transcripts.
2. `cad_get_effective_patterns` when writing copy in that speaker's voice.
3. `cad_record_feedback` when the user likes or rejects generated text
   that used a pattern.
4. `cad_maintain` occasionally (the maintenance worker also does this).
"""

# =============================================================================
# Server Setup
# =============================================================================

mcp = FastMCP(
    "cadence",
    instructions=SERVER_INSTRUCTIONS,
)


# =============================================================================
# Tools
# =============================================================================


@mcp.tool(name="cad_ping")
def ping() -> dict[str, Any]:
    """Check that the server is up."""
    return {"status": "ok", "message": "Cadence is operational"}


@mcp.tool(name="cad_learn_conversation")
def learn_conversation(
    transcripts: list[str] | str,
    speaker: str = "",
) -> dict[str, Any]:
    """Learn micro-patterns from a speaker's transcripts.

    New patterns are stored; patterns matching known ones strengthen them.

    Args:
        transcripts: The speaker's conversation transcripts.
        speaker: Speaker label.

    Returns:
        Counts and ids of created and merged patterns.
    """
    try:
        with get_container().synchronized() as service:
            result = service.learn_from_new_conversation(
                _normalize_transcripts(transcripts), speaker_label=speaker
            )
    except ValidationError as e:
        return {"success": False, "error": str(e)}
    except Timeout:
        return _lock_busy()

    return {
        "success": True,
        "created": len(result.created_ids),
        "merged": len(result.merged_ids),
        "created_ids": result.created_ids,
        "merged_ids": result.merged_ids,
        "total_patterns": result.total_patterns,
    }


@mcp.tool(name="cad_analyze_patterns")
def analyze_patterns(
    transcripts: list[str] | str,
    speaker: str = "",
) -> dict[str, Any]:
    """Extract micro-patterns without learning them."""
    service = get_container().learning_service
    try:
        patterns = service.analyze_micro_patterns(
            _normalize_transcripts(transcripts), speaker_label=speaker
        )
    except ValidationError as e:
        return {"success": False, "error": str(e)}
    return {"success": True, "patterns": [_format_pattern(p) for p in patterns]}


@mcp.tool(name="cad_analyze_rhythm")
def analyze_rhythm(transcripts: list[str] | str) -> dict[str, Any]:
    """Compute sentence length, pause frequency and tempo."""
    service = get_container().learning_service
    try:
        rhythm = service.analyze_communication_rhythm(
            _normalize_transcripts(transcripts)
        )
    except ValidationError as e:
        return {"success": False, "error": str(e)}
    return {"success": True, "rhythm": rhythm.to_dict()}


@mcp.tool(name="cad_record_feedback")
def record_feedback(pattern_id: str, is_positive: bool) -> dict[str, Any]:
    """Record whether the user liked text built on a pattern.

    Args:
        pattern_id: Pattern ID.
        is_positive: True for positive feedback.

    Returns:
        Updated effectiveness, confidence and feedback counters.
    """
    try:
        with get_container().synchronized() as service:
            result = service.record_user_feedback(pattern_id, is_positive)
    except Timeout:
        return _lock_busy()
    return result.model_dump()


@mcp.tool(name="cad_list_patterns")
def list_patterns() -> dict[str, Any]:
    """List every learned pattern."""
    try:
        with get_container().synchronized(save=False) as service:
            patterns = service.get_all_patterns()
    except Timeout:
        return _lock_busy()
    return {
        "success": True,
        "total": len(patterns),
        "patterns": [_format_pattern(p) for p in patterns],
    }


@mcp.tool(name="cad_get_effective_patterns")
def get_effective_patterns(limit: int = 10) -> dict[str, Any]:
    """Get the patterns ranked highest by effectiveness times confidence."""
    try:
        with get_container().synchronized(save=False) as service:
            patterns = service.get_most_effective_patterns(limit)
    except ValidationError as e:
        return {"success": False, "error": str(e)}
    except Timeout:
        return _lock_busy()
    return {"success": True, "patterns": [_format_pattern(p) for p in patterns]}


@mcp.tool(name="cad_get_recent_patterns")
def get_recent_patterns(days: float = 7) -> dict[str, Any]:
    """Get patterns discovered in the last `days` days, newest first."""
    try:
        with get_container().synchronized(save=False) as service:
            patterns = service.get_recent_patterns(days)
    except ValidationError as e:
        return {"success": False, "error": str(e)}
    except Timeout:
        return _lock_busy()
    return {"success": True, "patterns": [_format_pattern(p) for p in patterns]}


@mcp.tool(name="cad_maintain")
def maintain() -> dict[str, Any]:
    """Decay stale patterns, boost well-received ones and remove poor ones."""
    try:
        with get_container().synchronized() as service:
            result = service.run_maintenance()
    except Timeout:
        return _lock_busy()
    return {"success": True, **result.model_dump()}


@mcp.tool(name="cad_build_profile")
def build_profile(
    name: str,
    transcripts: list[str] | str,
    speaker: str = "",
    save: bool = True,
) -> dict[str, Any]:
    """Build a communication profile for a speaker from transcripts."""
    try:
        with get_container().synchronized(save=save) as service:
            profile = service.build_profile(
                name, _normalize_transcripts(transcripts), speaker_label=speaker
            )
            if save:
                service.save_profile(profile)
    except ValidationError as e:
        return {"success": False, "error": str(e)}
    except Timeout:
        return _lock_busy()
    return {"success": True, "profile": profile.to_dict(), "saved": save}


@mcp.tool(name="cad_list_profiles")
def list_profiles() -> dict[str, Any]:
    """List saved communication profiles."""
    try:
        with get_container().synchronized(save=False) as service:
            profiles = service.get_all_profiles()
    except Timeout:
        return _lock_busy()
    return {"success": True, "profiles": [p.to_dict() for p in profiles]}


@mcp.tool(name="cad_export")
def export_data() -> dict[str, Any]:
    """Export the complete learning state as a snapshot."""
    try:
        with get_container().synchronized(save=False) as service:
            snapshot = service.export_learning_data()
    except Timeout:
        return _lock_busy()
    return {"success": True, "snapshot": snapshot}


@mcp.tool(name="cad_import")
def import_data(snapshot: str) -> dict[str, Any]:
    """Replace the learning state with a snapshot (JSON text).

    Nothing changes if the snapshot is invalid.
    """
    container = get_container()
    try:
        parsed = container.codec.loads(snapshot)
        with container.synchronized() as service:
            service.import_learning_data(parsed)
    except SnapshotValidationError as e:
        return {"success": False, "error": str(e), "details": str(e.errors)}
    except Timeout:
        return _lock_busy()
    return {
        "success": True,
        "patterns": len(parsed.patterns),
        "feedback": len(parsed.feedback),
        "profiles": len(parsed.profiles),
    }
