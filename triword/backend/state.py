"""State builders for session snapshots."""

from __future__ import annotations

from typing import Any

from triword.backend.session import GameSession


def build_snapshot(session: GameSession) -> dict[str, Any]:
    """Return a JSON-ready copy of the session that shares no mutable state with it."""
    return {
        "id": session.session_id,
        "version": session.version,
        "status": session.status.value,
        "grid": [list(row) for row in session.grid],
        "players": [
            {
                "id": player.id,
                "name": player.name,
                "powerType": player.power_kind.value,
                "powerReady": player.power_ready,
            }
            for player in session.players
        ],
        "selectedCells": [{"row": row, "col": col} for row, col in session.path.cells],
        "currentWord": session.current_word,
        "wordsFound": [
            {"text": entry.text, "points": entry.points, "playerId": entry.player_id}
            for entry in session.words_found
        ],
        "score": session.score,
        "targetScore": session.target_score,
        "timeLeft": session.time_left,
        "message": session.message,
        "endReason": session.end_reason.value if session.end_reason else None,
    }


def topic_for(session_id: str) -> str:
    """Broadcast topic observers of ``session_id`` subscribe to."""
    return f"game-{session_id}"
