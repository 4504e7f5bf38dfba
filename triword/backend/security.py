"""Opaque identifier helpers for sessions and players."""

from __future__ import annotations

import secrets
import uuid


TOKEN_BYTES = 24
SESSION_ID_LENGTH = 8


def generate_token() -> str:
    """Generate a URL-safe token used as a player's identity."""
    return secrets.token_urlsafe(TOKEN_BYTES)


def generate_session_id() -> str:
    """Short, shareable session code."""
    return uuid.uuid4().hex[:SESSION_ID_LENGTH]
