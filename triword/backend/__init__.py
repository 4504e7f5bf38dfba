"""Backend package for the Triword game server."""

from .config import GameSettings, load_settings
from .lexicon import Lexicon, load_lexicon
from .security import generate_session_id, generate_token
from .session import GameSession
from .state import build_snapshot, topic_for
from .store import InMemorySessionRegistry, SessionRegistry, create_registry

__all__ = [
    "build_snapshot",
    "create_registry",
    "GameSession",
    "GameSettings",
    "generate_session_id",
    "generate_token",
    "InMemorySessionRegistry",
    "Lexicon",
    "load_lexicon",
    "load_settings",
    "SessionRegistry",
    "topic_for",
]
