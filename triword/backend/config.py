"""Configuration helpers for backend runtime."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class GameSettings:
    host: str = "127.0.0.1"
    port: int = 8000
    grid_rows: int = 4
    grid_cols: int = 4
    target_score: int = 50
    game_seconds: int = 180
    freeze_bonus_seconds: int = 10
    tick_seconds: float = 1.0
    grace_seconds: float = 3600.0
    sweep_seconds: float = 60.0
    vowel_weight: float = 0.35
    common_weight: float = 0.50
    wordlist_path: str | None = None
    log_level: str = "INFO"


def load_settings() -> GameSettings:
    return GameSettings(
        host=os.getenv("TRIWORD_HOST", "127.0.0.1"),
        port=int(os.getenv("TRIWORD_PORT", "8000")),
        grid_rows=int(os.getenv("TRIWORD_GRID_ROWS", "4")),
        grid_cols=int(os.getenv("TRIWORD_GRID_COLS", "4")),
        target_score=int(os.getenv("TRIWORD_TARGET_SCORE", "50")),
        game_seconds=int(os.getenv("TRIWORD_GAME_SECONDS", "180")),
        freeze_bonus_seconds=int(os.getenv("TRIWORD_FREEZE_BONUS_SECONDS", "10")),
        tick_seconds=float(os.getenv("TRIWORD_TICK_SECONDS", "1.0")),
        grace_seconds=float(os.getenv("TRIWORD_GRACE_SECONDS", "3600")),
        sweep_seconds=float(os.getenv("TRIWORD_SWEEP_SECONDS", "60")),
        vowel_weight=float(os.getenv("TRIWORD_VOWEL_WEIGHT", "0.35")),
        common_weight=float(os.getenv("TRIWORD_COMMON_WEIGHT", "0.50")),
        wordlist_path=os.getenv("TRIWORD_WORDLIST_PATH") or None,
        log_level=os.getenv("TRIWORD_LOG_LEVEL", "INFO").upper(),
    )
