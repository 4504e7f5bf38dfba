"""Game session state machine.

A ``GameSession`` is the only writer of one game's state. Every operation
validates first and mutates second, so a rejected call leaves the session
exactly as it found it. Callers are expected to serialize access; see
``triword.backend.store``.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field

from triword.backend.board import generate_grid
from triword.backend.config import GameSettings
from triword.backend.errors import (
    AlreadyStarted,
    Full,
    InvalidInput,
    NotInProgress,
    UnknownPlayer,
    WordAlreadyFound,
    WordNotRecognized,
    WordTooShort,
)
from triword.backend.lexicon import MIN_WORD_LENGTH, Lexicon
from triword.backend.models import (
    MAX_PLAYERS,
    POWER_ORDER,
    EndReason,
    Grid,
    Player,
    PowerEffect,
    PowerOutcome,
    SessionStatus,
    SubmitOutcome,
    WordEntry,
)
from triword.backend.path import SelectedPath
from triword.backend.powers import apply_effect, check_gate

logger = logging.getLogger(__name__)


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidInput("Player name is required")
    return cleaned


@dataclass
class GameSession:
    session_id: str
    grid: Grid
    lexicon: Lexicon
    target_score: int = 50
    time_left: int = 180
    freeze_bonus_seconds: int = 10
    players: list[Player] = field(default_factory=list)
    path: SelectedPath = field(default_factory=SelectedPath)
    words_found: list[WordEntry] = field(default_factory=list)
    score: int = 0
    status: SessionStatus = SessionStatus.WAITING
    message: str = ""
    version: int = 1
    created_at: float = field(default_factory=time.monotonic)
    ended_at: float | None = None
    end_reason: EndReason | None = None

    @classmethod
    def create(
        cls,
        session_id: str,
        host_id: str,
        host_name: str,
        settings: GameSettings,
        lexicon: Lexicon,
        rng: random.Random | None = None,
        now: float | None = None,
    ) -> "GameSession":
        name = _clean_name(host_name)
        grid = generate_grid(
            rows=settings.grid_rows,
            cols=settings.grid_cols,
            vowel_weight=settings.vowel_weight,
            common_weight=settings.common_weight,
            rng=rng,
        )
        session = cls(
            session_id=session_id,
            grid=grid,
            lexicon=lexicon,
            target_score=settings.target_score,
            time_left=settings.game_seconds,
            freeze_bonus_seconds=settings.freeze_bonus_seconds,
            created_at=time.monotonic() if now is None else now,
        )
        session.players.append(Player(id=host_id, name=name, power_kind=POWER_ORDER[0]))
        logger.info("Session %s created by %s", session_id, name)
        return session

    @property
    def current_word(self) -> str:
        return self.path.current_word(self.grid)

    def player(self, player_id: str) -> Player:
        for candidate in self.players:
            if candidate.id == player_id:
                return candidate
        raise UnknownPlayer()

    def _require_playing(self, player_id: str) -> Player:
        if self.status is not SessionStatus.PLAYING:
            raise NotInProgress()
        return self.player(player_id)

    def join(self, player_id: str, name: str) -> Player:
        cleaned = _clean_name(name)
        if len(self.players) >= MAX_PLAYERS:
            raise Full()
        if self.status is not SessionStatus.WAITING:
            raise AlreadyStarted()
        joined = Player(id=player_id, name=cleaned, power_kind=POWER_ORDER[len(self.players)])
        self.players.append(joined)
        self.message = f"{cleaned} joined"
        logger.info("Player %s joined session %s as %s", cleaned, self.session_id, joined.power_kind.value)
        if len(self.players) == MAX_PLAYERS:
            self.status = SessionStatus.PLAYING
            self.message = "Game started!"
            logger.info("Session %s started", self.session_id)
        return joined

    def select_cell(self, player_id: str, row: int, col: int) -> None:
        self._require_playing(player_id)
        self.path.select(self.grid, row, col)

    def clear_selection(self, player_id: str) -> None:
        self._require_playing(player_id)
        self.path.reset()

    def apply_power(self, player_id: str, effect: PowerEffect) -> PowerOutcome:
        player = self._require_playing(player_id)
        check_gate(player, effect)
        result = apply_effect(self.grid, effect, self.freeze_bonus_seconds)
        self.time_left += result.time_bonus
        player.power_ready = False
        self.message = result.description
        return PowerOutcome(description=result.description)

    def submit_word(self, player_id: str, now: float | None = None) -> SubmitOutcome:
        self._require_playing(player_id)
        word = self.current_word
        if len(word) < MIN_WORD_LENGTH:
            raise WordTooShort()
        if not self.lexicon.is_valid(word):
            raise WordNotRecognized(f"{word} is not a valid word")
        key = word.upper()
        if any(entry.text.upper() == key for entry in self.words_found):
            raise WordAlreadyFound(f"{word} was already found")

        points = self.lexicon.score(word)
        self.words_found.append(WordEntry(text=word, points=points, player_id=player_id))
        self.score += points
        self.path.reset()
        self.message = f"{word} (+{points} points)"
        if self.score >= self.target_score:
            self.end(EndReason.TARGET, now=now)
        return SubmitOutcome(word=word, points=points)

    def tick(self, now: float | None = None) -> None:
        if self.status is not SessionStatus.PLAYING:
            return
        self.time_left = max(0, self.time_left - 1)
        logger.debug("Session %s tick, %s seconds left", self.session_id, self.time_left)
        if self.time_left == 0:
            self.end(EndReason.TIMEOUT, now=now)

    def end(self, reason: EndReason, now: float | None = None) -> bool:
        """Move to ``ended``. Returns False when the session had already ended."""
        if self.status is SessionStatus.ENDED:
            return False
        self.status = SessionStatus.ENDED
        self.end_reason = reason
        self.ended_at = time.monotonic() if now is None else now
        self.message = "Target reached!" if reason is EndReason.TARGET else "Time's up!"
        logger.info("Session %s ended (%s) with score %s", self.session_id, reason.value, self.score)
        return True
