"""In-memory session registry and the per-session concurrency boundary."""

from __future__ import annotations

import asyncio
import logging
import random
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Protocol, TypeVar

from triword.backend.config import GameSettings
from triword.backend.errors import GameError, NotFound, NotInProgress
from triword.backend.lexicon import Lexicon, load_lexicon
from triword.backend.models import (
    CreatedSession,
    JoinedSession,
    PowerEffect,
    PowerOutcome,
    SessionStatus,
    SubmitOutcome,
)
from triword.backend.security import generate_session_id, generate_token
from triword.backend.session import GameSession
from triword.backend.state import build_snapshot, topic_for

logger = logging.getLogger(__name__)

T = TypeVar("T")
Publisher = Callable[[str, dict[str, Any]], Awaitable[None]]


class SessionRegistry(Protocol):
    publisher: Publisher | None

    def __contains__(self, session_id: object) -> bool:
        """Whether ``session_id`` is currently registered."""

    def get(self, session_id: str) -> dict[str, Any]:
        """Return the latest snapshot or raise NotFound."""

    async def create(self, host_name: str) -> CreatedSession:
        """Register a new waiting session and publish its first snapshot."""

    async def mutate(self, session_id: str, fn: Callable[[GameSession], T]) -> T:
        """Apply ``fn`` under the session lock and publish the new snapshot."""

    async def tick(self, session_id: str) -> dict[str, Any]:
        """Advance the countdown by one second."""

    def sweep(self) -> list[str]:
        """Evict ended sessions past the grace period."""

    def start(self) -> None:
        """Start background sweeping."""

    async def close(self) -> None:
        """Cancel every background task."""

    async def create_session(self, host_name: str) -> CreatedSession:
        """Create a session with its host and return the first snapshot."""

    async def join_session(self, session_id: str, player_name: str) -> JoinedSession:
        """Add a player; the third join starts the game."""

    async def select_cell(self, session_id: str, player_id: str, row: int, col: int) -> None:
        """Extend or shorten the shared path."""

    async def clear_selection(self, session_id: str, player_id: str) -> None:
        """Abandon the current path."""

    async def apply_power(self, session_id: str, player_id: str, effect: PowerEffect) -> PowerOutcome:
        """Spend the player's power on ``effect``."""

    async def submit_word(self, session_id: str, player_id: str) -> SubmitOutcome:
        """Score the word spelled by the current path."""


@dataclass
class _SessionSlot:
    session: GameSession
    snapshot: dict[str, Any]
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    outbox: asyncio.Queue = field(default_factory=asyncio.Queue)
    courier: asyncio.Task | None = None
    countdown: asyncio.Task | None = None

    def cancel_tasks(self) -> None:
        for task in (self.courier, self.countdown):
            if task is not None and not task.done():
                task.cancel()
        self.courier = None
        self.countdown = None


@dataclass
class InMemorySessionRegistry:
    settings: GameSettings = field(default_factory=GameSettings)
    lexicon: Lexicon = field(default_factory=Lexicon)
    publisher: Publisher | None = None
    clock: Callable[[], float] = time.monotonic
    rng: random.Random | None = None

    def __post_init__(self) -> None:
        self._slots: dict[str, _SessionSlot] = {}
        self._sweeper: asyncio.Task | None = None

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._slots

    def __len__(self) -> int:
        return len(self._slots)

    def _slot(self, session_id: str) -> _SessionSlot:
        slot = self._slots.get(session_id)
        if slot is None:
            raise NotFound()
        return slot

    def get(self, session_id: str) -> dict[str, Any]:
        return self._slot(session_id).snapshot

    async def create(self, host_name: str) -> CreatedSession:
        session_id = generate_session_id()
        while session_id in self._slots:
            session_id = generate_session_id()
        host_id = generate_token()
        session = GameSession.create(
            session_id=session_id,
            host_id=host_id,
            host_name=host_name,
            settings=self.settings,
            lexicon=self.lexicon,
            rng=self.rng,
            now=self.clock(),
        )
        slot = _SessionSlot(session=session, snapshot=build_snapshot(session))
        slot.courier = asyncio.create_task(self._deliver(topic_for(session_id), slot))
        self._slots[session_id] = slot
        self._publish(slot)
        return CreatedSession(session_id=session_id, player_id=host_id, session=slot.snapshot)

    async def mutate(self, session_id: str, fn: Callable[[GameSession], T]) -> T:
        """Run ``fn`` against the session while holding its lock.

        ``fn`` either succeeds, in which case a new snapshot is published, or
        raises, in which case the session is left as it was and the error
        propagates to the caller.
        """
        result, _ = await self._mutate(session_id, fn)
        return result

    async def _mutate(self, session_id: str, fn: Callable[[GameSession], T]) -> tuple[T, dict[str, Any]]:
        slot = self._slot(session_id)
        async with slot.lock:
            if self._slots.get(session_id) is not slot:
                raise NotFound()
            result = fn(slot.session)
            slot.session.version += 1
            slot.snapshot = build_snapshot(slot.session)
            self._publish(slot)
            self._sync_countdown(slot)
            return result, slot.snapshot

    def _publish(self, slot: _SessionSlot) -> None:
        if slot.courier is not None:
            slot.outbox.put_nowait(slot.snapshot)

    async def _deliver(self, topic: str, slot: _SessionSlot) -> None:
        # Read per snapshot: a publisher attached after creation still gets
        # every later snapshot.
        while True:
            snapshot = await slot.outbox.get()
            publisher = self.publisher
            if publisher is None:
                continue
            try:
                await publisher(topic, snapshot)
            except Exception:
                logger.exception("Failed to publish snapshot v%s on %s", snapshot.get("version"), topic)

    def _sync_countdown(self, slot: _SessionSlot) -> None:
        status = slot.session.status
        if status is SessionStatus.PLAYING and slot.countdown is None:
            slot.countdown = asyncio.create_task(self._run_countdown(slot.session.session_id))
            return
        if status is SessionStatus.ENDED and slot.countdown is not None:
            if slot.countdown is not asyncio.current_task():
                slot.countdown.cancel()
            slot.countdown = None

    async def _run_countdown(self, session_id: str) -> None:
        while True:
            await asyncio.sleep(self.settings.tick_seconds)
            try:
                snapshot = await self.tick(session_id)
            except GameError as exc:
                logger.debug("Countdown for %s stopped: %s", session_id, exc.kind)
                return
            if snapshot["status"] == SessionStatus.ENDED.value:
                return

    async def tick(self, session_id: str) -> dict[str, Any]:
        def _tick(session: GameSession) -> None:
            if session.status is not SessionStatus.PLAYING:
                raise NotInProgress()
            session.tick(now=self.clock())

        _, snapshot = await self._mutate(session_id, _tick)
        return snapshot

    def sweep(self) -> list[str]:
        """Evict sessions that ended longer than the grace period ago."""
        now = self.clock()
        expired = [
            session_id
            for session_id, slot in self._slots.items()
            if slot.session.ended_at is not None and now - slot.session.ended_at >= self.settings.grace_seconds
        ]
        for session_id in expired:
            slot = self._slots.pop(session_id)
            slot.cancel_tasks()
            logger.info("Evicted session %s", session_id)
        return expired

    async def run_sweeper(self) -> None:
        while True:
            await asyncio.sleep(self.settings.sweep_seconds)
            self.sweep()

    def start(self) -> None:
        if self._sweeper is None:
            self._sweeper = asyncio.create_task(self.run_sweeper())

    async def close(self) -> None:
        tasks = [task for slot in self._slots.values() for task in (slot.courier, slot.countdown) if task]
        if self._sweeper is not None:
            tasks.append(self._sweeper)
            self._sweeper = None
        for slot in self._slots.values():
            slot.cancel_tasks()
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def create_session(self, host_name: str) -> CreatedSession:
        return await self.create(host_name)

    async def join_session(self, session_id: str, player_name: str) -> JoinedSession:
        player_id = generate_token()
        _, snapshot = await self._mutate(session_id, lambda session: session.join(player_id, player_name))
        return JoinedSession(player_id=player_id, session=snapshot)

    async def select_cell(self, session_id: str, player_id: str, row: int, col: int) -> None:
        await self.mutate(session_id, lambda session: session.select_cell(player_id, row, col))

    async def clear_selection(self, session_id: str, player_id: str) -> None:
        await self.mutate(session_id, lambda session: session.clear_selection(player_id))

    async def apply_power(self, session_id: str, player_id: str, effect: PowerEffect) -> PowerOutcome:
        return await self.mutate(session_id, lambda session: session.apply_power(player_id, effect))

    async def submit_word(self, session_id: str, player_id: str) -> SubmitOutcome:
        return await self.mutate(session_id, lambda session: session.submit_word(player_id, now=self.clock()))


def create_registry(settings: GameSettings, publisher: Publisher | None = None) -> InMemorySessionRegistry:
    return InMemorySessionRegistry(
        settings=settings,
        lexicon=load_lexicon(settings.wordlist_path),
        publisher=publisher,
    )
