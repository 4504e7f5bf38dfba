"""Domain models for game sessions and API results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

Cell = tuple[int, int]
Grid = list[list[str]]


class SessionStatus(str, Enum):
    WAITING = "waiting"
    PLAYING = "playing"
    ENDED = "ended"


class EndReason(str, Enum):
    TARGET = "target"
    TIMEOUT = "timeout"


class PowerKind(str, Enum):
    SWAP = "SWAP"
    TRANSFORM = "TRANSFORM"
    FREEZE = "FREEZE"


# Join slot order decides who holds which power.
POWER_ORDER: tuple[PowerKind, ...] = (PowerKind.SWAP, PowerKind.TRANSFORM, PowerKind.FREEZE)
MAX_PLAYERS = len(POWER_ORDER)


@dataclass
class Player:
    id: str
    name: str
    power_kind: PowerKind
    power_ready: bool = True


@dataclass(frozen=True)
class WordEntry:
    text: str
    points: int
    player_id: str


@dataclass(frozen=True)
class SwapEffect:
    kind: ClassVar[PowerKind] = PowerKind.SWAP
    a: Cell
    b: Cell


@dataclass(frozen=True)
class TransformEffect:
    kind: ClassVar[PowerKind] = PowerKind.TRANSFORM
    cell: Cell
    letter: str


@dataclass(frozen=True)
class FreezeEffect:
    kind: ClassVar[PowerKind] = PowerKind.FREEZE


PowerEffect = SwapEffect | TransformEffect | FreezeEffect


@dataclass(frozen=True)
class CreatedSession:
    session_id: str
    player_id: str
    session: dict[str, Any]


@dataclass(frozen=True)
class JoinedSession:
    player_id: str
    session: dict[str, Any]


@dataclass(frozen=True)
class PowerOutcome:
    description: str


@dataclass(frozen=True)
class SubmitOutcome:
    word: str
    points: int
