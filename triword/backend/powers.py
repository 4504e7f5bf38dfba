"""Power effects that mutate the shared board or clock."""

from __future__ import annotations

from dataclasses import dataclass

from triword.backend.board import in_bounds
from triword.backend.errors import InvalidInput, PowerMismatch, PowerNotReady
from triword.backend.models import (
    FreezeEffect,
    Grid,
    Player,
    PowerEffect,
    SwapEffect,
    TransformEffect,
)


@dataclass(frozen=True)
class EffectResult:
    description: str
    time_bonus: int = 0


def check_gate(player: Player, effect: PowerEffect) -> None:
    """Reject the effect when the player may not use it right now."""
    if effect.kind is not player.power_kind:
        raise PowerMismatch(f"{player.name} holds {player.power_kind.value}, not {effect.kind.value}")
    if not player.power_ready:
        raise PowerNotReady()


def normalize_letter(letter: str) -> str:
    value = letter.strip().upper()
    if len(value) != 1 or not value.isalpha():
        raise InvalidInput(f"Expected a single letter, got {letter!r}")
    return value


def apply_effect(grid: Grid, effect: PowerEffect, freeze_bonus_seconds: int) -> EffectResult:
    """Apply ``effect`` to ``grid`` in place.

    All targets are validated before the grid is touched, so a rejected
    effect leaves the board as it was. FREEZE only reports its bonus; the
    caller owns the clock.
    """
    match effect:
        case SwapEffect(a=a, b=b):
            for cell in (a, b):
                if not in_bounds(grid, cell):
                    raise InvalidInput(f"Cell {cell} is outside the grid")
            if a != b:
                grid[a[0]][a[1]], grid[b[0]][b[1]] = grid[b[0]][b[1]], grid[a[0]][a[1]]
            return EffectResult(description="Letters swapped!")
        case TransformEffect(cell=cell, letter=letter):
            if not in_bounds(grid, cell):
                raise InvalidInput(f"Cell {cell} is outside the grid")
            grid[cell[0]][cell[1]] = normalize_letter(letter)
            return EffectResult(description="Letter transformed!")
        case FreezeEffect():
            return EffectResult(
                description=f"Time extended by {freeze_bonus_seconds} seconds!",
                time_bonus=freeze_bonus_seconds,
            )
    raise InvalidInput(f"Unknown power effect {effect!r}")
