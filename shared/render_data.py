"""Render snapshot value objects.

These classes are the read-only query surface handed to the presentation
layer after every state change. They carry copies of the level state, never
references to the mutable state owned by the active level, so a renderer can
keep a snapshot around without observing later mutations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Union

import numpy as np


@dataclass(frozen=True, eq=False)
class MazeSnapshot:
    """State of the key maze.

    Attributes:
        level_map: Read-only static map (indexed [y, x])
        positions: Player id -> (x, y)
        keys: Player id -> sorted tuple of collected key codes
        remaining_keys: Player id -> key codes still lying on that player's grid
        exit_unlocked: Player id -> True once that player holds every key
        winner: Winning player id, or None while the level is running
    """

    kind: ClassVar[str] = "maze"

    level_map: np.ndarray
    positions: dict[int, tuple[int, int]]
    keys: dict[int, tuple[int, ...]]
    remaining_keys: dict[int, tuple[int, ...]]
    exit_unlocked: dict[int, bool]
    winner: int | None = None


@dataclass(frozen=True, eq=False)
class PortalSnapshot:
    """State of the portal puzzle.

    Attributes:
        level_map: Read-only static map (indexed [y, x])
        positions: Player id -> (x, y)
        portal_links: Portal cell code -> destination (x, y)
        winner: Winning player id, or None while the level is running
    """

    kind: ClassVar[str] = "portal"

    level_map: np.ndarray
    positions: dict[int, tuple[int, int]]
    portal_links: dict[int, tuple[int, int]]
    winner: int | None = None


@dataclass(frozen=True)
class DigSnapshot:
    """State of the dig board level.

    ``cells`` only exposes the type of revealed cells; unrevealed cells are None
    so the presentation layer cannot leak hidden gems or TNT.
    """

    kind: ClassVar[str] = "dig"

    width: int
    height: int
    cells: dict[int, tuple[int | None, ...]]
    cursors: dict[int, int]
    scores: dict[int, int]
    stun_ms: dict[int, int]
    winner: int | None = None

    def is_stunned(self, player: int) -> bool:
        return self.stun_ms.get(player, 0) > 0


LevelSnapshot = Union[MazeSnapshot, PortalSnapshot, DigSnapshot]


@dataclass(frozen=True)
class LevelResult:
    """Outcome of a finished level, including the snapshot taken at the winning move."""

    stage: str
    winner: int
    snapshot: LevelSnapshot | None = None


@dataclass(frozen=True)
class MatchSnapshot:
    """Match-level view: stage, scoreboard and the active level's state."""

    stage: str
    title: str
    scores: dict[int, int]
    winner: int | None = None
    level: LevelSnapshot | None = None
    results: tuple[LevelResult, ...] = field(default_factory=tuple)

    def is_finished(self) -> bool:
        return self.stage == "final"

    def is_tie(self) -> bool:
        return self.is_finished() and self.winner is None
