"""Level 1: key maze.

Each player walks an independent copy of the same 11x11 maze. Keys are picked
up by stepping on them (once per key code); the exit only yields a win once all
three keys are held. Stepping onto the exit without them is allowed and the
player may walk away again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from game.constants import (
    EXIT,
    KEY_CODES,
    MAZE_SIZE,
    PLAYERS,
    REQUIRED_KEY_COUNT,
    STAGE_MAZE,
)
from game.grid_rules import attempt_move, find_cells, validate_level_map
from game.level import Level
from game.level_maps import MAZE_MAP, MAZE_STARTS
from shared.render_data import MazeSnapshot


@dataclass
class MazeRunner:
    """Position and key inventory of one player."""

    position: tuple[int, int]
    keys: set[int] = field(default_factory=set)

    def has_all_keys(self) -> bool:
        return len(self.keys) == REQUIRED_KEY_COUNT


class MazeLevel(Level):
    stage = STAGE_MAZE

    def __init__(
        self,
        level_map=None,
        starts: dict[int, tuple[int, int]] | None = None,
        status_reporter: Callable[[str], None] | None = None,
    ):
        super().__init__(status_reporter)
        self.starts = dict(starts if starts is not None else MAZE_STARTS)
        self.level_map = validate_level_map(
            level_map if level_map is not None else MAZE_MAP,
            shape=(MAZE_SIZE, MAZE_SIZE),
            required_cells=KEY_CODES + (EXIT,),
            walkable=[self.starts[p] for p in PLAYERS],
        )
        self._runners: dict[int, MazeRunner] = {}

    def _reset_state(self) -> None:
        self._runners = {p: MazeRunner(self.starts[p]) for p in PLAYERS}

    def _clear_state(self) -> None:
        self._runners = {}

    def _move(self, player: int, dx: int, dy: int) -> bool:
        runner = self._runners[player]
        result = attempt_move(runner.position, dx, dy, self.level_map)
        if not result.moved:
            return False

        if result.cell in KEY_CODES and result.cell not in runner.keys:
            runner.keys.add(result.cell)
            self._report(f"Player {player} picked up key {result.cell} ({len(runner.keys)}/{REQUIRED_KEY_COUNT})")

        runner.position = result.position

        if result.cell == EXIT and runner.has_all_keys():
            self._declare_win(player)
        return True

    def position(self, player: int) -> tuple[int, int] | None:
        runner = self._runners.get(player)
        return runner.position if runner else None

    def keys(self, player: int) -> frozenset[int]:
        runner = self._runners.get(player)
        return frozenset(runner.keys) if runner else frozenset()

    def _snapshot(self) -> MazeSnapshot:
        return MazeSnapshot(
            level_map=self.level_map,
            positions={p: r.position for p, r in self._runners.items()},
            keys={p: tuple(sorted(r.keys)) for p, r in self._runners.items()},
            remaining_keys={
                p: tuple(code for code in KEY_CODES if code not in r.keys)
                for p, r in self._runners.items()
            },
            exit_unlocked={p: r.has_all_keys() for p, r in self._runners.items()},
            winner=self._winner,
        )

    def key_positions(self) -> dict[int, tuple[int, int]]:
        """Map each key code to its (x, y) cell on the static map."""
        return {code: find_cells(self.level_map, code)[0] for code in KEY_CODES}
