"""Stateless grid movement rules shared by the maze and portal levels.

All functions are pure: same inputs → same outputs.
No side effects, no mutations, no hidden state.

Positions are ``(x, y)`` tuples. Level maps are 2D numpy arrays indexed
``[y, x]`` holding the cell codes from ``game.constants``.

Usage:
    result = attempt_move((1, 1), 0, 1, MAZE_MAP)
    if result.moved:
        position = result.position
        ...interpret result.cell (key pickup, teleport, goal)...
"""

from typing import Iterable, NamedTuple, Tuple

import numpy as np

from game.constants import WALL

Position = Tuple[int, int]

# Orthogonal unit deltas (dx, dy); y grows downwards
DIRECTIONS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}
UNIT_DELTAS = frozenset(DIRECTIONS.values())


class LevelMapError(ValueError):
    """Raised when a static level map is malformed (build-time defect)."""


class MoveResult(NamedTuple):
    """Outcome of a single move attempt.

    A rejected move keeps the original position and carries no cell code.
    """
    moved: bool
    position: Position
    cell: int | None


def is_unit_delta(dx: int, dy: int) -> bool:
    """Check whether (dx, dy) is one of the four orthogonal unit vectors."""
    return (dx, dy) in UNIT_DELTAS


def in_bounds(x: int, y: int, level_map: np.ndarray) -> bool:
    height, width = level_map.shape
    return 0 <= x < width and 0 <= y < height


def cell_at(position: Position, level_map: np.ndarray) -> int:
    x, y = position
    return int(level_map[y, x])


def attempt_move(position: Position, dx: int, dy: int, level_map: np.ndarray) -> MoveResult:
    """Try to move one step from ``position`` by ``(dx, dy)``.

    Rejected (no state change) when the delta is not an orthogonal unit vector,
    the target lies outside the grid, or the target is a wall.

    Args:
        position: Current (x, y) position
        dx: Horizontal delta (-1, 0 or 1)
        dy: Vertical delta (-1, 0 or 1)
        level_map: Static level map indexed [y, x]

    Returns:
        MoveResult with the target coordinates and cell code on success
    """
    if not is_unit_delta(dx, dy):
        return MoveResult(False, position, None)

    x, y = position
    new_x, new_y = x + dx, y + dy
    if not in_bounds(new_x, new_y, level_map):
        return MoveResult(False, position, None)

    cell = int(level_map[new_y, new_x])
    if cell == WALL:
        return MoveResult(False, position, None)

    return MoveResult(True, (new_x, new_y), cell)


def find_cells(level_map: np.ndarray, code: int) -> list[Position]:
    """Return every (x, y) coordinate holding ``code``, in row-major order."""
    ys, xs = np.nonzero(level_map == code)
    return [(int(x), int(y)) for y, x in zip(ys, xs)]


def validate_level_map(
    level_map,
    shape: Tuple[int, int],
    required_cells: Iterable[int] = (),
    walkable: Iterable[Position] = (),
) -> np.ndarray:
    """Validate static map data and return it as a read-only array.

    Args:
        level_map: Nested lists or array of cell codes
        shape: Expected (height, width)
        required_cells: Codes that must appear exactly once
        walkable: Positions that must not be walls (e.g. start coordinates)

    Returns:
        Read-only int numpy array

    Raises:
        LevelMapError: For wrong dimensions, missing/duplicated special cells
            or start positions placed on walls
    """
    try:
        grid = np.array(level_map, dtype=np.int16)
    except (TypeError, ValueError) as e:
        raise LevelMapError(f"Level map is not a rectangular grid: {e}") from e

    if grid.ndim != 2:
        raise LevelMapError(f"Level map must be 2D, got {grid.ndim} dimension(s)")
    if grid.shape != tuple(shape):
        raise LevelMapError(f"Level map must be {shape[0]}x{shape[1]}, got {grid.shape[0]}x{grid.shape[1]}")

    for code in required_cells:
        count = int(np.count_nonzero(grid == code))
        if count != 1:
            raise LevelMapError(f"Cell code {code} must appear exactly once, found {count}")

    for position in walkable:
        if not in_bounds(position[0], position[1], grid):
            raise LevelMapError(f"Position {position} is outside the level map")
        if cell_at(position, grid) == WALL:
            raise LevelMapError(f"Position {position} is a wall")

    grid.setflags(write=False)
    return grid
