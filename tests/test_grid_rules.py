"""Tests for the stateless grid movement rules."""

import numpy as np
import pytest

from game.constants import EXIT, FLOOR, KEY_CODES, KEY_RED, MAZE_SIZE, WALL
from game.grid_rules import (
    DIRECTIONS,
    LevelMapError,
    MoveResult,
    attempt_move,
    find_cells,
    is_unit_delta,
    validate_level_map,
)
from game.level_maps import MAZE_MAP, PORTAL_MAP


@pytest.fixture
def maze():
    return validate_level_map(MAZE_MAP, (MAZE_SIZE, MAZE_SIZE), KEY_CODES + (EXIT,))


@pytest.fixture
def open_grid():
    """3x3 grid without walls so every edge is a bounds check."""
    return np.zeros((3, 3), dtype=np.int16)


class TestAttemptMove:
    def test_move_onto_floor(self, maze):
        result = attempt_move((1, 1), 1, 0, maze)
        assert result == MoveResult(True, (2, 1), FLOOR)

    def test_returns_cell_code_of_target(self, maze):
        result = attempt_move((5, 1), 1, 0, maze)
        assert result.moved
        assert result.position == (6, 1)
        assert result.cell == KEY_RED

    def test_wall_rejected(self, maze):
        result = attempt_move((1, 1), 0, -1, maze)
        assert result == MoveResult(False, (1, 1), None)

    @pytest.mark.parametrize("position,delta", [
        ((0, 0), (-1, 0)),
        ((0, 0), (0, -1)),
        ((2, 2), (1, 0)),
        ((2, 2), (0, 1)),
    ])
    def test_out_of_bounds_rejected(self, open_grid, position, delta):
        result = attempt_move(position, *delta, open_grid)
        assert not result.moved
        assert result.position == position
        assert result.cell is None

    @pytest.mark.parametrize("delta", [(1, 1), (-1, 1), (0, 0), (2, 0), (0, -2)])
    def test_non_unit_delta_rejected(self, open_grid, delta):
        result = attempt_move((1, 1), *delta, open_grid)
        assert not result.moved
        assert result.position == (1, 1)

    def test_no_move_into_any_wall(self, maze):
        """Every step into a wall from every floor cell keeps the position."""
        height, width = maze.shape
        for y in range(height):
            for x in range(width):
                if maze[y, x] == WALL:
                    continue
                for dx, dy in DIRECTIONS.values():
                    tx, ty = x + dx, y + dy
                    result = attempt_move((x, y), dx, dy, maze)
                    if maze[ty, tx] == WALL:
                        assert result.position == (x, y)
                        assert not result.moved
                    else:
                        assert result.position == (tx, ty)

    def test_does_not_mutate_map(self, open_grid):
        before = open_grid.copy()
        attempt_move((1, 1), 1, 0, open_grid)
        assert np.array_equal(before, open_grid)


class TestHelpers:
    def test_is_unit_delta(self):
        assert all(is_unit_delta(dx, dy) for dx, dy in DIRECTIONS.values())
        assert not is_unit_delta(1, 1)

    def test_find_cells(self, maze):
        assert find_cells(maze, EXIT) == [(9, 9)]
        assert find_cells(maze, 42) == []


class TestValidateLevelMap:
    def test_returns_read_only_array(self, maze):
        assert isinstance(maze, np.ndarray)
        assert not maze.flags.writeable
        with pytest.raises(ValueError):
            maze[1, 1] = WALL

    def test_wrong_dimensions(self):
        with pytest.raises(LevelMapError, match="must be 11x11"):
            validate_level_map(PORTAL_MAP, (MAZE_SIZE, MAZE_SIZE))

    def test_ragged_rows(self):
        with pytest.raises(LevelMapError):
            validate_level_map([[0, 0], [0]], (2, 2))

    def test_not_two_dimensional(self):
        with pytest.raises(LevelMapError, match="2D"):
            validate_level_map([0, 0, 0], (1, 3))

    def test_missing_required_cell(self):
        with pytest.raises(LevelMapError, match="exactly once"):
            validate_level_map([[0, 0], [0, 0]], (2, 2), required_cells=(EXIT,))

    def test_duplicated_required_cell(self):
        with pytest.raises(LevelMapError, match="found 2"):
            validate_level_map([[EXIT, 0], [0, EXIT]], (2, 2), required_cells=(EXIT,))

    def test_start_on_wall(self):
        with pytest.raises(LevelMapError, match="is a wall"):
            validate_level_map([[WALL, 0], [0, 0]], (2, 2), walkable=[(0, 0)])

    def test_level_map_error_is_value_error(self):
        assert issubclass(LevelMapError, ValueError)
