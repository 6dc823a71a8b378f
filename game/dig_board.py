"""Dig board for the third level.

One ``DigBoard`` belongs to exactly one player: it holds the hidden cell types
and that player's reveal flags. The level keeps two independent instances, so
revealing a cell on one board never touches the other.

Cells are addressed by a flat row-major index (``index = y * width + x``).
"""

from __future__ import annotations

import numpy as np

from game.constants import (
    DIG_CELL_NAMES,
    DIG_EMPTY,
    DIG_GEM,
    DIG_GEM_COUNT,
    DIG_HEIGHT,
    DIG_TNT,
    DIG_TNT_COUNT,
    DIG_WIDTH,
)


class DigBoard:
    """Hidden cell types plus a single player's reveal state."""

    def __init__(self, cells, width: int = DIG_WIDTH, height: int = DIG_HEIGHT):
        cells = np.asarray(cells, dtype=np.int8).reshape(-1)
        if cells.size != width * height:
            raise ValueError(f"Dig board needs {width * height} cells, got {cells.size}")
        self.width = width
        self.height = height
        self._cells = cells.copy()
        self._cells.setflags(write=False)
        self._revealed = np.zeros(cells.size, dtype=bool)

    @classmethod
    def generate(
        cls,
        rng=None,
        width: int = DIG_WIDTH,
        height: int = DIG_HEIGHT,
        gems: int = DIG_GEM_COUNT,
        tnt: int = DIG_TNT_COUNT,
    ) -> DigBoard:
        """Generate a random board by shuffling the cell indices and slicing.

        The first ``gems`` shuffled indices become gems, the next ``tnt`` become
        TNT and the rest stay empty, so placements never overlap and generation
        always terminates.

        Args:
            rng: numpy Generator/RandomState (default: global numpy.random)
            width: Board width
            height: Board height
            gems: Number of gems to place
            tnt: Number of TNT cells to place

        Returns:
            DigBoard: New board with nothing revealed
        """
        size = width * height
        if gems < 0 or tnt < 0 or gems + tnt > size:
            raise ValueError(f"Cannot place {gems} gems and {tnt} TNT on {size} cells")

        rng = rng if rng is not None else np.random
        order = rng.permutation(size)

        cells = np.full(size, DIG_EMPTY, dtype=np.int8)
        cells[order[:gems]] = DIG_GEM
        cells[order[gems:gems + tnt]] = DIG_TNT
        return cls(cells, width, height)

    @property
    def size(self) -> int:
        return self._cells.size

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the hidden cell types."""
        return self._cells

    def in_range(self, index) -> bool:
        return isinstance(index, (int, np.integer)) and 0 <= index < self.size

    def cell_type(self, index: int) -> int:
        return int(self._cells[index])

    def is_revealed(self, index: int) -> bool:
        return bool(self._revealed[index])

    def reveal(self, index: int) -> int | None:
        """Reveal a cell.

        Returns:
            The cell type on the first reveal, None if already revealed
        """
        if self._revealed[index]:
            return None
        self._revealed[index] = True
        return int(self._cells[index])

    def count(self, cell_type: int) -> int:
        return int(np.count_nonzero(self._cells == cell_type))

    def revealed_count(self) -> int:
        return int(np.count_nonzero(self._revealed))

    def visible_cells(self) -> tuple[int | None, ...]:
        """Cell types with unrevealed cells masked as None."""
        return tuple(
            int(cell) if revealed else None
            for cell, revealed in zip(self._cells, self._revealed)
        )

    def index_to_xy(self, index: int) -> tuple[int, int]:
        return index % self.width, index // self.width

    def xy_to_index(self, x: int, y: int) -> int:
        return y * self.width + x

    def __repr__(self):
        counts = ", ".join(f"{name}={self.count(code)}" for code, name in DIG_CELL_NAMES.items())
        return f"DigBoard({self.width}x{self.height}, {counts}, revealed={self.revealed_count()})"
