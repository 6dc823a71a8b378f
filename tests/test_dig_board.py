"""Tests for dig board generation and reveal state."""

import numpy as np
import pytest

from game.constants import DIG_EMPTY, DIG_GEM, DIG_GEM_COUNT, DIG_TNT, DIG_TNT_COUNT
from game.dig_board import DigBoard


class FixedOrder:
    """Stand-in random source whose shuffle is the identity."""

    def permutation(self, n):
        return np.arange(n)


@pytest.fixture
def board():
    return DigBoard.generate(FixedOrder())


class TestGenerate:
    @pytest.mark.parametrize("seed", [0, 1, 7, 12345])
    def test_exact_counts(self, seed):
        board = DigBoard.generate(np.random.default_rng(seed))
        assert board.size == 25
        assert board.count(DIG_GEM) == DIG_GEM_COUNT
        assert board.count(DIG_TNT) == DIG_TNT_COUNT
        assert board.count(DIG_EMPTY) == 25 - DIG_GEM_COUNT - DIG_TNT_COUNT

    def test_same_seed_same_board(self):
        a = DigBoard.generate(np.random.default_rng(42))
        b = DigBoard.generate(np.random.default_rng(42))
        assert np.array_equal(a.cells, b.cells)

    def test_global_random_state(self):
        np.random.seed(5)
        a = DigBoard.generate()
        np.random.seed(5)
        b = DigBoard.generate()
        assert np.array_equal(a.cells, b.cells)

    def test_slices_permutation(self, board):
        assert list(board.cells[:5]) == [DIG_GEM] * 5
        assert list(board.cells[5:12]) == [DIG_TNT] * 7
        assert list(board.cells[12:]) == [DIG_EMPTY] * 13

    def test_full_board(self):
        board = DigBoard.generate(np.random.default_rng(0), width=2, height=2, gems=2, tnt=2)
        assert board.count(DIG_EMPTY) == 0

    @pytest.mark.parametrize("gems,tnt", [(20, 6), (-1, 3), (3, -1)])
    def test_impossible_counts(self, gems, tnt):
        with pytest.raises(ValueError):
            DigBoard.generate(np.random.default_rng(0), gems=gems, tnt=tnt)

    def test_wrong_cell_count(self):
        with pytest.raises(ValueError, match="needs 25 cells"):
            DigBoard([0] * 24)


class TestReveal:
    def test_nothing_revealed_initially(self, board):
        assert board.revealed_count() == 0
        assert board.visible_cells() == (None,) * 25

    def test_first_reveal_returns_type(self, board):
        assert board.reveal(0) == DIG_GEM
        assert board.reveal(5) == DIG_TNT
        assert board.reveal(24) == DIG_EMPTY
        assert board.is_revealed(0)
        assert not board.is_revealed(1)

    def test_second_reveal_returns_none(self, board):
        board.reveal(3)
        assert board.reveal(3) is None
        assert board.revealed_count() == 1

    def test_visible_cells_mask_hidden(self, board):
        board.reveal(6)
        visible = board.visible_cells()
        assert visible[6] == DIG_TNT
        assert visible.count(None) == 24

    def test_cells_read_only(self, board):
        with pytest.raises(ValueError):
            board.cells[0] = DIG_EMPTY


class TestIndexing:
    def test_in_range(self, board):
        assert board.in_range(0)
        assert board.in_range(24)
        assert board.in_range(np.int64(3))
        assert not board.in_range(25)
        assert not board.in_range(-1)
        assert not board.in_range(1.5)

    def test_index_conversion(self, board):
        assert board.index_to_xy(7) == (2, 1)
        assert board.xy_to_index(2, 1) == 7

    def test_repr(self, board):
        assert repr(board) == "DigBoard(5x5, empty=13, gem=5, tnt=7, revealed=0)"
