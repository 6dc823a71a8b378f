"""Level 3: timed dig board.

Each player digs on their own randomly generated 5x5 board. Gems score a
point; TNT stuns the player for a fixed duration during which digging and
cursor movement are ignored. The first player to collect three gems wins.

The stun countdown is a single repeating job on the injected scheduler: it is
scheduled when the level activates and cancelled when it deactivates, so no
timer outlives the level.
"""

from __future__ import annotations

from typing import Callable

from game.constants import (
    DIG_GEM,
    DIG_GEM_COUNT,
    DIG_HEIGHT,
    DIG_TNT,
    DIG_TNT_COUNT,
    DIG_WIDTH,
    GEMS_TO_WIN,
    PLAYERS,
    STAGE_DIG,
    STUN_DURATION_MS,
    STUN_TICK_MS,
)
from game.dig_board import DigBoard
from game.grid_rules import is_unit_delta
from game.level import Level
from shared.render_data import DigSnapshot


class DigLevel(Level):
    stage = STAGE_DIG

    def __init__(
        self,
        scheduler=None,
        rng=None,
        width: int = DIG_WIDTH,
        height: int = DIG_HEIGHT,
        gems: int = DIG_GEM_COUNT,
        tnt: int = DIG_TNT_COUNT,
        gems_to_win: int = GEMS_TO_WIN,
        stun_duration_ms: int = STUN_DURATION_MS,
        tick_ms: int = STUN_TICK_MS,
        status_reporter: Callable[[str], None] | None = None,
    ):
        """Initialize the dig level.

        Args:
            scheduler: IScheduler used for the stun countdown (None = call tick() manually)
            rng: numpy random source for board generation (None = global numpy.random)
            width: Board width
            height: Board height
            gems: Gems placed per board
            tnt: TNT cells placed per board
            gems_to_win: Gems needed to win the level
            stun_duration_ms: Stun applied when a player digs TNT
            tick_ms: Countdown step and interval
            status_reporter: Optional callback for status messages
        """
        super().__init__(status_reporter)
        self.scheduler = scheduler
        self.rng = rng
        self.width = width
        self.height = height
        self.gems = gems
        self.tnt = tnt
        self.gems_to_win = gems_to_win
        self.stun_duration_ms = stun_duration_ms
        self.tick_ms = tick_ms

        self._boards: dict[int, DigBoard] = {}
        self._scores: dict[int, int] = {}
        self._stun: dict[int, int] = {}
        self._cursors: dict[int, int] = {}
        self._timer_handle = None

    #
    # Lifecycle
    #
    def _reset_state(self) -> None:
        self._boards = {
            p: DigBoard.generate(self.rng, self.width, self.height, self.gems, self.tnt)
            for p in PLAYERS
        }
        self._scores = {p: 0 for p in PLAYERS}
        self._stun = {p: 0 for p in PLAYERS}
        self._cursors = {p: 0 for p in PLAYERS}
        self._start_timer()

    def _clear_state(self) -> None:
        self._stop_timer()
        self._boards = {}
        self._scores = {}
        self._stun = {}
        self._cursors = {}

    def _start_timer(self) -> None:
        self._stop_timer()
        if self.scheduler is not None:
            self._timer_handle = self.scheduler.schedule_interval(self.tick, self.tick_ms)

    def _stop_timer(self) -> None:
        if self._timer_handle is not None and self.scheduler is not None:
            self.scheduler.cancel(self._timer_handle)
        self._timer_handle = None

    def has_timer(self) -> bool:
        return self._timer_handle is not None

    #
    # Rules
    #
    def tick(self) -> None:
        """Decrement both players' stun by ``tick_ms``, floored at zero."""
        if not self._active:
            return
        for player in PLAYERS:
            self._stun[player] = max(0, self._stun[player] - self.tick_ms)

    def dig(self, player: int, index: int) -> bool:
        """Dig a cell on the player's own board.

        No-op (returns False) while stunned, for an out-of-range index, or when
        the player already revealed the cell.
        """
        if not self._accepts_input(player) or self._stun[player] > 0:
            return False

        board = self._boards[player]
        if not board.in_range(index):
            return False

        cell = board.reveal(index)
        if cell is None:
            return False

        if cell == DIG_TNT:
            self._stun[player] = self.stun_duration_ms
            self._report(f"Player {player} hit TNT, stunned for {self.stun_duration_ms}ms")
        elif cell == DIG_GEM:
            self._scores[player] += 1
            self._report(f"Player {player} found a gem ({self._scores[player]}/{self.gems_to_win})")
            self._check_win(player)
        return True

    def _check_win(self, player: int) -> None:
        if self._scores[player] >= self.gems_to_win:
            self._declare_win(player)

    def _interact(self, player: int) -> bool:
        return self.dig(player, self._cursors[player])

    def _move(self, player: int, dx: int, dy: int) -> bool:
        """Move the player's cursor one cell; leaving the board is a no-op."""
        if self._stun[player] > 0 or not is_unit_delta(dx, dy):
            return False
        board = self._boards[player]
        x, y = board.index_to_xy(self._cursors[player])
        new_x, new_y = x + dx, y + dy
        if not (0 <= new_x < self.width and 0 <= new_y < self.height):
            return False
        self._cursors[player] = board.xy_to_index(new_x, new_y)
        return True

    #
    # Queries
    #
    def board(self, player: int) -> DigBoard | None:
        return self._boards.get(player)

    def score(self, player: int) -> int:
        return self._scores.get(player, 0)

    def stun_remaining(self, player: int) -> int:
        return self._stun.get(player, 0)

    def cursor(self, player: int) -> int:
        return self._cursors.get(player, 0)

    def _snapshot(self) -> DigSnapshot:
        return DigSnapshot(
            width=self.width,
            height=self.height,
            cells={p: b.visible_cells() for p, b in self._boards.items()},
            cursors=dict(self._cursors),
            scores=dict(self._scores),
            stun_ms=dict(self._stun),
            winner=self._winner,
        )
