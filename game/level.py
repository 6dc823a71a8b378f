"""Base class for the three mini-levels.

A level owns all per-player state while it is active. The orchestrator
activates it with a win callback; the level emits at most one win event per
activation and from then on refuses mutating input until reactivated.

Invalid input (unknown player, inactive level, level already won) is a silent
no-op: the handlers return False instead of raising.
"""

from __future__ import annotations

from typing import Callable

from game.utils.player_utils import is_player

WinCallback = Callable[[int], None]


class Level:
    """Activation lifecycle, one-shot win event and input gating."""

    stage = "level"

    def __init__(self, status_reporter: Callable[[str], None] | None = None):
        self._status_reporter = status_reporter
        self._active = False
        self._winner: int | None = None
        self._on_win: WinCallback | None = None

    #
    # Lifecycle
    #
    def activate(self, on_win: WinCallback | None = None) -> None:
        """Reset per-player state and start accepting input."""
        self._on_win = on_win
        self._winner = None
        self._reset_state()
        self._active = True

    def deactivate(self) -> None:
        """Stop accepting input and discard all per-player state."""
        self._active = False
        self._on_win = None
        self._winner = None
        self._clear_state()

    def is_active(self) -> bool:
        return self._active

    @property
    def winner(self) -> int | None:
        return self._winner

    def is_finished(self) -> bool:
        return self._winner is not None

    #
    # Input
    #
    def handle_move(self, player: int, dx: int, dy: int) -> bool:
        """Apply a directional move. Returns True if state changed."""
        if not self._accepts_input(player):
            return False
        return self._move(player, dx, dy)

    def handle_interact(self, player: int) -> bool:
        """Apply an interact action. Levels without one ignore it."""
        if not self._accepts_input(player):
            return False
        return self._interact(player)

    def tick(self) -> None:
        """Advance level timers by one fixed step (no timers by default)."""
        return None

    def snapshot(self):
        """Return a read-only snapshot, or None while inactive."""
        if not self._active:
            return None
        return self._snapshot()

    #
    # Subclass hooks
    #
    def _reset_state(self) -> None:
        raise NotImplementedError

    def _clear_state(self) -> None:
        raise NotImplementedError

    def _move(self, player: int, dx: int, dy: int) -> bool:
        raise NotImplementedError

    def _interact(self, player: int) -> bool:
        return False

    def _snapshot(self):
        raise NotImplementedError

    #
    # Helpers
    #
    def _accepts_input(self, player: int) -> bool:
        return self._active and self._winner is None and is_player(player)

    def _declare_win(self, player: int) -> None:
        """Record the winner and notify the orchestrator (at most once)."""
        if self._winner is not None:
            return
        self._winner = player
        self._report(f"Player {player} wins the {self.stage} level")
        if self._on_win is not None:
            self._on_win(player)

    def set_status_reporter(self, reporter: Callable[[str], None] | None) -> None:
        """Set or update the status reporter callback."""
        self._status_reporter = reporter

    def _report(self, message: str | None) -> None:
        if message is None:
            return
        if self._status_reporter is not None:
            self._status_reporter(message)
