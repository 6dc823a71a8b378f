"""Match orchestration: menu → maze → portal → dig → final.

The orchestrator activates exactly one level at a time, routes input events
to it, and reacts to its single win event by scoring the level, deactivating
it and activating the next one. After the last level it computes the overall
winner; equal scores produce no winner.
"""

from __future__ import annotations

from typing import Any, Callable

from game.constants import (
    LEVEL_SEQUENCE,
    PLAYERS,
    STAGE_DIG,
    STAGE_FINAL,
    STAGE_MAZE,
    STAGE_MENU,
    STAGE_PORTAL,
    STAGE_TITLES,
)
from game.dig_level import DigLevel
from game.level import Level
from game.maze_level import MazeLevel
from game.portal_level import PortalLevel
from shared.input_events import InteractRequest, MoveRequest
from shared.render_data import LevelResult, MatchSnapshot

MatchListener = Callable[[str, dict], None]


def determine_match_winner(scores: dict[int, int]) -> int | None:
    """Return the player with strictly more level wins, or None on a tie."""
    p1, p2 = PLAYERS
    if scores[p1] > scores[p2]:
        return p1
    if scores[p2] > scores[p1]:
        return p2
    return None


class MatchOrchestrator:
    """Drives the fixed level sequence and keeps the match score."""

    def __init__(
        self,
        levels: dict[str, Level] | None = None,
        scheduler=None,
        rng=None,
        status_reporter: Callable[[str], None] | None = None,
    ):
        """Initialize the orchestrator.

        Args:
            levels: Stage name -> Level (default: maze, portal and dig levels)
            scheduler: IScheduler for the dig level's stun countdown
            rng: numpy random source for dig board generation
            status_reporter: Optional callback for status messages
        """
        self._status_reporter = status_reporter
        if levels is None:
            levels = {
                STAGE_MAZE: MazeLevel(status_reporter=status_reporter),
                STAGE_PORTAL: PortalLevel(status_reporter=status_reporter),
                STAGE_DIG: DigLevel(scheduler=scheduler, rng=rng, status_reporter=status_reporter),
            }
        missing = [stage for stage in LEVEL_SEQUENCE if stage not in levels]
        if missing:
            raise ValueError(f"Missing level(s) for stage(s): {', '.join(missing)}")

        self.levels = dict(levels)
        self.stage = STAGE_MENU
        self.scores = {p: 0 for p in PLAYERS}
        self.winner: int | None = None
        self.results: list[LevelResult] = []
        self._listeners: list[MatchListener] = []

    #
    # State machine
    #
    @property
    def active_level(self) -> Level | None:
        return self.levels.get(self.stage)

    def is_running(self) -> bool:
        return self.stage in LEVEL_SEQUENCE

    def is_finished(self) -> bool:
        return self.stage == STAGE_FINAL

    def start(self) -> None:
        """Leave the menu and activate the first level."""
        if self.stage != STAGE_MENU:
            raise RuntimeError(f"Cannot start a match from stage '{self.stage}'")
        self._zero_scores()
        self._enter_level(LEVEL_SEQUENCE[0])

    def reset(self) -> None:
        """Return to the menu from any stage, tearing down the active level."""
        level = self.active_level
        if level is not None and level.is_active():
            level.deactivate()
        self.stage = STAGE_MENU
        self._zero_scores()
        self._notify("match_reset", {})

    def _zero_scores(self) -> None:
        self.scores = {p: 0 for p in PLAYERS}
        self.winner = None
        self.results = []

    def _enter_level(self, stage: str) -> None:
        self.stage = stage
        self.levels[stage].activate(lambda player: self._on_level_win(stage, player))
        self._report(f"== {STAGE_TITLES[stage]} ==")
        self._notify("stage_started", {"stage": stage})

    def _on_level_win(self, stage: str, player: int) -> None:
        if stage != self.stage:
            return

        level = self.levels[stage]
        self.results.append(LevelResult(stage, player, level.snapshot()))
        self.scores[player] += 1
        level.deactivate()
        self._notify("level_won", {"stage": stage, "player": player, "scores": dict(self.scores)})

        index = LEVEL_SEQUENCE.index(stage)
        if index + 1 < len(LEVEL_SEQUENCE):
            self._enter_level(LEVEL_SEQUENCE[index + 1])
            return

        self.stage = STAGE_FINAL
        self.winner = determine_match_winner(self.scores)
        if self.winner is None:
            self._report(f"Match tied {self.scores[PLAYERS[0]]}-{self.scores[PLAYERS[1]]}")
        else:
            self._report(f"Player {self.winner} wins the match")
        self._notify("match_finished", {"winner": self.winner, "scores": dict(self.scores)})

    #
    # Input dispatch
    #
    def handle_move(self, player: int, dx: int, dy: int) -> bool:
        level = self.active_level
        if level is None:
            return False
        return level.handle_move(player, dx, dy)

    def handle_interact(self, player: int) -> bool:
        level = self.active_level
        if level is None:
            return False
        return level.handle_interact(player)

    def dispatch(self, event) -> bool:
        """Route an input event to the active level.

        Returns:
            bool: True if the event changed level state (unknown event
                objects are ignored like any other invalid input)
        """
        if isinstance(event, MoveRequest):
            return self.handle_move(event.player, event.dx, event.dy)
        if isinstance(event, InteractRequest):
            return self.handle_interact(event.player)
        return False

    def tick(self) -> None:
        """Advance the active level's timers by one step manually (no scheduler)."""
        level = self.active_level
        if level is not None:
            level.tick()

    #
    # Queries and notifications
    #
    def snapshot(self) -> MatchSnapshot:
        level = self.active_level
        return MatchSnapshot(
            stage=self.stage,
            title=STAGE_TITLES[self.stage],
            scores=dict(self.scores),
            winner=self.winner,
            level=level.snapshot() if level is not None else None,
            results=tuple(self.results),
        )

    def add_listener(self, listener: MatchListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: MatchListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, event: str, payload: dict[str, Any]) -> None:
        for listener in list(self._listeners):
            listener(event, payload)

    def set_status_reporter(self, reporter: Callable[[str], None] | None) -> None:
        """Set or update the status reporter callback on the orchestrator and its levels."""
        self._status_reporter = reporter
        for level in self.levels.values():
            level.set_status_reporter(reporter)

    def _report(self, message: str | None) -> None:
        if message is None:
            return
        if self._status_reporter is not None:
            self._status_reporter(message)
