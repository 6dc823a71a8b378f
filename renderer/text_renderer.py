"""Text-based renderer implementation for status output and board dumps."""

from __future__ import annotations

import logging
import sys
from typing import Callable, TextIO

from game.constants import (
    DIG_GEM,
    DIG_TNT,
    EXIT,
    KEY_BLUE,
    KEY_RED,
    KEY_YELLOW,
    PLAYERS,
    PORTAL_BLUE_A,
    PORTAL_BLUE_B,
    PORTAL_ORANGE_A,
    PORTAL_ORANGE_B,
    STAGE_FINAL,
    WALL,
)
from shared.interfaces import IRenderer
from shared.render_data import DigSnapshot, MatchSnapshot, MazeSnapshot, PortalSnapshot

logger = logging.getLogger(__name__)

CELL_GLYPHS = {
    WALL: "#",
    KEY_RED: "r",
    KEY_BLUE: "b",
    KEY_YELLOW: "y",
    EXIT: "E",
    PORTAL_BLUE_A: "B",
    PORTAL_BLUE_B: "B",
    PORTAL_ORANGE_A: "O",
    PORTAL_ORANGE_B: "O",
}
DIG_GLYPHS = {None: "?", DIG_GEM: "*", DIG_TNT: "X"}


def render_grid(level_map, position, hidden_codes=()) -> list[str]:
    """Render a static map with the player marker and without collected items."""
    rows = []
    for y, row in enumerate(level_map):
        line = []
        for x, cell in enumerate(row):
            if (x, y) == tuple(position):
                line.append("@")
            elif int(cell) in hidden_codes:
                line.append(".")
            else:
                line.append(CELL_GLYPHS.get(int(cell), "."))
        rows.append(" ".join(line))
    return rows


def render_dig_board(cells, width, cursor) -> list[str]:
    rows = []
    for start in range(0, len(cells), width):
        line = []
        for index in range(start, start + width):
            glyph = DIG_GLYPHS.get(cells[index], "-")
            line.append(f"[{glyph}]" if index == cursor else f" {glyph} ")
        rows.append("".join(line))
    return rows


def side_by_side(left: list[str], right: list[str], gap: int = 4) -> list[str]:
    width = max((len(line) for line in left), default=0)
    height = max(len(left), len(right))
    left = left + [""] * (height - len(left))
    right = right + [""] * (height - len(right))
    return [f"{a.ljust(width)}{' ' * gap}{b}".rstrip() for a, b in zip(left, right)]


class TextRenderer(IRenderer):
    """Minimal renderer that emits status updates and text dumps to a stream.

    Args:
        stream: Output stream (default: stdout)
        render_every_step: Dump every snapshot instead of only stage changes
    """

    def __init__(self, stream: TextIO | None = None, render_every_step: bool = False):
        self._stream: TextIO = stream or sys.stdout
        self._render_every_step = render_every_step
        self._last_stage: str | None = None

    def run(self) -> None:
        """No-op run loop for text renderer."""
        pass

    def reset_board(self) -> None:
        self._last_stage = None
        self.report_status("Board reset.")

    def attach_update_loop(
        self, update_fn: Callable[[], bool], interval: float
    ) -> bool:
        return False

    def report_status(self, message: str) -> None:
        if message is None:
            return
        print(message, file=self._stream)

    def render(self, snapshot: MatchSnapshot) -> None:
        stage_changed = snapshot.stage != self._last_stage
        self._last_stage = snapshot.stage
        if not (stage_changed or self._render_every_step):
            return
        for line in self.format_snapshot(snapshot):
            print(line, file=self._stream)

    def format_snapshot(self, snapshot: MatchSnapshot) -> list[str]:
        p1, p2 = PLAYERS
        lines = [f"[{snapshot.title}]  P1 {snapshot.scores[p1]} : {snapshot.scores[p2]} P2"]
        level = snapshot.level
        if isinstance(level, MazeSnapshot):
            grids = [
                [f"P{p} keys={list(level.keys[p])}"]
                + render_grid(level.level_map, level.positions[p], level.keys[p])
                for p in PLAYERS
            ]
            lines.extend(side_by_side(*grids))
        elif isinstance(level, PortalSnapshot):
            grids = [[f"P{p}"] + render_grid(level.level_map, level.positions[p]) for p in PLAYERS]
            lines.extend(side_by_side(*grids))
        elif isinstance(level, DigSnapshot):
            grids = [
                [f"P{p} gems={level.scores[p]} stun={level.stun_ms[p]}ms"]
                + render_dig_board(level.cells[p], level.width, level.cursors[p])
                for p in PLAYERS
            ]
            lines.extend(side_by_side(*grids))
        elif snapshot.stage == STAGE_FINAL:
            if snapshot.winner is None:
                lines.append("TIE!")
            else:
                lines.append(f"PLAYER {snapshot.winner} WINS!")
        elif level is not None:
            logger.warning("No text layout for snapshot type %s", type(level).__name__)
        return lines
