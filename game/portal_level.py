"""Level 2: portal puzzle.

Both players start on the same 9x9 map. Stepping onto a portal relocates the
player to the paired portal of the same colour in a single step; the landing
cell is not evaluated as a new portal entry. Stepping onto the goal wins.
"""

from __future__ import annotations

from typing import Callable

from game.constants import GOAL, PLAYERS, PORTAL_CODES, PORTAL_PAIRS, PORTAL_SIZE, STAGE_PORTAL
from game.grid_rules import Position, attempt_move, find_cells, validate_level_map
from game.level import Level
from game.level_maps import PORTAL_MAP, PORTAL_STARTS
from shared.render_data import PortalSnapshot


def build_portal_links(level_map) -> dict[int, Position]:
    """Scan the map once and map every portal code to its partner's coordinates.

    Args:
        level_map: Validated static map holding each portal code exactly once

    Returns:
        Dict of portal code -> destination (x, y)
    """
    coords = {code: find_cells(level_map, code)[0] for code in PORTAL_CODES}
    links: dict[int, Position] = {}
    for first, second in PORTAL_PAIRS:
        links[first] = coords[second]
        links[second] = coords[first]
    return links


class PortalLevel(Level):
    stage = STAGE_PORTAL

    def __init__(
        self,
        level_map=None,
        starts: dict[int, Position] | None = None,
        status_reporter: Callable[[str], None] | None = None,
    ):
        super().__init__(status_reporter)
        self.starts = dict(starts if starts is not None else PORTAL_STARTS)
        self.level_map = validate_level_map(
            level_map if level_map is not None else PORTAL_MAP,
            shape=(PORTAL_SIZE, PORTAL_SIZE),
            required_cells=PORTAL_CODES + (GOAL,),
            walkable=[self.starts[p] for p in PLAYERS],
        )
        self._links = build_portal_links(self.level_map)
        self._positions: dict[int, Position] = {}

    @property
    def portal_links(self) -> dict[int, Position]:
        return dict(self._links)

    def destination(self, cell: int) -> Position | None:
        """Return the teleport destination for a portal code (None otherwise)."""
        return self._links.get(cell)

    def _reset_state(self) -> None:
        self._positions = {p: self.starts[p] for p in PLAYERS}

    def _clear_state(self) -> None:
        self._positions = {}

    def _move(self, player: int, dx: int, dy: int) -> bool:
        result = attempt_move(self._positions[player], dx, dy, self.level_map)
        if not result.moved:
            return False

        if result.cell == GOAL:
            self._positions[player] = result.position
            self._declare_win(player)
            return True

        dest = self.destination(result.cell)
        if dest is not None:
            self._report(f"Player {player} teleports {result.position} -> {dest}")
            self._positions[player] = dest
        else:
            self._positions[player] = result.position
        return True

    def position(self, player: int) -> Position | None:
        return self._positions.get(player)

    def _snapshot(self) -> PortalSnapshot:
        return PortalSnapshot(
            level_map=self.level_map,
            positions=dict(self._positions),
            portal_links=dict(self._links),
            winner=self._winner,
        )
