from __future__ import annotations

import numpy as np

from game.constants import STAGE_DIG
from game.grid_rules import DIRECTIONS
from game.players.match_player import MatchPlayer
from game.player_config import DEFAULT_DIG_BIAS
from shared.input_events import InteractRequest, MoveRequest

DIRECTION_NAMES = tuple(DIRECTIONS)


class RandomPlayer(MatchPlayer):

    def __init__(self, n, seed: int | None = None, dig_bias: float = DEFAULT_DIG_BIAS, name: str | None = None):
        super().__init__(n, name or f"Random {n}")
        self.dig_bias = dig_bias
        # Unseeded players share the session-seeded global numpy state
        self._rng = np.random.default_rng(seed) if seed is not None else np.random

    def get_event(self, snapshot):
        """
        Select a random input for the active level.
        - Maze and portal: one of the four directions
        - Dig board: dig the cursor cell with probability ``dig_bias``, otherwise move the cursor
        Stunned players and players outside a level stay idle.
        """
        if snapshot.level is None:
            return None

        if snapshot.stage == STAGE_DIG:
            if snapshot.level.is_stunned(self.n):
                return None
            if self._rng.random() < self.dig_bias:
                return InteractRequest(self.n)

        direction = DIRECTION_NAMES[int(self._rng.choice(len(DIRECTION_NAMES)))]
        return MoveRequest.toward(self.n, direction)
