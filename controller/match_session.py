"""Match session management.

Manages a single match's lifecycle including the orchestrator, players and
seed management.
"""

import hashlib
import random
import time
from typing import Callable

import numpy as np

from controller.match_orchestrator import MatchOrchestrator
from game.constants import PLAYER_1, PLAYER_2
from game.player_config import PlayerConfig
from game.players import HumanPlayer, RandomPlayer, ScriptedPlayer


class MatchSession:
    """Manages a single match's lifecycle (orchestrator, players, seed)."""

    def __init__(
        self,
        seed=None,
        scheduler=None,
        status_reporter: Callable[[str], None] | None = None,
        player1_config: PlayerConfig | None = None,
        player2_config: PlayerConfig | None = None,
    ):
        """Initialize a match session.

        Args:
            seed: Random seed for reproducibility (auto-generated if None)
            scheduler: IScheduler driving the dig level's stun countdown
                (None = the caller ticks the orchestrator manually)
            status_reporter: Optional callback for status messages
            player1_config: Configuration for player 1 (default: random)
            player2_config: Configuration for player 2 (default: random)
        """
        self.scheduler = scheduler
        self._status_reporter: Callable[[str], None] | None = status_reporter

        self.player1_config = player1_config if player1_config is not None else PlayerConfig.random()
        self.player2_config = player2_config if player2_config is not None else PlayerConfig.random()

        if seed is None:
            seed = int(time.time())
        self.current_seed = seed
        self._apply_seed(seed)

        self.orchestrator = None
        self.player1 = None
        self.player2 = None
        self.matches_played = 0

        self.reset_match()

    def _apply_seed(self, seed):
        """Apply a seed to both global random number generators."""
        self._report(f"-- Setting Seed: {seed}")
        np.random.seed(seed)
        random.seed(seed)

    def _generate_next_seed(self):
        """Generate the next seed deterministically from the current seed using hash.

        Returns:
            int: New seed value
        """
        hash_obj = hashlib.sha256(str(self.current_seed).encode())
        new_seed = int.from_bytes(hash_obj.digest()[:8], byteorder="big")
        # Keep it in a reasonable range (32-bit unsigned int)
        return new_seed % (2**32)

    def _create_player_from_config(self, player_num: int, config: PlayerConfig):
        """Create a player from a PlayerConfig.

        Args:
            player_num: Player id (1 or 2)
            config: PlayerConfig describing player type and parameters

        Returns:
            MatchPlayer: Configured player instance
        """
        if config.player_type == "human":
            return HumanPlayer(player_num, name=config.name)
        if config.player_type == "random":
            return RandomPlayer(player_num, seed=config.rng_seed, dig_bias=config.dig_bias, name=config.name)
        if config.player_type == "scripted":
            return ScriptedPlayer(player_num, config.script, name=config.name)
        raise ValueError(f"Unknown player type: {config.player_type}")

    def reset_match(self):
        """Reset the session for a new match.

        Tears down the previous orchestrator (cancelling its timers), creates a
        new one with dig boards drawn from the current seed, and new players.
        """
        if self.orchestrator is not None:
            self.orchestrator.reset()
            self.current_seed = self._generate_next_seed()
            self._apply_seed(self.current_seed)

        self._report("** New match **")
        self.orchestrator = MatchOrchestrator(
            scheduler=self.scheduler,
            rng=np.random.default_rng(self.current_seed),
            status_reporter=self._status_reporter,
        )
        self.player1 = self._create_player_from_config(PLAYER_1, self.player1_config)
        self.player2 = self._create_player_from_config(PLAYER_2, self.player2_config)

    @property
    def players(self):
        return (self.player1, self.player2)

    def get_player(self, player_num: int):
        return self.player1 if player_num == PLAYER_1 else self.player2

    def increment_matches_played(self):
        self.matches_played += 1

    def get_seed(self):
        return self.current_seed

    def get_matches_played(self):
        return self.matches_played

    def set_status_reporter(self, reporter: Callable[[str], None] | None) -> None:
        """Set or update the status reporter callback."""
        self._status_reporter = reporter
        if self.orchestrator is not None:
            self.orchestrator.set_status_reporter(reporter)

    def _report(self, message: str | None) -> None:
        if message is None:
            return
        if self._status_reporter is not None:
            self._status_reporter(message)
        else:
            print(message)
