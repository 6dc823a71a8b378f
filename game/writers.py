"""Match event writers.

Provides pluggable writer classes that log match events to output streams in
different formats (full transcript, compact level results).
"""

import sys
from abc import ABC, abstractmethod
from typing import TextIO

from game.constants import PLAYERS, STAGE_TITLES


class GameWriter(ABC):
    """Abstract base class for match event writers.

    A GameWriter owns an output stream and writes one match at a time:
    a header, the events and level results, and a footer with the final score.
    """

    def __init__(self, output: TextIO):
        """Initialize the writer.

        Args:
            output: Output stream to write to (file, stdout, etc.)
        """
        self.output = output
        self._match_started = False

    @abstractmethod
    def write_header(self, seed: int | None, player1_name: str | None = None, player2_name: str | None = None) -> None:
        """Write header with match metadata.

        Args:
            seed: Random seed for this match
            player1_name: Optional name for player 1
            player2_name: Optional name for player 2
        """
        pass

    def write_event(self, player_num: int, stage: str, event_text: str) -> None:
        """Write an accepted input event (default: ignored).

        Args:
            player_num: Player id (1 or 2)
            stage: Stage the event was applied to
            event_text: Short description such as "move up" or "dig"
        """
        pass

    @abstractmethod
    def write_result(self, stage: str, player_num: int) -> None:
        """Write the winner of a finished level."""
        pass

    def write_comment(self, message: str) -> None:
        """Write a status/comment message (default: ignored)."""
        pass

    def write_footer(
        self, scores: dict | None = None, winner: int | None = None, abort_reason: str | None = None
    ) -> None:
        """Write footer with the final match score (optional).

        Args:
            scores: Level wins per player
            winner: Match winner, None on a tie
            abort_reason: Set when the match was cut short; it then has no result
        """
        pass

    def flush(self) -> None:
        """Flush the output stream."""
        self.output.flush()

    def close(self) -> None:
        """Close the output stream (but never close stdout/stderr)."""
        if self.output in (sys.stdout, sys.stderr):
            return
        if hasattr(self.output, 'close'):
            self.output.close()


class TranscriptWriter(GameWriter):
    """Writes every accepted event in transcript format.

    File format:
        # Seed: 12345                 # Header comments
        # Player 1: Alice
        #
        Player 1 [maze]: move down    # Event with player and stage prefix
        Player 2 [maze]: move right
        # Player 1 wins the maze level
        ...
        #
        # Final score: 2-1            # Footer comments
        # Winner: Player 1            # or "# Aborted: step limit"
    """

    def write_header(self, seed: int | None, player1_name: str | None = None, player2_name: str | None = None) -> None:
        self.output.write(f"# Seed: {seed}\n")
        if player1_name:
            self.output.write(f"# Player 1: {player1_name}\n")
        if player2_name:
            self.output.write(f"# Player 2: {player2_name}\n")
        self.output.write("#\n")
        self._match_started = True
        self.flush()

    def write_event(self, player_num: int, stage: str, event_text: str) -> None:
        """Format: "Player {player_num} [{stage}]: {event_text}"."""
        self.output.write(f"Player {player_num} [{stage}]: {event_text}\n")
        self.flush()

    def write_result(self, stage: str, player_num: int) -> None:
        self.write_comment(f"Player {player_num} wins {STAGE_TITLES.get(stage, stage)}")

    def write_comment(self, message: str) -> None:
        self.output.write(f"# {message}\n")
        self.flush()

    def write_footer(
        self, scores: dict | None = None, winner: int | None = None, abort_reason: str | None = None
    ) -> None:
        if scores is None:
            return
        p1, p2 = PLAYERS
        self.output.write("#\n")
        self.output.write(f"# Final score: {scores.get(p1, 0)}-{scores.get(p2, 0)}\n")
        if abort_reason is not None:
            self.output.write(f"# Aborted: {abort_reason}\n")
        elif winner is None:
            self.output.write("# Winner: none (tie)\n")
        else:
            self.output.write(f"# Winner: Player {winner}\n")
        self.flush()


class ResultWriter(GameWriter):
    """Writes only level winners, one compact line per level.

    File format:
        match 12345
        maze P1
        portal P1
        dig P2
        final P1 2-1                  # "final tie 1-1" / "final aborted 1-0"
    """

    def write_header(self, seed: int | None, player1_name: str | None = None, player2_name: str | None = None) -> None:
        self.output.write(f"match {seed}\n")
        self._match_started = True
        self.flush()

    def write_result(self, stage: str, player_num: int) -> None:
        self.output.write(f"{stage} P{player_num}\n")
        self.flush()

    def write_footer(
        self, scores: dict | None = None, winner: int | None = None, abort_reason: str | None = None
    ) -> None:
        if scores is None:
            return
        p1, p2 = PLAYERS
        if abort_reason is not None:
            label = "aborted"
        elif winner is None:
            label = "tie"
        else:
            label = f"P{winner}"
        self.output.write(f"final {label} {scores.get(p1, 0)}-{scores.get(p2, 0)}\n")
        self.flush()
