"""Input events consumed by the rules engine.

The source of an event (keyboard, touch, scripted player) is irrelevant to the
core; the presentation layer or a player object builds these and hands them to
``MatchOrchestrator.dispatch``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from game.grid_rules import DIRECTIONS

INTERACT_WORDS = ("dig", "interact")


@dataclass(frozen=True)
class MoveRequest:
    """Directional move request for one player."""

    player: int
    dx: int
    dy: int

    @classmethod
    def toward(cls, player: int, direction: str) -> MoveRequest:
        """Build a move request from a direction name (up/down/left/right)."""
        try:
            dx, dy = DIRECTIONS[direction.lower()]
        except KeyError:
            raise ValueError(
                f"Unknown direction: {direction}. Must be one of {', '.join(DIRECTIONS)}"
            ) from None
        return cls(player, dx, dy)

    def describe(self) -> str:
        for name, delta in DIRECTIONS.items():
            if delta == (self.dx, self.dy):
                return f"move {name}"
        return f"move ({self.dx}, {self.dy})"


@dataclass(frozen=True)
class InteractRequest:
    """Interact / dig request for one player."""

    player: int

    def describe(self) -> str:
        return "dig"


InputEvent = Union[MoveRequest, InteractRequest]


def parse_action_word(player: int, word: str) -> InputEvent:
    """Convert an action word (up/down/left/right/dig) into an input event.

    Raises:
        ValueError: If the word is not a known action
    """
    word = word.strip().lower()
    if word in INTERACT_WORDS:
        return InteractRequest(player)
    return MoveRequest.toward(player, word)
