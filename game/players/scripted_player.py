from __future__ import annotations

from game.constants import STAGE_DIG
from game.players.match_player import MatchPlayer
from shared.input_events import parse_action_word


class ScriptedPlayer(MatchPlayer):
    """Player that replays a fixed list of action words."""

    def __init__(self, n, actions, name: str | None = None):
        super().__init__(n, name or f"Scripted {n}")
        self.actions = list(actions)
        self.action_index = 0

    def get_event(self, snapshot):
        """Return the next scripted event.

        Idles outside a level, while stunned on the dig board (so no scripted
        action is lost to the stun) and once the script is exhausted.
        """
        if snapshot.level is None or self.is_exhausted():
            return None
        if snapshot.stage == STAGE_DIG and snapshot.level.is_stunned(self.n):
            return None

        word = self.actions[self.action_index]
        self.action_index += 1
        return parse_action_word(self.n, word)

    def is_exhausted(self) -> bool:
        return self.action_index >= len(self.actions)
