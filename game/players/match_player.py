from __future__ import annotations

import queue

from shared.input_events import InputEvent
from shared.render_data import MatchSnapshot


class MatchPlayer:
    """Base player with shared state and lifecycle hooks."""

    def __init__(self, n, name: str | None = None):
        self.n = n
        self.name = name or f"Player {n}"

    def get_event(self, snapshot: MatchSnapshot) -> InputEvent | None:
        """Return the next input event, or None to stay idle this step."""
        raise NotImplementedError

    #
    # Lifecycle hooks
    #
    def on_stage_start(self, stage: str) -> None:
        """Inform the player that a new level has started."""
        return None

    def on_match_end(self) -> None:
        return None


class HumanPlayer(MatchPlayer):
    """Player fed by the presentation layer through ``submit``."""

    def __init__(self, n, name: str | None = None):
        super().__init__(n, name)
        self._event_queue: queue.Queue = queue.Queue()

    def submit(self, event: InputEvent) -> None:
        self._event_queue.put(event)

    def get_event(self, snapshot: MatchSnapshot) -> InputEvent | None:
        try:
            return self._event_queue.get_nowait()
        except queue.Empty:
            return None

    def cancel_pending_events(self) -> None:
        try:
            while True:
                self._event_queue.get_nowait()
        except queue.Empty:
            pass

    def pending_actions_empty(self) -> bool:
        return self._event_queue.empty()

    def on_match_end(self) -> None:
        self.cancel_pending_events()
