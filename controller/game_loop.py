"""Fixed-step driver for the level duel.

Every step polls the controller for input, advances the simulated clock by
``step_ms`` and fires the timer jobs that became due (the dig level's stun
countdown). Time only moves when a step runs, so headless matches replay
identically for the same seed and player configuration.
"""

from __future__ import annotations

import logging

from controller.interval_scheduler import IntervalScheduler
from shared.interfaces import IRenderer

logger = logging.getLogger(__name__)


class GameLoop:
    """Runs controller steps on a simulated clock with a per-match step budget.

    Args:
        controller: Object exposing ``update_game()`` and ``after_step()``,
            both returning False once the run is over
        step_ms: Simulated milliseconds per step
        max_steps: Steps allowed per match (None = unlimited)
    """

    def __init__(self, controller, step_ms: float, max_steps: int | None = None) -> None:
        if step_ms <= 0:
            raise ValueError(f"step_ms must be positive, got {step_ms}")
        self._controller = controller
        self.step_ms = step_ms
        self.max_steps = max_steps
        self.sim_time_ms = 0.0
        self.match_steps = 0
        self.scheduler = IntervalScheduler(clock=self.now)

    def now(self) -> float:
        return self.sim_time_ms

    def begin_match(self) -> None:
        self.match_steps = 0

    def step_limit_reached(self) -> bool:
        return self.max_steps is not None and self.match_steps >= self.max_steps

    def run(self, renderer: IRenderer | None = None) -> None:
        """Step until the controller reports the run is over.

        A renderer with its own event loop may take over the stepping; it then
        calls ``step`` every ``step_ms`` of wall time until it returns False.
        """
        if renderer is not None and renderer.attach_update_loop(self.step, self.step_ms / 1000.0):
            renderer.run()
            return

        while self.step():
            pass

    def step(self) -> bool:
        """Run one step. Returns False once the controller has finished."""
        if not self._controller.update_game():
            return False

        self.sim_time_ms += self.step_ms
        fired = self.scheduler.run_pending()
        if fired:
            logger.debug("t=%sms: fired %d timer job(s)", self.sim_time_ms, fired)
        self.match_steps += 1
        return self._controller.after_step()
