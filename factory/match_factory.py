"""Factory helpers for constructing match components."""

from __future__ import annotations

from typing import TextIO

from controller.match_controller import MatchController
from game.player_config import PlayerConfig
from renderer.text_renderer import TextRenderer
from shared.interfaces import IRenderer


class MatchFactory:
    """Centralised factory for assembling MatchController instances."""

    def __init__(self, text_stream: TextIO | None = None):
        self._text_stream = text_stream

    def create_controller(
        self,
        *,
        seed: int | None = None,
        log_to_file: str | None = None,
        log_to_screen: bool = False,
        log_results_to_file: str | None = None,
        log_results_to_screen: bool = False,
        headless: bool = False,
        render_every_step: bool = False,
        max_matches: int | None = 1,
        max_steps: int | None = 20000,
        step_ms: int = 100,
        track_statistics: bool = False,
        player1_config: PlayerConfig | None = None,
        player2_config: PlayerConfig | None = None,
    ) -> MatchController:
        """Create a fully-wired MatchController with the text renderer unless headless."""

        def renderer_factory(controller: MatchController) -> IRenderer | None:
            if headless:
                return None
            return TextRenderer(stream=self._text_stream, render_every_step=render_every_step)

        return MatchController(
            seed=seed,
            log_to_file=log_to_file,
            log_to_screen=log_to_screen,
            log_results_to_file=log_results_to_file,
            log_results_to_screen=log_results_to_screen,
            max_matches=max_matches,
            max_steps=max_steps,
            step_ms=step_ms,
            renderer_or_factory=renderer_factory,
            track_statistics=track_statistics,
            player1_config=player1_config,
            player2_config=player2_config,
        )
