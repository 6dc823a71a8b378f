"""Match controller for the level duel.

Manages player input, renderer updates, match logging and the sequence of
matches. The fixed-step clock and the timer jobs it drives live in
``GameLoop``.
"""

from __future__ import annotations

import statistics
import time

from controller.game_loop import GameLoop
from controller.match_logger import MatchLogger
from controller.match_session import MatchSession
from game.constants import PLAYER_1, PLAYER_2, STAGE_TITLES
from game.player_config import PlayerConfig
from game.utils.player_utils import format_player_name
from shared.interfaces import IRenderer, IRendererFactory

STEP_LIMIT_REASON = "step limit"


class MatchController:
    """Runs one or more matches between two configured players.

    Every step polls both players once and dispatches their events to the
    active level; the game loop then advances the simulated clock and fires
    due timer jobs before ``after_step`` renders and checks for the match end.
    """

    def __init__(
        self,
        seed=None,
        log_to_file: str | None = None,
        log_to_screen=False,
        log_results_to_file: str | None = None,
        log_results_to_screen=False,
        max_matches=1,
        max_steps=20000,
        step_ms=100,
        renderer_or_factory: IRenderer | IRendererFactory | None = None,
        track_statistics=False,
        player1_config: PlayerConfig | None = None,
        player2_config: PlayerConfig | None = None,
    ):
        self.max_matches = max_matches  # Completed plus aborted; None means play indefinitely

        # Statistics tracking
        self.track_statistics = track_statistics
        self.match_stats = []  # Wall-clock seconds per completed match
        self.step_stats = []  # Steps per completed match
        self.win_loss_stats = {PLAYER_1: 0, PLAYER_2: 0, None: 0}
        self.aborted_matches = 0
        self.current_match_start_time = None
        self.total_start_time = None

        self._match_ending_processed = False
        self.renderer = None

        self._game_loop = GameLoop(self, step_ms, max_steps)
        self.scheduler = self._game_loop.scheduler
        self.session = MatchSession(
            seed=seed,
            scheduler=self.scheduler,
            status_reporter=print,
            player1_config=player1_config,
            player2_config=player2_config,
        )

        self.logger = MatchLogger(
            session=self.session,
            transcript_dir=log_to_file,
            results_dir=log_results_to_file,
            log_to_screen=log_to_screen,
            log_results_to_screen=log_results_to_screen,
        )

        if isinstance(renderer_or_factory, IRenderer):
            self.renderer = renderer_or_factory
        elif isinstance(renderer_or_factory, IRendererFactory):
            self.renderer = renderer_or_factory(self)
        elif renderer_or_factory is not None:
            raise TypeError(
                "renderer_or_factory must be an IRenderer, IRendererFactory, or None"
            )

        self.session.set_status_reporter(self._report)

        for filename in self.logger.get_log_filenames():
            self._report(f"Logging to: {filename}")

        if self.track_statistics:
            self.total_start_time = time.time()
        self._start_match()

    @property
    def orchestrator(self):
        return self.session.orchestrator

    @property
    def sim_time_ms(self) -> float:
        return self._game_loop.sim_time_ms

    @property
    def max_steps(self) -> int | None:
        return self._game_loop.max_steps

    @property
    def matches_run(self) -> int:
        return self.session.get_matches_played() + self.aborted_matches

    def run(self):
        self._game_loop.run(self.renderer)

    def _start_match(self):
        """Hook the orchestrator, open logs and leave the menu."""
        self._game_loop.begin_match()
        self._match_ending_processed = False
        self.orchestrator.add_listener(self._on_match_event)
        self.logger.start_log(self.session.get_seed())
        if self.track_statistics:
            self.current_match_start_time = time.time()
        self.orchestrator.start()
        self._render()

    def _reset_match(self):
        self.session.reset_match()
        if self.renderer is not None:
            self.renderer.reset_board()
        self._start_match()

    def _on_match_event(self, event: str, payload: dict) -> None:
        if event == "stage_started":
            for player in self.session.players:
                player.on_stage_start(payload["stage"])
        elif event == "level_won":
            self.logger.log_result(payload["stage"], payload["player"])

    def update_game(self) -> bool:
        """Poll both players and dispatch their events.

        Returns:
            bool: False once the run is over
        """
        if self._game_loop.step_limit_reached() and not self._handle_step_limit():
            return False

        orchestrator = self.orchestrator
        for player in self.session.players:
            event = player.get_event(orchestrator.snapshot())
            if event is None:
                continue
            stage = orchestrator.stage
            if orchestrator.dispatch(event):
                self.logger.log_event(player.n, stage, event.describe())
            if orchestrator.stage != stage:
                # The other player's input belonged to the finished level
                break
        return True

    def after_step(self) -> bool:
        """Render the stepped state and close the match once it is over."""
        self._render()
        if self.orchestrator.is_finished():
            return self._handle_match_ending()
        return True

    def _render(self):
        if self.renderer is not None:
            self.renderer.render(self.orchestrator.snapshot())

    def _next_match(self) -> bool:
        """Start another match unless ``max_matches`` has been reached."""
        if self.max_matches is not None and self.matches_run >= self.max_matches:
            self._report(
                f"Completed {self.session.get_matches_played()} match(es), "
                f"{self.aborted_matches} aborted"
            )
            return False
        self._reset_match()
        return True

    def _handle_step_limit(self) -> bool:
        """Abort a match that did not finish within ``max_steps`` steps.

        The log is closed as aborted (not as a tie) and the match does not
        count as played.
        """
        orchestrator = self.orchestrator
        self._report(f"Step limit reached ({self.max_steps}) in {STAGE_TITLES[orchestrator.stage]}")
        scores = dict(orchestrator.scores)
        orchestrator.reset()
        self.aborted_matches += 1
        for player in self.session.players:
            player.on_match_end()
        self.logger.end_log(scores, None, abort_reason=STEP_LIMIT_REASON)
        return self._next_match()

    def _handle_match_ending(self) -> bool:
        """Handle match ending (report winner, count, next match).

        Idempotent: calling it again for the same match has no additional effect.
        """
        if self._match_ending_processed:
            return False
        self._match_ending_processed = True

        orchestrator = self.orchestrator
        winner = orchestrator.winner
        scores = dict(orchestrator.scores)

        self._report("")
        if winner is None:
            self._report(f"Match ended in a tie ({scores[PLAYER_1]}-{scores[PLAYER_2]})")
        else:
            name = format_player_name(winner, self.session.get_player(winner).name)
            self._report(f"Winner: {name} ({scores[PLAYER_1]}-{scores[PLAYER_2]})")

        if self.track_statistics and self.current_match_start_time is not None:
            self.match_stats.append(time.time() - self.current_match_start_time)
            self.step_stats.append(self._game_loop.match_steps)
            self.win_loss_stats[winner] += 1

        self.session.increment_matches_played()
        for player in self.session.players:
            player.on_match_end()
        self.logger.end_log(scores, winner)
        return self._next_match()

    def _report(self, message: str | None) -> None:
        """Forward status messages to the log writers, or the renderer when none are configured."""
        if message is None:
            return
        text = str(message)
        if self.logger.writers:
            self.logger.log_comment(text)
        elif self.renderer is not None:
            self.renderer.report_status(text)

    def print_statistics(self) -> None:
        """Print timing and win/loss statistics for all matches played."""
        if not self.track_statistics or not self.match_stats:
            return

        total_time = time.time() - self.total_start_time if self.total_start_time else 0
        total = len(self.match_stats)
        p1_wins = self.win_loss_stats[PLAYER_1]
        p2_wins = self.win_loss_stats[PLAYER_2]
        ties = self.win_loss_stats[None]

        print("\n" + "=" * 60)
        print("STATISTICS")
        print("=" * 60)
        print(f"Matches played: {total}")
        if self.aborted_matches:
            print(f"Matches aborted (step limit): {self.aborted_matches}")
        print()
        print("Win/Loss/Tie:")
        print(f"  Player 1 wins: {p1_wins} ({p1_wins / total * 100:.1f}%)")
        print(f"  Player 2 wins: {p2_wins} ({p2_wins / total * 100:.1f}%)")
        print(f"  Ties: {ties} ({ties / total * 100:.1f}%)")
        print()
        print("Steps:")
        print(f"  Mean steps per match: {statistics.mean(self.step_stats):.1f}")
        print(f"  Min steps: {min(self.step_stats)}")
        print(f"  Max steps: {max(self.step_stats)}")
        print()
        print("Timing:")
        print(f"  Mean time per match: {statistics.mean(self.match_stats):.3f}s")
        print(f"  Total execution time: {total_time:.3f}s")
        print("=" * 60)
