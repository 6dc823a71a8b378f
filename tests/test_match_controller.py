"""Tests for MatchController, the game loop and the factory wiring."""

import os
import tempfile
from io import StringIO
from unittest.mock import Mock

import pytest

from controller.game_loop import GameLoop
from controller.match_controller import MatchController
from factory.match_factory import MatchFactory
from game.constants import PLAYER_1, PLAYER_2, STAGE_FINAL, STAGE_MENU
from game.player_config import PlayerConfig
from renderer.text_renderer import TextRenderer

from level_routes import MAZE_P1_WIN, PORTAL_WIN, dig_sweep


@pytest.fixture
def temp_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def winning_script():
    return PlayerConfig.scripted(MAZE_P1_WIN + PORTAL_WIN + dig_sweep(), name="Runner")


@pytest.fixture
def idle():
    return PlayerConfig.human()


class TestMatchController:
    def test_scripted_match(self, winning_script, idle):
        controller = MatchController(seed=3, player1_config=winning_script, player2_config=idle)
        controller.run()

        orchestrator = controller.orchestrator
        assert orchestrator.stage == STAGE_FINAL
        assert orchestrator.winner == PLAYER_1
        assert orchestrator.scores == {PLAYER_1: 3, PLAYER_2: 0}
        assert [r.stage for r in orchestrator.results] == ["maze", "portal", "dig"]
        assert controller.session.get_matches_played() == 1

    def test_dig_timer_cancelled_after_match(self, winning_script, idle):
        controller = MatchController(seed=3, player1_config=winning_script, player2_config=idle)
        controller.run()
        assert controller.scheduler.active_count() == 0
        assert controller.sim_time_ms > 0

    def test_step_limit(self, idle, temp_dir):
        controller = MatchController(
            seed=8,
            max_steps=10,
            log_to_file=temp_dir,
            player1_config=idle,
            player2_config=idle,
        )
        controller.run()
        assert controller.orchestrator.stage == STAGE_MENU
        assert controller.session.get_matches_played() == 0
        with open(os.path.join(temp_dir, "matchlog_8.txt")) as f:
            text = f.read()
        assert "# Step limit reached (10) in 1. LABYRINTH" in text
        assert text.endswith("# Final score: 0-0\n# Aborted: step limit\n")
        assert "Winner" not in text
        assert controller.aborted_matches == 1

    def test_step_limit_moves_on_to_next_match(self, idle, temp_dir):
        """An aborted match keeps its score, is not a tie, and the run continues."""
        controller = MatchController(
            seed=5,
            max_steps=len(MAZE_P1_WIN) + 5,
            max_matches=3,
            log_results_to_file=temp_dir,
            player1_config=PlayerConfig.scripted(MAZE_P1_WIN),
            player2_config=idle,
        )
        controller.run()

        assert controller.aborted_matches == 3
        assert controller.session.get_matches_played() == 0
        assert controller.matches_run == 3
        names = os.listdir(temp_dir)
        assert len(names) == 3
        for name in names:
            with open(os.path.join(temp_dir, name)) as f:
                lines = f.read().splitlines()
            assert lines[1:] == ["maze P1", "final aborted 1-0"]
        with open(os.path.join(temp_dir, "matchlog_5_results.txt")) as f:
            assert f.readline() == "match 5\n"

    def test_transcript_records_accepted_events(self, winning_script, idle, temp_dir):
        MatchController(
            seed=3,
            log_to_file=temp_dir,
            log_results_to_file=temp_dir,
            player1_config=winning_script,
            player2_config=idle,
        ).run()
        with open(os.path.join(temp_dir, "matchlog_3.txt")) as f:
            transcript = f.read()
        with open(os.path.join(temp_dir, "matchlog_3_results.txt")) as f:
            results = f.read()
        assert "Player 1 [maze]: move down\n" in transcript
        assert "Player 1 [dig]: dig\n" in transcript
        assert "Player 2 [" not in transcript
        assert results == "match 3\nmaze P1\nportal P1\ndig P1\nfinal P1 3-0\n"

    def test_multiple_matches(self, winning_script, idle, temp_dir):
        controller = MatchController(
            seed=3,
            max_matches=2,
            log_results_to_file=temp_dir,
            player1_config=winning_script,
            player2_config=idle,
        )
        controller.run()
        assert controller.session.get_matches_played() == 2
        assert controller.session.get_seed() != 3
        names = sorted(os.listdir(temp_dir))
        assert len(names) == 2
        assert "matchlog_3_results.txt" in names

    def test_statistics(self, winning_script, idle, capsys):
        controller = MatchController(
            seed=3, track_statistics=True, player1_config=winning_script, player2_config=idle
        )
        controller.run()
        assert controller.win_loss_stats[PLAYER_1] == 1
        assert len(controller.step_stats) == 1
        controller.print_statistics()
        assert "Player 1 wins: 1 (100.0%)" in capsys.readouterr().out

    def test_renderer_instance(self, winning_script, idle):
        stream = StringIO()
        controller = MatchController(
            seed=3,
            renderer_or_factory=TextRenderer(stream=stream),
            player1_config=winning_script,
            player2_config=idle,
        )
        controller.run()
        output = stream.getvalue()
        assert "[1. LABYRINTH]" in output
        assert "[3. TNT FIELD]" in output
        assert "PLAYER 1 WINS!" in output
        assert "Winner: Player 1 (Runner) (3-0)" in output

    def test_invalid_renderer(self, idle):
        with pytest.raises(TypeError):
            MatchController(seed=1, renderer_or_factory=42, player1_config=idle, player2_config=idle)

    def test_invalid_step(self):
        with pytest.raises(ValueError):
            MatchController(seed=1, step_ms=0)


class TestGameLoop:
    @pytest.fixture
    def controller(self):
        controller = Mock()
        controller.after_step.return_value = True
        return controller

    def test_runs_until_controller_stops(self, controller):
        controller.update_game.side_effect = [True, True, False]
        loop = GameLoop(controller, 100)
        loop.run()
        assert controller.update_game.call_count == 3
        assert controller.after_step.call_count == 2
        assert loop.sim_time_ms == 200
        assert loop.match_steps == 2

    def test_after_step_can_stop(self, controller):
        controller.update_game.return_value = True
        controller.after_step.return_value = False
        loop = GameLoop(controller, 100)
        loop.run()
        assert loop.match_steps == 1

    def test_timers_follow_simulated_clock(self, controller):
        controller.update_game.side_effect = [True] * 5 + [False]
        loop = GameLoop(controller, 100)
        fired_at = []
        loop.scheduler.schedule_interval(lambda: fired_at.append(loop.now()), 250)
        loop.run()
        assert fired_at == [300, 500]

    def test_step_budget_per_match(self, controller):
        controller.update_game.return_value = True
        loop = GameLoop(controller, 100, max_steps=2)
        loop.step()
        assert not loop.step_limit_reached()
        loop.step()
        assert loop.step_limit_reached()
        loop.begin_match()
        assert not loop.step_limit_reached()
        assert loop.sim_time_ms == 200

    def test_unlimited_steps(self, controller):
        loop = GameLoop(controller, 100, max_steps=None)
        loop.match_steps = 10**6
        assert not loop.step_limit_reached()

    def test_renderer_owned_loop(self, controller):
        renderer = Mock()
        renderer.attach_update_loop.return_value = True
        loop = GameLoop(controller, 100)
        loop.run(renderer)
        renderer.attach_update_loop.assert_called_once_with(loop.step, 0.1)
        renderer.run.assert_called_once()
        controller.update_game.assert_not_called()

    @pytest.mark.parametrize("step_ms", [0, -100])
    def test_invalid_step(self, controller, step_ms):
        with pytest.raises(ValueError):
            GameLoop(controller, step_ms)

class TestMatchFactory:
    def test_text_renderer_by_default(self, winning_script, idle):
        stream = StringIO()
        controller = MatchFactory(text_stream=stream).create_controller(
            seed=3, player1_config=winning_script, player2_config=idle
        )
        assert isinstance(controller.renderer, TextRenderer)
        controller.run()
        assert "PLAYER 1 WINS!" in stream.getvalue()

    def test_headless(self, idle):
        controller = MatchFactory().create_controller(
            seed=3, headless=True, max_steps=1, player1_config=idle, player2_config=idle
        )
        assert controller.renderer is None
