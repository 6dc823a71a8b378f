"""Controller module for the level duel.

Contains the match orchestrator, session, controller and timer scheduler.
"""

from controller.interval_scheduler import IntervalScheduler
from controller.match_controller import MatchController
from controller.match_orchestrator import MatchOrchestrator, determine_match_winner

__all__ = ["IntervalScheduler", "MatchController", "MatchOrchestrator", "determine_match_winner"]
