"""Players."""

from .match_player import HumanPlayer, MatchPlayer
from .random_player import RandomPlayer
from .scripted_player import ScriptedPlayer

__all__ = ["MatchPlayer", "HumanPlayer", "RandomPlayer", "ScriptedPlayer"]
