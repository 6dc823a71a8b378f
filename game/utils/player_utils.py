"""Utilities for working with player ids and display names."""

from game.constants import PLAYERS


def format_player_name(player_num: int, player_name: str | None = None) -> str:
    """Format a player display name with optional custom name.

    Args:
        player_num: Player id (1 or 2)
        player_name: Optional custom player name

    Returns:
        Formatted string like "Player 1" or "Player 1 (Alice)"

    Examples:
        >>> format_player_name(2)
        'Player 2'
        >>> format_player_name(1, "Steve")
        'Player 1 (Steve)'
    """
    label = f"Player {player_num}"
    return f"{label} ({player_name})" if player_name else label


def is_player(value) -> bool:
    """Return True if ``value`` is one of the two player ids."""
    return value in PLAYERS

