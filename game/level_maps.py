"""Static level maps for the maze and portal levels.

Cell codes (see game.constants):
    0 floor, 1 wall, 2/3/4 red/blue/yellow key, 8 start, 9 exit/goal,
    10/11 blue portal A/B, 20/21 orange portal A/B

Maps are stored as nested lists and validated into read-only arrays when a
level is constructed.
"""

from game.constants import PLAYER_1, PLAYER_2

MAZE_MAP = [
    [1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1],
    [1, 0, 0, 0, 1, 0, 2, 0, 0, 0, 1],
    [1, 0, 1, 0, 1, 0, 1, 1, 1, 0, 1],
    [1, 0, 1, 0, 0, 0, 0, 0, 1, 0, 1],
    [1, 0, 1, 1, 1, 1, 1, 0, 1, 0, 1],
    [1, 3, 0, 0, 0, 0, 0, 0, 0, 4, 1],
    [1, 1, 1, 0, 1, 1, 1, 1, 1, 0, 1],
    [1, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1],
    [1, 0, 1, 1, 1, 0, 1, 0, 1, 0, 1],
    [1, 0, 0, 0, 0, 0, 1, 0, 0, 9, 1],
    [1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1],
]

# P2 starts in the lower left corner
MAZE_STARTS = {
    PLAYER_1: (1, 1),
    PLAYER_2: (1, 9),
}

# Intended route: blue A (1,3) → blue B (7,1) → orange A (7,3)
# → orange B (1,5) → goal (1,7)
PORTAL_MAP = [
    [1, 1, 1, 1, 1, 1, 1, 1, 1],
    [1, 8, 0, 0, 1, 0, 0, 11, 1],
    [1, 1, 1, 0, 1, 0, 1, 1, 1],
    [1, 10, 0, 0, 0, 0, 0, 20, 1],
    [1, 1, 1, 1, 1, 1, 1, 0, 1],
    [1, 21, 0, 0, 0, 0, 1, 0, 1],
    [1, 1, 1, 1, 1, 0, 1, 0, 1],
    [1, 9, 0, 0, 0, 0, 0, 0, 1],
    [1, 1, 1, 1, 1, 1, 1, 1, 1],
]

PORTAL_STARTS = {
    PLAYER_1: (1, 1),
    PLAYER_2: (1, 1),
}
