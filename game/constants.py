"""Game constants shared across modules.

This module contains player ids, cell codes, level thresholds and match stage
names used by the level rules, the orchestrator and the presentation layer.
"""

# Player ids
PLAYER_1 = 1
PLAYER_2 = 2
PLAYERS = (PLAYER_1, PLAYER_2)

# Static map cell codes (maze and portal levels)
FLOOR = 0
WALL = 1
KEY_RED = 2
KEY_BLUE = 3
KEY_YELLOW = 4
START = 8
EXIT = 9  # Maze exit and portal goal share the code
GOAL = EXIT
PORTAL_BLUE_A = 10
PORTAL_BLUE_B = 11
PORTAL_ORANGE_A = 20
PORTAL_ORANGE_B = 21

KEY_CODES = (KEY_RED, KEY_BLUE, KEY_YELLOW)
PORTAL_CODES = (PORTAL_BLUE_A, PORTAL_BLUE_B, PORTAL_ORANGE_A, PORTAL_ORANGE_B)
PORTAL_PAIRS = ((PORTAL_BLUE_A, PORTAL_BLUE_B), (PORTAL_ORANGE_A, PORTAL_ORANGE_B))

# Maze rules
MAZE_SIZE = 11
REQUIRED_KEY_COUNT = 3

# Portal rules
PORTAL_SIZE = 9

# Dig board cell types
DIG_EMPTY = 0
DIG_GEM = 1
DIG_TNT = 2
DIG_CELL_NAMES = {DIG_EMPTY: "empty", DIG_GEM: "gem", DIG_TNT: "tnt"}

# Dig board rules
DIG_WIDTH = 5
DIG_HEIGHT = 5
DIG_GEM_COUNT = 5
DIG_TNT_COUNT = 7
GEMS_TO_WIN = 3
STUN_DURATION_MS = 2000
STUN_TICK_MS = 100

# Match stages
STAGE_MENU = "menu"
STAGE_MAZE = "maze"
STAGE_PORTAL = "portal"
STAGE_DIG = "dig"
STAGE_FINAL = "final"
LEVEL_SEQUENCE = (STAGE_MAZE, STAGE_PORTAL, STAGE_DIG)

STAGE_TITLES = {
    STAGE_MENU: "MENU",
    STAGE_MAZE: "1. LABYRINTH",
    STAGE_PORTAL: "2. PORTAL",
    STAGE_DIG: "3. TNT FIELD",
    STAGE_FINAL: "GAME OVER",
}
