from pathlib import Path

NUM_COLUMNS = 9
NUM_ROWS = 9
# Playable levels, excluding the Level_0 tutorial board.
NUM_LEVELS = 4

# Chain scoring: BASE_CHAIN_SCORE per cookie beyond the first two, times the combo multiplier.
BASE_CHAIN_SCORE = 60
MIN_CHAIN_LENGTH = 3

# Upper bound on board regenerations while searching for a layout with a legal swap.
MAX_SHUFFLE_ATTEMPTS = 1000

LEVELS_DIR = Path(__file__).resolve().parent / "levels"
