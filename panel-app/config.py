"""
Matrix Panel - Configuration
"""

# Logical grid (glyph rows + one margin row above and below)
GRID_COLS       = 100
GRID_ROW_MARGIN = 2

# Cell sizing
MIN_CELL_SIZE     = 2.0
MAX_CELL_SIZE     = 36.0
DEFAULT_CELL_SIZE = 12.0    # used for the size hint only
MAX_HEIGHT_USAGE  = 0.95    # fraction of the surface height the grid may fill
PIXEL_DIAMETER    = 0.8     # lit dot diameter as a fraction of the cell

# Animation timing (milliseconds)
BASE_SCROLL_INTERVAL_MS = 50
CLOCK_INTERVAL_MS       = 1000
MAX_CATCH_UP_TICKS      = 5     # ticks fired per advance() at most

# Scroll speed levels (higher = faster)
SPEED_MIN     = 1
SPEED_MAX     = 5
SPEED_DEFAULT = 2

# Colours
PIXEL_COLOR      = (0, 255, 0)
BACKGROUND_COLOR = (40, 40, 40)
BEZEL_COLOR      = (0, 0, 0)

# Host window
WINDOW_W  = 900
WINDOW_H  = 220
FRAME_RATE = 60
DEFAULT_TEXT = "HELLO WORLD!"

# Palettes cycled by the host in place of colour dialogs
PIXEL_PALETTE = [
    (0, 255, 0),
    (255, 60, 40),
    (255, 176, 0),
    (56, 189, 248),
    (255, 255, 255),
]
BACKGROUND_PALETTE = [
    (40, 40, 40),
    (15, 23, 42),
    (30, 10, 10),
    (0, 0, 0),
]
