GRID_SIZE = 9
INITIAL_BALLS = 5
UPCOMING_BALLS = 3
MIN_LINE_LENGTH = 5

# Spawnable ball colors, in palette order.
BALL_COLORS = {
    'red':    (220, 40, 40),
    'blue':   (40, 70, 220),
    'yellow': (235, 215, 40),
    'green':  (40, 180, 70),
    'brown':  (150, 75, 0),
}

WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
WINDOW_TITLE = "Five Balls"

BOTTOM_MARGIN = 20

# Board footprint relative to window; the remaining space above holds the score and preview bar.
BOARD_MAX_WIDTH_PCT = 0.90
BOARD_MAX_HEIGHT_PCT = 0.80
# Height reserved above the board for the score / upcoming balls bar.
HUD_HEIGHT = 64
# Ball radius as a fraction of half the tile size.
BALL_RADIUS_FACTOR = 0.8
MIN_TILE_SIZE = 20
