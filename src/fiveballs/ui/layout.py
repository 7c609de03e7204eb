from typing import Optional, Tuple

from fiveballs.constants import (
    BOARD_MAX_HEIGHT_PCT, BOARD_MAX_WIDTH_PCT, BOTTOM_MARGIN, HUD_HEIGHT, MIN_TILE_SIZE,
)


def compute_board_geometry(window_width: int, window_height: int, size: int):
    """Return (tile_size, start_x, start_y) for a ``size`` x ``size`` board.

    start_x/start_y is the bottom-left corner of the board in window pixels. Used
    by both RenderSystem and InputSystem so clicks map to what is drawn.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - HUD_HEIGHT) * BOARD_MAX_HEIGHT_PCT
    tile_size = int(min(max_board_w / size, max_board_h / size))
    if tile_size < MIN_TILE_SIZE:
        tile_size = MIN_TILE_SIZE
    total_width = size * tile_size
    start_x = (window_width - total_width) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def cell_at_point(x: float, y: float, window_width: int, window_height: int, size: int) -> Optional[Tuple[int, int]]:
    """Map a window point to (row, col), or None when it misses the board.

    Row 0 is the top row on screen while window y grows upwards.
    """
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, size)
    extent = size * tile_size
    if x < start_x or x >= start_x + extent:
        return None
    if y < start_y or y >= start_y + extent:
        return None
    col = int((x - start_x) // tile_size)
    row = size - 1 - int((y - start_y) // tile_size)
    if 0 <= row < size and 0 <= col < size:
        return row, col
    return None


def cell_center(row: int, col: int, window_width: int, window_height: int, size: int) -> Tuple[float, float]:
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, size)
    x = start_x + col * tile_size + tile_size / 2
    y = start_y + (size - 1 - row) * tile_size + tile_size / 2
    return x, y
