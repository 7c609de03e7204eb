from typing import Any, Optional

from esper import World

from fiveballs.components.game_state import GameState
from fiveballs.components.upcoming_balls import UpcomingBalls
from fiveballs.constants import BALL_RADIUS_FACTOR, BOTTOM_MARGIN, HUD_HEIGHT
from fiveballs.events.bus import (
    EventBus,
    EVENT_BALL_DESELECTED,
    EVENT_BALL_SELECTED,
    EVENT_GAME_OVER,
    EVENT_GAME_STARTED,
    EVENT_LINES_CLEARED,
)
from fiveballs.systems.board_ops import ball_color_map, board_size, get_palette
from fiveballs.ui.layout import compute_board_geometry

GRID_LINE_COLOR = (180, 180, 180)
BOARD_BACKGROUND = (242, 242, 242)
SELECTION_FILL = (0, 0, 255, 80)
SELECTION_RING = (25, 25, 25, 180)
TEXT_COLOR = (255, 255, 255)


class RenderSystem:
    """Draws the board, selection, score and upcoming preview.

    ``build_layout`` computes everything that gets drawn and is safe to call
    without a window; ``process`` performs the arcade draw calls.
    """
    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_BALL_SELECTED, self.on_ball_selected)
        self.event_bus.subscribe(EVENT_BALL_DESELECTED, self.on_ball_deselected)
        self.event_bus.subscribe(EVENT_LINES_CLEARED, self.on_lines_cleared)
        self.event_bus.subscribe(EVENT_GAME_OVER, self.on_game_over)
        self.event_bus.subscribe(EVENT_GAME_STARTED, self.on_game_started)
        self.selected: Optional[tuple[int, int]] = None
        self.last_points = 0
        self.banner: Optional[str] = None
        self._layout_cache: dict[str, Any] = {}

    def on_ball_selected(self, sender, **kwargs):
        self.selected = (kwargs.get('row'), kwargs.get('col'))

    def on_ball_deselected(self, sender, **kwargs):
        self.selected = None

    def on_lines_cleared(self, sender, **kwargs):
        self.last_points = kwargs.get('points', 0)

    def on_game_over(self, sender, **kwargs):
        self.selected = None
        self.banner = f"Game Over! The board is full. Final score: {kwargs.get('score', 0)}"

    def on_game_started(self, sender, **kwargs):
        self.selected = None
        self.last_points = 0
        self.banner = None

    def _state(self) -> Optional[GameState]:
        for _, state in self.world.get_component(GameState):
            return state
        return None

    def _upcoming(self) -> list[str]:
        for _, upcoming in self.world.get_component(UpcomingBalls):
            return list(upcoming.colors)
        return []

    def build_layout(self) -> dict[str, Any]:
        size = board_size(self.world)
        palette = get_palette(self.world)
        tile_size, start_x, start_y = compute_board_geometry(self.window.width, self.window.height, size)
        radius = tile_size / 2 * BALL_RADIUS_FACTOR
        balls = []
        for (row, col), color in sorted(ball_color_map(self.world).items()):
            balls.append({
                'row': row,
                'col': col,
                'x': start_x + col * tile_size + tile_size / 2,
                'y': start_y + (size - 1 - row) * tile_size + tile_size / 2,
                'radius': radius,
                'rgb': palette.rgb_for(color),
                'selected': (row, col) == self.selected,
            })
        hud_y = start_y + size * tile_size + (HUD_HEIGHT - BOTTOM_MARGIN) / 2
        preview_radius = min(radius, (HUD_HEIGHT - BOTTOM_MARGIN) / 2)
        preview = []
        for index, color in enumerate(self._upcoming()):
            preview.append({
                'x': start_x + size * tile_size - (index + 0.5) * preview_radius * 2.5,
                'y': hud_y,
                'radius': preview_radius,
                'rgb': palette.rgb_for(color),
            })
        state = self._state()
        self._layout_cache = {
            'size': size,
            'tile_size': tile_size,
            'left': start_x,
            'bottom': start_y,
            'right': start_x + size * tile_size,
            'top': start_y + size * tile_size,
            'balls': balls,
            'preview': preview,
            'score_text': f"Score: {state.score if state else 0}",
            'score_pos': (start_x, hud_y),
            'banner': self.banner,
        }
        return self._layout_cache

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        layout = self.build_layout()
        try:
            arcade.get_window()
        except Exception:
            return
        left, right, bottom, top = layout['left'], layout['right'], layout['bottom'], layout['top']
        tile_size = layout['tile_size']
        arcade.draw_lrbt_rectangle_filled(left, right, bottom, top, BOARD_BACKGROUND)
        for i in range(layout['size'] + 1):
            offset = i * tile_size
            arcade.draw_line(left + offset, bottom, left + offset, top, GRID_LINE_COLOR, 1)
            arcade.draw_line(left, bottom + offset, right, bottom + offset, GRID_LINE_COLOR, 1)
        for ball in layout['balls']:
            if ball['selected']:
                half = tile_size / 2
                arcade.draw_lrbt_rectangle_filled(
                    ball['x'] - half, ball['x'] + half, ball['y'] - half, ball['y'] + half, SELECTION_FILL
                )
            arcade.draw_circle_filled(ball['x'], ball['y'], ball['radius'], ball['rgb'])
            if ball['selected']:
                arcade.draw_circle_outline(ball['x'], ball['y'], ball['radius'] + 1.5, SELECTION_RING, 2)
        for preview in layout['preview']:
            arcade.draw_circle_filled(preview['x'], preview['y'], preview['radius'], preview['rgb'])
        score_x, score_y = layout['score_pos']
        arcade.draw_text(layout['score_text'], score_x, score_y, TEXT_COLOR, 18, anchor_y="center")
        if layout['banner']:
            arcade.draw_text(
                layout['banner'],
                self.window.width / 2,
                self.window.height / 2,
                arcade.color.RED,
                20,
                anchor_x="center",
                anchor_y="center",
            )
