from fiveballs.events.bus import (
    EventBus,
    EVENT_MOUSE_PRESS,
    EVENT_SELECTION_CLEAR_REQUEST,
    EVENT_TILE_CLICK,
)
from fiveballs.systems.board_ops import board_size
from fiveballs.ui.layout import cell_at_point

# Arcade button codes.
MOUSE_BUTTON_LEFT = 1
MOUSE_BUTTON_RIGHT = 4


class InputSystem:
    """Translates raw mouse presses into board clicks.

    Left click on a cell emits EVENT_TILE_CLICK; left click outside the board or
    any right click asks the session to drop its selection.
    """
    def __init__(self, event_bus: EventBus, window, world):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None:
            return
        if button == MOUSE_BUTTON_RIGHT:
            self.event_bus.emit(EVENT_SELECTION_CLEAR_REQUEST, reason='right_click')
            return
        if button != MOUSE_BUTTON_LEFT:
            return
        cell = cell_at_point(x, y, self.window.width, self.window.height, board_size(self.world))
        if cell is None:
            self.event_bus.emit(EVENT_SELECTION_CLEAR_REQUEST, reason='outside_board')
            return
        row, col = cell
        self.event_bus.emit(EVENT_TILE_CLICK, row=row, col=col)
