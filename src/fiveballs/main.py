"""Entry point for the Five Balls game.

Sets up the ECS world, event bus, systems, and Arcade window.
"""
import logging

from arcade import Window, run, set_background_color, color, key
from fiveballs.world import create_world
from fiveballs.constants import WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
from fiveballs.events.bus import EventBus, EVENT_MOUSE_PRESS
from fiveballs.systems.game_session import GameSessionSystem
from fiveballs.systems.input import InputSystem
from fiveballs.systems.render import RenderSystem


class FiveBallsWindow(Window):
    def __init__(self):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, WINDOW_TITLE, resizable=True)
        set_background_color(color.DARK_SLATE_GRAY)
        self.new_game()

    def new_game(self):
        # A finished session is never reset; a new game gets a fresh world and bus.
        self.event_bus = EventBus()
        self.world = create_world()
        self.render_system = RenderSystem(self.world, self.event_bus, self)
        self.input_system = InputSystem(self.event_bus, self, self.world)
        self.session = GameSessionSystem(self.world, self.event_bus)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == key.N:
            self.new_game()


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    FiveBallsWindow()
    run()

if __name__ == "__main__":
    main()
