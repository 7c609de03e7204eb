from __future__ import annotations

from typing import Iterable, Sequence, Tuple

from esper import World

from fiveballs.events.bus import EventBus
from fiveballs.systems.board_ops import place_ball


class FirstChoice:
    """Deterministic stand-in for random.Random: always picks the first candidate.

    Empty cells are offered in row-major order, so balls land on the first free cell.
    """

    def choice(self, seq: Sequence):
        return seq[0]


class EventCapture:
    """Records every payload emitted for one event name."""

    def __init__(self, bus: EventBus, name: str):
        self.received: list[dict] = []
        bus.subscribe(name, self.on_event)

    def on_event(self, sender, **payload):
        self.received.append(payload)

    def __len__(self) -> int:
        return len(self.received)

    @property
    def last(self) -> dict:
        return self.received[-1]


def place_balls(world: World, positions: Iterable[Tuple[int, int]], color: str) -> list[int]:
    """Place one ``color`` ball on each position and return their ids."""
    return [place_ball(world, row, col, color).id for row, col in positions]
