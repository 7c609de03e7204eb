"""Game state resource describing the session's score, selection and turn phase."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple


class TurnPhase(Enum):
    """Move state machine phases."""
    IDLE = auto()
    SELECTED = auto()
    GAME_OVER = auto()


@dataclass
class GameState:
    """Singleton component storing the session's score, selection and game-over flag."""
    score: int = 0
    selected: Optional[Tuple[int, int]] = None
    game_over: bool = False

    @property
    def phase(self) -> TurnPhase:
        if self.game_over:
            return TurnPhase.GAME_OVER
        if self.selected is not None:
            return TurnPhase.SELECTED
        return TurnPhase.IDLE
