from dataclasses import dataclass

@dataclass(slots=True)
class Board:
    """Square board of ``size`` x ``size`` cells.

    Balls live on their own entities (Ball + BoardPosition); an empty cell has no entity.
    ``next_ball_id`` is the last id handed out, so ids start at 1 and only grow.
    """
    size: int
    next_ball_id: int = 0

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError(f"Board size must be at least 1, got {self.size}")

    def allocate_ball_id(self) -> int:
        self.next_ball_id += 1
        return self.next_ball_id
