from dataclasses import dataclass

@dataclass(frozen=True, slots=True)
class Ball:
    """A ball on the board. Never mutated; moving it only changes its BoardPosition."""
    id: int
    color: str
