from dataclasses import dataclass, field
from typing import List

@dataclass(slots=True)
class UpcomingBalls:
    """Preview of the colors that will be dropped after the next move that forms no line."""
    size: int = 3
    colors: List[str] = field(default_factory=list)
