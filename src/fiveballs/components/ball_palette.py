from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

@dataclass(slots=True)
class BallPalette:
    """Canonical ball colors stored on a single entity.

    ``colors`` maps a color name to the RGB used for drawing; ``spawnable`` is the
    ordered subset that random placement may pick from.
    """
    colors: Dict[str, Tuple[int, int, int]]
    spawnable: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.colors:
            raise ValueError("BallPalette needs at least one color")
        self.set_spawnable(self.spawnable or self.colors.keys())

    def rgb_for(self, color: str) -> Tuple[int, int, int]:
        return self.colors[color]

    def spawnable_colors(self) -> List[str]:
        return list(self.spawnable)

    def set_spawnable(self, names: Iterable[str]) -> None:
        # Preserve order while filtering unknown and duplicate names.
        seen: set[str] = set()
        filtered: List[str] = []
        for name in names:
            if name in self.colors and name not in seen:
                filtered.append(name)
                seen.add(name)
        self.spawnable = filtered or list(self.colors.keys())
