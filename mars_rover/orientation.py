from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple
import math


class Orientation(Enum):
    """Compass heading of a rover on the grid.

    The grid uses the same convention as the rest of the simulator:
    - x increases to the east (right)
    - y increases to the north (up)
    """

    NORTH = "N"
    EAST = "E"
    SOUTH = "S"
    WEST = "W"

    @property
    def display_name(self) -> str:
        """Full English name used in status lines ("North", "East", ...)."""
        return self.name.capitalize()

    @property
    def yaw(self) -> float:
        """Heading in radians, CCW from +x."""
        return _YAW[self]

    def step(self) -> Tuple[int, int]:
        """Unit displacement (dx, dy) for one forward move."""
        return _STEP[self]

    def left(self) -> "Orientation":
        """Heading after a 90 degree turn counter-clockwise."""
        return _LEFT[self]

    def right(self) -> "Orientation":
        """Heading after a 90 degree turn clockwise."""
        return _RIGHT[self]

    @classmethod
    def from_token(cls, token: str, default: Optional["Orientation"] = None) -> "Orientation":
        """Resolve a one-letter direction token such as "n" or "E".

        Anything else, including full names and empty tokens, resolves to
        ``default`` (North if not given).
        """
        if default is None:
            default = cls.NORTH
        key = token.strip().upper() if token else ""
        for orientation in cls:
            if key == orientation.value:
                return orientation
        return default


_STEP: Dict[Orientation, Tuple[int, int]] = {
    Orientation.NORTH: (0, 1),
    Orientation.SOUTH: (0, -1),
    Orientation.EAST: (1, 0),
    Orientation.WEST: (-1, 0),
}

_LEFT: Dict[Orientation, Orientation] = {
    Orientation.NORTH: Orientation.WEST,
    Orientation.WEST: Orientation.SOUTH,
    Orientation.SOUTH: Orientation.EAST,
    Orientation.EAST: Orientation.NORTH,
}

_RIGHT: Dict[Orientation, Orientation] = {
    before: after for after, before in _LEFT.items()
}

_YAW: Dict[Orientation, float] = {
    Orientation.EAST: 0.0,
    Orientation.NORTH: math.pi / 2.0,
    Orientation.WEST: math.pi,
    Orientation.SOUTH: -math.pi / 2.0,
}
