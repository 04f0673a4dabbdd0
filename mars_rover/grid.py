from __future__ import annotations

from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple
import json

import numpy as np


Cell = Tuple[int, int]


class Grid:
    """Bounded 2D cell grid with point obstacles.

    Coordinates are integer cells with origin at the bottom-left:
    - x increases to the right
    - y increases upward

    The grid is immutable after construction and may be shared read-only
    between any number of rovers.

    Parameters
    ----------
    width : int
        Number of columns, must be positive.
    height : int
        Number of rows, must be positive.
    obstacles : iterable of (int, int)
        Occupied cells. Duplicates collapse. Cells outside the bounds are
        accepted and are simply never reachable from inside the grid.
    """

    def __init__(
        self,
        width: int,
        height: int,
        obstacles: Optional[Iterable[Cell]] = None,
    ) -> None:
        if isinstance(width, bool) or not isinstance(width, int) or width <= 0:
            raise ValueError(f"Grid width must be a positive integer, got {width!r}")
        if isinstance(height, bool) or not isinstance(height, int) or height <= 0:
            raise ValueError(f"Grid height must be a positive integer, got {height!r}")
        self._width = width
        self._height = height
        self._obstacles: FrozenSet[Cell] = frozenset(
            (int(x), int(y)) for x, y in (obstacles or ())
        )

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def obstacles(self) -> FrozenSet[Cell]:
        return self._obstacles

    def __repr__(self) -> str:
        return f"Grid(width={self._width}, height={self._height}, obstacles={sorted(self._obstacles)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self._width, self._height, self._obstacles) == (
            other._width,
            other._height,
            other._obstacles,
        )

    def __hash__(self) -> int:
        return hash((self._width, self._height, self._obstacles))

    # ------------------------------------------------------------------
    # Map loading
    # ------------------------------------------------------------------
    @classmethod
    def from_map_dict(cls, data: Dict[str, Any]) -> "Grid":
        """Create a grid from a dict with width, height and obstacle cells.

        Obstacles may be given either as ``{"x": 1, "y": 2}`` objects or as
        ``[1, 2]`` pairs.
        """
        obstacles = []
        for o in data.get("obstacles", []):
            if isinstance(o, dict):
                obstacles.append((int(o["x"]), int(o["y"])))
            else:
                x, y = o
                obstacles.append((int(x), int(y)))
        return cls(width=int(data["width"]), height=int(data["height"]), obstacles=obstacles)

    @classmethod
    def from_map_file(cls, path: str) -> "Grid":
        """Create a grid from a JSON map file."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_map_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize grid description to a Python dict."""
        return {
            "width": self._width,
            "height": self._height,
            "obstacles": [{"x": x, "y": y} for x, y in sorted(self._obstacles)],
        }

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def has_obstacle(self, x: int, y: int) -> bool:
        """Return True if cell (x, y) is occupied."""
        return (x, y) in self._obstacles

    def is_within_bounds(self, x: int, y: int) -> bool:
        """Return True if 0 <= x < width and 0 <= y < height."""
        return 0 <= x < self._width and 0 <= y < self._height

    def occupancy(self) -> np.ndarray:
        """Occupancy map of shape (height, width), indexed as [y, x].

        Obstacles outside the bounds are left out.
        """
        grid = np.zeros((self._height, self._width), dtype=np.uint8)
        for x, y in self._obstacles:
            if self.is_within_bounds(x, y):
                grid[y, x] = 1
        return grid
