from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .grid import Grid
from .orientation import Orientation


@dataclass(frozen=True)
class RoverState:
    """Snapshot of a rover on the grid.

    Attributes
    ----------
    x : int
        Column of the rover cell.
    y : int
        Row of the rover cell.
    orientation : Orientation
        Current heading.
    """

    x: int
    y: int
    orientation: Orientation

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)


class Rover:
    """Directional rover moving one cell at a time on a Grid.

    The rover only reads the grid. By default it may leave the grid bounds
    (only obstacles block a move); with ``enforce_bounds=True`` a cell outside
    the grid blocks the move the same way an obstacle does.
    """

    def __init__(
        self,
        x: int,
        y: int,
        orientation: Orientation,
        grid: Grid,
        enforce_bounds: bool = False,
    ) -> None:
        self.x = x
        self.y = y
        self.orientation = orientation
        self.grid = grid
        self.enforce_bounds = enforce_bounds

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    # ------------------------------------------------------------------
    # Motion
    # ------------------------------------------------------------------
    def is_blocked(self, x: int, y: int) -> bool:
        """Return True if the rover may not enter cell (x, y)."""
        if self.grid.has_obstacle(x, y):
            return True
        return self.enforce_bounds and not self.grid.is_within_bounds(x, y)

    def move_forward(self) -> bool:
        """Advance one cell along the current heading.

        A blocked move leaves the rover where it is. Returns whether the
        rover moved.
        """
        dx, dy = self.orientation.step()
        nx, ny = self.x + dx, self.y + dy
        if self.is_blocked(nx, ny):
            return False
        self.x, self.y = nx, ny
        return True

    def turn_left(self) -> None:
        self.orientation = self.orientation.left()

    def turn_right(self) -> None:
        self.orientation = self.orientation.right()

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------
    def status(self) -> str:
        return f"Rover is at ({self.x}, {self.y}) facing {self.orientation.display_name}."

    def get_state(self) -> RoverState:
        """Return an immutable snapshot of the current state."""
        return RoverState(x=self.x, y=self.y, orientation=self.orientation)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize current rover state to a dict for logging/telemetry."""
        return {
            "x": self.x,
            "y": self.y,
            "orientation": self.orientation.display_name,
        }
