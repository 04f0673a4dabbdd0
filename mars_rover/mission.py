"""
Mission input: turns raw text or config values into a validated record.

A mission bundles everything needed to run one simulation: grid size,
obstacle cells, start pose and the command string. Text formats follow the
interactive prompts of the command-line tool:

- grid size:  "5,5"
- start pose: "0,0,N"   (direction is optional; unknown letters mean North)
- obstacles:  "2,2;3,5" (blank means none)
- commands:   "MMRMM"   (unknown characters are dropped)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .commands import Command, parse_commands
from .grid import Cell, Grid
from .orientation import Orientation
from .rover import Rover
from .simulation import Simulation
from telemetry.logger import TelemetryLogger


class MissionError(ValueError):
    """Raised when mission input cannot be turned into valid values."""


def _to_int(value: Any, what: str) -> int:
    if isinstance(value, bool):
        raise MissionError(f"Invalid {what}: {value!r}")
    if isinstance(value, int):
        return value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        raise MissionError(f"Invalid {what}: {value!r} is not an integer") from None


def _split(text: str, sep: str) -> List[str]:
    return [part.strip() for part in text.split(sep)]


# ---------------------------------------------------------------------------
# Text parsing
# ---------------------------------------------------------------------------


def parse_grid_size(text: str) -> Tuple[int, int]:
    """Parse "width,height" into positive integers."""
    parts = _split(text, ",")
    if len(parts) != 2:
        raise MissionError(f"Grid size must be 'width,height', got {text!r}")
    width = _to_int(parts[0], "grid width")
    height = _to_int(parts[1], "grid height")
    if width <= 0 or height <= 0:
        raise MissionError(f"Grid size must be positive, got {width}x{height}")
    return width, height


def parse_start(text: str) -> Tuple[int, int, Orientation]:
    """Parse "x,y[,direction]" into a start pose."""
    parts = _split(text, ",")
    if len(parts) not in (2, 3):
        raise MissionError(f"Start position must be 'x,y,direction', got {text!r}")
    x = _to_int(parts[0], "start x")
    y = _to_int(parts[1], "start y")
    direction = parts[2] if len(parts) == 3 else ""
    return x, y, Orientation.from_token(direction)


def parse_obstacles(text: str) -> List[Cell]:
    """Parse "x,y;x,y;..." into obstacle cells."""
    obstacles: List[Cell] = []
    for pair in _split(text or "", ";"):
        if not pair:
            continue
        parts = _split(pair, ",")
        if len(parts) != 2:
            raise MissionError(f"Obstacle must be 'x,y', got {pair!r}")
        obstacles.append((_to_int(parts[0], "obstacle x"), _to_int(parts[1], "obstacle y")))
    return obstacles


# ---------------------------------------------------------------------------
# Mission record
# ---------------------------------------------------------------------------


@dataclass
class MissionInput:
    """Validated inputs for one simulation run."""

    width: int
    height: int
    x: int
    y: int
    orientation: Orientation = Orientation.NORTH
    obstacles: List[Cell] = field(default_factory=list)
    commands: List[Command] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise MissionError(f"Grid size must be positive, got {self.width}x{self.height}")

    @classmethod
    def from_strings(
        cls,
        grid: str,
        start: str,
        obstacles: str = "",
        commands: str = "",
    ) -> "MissionInput":
        """Build a mission from the four prompt answers."""
        width, height = parse_grid_size(grid)
        x, y, orientation = parse_start(start)
        return cls(
            width=width,
            height=height,
            x=x,
            y=y,
            orientation=orientation,
            obstacles=parse_obstacles(obstacles),
            commands=parse_commands(commands),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MissionInput":
        """Build a mission from a config mapping.

        Each field accepts either the prompt string form or a list form, e.g.
        ``grid: [5, 5]``, ``start: [0, 0, N]``, ``obstacles: [[2, 2]]``.
        ``map`` names a JSON map file that supplies the grid size and base
        obstacles; listed ``obstacles`` are added on top.
        """
        if not isinstance(data, dict):
            raise MissionError(f"Mission must be a mapping, got {data!r}")
        if "start" not in data:
            raise MissionError("Mission is missing 'start'")

        map_obstacles: List[Cell] = []
        if data.get("map"):
            try:
                map_grid = Grid.from_map_file(data["map"])
            except (OSError, KeyError, ValueError, TypeError, AttributeError) as exc:
                raise MissionError(f"Cannot load map {data['map']!r}: {exc}") from exc
            width, height = map_grid.width, map_grid.height
            map_obstacles = sorted(map_grid.obstacles)
        elif "grid" in data:
            grid = data["grid"]
            if isinstance(grid, str):
                width, height = parse_grid_size(grid)
            else:
                width, height = _pair(grid, "grid size")
        else:
            raise MissionError("Mission needs either 'grid' or 'map'")

        start = data["start"]
        if isinstance(start, str):
            x, y, orientation = parse_start(start)
        else:
            x, y, orientation = _pose(start)

        raw_obstacles = data.get("obstacles") or []
        if isinstance(raw_obstacles, str):
            obstacles = parse_obstacles(raw_obstacles)
        elif isinstance(raw_obstacles, (list, tuple)):
            obstacles = [_pair(o, "obstacle") for o in raw_obstacles]
        else:
            raise MissionError(f"Invalid obstacles: {raw_obstacles!r}")
        obstacles = map_obstacles + obstacles

        raw_commands = data.get("commands") or ""
        if isinstance(raw_commands, (list, tuple)):
            raw_commands = "".join(str(c) for c in raw_commands)
        elif not isinstance(raw_commands, str):
            raise MissionError(f"Invalid commands: {raw_commands!r}")

        return cls(
            width=width,
            height=height,
            x=x,
            y=y,
            orientation=orientation,
            obstacles=obstacles,
            commands=parse_commands(raw_commands),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "grid": [self.width, self.height],
            "start": [self.x, self.y, self.orientation.value],
            "obstacles": [[x, y] for x, y in self.obstacles],
            "commands": "".join(c.value for c in self.commands),
        }

    def build_grid(self) -> Grid:
        return Grid(self.width, self.height, self.obstacles)

    def build(
        self,
        enforce_bounds: bool = False,
        telemetry: Optional[TelemetryLogger] = None,
        grid: Optional[Grid] = None,
    ) -> Simulation:
        """Create the grid, rover and simulation with all commands queued.

        An existing ``grid`` may be passed to share it between runs.
        """
        grid = grid if grid is not None else self.build_grid()
        rover = Rover(self.x, self.y, self.orientation, grid, enforce_bounds=enforce_bounds)
        sim = Simulation(rover, telemetry=telemetry)
        sim.extend(self.commands)
        return sim


def _pair(value: Any, what: str) -> Cell:
    if isinstance(value, dict):
        value = (value.get("x"), value.get("y"))
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise MissionError(f"Invalid {what}: {value!r}")
    return _to_int(value[0], what), _to_int(value[1], what)


def _pose(value: Any) -> Tuple[int, int, Orientation]:
    if isinstance(value, dict):
        value = (value.get("x"), value.get("y"), value.get("orientation", ""))
    if not isinstance(value, (list, tuple)) or len(value) not in (2, 3):
        raise MissionError(f"Invalid start pose: {value!r}")
    x = _to_int(value[0], "start x")
    y = _to_int(value[1], "start y")
    direction = str(value[2]) if len(value) == 3 and value[2] is not None else ""
    return x, y, Orientation.from_token(direction)
