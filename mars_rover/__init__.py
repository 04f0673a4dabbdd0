"""
Top-level package for the grid rover simulator.

Components:
- grid: bounds and obstacle cells
- orientation: compass headings with turn and step rules
- rover: cell-by-cell motion checked against the grid
- commands: M/L/R actions applied to a rover
- simulation: FIFO command queue and status reporting
- mission: parsing of mission text/config into a runnable simulation
- render: pygame-based visualization (imported on demand)
"""

from .grid import Grid
from .orientation import Orientation
from .rover import RoverState, Rover
from .commands import Command, parse_commands
from .simulation import Simulation, StepRecord
from .mission import MissionError, MissionInput

__all__ = [
    "Grid",
    "Orientation",
    "RoverState",
    "Rover",
    "Command",
    "parse_commands",
    "Simulation",
    "StepRecord",
    "MissionError",
    "MissionInput",
]
