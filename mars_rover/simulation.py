from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Dict, Iterable, List, Optional

from .commands import Command
from .rover import Rover, RoverState
from telemetry.logger import TelemetryLogger


@dataclass(frozen=True)
class StepRecord:
    """Outcome of one executed command."""

    index: int
    command: Command
    before: RoverState
    after: RoverState
    moved: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step": self.index,
            "command": self.command.value,
            "x": self.after.x,
            "y": self.after.y,
            "orientation": self.after.orientation.display_name,
            "moved": self.moved,
        }


class Simulation:
    """Ordered command queue driving a single rover.

    Commands run strictly in the order they were enqueued. Each call to
    :meth:`run` drains the queue, so running between enqueues ends in the
    same state as one run after all enqueues.

    Parameters
    ----------
    rover : Rover
        The rover mutated by the commands.
    telemetry : TelemetryLogger, optional
        Receives one record per executed command.
    """

    def __init__(self, rover: Rover, telemetry: Optional[TelemetryLogger] = None) -> None:
        self.rover = rover
        self.telemetry = telemetry
        self._queue: Deque[Command] = deque()
        self.history: List[StepRecord] = []

    @property
    def pending(self) -> int:
        """Number of queued commands not yet executed."""
        return len(self._queue)

    def enqueue(self, command: Command) -> None:
        self._queue.append(command)

    def extend(self, commands: Iterable[Command]) -> None:
        self._queue.extend(commands)

    def run(self) -> List[StepRecord]:
        """Execute every queued command in FIFO order.

        Returns the records of the commands executed by this call.
        """
        executed: List[StepRecord] = []
        while self._queue:
            command = self._queue.popleft()
            before = self.rover.get_state()
            changed = command.apply(self.rover)
            record = StepRecord(
                index=len(self.history),
                command=command,
                before=before,
                after=self.rover.get_state(),
                moved=command is Command.MOVE_FORWARD and changed,
            )
            self.history.append(record)
            executed.append(record)
            if self.telemetry is not None:
                self.telemetry.log_step(record.to_dict())
        return executed

    def status(self) -> str:
        return self.rover.status()
