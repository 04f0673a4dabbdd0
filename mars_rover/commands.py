from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List, Optional

from .rover import Rover


class Command(Enum):
    """Single rover action, keyed by its input letter."""

    MOVE_FORWARD = "M"
    TURN_LEFT = "L"
    TURN_RIGHT = "R"

    def apply(self, rover: Rover) -> bool:
        """Apply this command to ``rover``.

        Returns False only when a forward move was blocked.
        """
        result = _DISPATCH[self](rover)
        return result is not False

    @classmethod
    def from_token(cls, token: str) -> Optional["Command"]:
        """Map a single letter (any case) to a Command, or None if unknown."""
        try:
            return cls(token.upper())
        except ValueError:
            return None


_DISPATCH: Dict[Command, Callable[[Rover], Optional[bool]]] = {
    Command.MOVE_FORWARD: Rover.move_forward,
    Command.TURN_LEFT: Rover.turn_left,
    Command.TURN_RIGHT: Rover.turn_right,
}


def parse_commands(text: str) -> List[Command]:
    """Turn a command string such as "MMrML" into Commands.

    Characters other than M, L and R (any case) are dropped.
    """
    commands = []
    for ch in text:
        cmd = Command.from_token(ch)
        if cmd is not None:
            commands.append(cmd)
    return commands
