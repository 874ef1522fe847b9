"""Movement interpreter.

Turns an instruction string such as ``"LMMRM"`` into a new heading and
position. The whole string is validated before the first command is
applied, so a rejected instruction never leaves a rover half-moved.

Everything here is pure: callers load the rover, call :func:`drive`
and persist the result themselves.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable

from marsrover.exceptions import InvalidCommandError
from marsrover.models.rover import Heading, Position, Rover

_logger = logging.getLogger(__name__)


class Command(enum.StrEnum):
    """Single-letter movement commands."""

    LEFT = "L"
    RIGHT = "R"
    MOVE = "M"


_ALPHABET: dict[str, Command] = {
    **{command.value: command for command in Command},
    **{command.value.lower(): command for command in Command},
}

# Unit step along each heading.
_STEPS: dict[Heading, tuple[int, int]] = {
    Heading.NORTH: (0, 1),
    Heading.EAST: (1, 0),
    Heading.SOUTH: (0, -1),
    Heading.WEST: (-1, 0),
}


def parse_commands(text: str) -> tuple[Command, ...]:
    """Validate *text* and return its commands in order.

    Letters are case-insensitive. The empty string yields no commands.
    Raises :class:`InvalidCommandError` naming the first character that
    is not ``L``, ``R`` or ``M``.
    """
    commands: list[Command] = []
    for index, char in enumerate(text):
        command = _ALPHABET.get(char)
        if command is None:
            raise InvalidCommandError(text, position=index)
        commands.append(command)
    return tuple(commands)


def rotate_left(heading: Heading) -> Heading:
    """Turn 90 degrees counter-clockwise (north becomes west)."""
    return Heading.from_ordinal(heading.ordinal - 1)


def rotate_right(heading: Heading) -> Heading:
    """Turn 90 degrees clockwise (north becomes east)."""
    return Heading.from_ordinal(heading.ordinal + 1)


def advance(heading: Heading, position: Position) -> Position:
    """Step one grid unit forward along *heading*."""
    dx, dy = _STEPS[heading]
    return position.shifted(dx, dy)


def execute(
    heading: Heading,
    position: Position,
    commands: str | Iterable[Command],
) -> tuple[Heading, Position]:
    """Apply *commands* left to right and return the final heading and position.

    Non-string input is joined and validated like a string, so every item
    must be one of ``L``, ``R``, ``M`` (or the matching :class:`Command`).
    """
    text = commands if isinstance(commands, str) else "".join(str(item) for item in commands)
    for command in parse_commands(text):
        match command:
            case Command.LEFT:
                heading = rotate_left(heading)
            case Command.RIGHT:
                heading = rotate_right(heading)
            case Command.MOVE:
                position = advance(heading, position)
    return heading, position


def drive(rover: Rover, commands: str | Iterable[Command]) -> Rover:
    """Return a copy of *rover* after executing *commands*."""
    heading, position = execute(rover.heading, rover.position, commands)
    _logger.debug(
        "Rover %s: %s (%d, %d) -> %s (%d, %d)",
        rover.id,
        rover.heading.value,
        rover.x,
        rover.y,
        heading.value,
        position.x,
        position.y,
    )
    return rover.model_copy(update={"heading": heading, "position": position})
