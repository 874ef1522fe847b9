"""Custom exception hierarchy for marsrover."""

from __future__ import annotations


class RoverError(Exception):
    """Base exception for all marsrover errors."""


class RoverConfigError(RoverError):
    """Invalid or missing configuration."""


class RoverNotFoundError(RoverError):
    """No rover is stored under the requested identifier."""

    def __init__(self, rover_id: int, message: str | None = None) -> None:
        self.rover_id = rover_id
        super().__init__(message or f"Rover {rover_id} not found")


class RoverConflictError(RoverError):
    """A rover with the requested identifier already exists."""

    def __init__(self, rover_id: int, message: str | None = None) -> None:
        self.rover_id = rover_id
        super().__init__(message or "Id already exists")


class InvalidCommandError(RoverError):
    """Movement instruction contains a character outside ``L``, ``R``, ``M``.

    ``position`` is the index of the first offending character, or ``None``
    when the error was reconstructed from a remote response that did not
    carry it.
    """

    def __init__(
        self,
        commands: str,
        *,
        position: int | None = None,
        message: str | None = None,
    ) -> None:
        self.commands = commands
        self.position = position
        super().__init__(message or "Invalid movement instruction")


class RoverStoreError(RoverError):
    """Persistent store could not be read or written."""


class RoverTransportError(RoverError):
    """HTTP-level failure (network, unexpected status, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)
