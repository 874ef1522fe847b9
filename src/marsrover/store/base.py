"""Store interface used by the rover service."""

from __future__ import annotations

from typing import Protocol

from marsrover.models.rover import Rover


class RoverStore(Protocol):
    """Structural store interface.

    Having a protocol here makes it easy to pass test doubles while
    keeping the shipped implementations concrete. Stores hand out and
    accept immutable :class:`Rover` values; callers never share mutable
    state with the store.
    """

    def find(self, rover_id: int) -> Rover | None:
        ...

    def insert(self, rover: Rover) -> None:
        """Add a new rover. Raises ``RoverConflictError`` on a duplicate id."""
        ...

    def update(self, rover: Rover) -> None:
        """Replace a stored rover. Raises ``RoverNotFoundError`` when absent."""
        ...

    def all(self) -> list[Rover]:
        ...
