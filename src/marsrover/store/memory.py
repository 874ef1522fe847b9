"""In-memory rover store."""

from __future__ import annotations

import logging

from marsrover.exceptions import RoverConflictError, RoverNotFoundError
from marsrover.models.rover import Rover

_logger = logging.getLogger(__name__)


class InMemoryRoverStore:
    """Dict-backed store keyed by rover id.

    Rovers are frozen models, so storing and returning the same instance
    cannot leak mutations between callers. Last write wins.
    """

    def __init__(self, rovers: list[Rover] | None = None) -> None:
        self._rovers: dict[int, Rover] = {}
        for rover in rovers or ():
            if rover.id in self._rovers:
                raise RoverConflictError(rover.id)
            self._rovers[rover.id] = rover

    def __len__(self) -> int:
        return len(self._rovers)

    def __contains__(self, rover_id: object) -> bool:
        return rover_id in self._rovers

    def find(self, rover_id: int) -> Rover | None:
        return self._rovers.get(rover_id)

    def insert(self, rover: Rover) -> None:
        if rover.id in self._rovers:
            raise RoverConflictError(rover.id)
        self._rovers[rover.id] = rover
        _logger.debug("Inserted rover %s", rover.id)

    def update(self, rover: Rover) -> None:
        if rover.id not in self._rovers:
            raise RoverNotFoundError(rover.id)
        self._rovers[rover.id] = rover
        _logger.debug("Updated rover %s", rover.id)

    def all(self) -> list[Rover]:
        return [self._rovers[key] for key in sorted(self._rovers)]
