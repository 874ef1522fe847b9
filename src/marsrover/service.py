"""Rover operations: retrieve, create, rename, move.

Each operation is a single read-modify-write against the store with
"last write wins" semantics. Request models validate and normalise the
inputs before any store access.
"""

from __future__ import annotations

import logging

from marsrover import navigation
from marsrover.exceptions import InvalidCommandError, RoverConflictError, RoverNotFoundError
from marsrover.models.requests import (
    CreateRoverRequest,
    MoveRoverRequest,
    RenameRoverRequest,
    RoverIdRequest,
)
from marsrover.models.rover import Heading, Position, Rover
from marsrover.store.base import RoverStore

_logger = logging.getLogger(__name__)


class RoverService:
    """Rover operations over an explicitly passed store."""

    def __init__(self, store: RoverStore) -> None:
        self._store = store

    @property
    def store(self) -> RoverStore:
        return self._store

    def _require(self, rover_id: int) -> Rover:
        rover = self._store.find(rover_id)
        if rover is None:
            _logger.warning("Rejected: rover %s not found", rover_id)
            raise RoverNotFoundError(rover_id)
        return rover

    def list_rovers(self) -> list[Rover]:
        return self._store.all()

    def get(self, rover_id: int) -> Rover:
        req = RoverIdRequest(rover_id=rover_id)
        return self._require(req.rover_id)

    def create(self, rover_id: int, name: str) -> Rover:
        """Create a rover at ``(0, 0)`` facing north.

        Raises :class:`RoverConflictError` when *rover_id* is taken.
        """
        req = CreateRoverRequest(rover_id=rover_id, name=name)
        if self._store.find(req.rover_id) is not None:
            _logger.warning("Create rejected: rover %s already exists", req.rover_id)
            raise RoverConflictError(req.rover_id)
        rover = Rover(id=req.rover_id, name=req.name, position=Position(), heading=Heading.NORTH)
        self._store.insert(rover)
        _logger.info("Created rover %s (%s)", rover.id, rover.name)
        return rover

    def rename(self, rover_id: int, name: str) -> Rover:
        req = RenameRoverRequest(rover_id=rover_id, name=name)
        rover = self._require(req.rover_id).model_copy(update={"name": req.name})
        self._store.update(rover)
        _logger.info("Renamed rover %s to %s", rover.id, rover.name)
        return rover

    def move(self, rover_id: int, commands: str) -> Rover:
        """Run *commands* against a stored rover and persist the result.

        The instruction is validated before the rover is looked up, so an
        invalid instruction is reported even for an unknown id.
        """
        req = MoveRoverRequest(rover_id=rover_id, commands=commands)
        try:
            parsed = navigation.parse_commands(req.commands)
        except InvalidCommandError as exc:
            _logger.warning(
                "Move rejected for rover %s: invalid instruction %r at position %s",
                req.rover_id,
                req.commands,
                exc.position,
            )
            raise
        rover = navigation.drive(self._require(req.rover_id), parsed)
        self._store.update(rover)
        _logger.info(
            "Moved rover %s with %r to (%d, %d) facing %s",
            rover.id,
            req.commands,
            rover.x,
            rover.y,
            rover.heading.value,
        )
        return rover
