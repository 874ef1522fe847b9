"""Data models for rovers and rover requests."""

from marsrover.models.requests import (
    CreateRoverRequest,
    MoveRoverRequest,
    RenameRoverRequest,
    RoverIdRequest,
)
from marsrover.models.rover import Heading, Position, Rover

__all__ = [
    "CreateRoverRequest",
    "Heading",
    "MoveRoverRequest",
    "Position",
    "RenameRoverRequest",
    "Rover",
    "RoverIdRequest",
]
