"""marsrover - track and drive grid-bound rovers."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("marsrover")
except PackageNotFoundError:
    __version__ = "0+local"
from marsrover.client import RoverClient
from marsrover.config import RoverConfig
from marsrover.exceptions import (
    InvalidCommandError,
    RoverConfigError,
    RoverConflictError,
    RoverError,
    RoverNotFoundError,
    RoverStoreError,
    RoverTransportError,
)
from marsrover.models import Heading, Position, Rover
from marsrover.navigation import Command, drive, execute, parse_commands
from marsrover.service import RoverService
from marsrover.store import InMemoryRoverStore, JsonFileRoverStore, RoverStore

__all__ = [
    "__version__",
    "Command",
    "Heading",
    "InMemoryRoverStore",
    "InvalidCommandError",
    "JsonFileRoverStore",
    "Position",
    "Rover",
    "RoverClient",
    "RoverConfig",
    "RoverConfigError",
    "RoverConflictError",
    "RoverError",
    "RoverNotFoundError",
    "RoverService",
    "RoverStore",
    "RoverStoreError",
    "RoverTransportError",
    "drive",
    "execute",
    "parse_commands",
]
