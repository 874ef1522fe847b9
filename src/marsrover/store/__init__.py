"""Rover persistence.

The service only talks to the :class:`RoverStore` protocol; the two
shipped implementations keep rovers in memory or in a JSON file.
"""

from marsrover.store.base import RoverStore
from marsrover.store.json_file import JsonFileRoverStore
from marsrover.store.memory import InMemoryRoverStore

__all__ = ["InMemoryRoverStore", "JsonFileRoverStore", "RoverStore"]
