from __future__ import annotations

import logging
from dataclasses import dataclass, field

import pytest
from pydantic import ValidationError

from marsrover.exceptions import InvalidCommandError, RoverConflictError, RoverNotFoundError
from marsrover.models.rover import Heading, Position, Rover
from marsrover.service import RoverService
from marsrover.store import InMemoryRoverStore


@dataclass
class RecordingStore:
    """Store double that counts calls per operation."""

    rovers: dict[int, Rover] = field(default_factory=dict)
    calls: dict[str, int] = field(default_factory=dict)

    def _record_call(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1

    def find(self, rover_id: int) -> Rover | None:
        self._record_call("find")
        return self.rovers.get(rover_id)

    def insert(self, rover: Rover) -> None:
        self._record_call("insert")
        self.rovers[rover.id] = rover

    def update(self, rover: Rover) -> None:
        self._record_call("update")
        self.rovers[rover.id] = rover

    def all(self) -> list[Rover]:
        return sorted(self.rovers.values(), key=lambda rover: rover.id)


def test_create_initialises_at_origin_facing_north() -> None:
    service = RoverService(InMemoryRoverStore())
    rover = service.create(1, "Curiosity")
    assert (rover.x, rover.y, rover.heading) == (0, 0, Heading.NORTH)
    assert service.get(1) == rover


def test_create_duplicate_conflicts_without_mutation() -> None:
    store = RecordingStore()
    service = RoverService(store)
    service.create(1, "Curiosity")
    service.move(1, "M")

    with pytest.raises(RoverConflictError):
        service.create(1, "Impostor")

    rover = service.get(1)
    assert rover.name == "Curiosity"
    assert (rover.x, rover.y) == (0, 1)
    assert store.calls["insert"] == 1


def test_get_missing_raises_not_found() -> None:
    with pytest.raises(RoverNotFoundError) as exc_info:
        RoverService(InMemoryRoverStore()).get(99)
    assert exc_info.value.rover_id == 99


def test_rename() -> None:
    service = RoverService(InMemoryRoverStore())
    service.create(1, "Curiosity")
    service.move(1, "RM")
    renamed = service.rename(1, "Perseverance")
    assert renamed.name == "Perseverance"
    assert (renamed.x, renamed.y, renamed.heading) == (1, 0, Heading.EAST)
    assert service.get(1).name == "Perseverance"


def test_rename_missing_raises_not_found() -> None:
    with pytest.raises(RoverNotFoundError):
        RoverService(InMemoryRoverStore()).rename(5, "Nobody")


def test_rename_blank_name_rejected() -> None:
    service = RoverService(InMemoryRoverStore())
    service.create(1, "Curiosity")
    with pytest.raises(ValidationError):
        service.rename(1, " ")
    assert service.get(1).name == "Curiosity"


def test_move_persists_result() -> None:
    store = RecordingStore()
    service = RoverService(store)
    store.rovers[5] = Rover(id=5, name="Sojourner", position=Position(x=5, y=5), heading=Heading.EAST)

    moved = service.move(5, "RMM")

    assert (moved.x, moved.y, moved.heading) == (5, 3, Heading.SOUTH)
    assert store.rovers[5] == moved
    assert store.calls["update"] == 1


def test_move_empty_instruction_is_noop() -> None:
    service = RoverService(InMemoryRoverStore())
    created = service.create(1, "Curiosity")
    assert service.move(1, "") == created


def test_move_invalid_instruction_checked_before_lookup() -> None:
    store = RecordingStore()
    service = RoverService(store)

    with pytest.raises(InvalidCommandError):
        service.move(404, "MX")

    assert "find" not in store.calls


def test_move_invalid_instruction_leaves_state_unchanged() -> None:
    store = RecordingStore()
    service = RoverService(store)
    service.create(1, "Curiosity")

    with pytest.raises(InvalidCommandError):
        service.move(1, "MMMMX")

    rover = service.get(1)
    assert (rover.x, rover.y, rover.heading) == (0, 0, Heading.NORTH)
    assert "update" not in store.calls


def test_move_missing_rover_raises_not_found() -> None:
    with pytest.raises(RoverNotFoundError):
        RoverService(InMemoryRoverStore()).move(3, "M")


def test_list_rovers() -> None:
    service = RoverService(InMemoryRoverStore())
    service.create(2, "B")
    service.create(1, "A")
    assert [rover.name for rover in service.list_rovers()] == ["A", "B"]


def test_rejections_logged_at_warning(caplog: pytest.LogCaptureFixture) -> None:
    service = RoverService(InMemoryRoverStore())
    service.create(1, "Curiosity")

    with caplog.at_level(logging.WARNING, logger="marsrover.service"):
        with pytest.raises(RoverNotFoundError):
            service.get(2)
        with pytest.raises(InvalidCommandError):
            service.move(1, "MX")
        with pytest.raises(RoverConflictError):
            service.create(1, "Again")

    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert len(warnings) == 3
    assert "not found" in warnings[0].getMessage()
    assert "invalid instruction" in warnings[1].getMessage()
    assert "already exists" in warnings[2].getMessage()
