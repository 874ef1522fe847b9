"""Rover model, heading enum and grid position.

The wire form mirrors the field names the rover API has always used
(``roverId``, ``roverName``, ``currentX``, ``currentY``,
``currentDirection``); the model accepts those as well as the
snake_case attribute names.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


class Heading(enum.StrEnum):
    """Cardinal direction a rover faces.

    Members are declared in clockwise order, so a member's index in the
    enum is its compass ordinal (``N=0``, ``E=1``, ``S=2``, ``W=3``).
    """

    NORTH = "N"
    EAST = "E"
    SOUTH = "S"
    WEST = "W"

    @classmethod
    def _missing_(cls, value: object) -> Heading | None:
        # Accept lowercase letters and full names ("north", "West").
        if not isinstance(value, str):
            return None
        text = value.strip().upper()
        for member in cls:
            if text in (member.value, member.name):
                return member
        return None

    @property
    def ordinal(self) -> int:
        return _ORDER.index(self)

    @classmethod
    def from_ordinal(cls, ordinal: int) -> Heading:
        """Return the heading at *ordinal*, wrapping modulo 4."""
        return _ORDER[ordinal % len(_ORDER)]


_ORDER: tuple[Heading, ...] = tuple(Heading)


class Position(BaseModel):
    """Integer grid coordinate. The grid is unbounded."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    x: int = 0
    y: int = 0

    def shifted(self, dx: int, dy: int) -> Position:
        return Position(x=self.x + dx, y=self.y + dy)


class Rover(BaseModel):
    """A rover as held by the store.

    Instances are immutable; rename and move produce updated copies
    which the caller persists.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    id: int = Field(validation_alias=AliasChoices("id", "roverId", "rover_id"))
    """Unique identifier, fixed at creation."""
    name: str = Field(validation_alias=AliasChoices("name", "roverName", "rover_name"))
    """Display name; may be changed with a rename."""
    position: Position = Field(default_factory=Position)
    """Current grid coordinate, ``(0, 0)`` at creation."""
    heading: Heading = Field(
        default=Heading.NORTH,
        validation_alias=AliasChoices("heading", "currentDirection", "current_direction"),
    )
    """Current heading, north at creation."""

    @model_validator(mode="before")
    @classmethod
    def _fold_wire_coordinates(cls, values: Any) -> Any:
        """Accept the flat ``currentX``/``currentY`` wire shape."""
        if not isinstance(values, dict) or "position" in values:
            return values
        merged = dict(values)
        x = merged.pop("currentX", merged.pop("current_x", None))
        y = merged.pop("currentY", merged.pop("current_y", None))
        if x is not None or y is not None:
            merged["position"] = {"x": x or 0, "y": y or 0}
        return merged

    @field_validator("name")
    @classmethod
    def _name_non_empty(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("name must be non-empty")
        return name

    @property
    def x(self) -> int:
        return self.position.x

    @property
    def y(self) -> int:
        return self.position.y

    def to_wire(self) -> dict[str, Any]:
        """Serialise using the API's camelCase field names."""
        return {
            "roverId": self.id,
            "roverName": self.name,
            "currentX": self.position.x,
            "currentY": self.position.y,
            "currentDirection": self.heading.value,
        }
