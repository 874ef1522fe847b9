"""Pydantic request models for service and HTTP entrypoints.

These models provide a consistent "validate → normalize → execute" flow.
The HTTP layer feeds raw query parameters into them; pydantic's lax mode
coerces numeric strings such as ``"7"`` into ``int``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class RoverIdRequest(BaseModel):
    """Request addressing a single rover."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
    )

    rover_id: int


class CreateRoverRequest(RoverIdRequest):
    name: str

    @field_validator("name")
    @classmethod
    def _name_non_empty(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("name must be non-empty")
        return name


class RenameRoverRequest(CreateRoverRequest):
    pass


class MoveRoverRequest(RoverIdRequest):
    """Move request.

    The instruction is kept verbatim (no whitespace stripping); its
    alphabet is checked by :func:`marsrover.navigation.parse_commands`.
    """

    model_config = ConfigDict(str_strip_whitespace=False)

    commands: str
