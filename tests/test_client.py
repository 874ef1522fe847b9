from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp import test_utils, web

from marsrover.client import RoverClient
from marsrover.config import RoverConfig
from marsrover.exceptions import (
    InvalidCommandError,
    RoverConflictError,
    RoverError,
    RoverNotFoundError,
    RoverTransportError,
)
from marsrover.models.rover import Heading
from marsrover.server import create_app
from marsrover.service import RoverService
from marsrover.store import InMemoryRoverStore


@pytest_asyncio.fixture
async def client() -> AsyncIterator[RoverClient]:
    app = create_app(RoverService(InMemoryRoverStore()))
    async with test_utils.TestServer(app) as server:
        config = RoverConfig(base_url=str(server.make_url("/")))
        async with RoverClient(config) as rover_client:
            yield rover_client


@pytest.mark.asyncio
async def test_full_lifecycle(client: RoverClient) -> None:
    created = await client.create_rover(1, "Curiosity")
    assert (created.x, created.y, created.heading) == (0, 0, Heading.NORTH)

    moved = await client.move_rover(1, "MRM")
    assert (moved.x, moved.y, moved.heading) == (1, 1, Heading.EAST)

    renamed = await client.rename_rover(1, "Perseverance")
    assert renamed.name == "Perseverance"

    fetched = await client.get_rover(1)
    assert fetched == renamed
    assert await client.list_rovers() == [fetched]


@pytest.mark.asyncio
async def test_duplicate_create_raises_conflict(client: RoverClient) -> None:
    await client.create_rover(1, "Curiosity")
    with pytest.raises(RoverConflictError) as exc_info:
        await client.create_rover(1, "Curiosity")
    assert exc_info.value.rover_id == 1


@pytest.mark.asyncio
async def test_missing_rover_raises_not_found(client: RoverClient) -> None:
    with pytest.raises(RoverNotFoundError) as exc_info:
        await client.get_rover(12)
    assert exc_info.value.rover_id == 12


@pytest.mark.asyncio
async def test_invalid_instruction_raises_invalid_command(client: RoverClient) -> None:
    await client.create_rover(1, "Curiosity")
    with pytest.raises(InvalidCommandError) as exc_info:
        await client.move_rover(1, "LMZ")
    assert exc_info.value.position == 2
    assert exc_info.value.commands == "LMZ"
    rover = await client.get_rover(1)
    assert (rover.x, rover.y, rover.heading) == (0, 0, Heading.NORTH)


@pytest.mark.asyncio
async def test_other_errors_raise_transport_error(client: RoverClient) -> None:
    with pytest.raises(RoverTransportError) as exc_info:
        await client.create_rover(1, " ")
    assert exc_info.value.status_code == 400
    assert exc_info.value.endpoint == "/api/MarsRover/Create"


@pytest.mark.asyncio
async def test_non_json_body_raises_transport_error() -> None:
    async def broken(_request: web.Request) -> web.Response:
        return web.Response(text="<html>oops</html>", status=502)

    app = web.Application()
    app.router.add_get("/api/MarsRover/Retrieve", broken)
    async with test_utils.TestServer(app) as server:
        async with RoverClient(RoverConfig(base_url=str(server.make_url("/")))) as rover_client:
            with pytest.raises(RoverTransportError) as exc_info:
                await rover_client.get_rover(1)
    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_requires_context_manager() -> None:
    with pytest.raises(RoverError):
        await RoverClient().get_rover(1)
