"""aiohttp application exposing the rover operations over HTTP.

Routes keep the shape of the original rover API: every operation lives
under ``/api/MarsRover`` and takes its arguments from the query string
(``RoverId``, ``RoverName``, ``MovementInstruction``; names are matched
case-insensitively).
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from aiohttp import web
from pydantic import ValidationError

from marsrover.config import RoverConfig
from marsrover.exceptions import (
    InvalidCommandError,
    RoverConflictError,
    RoverNotFoundError,
    RoverStoreError,
)
from marsrover.models.requests import (
    CreateRoverRequest,
    MoveRoverRequest,
    RenameRoverRequest,
    RoverIdRequest,
)
from marsrover.service import RoverService
from marsrover.store import InMemoryRoverStore, JsonFileRoverStore, RoverStore

_logger = logging.getLogger(__name__)

API_PREFIX = "/api/MarsRover"

SERVICE_KEY = web.AppKey("service", RoverService)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def _error(status: int, kind: str, message: str, **extra: Any) -> web.Response:
    return web.json_response({"error": kind, "message": message, **extra}, status=status)


def _validation_message(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(item) for item in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg', 'invalid')}" if loc else str(err.get("msg", "invalid")))
    return "; ".join(parts)


@web.middleware
async def error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Map rover errors onto HTTP responses.

    The service already logs its own rejections at WARNING; only request
    validation failures, which never reach it, are logged at WARNING here.
    """
    try:
        return await handler(request)
    except RoverNotFoundError as exc:
        _logger.debug("%s %s: %s", request.method, request.path, exc)
        return _error(404, "not_found", str(exc), roverId=exc.rover_id)
    except RoverConflictError as exc:
        _logger.debug("%s %s: %s", request.method, request.path, exc)
        return _error(400, "conflict", str(exc), roverId=exc.rover_id)
    except InvalidCommandError as exc:
        _logger.debug("%s %s: %s", request.method, request.path, exc)
        return _error(400, "invalid_command", str(exc), position=exc.position)
    except ValidationError as exc:
        _logger.warning("Rejected %s %s: %s", request.method, request.path, _validation_message(exc))
        return _error(400, "invalid_request", _validation_message(exc))
    except RoverStoreError as exc:
        _logger.exception("Store failure on %s %s", request.method, request.path)
        return _error(500, "store_error", str(exc))


def _query(request: web.Request) -> dict[str, str]:
    """Lower-cased view of the query string (first value wins)."""
    params: dict[str, str] = {}
    for key, value in request.query.items():
        params.setdefault(key.lower(), value)
    return params


def _service(request: web.Request) -> RoverService:
    return request.app[SERVICE_KEY]


async def list_rovers(request: web.Request) -> web.Response:
    rovers = _service(request).list_rovers()
    return web.json_response([rover.to_wire() for rover in rovers])


async def retrieve(request: web.Request) -> web.Response:
    params = _query(request)
    req = RoverIdRequest.model_validate({"rover_id": params.get("roverid")})
    rover = _service(request).get(req.rover_id)
    return web.json_response(rover.to_wire())


async def create(request: web.Request) -> web.Response:
    params = _query(request)
    req = CreateRoverRequest.model_validate({"rover_id": params.get("roverid"), "name": params.get("rovername")})
    rover = _service(request).create(req.rover_id, req.name)
    return web.json_response(rover.to_wire())


async def rename(request: web.Request) -> web.Response:
    params = _query(request)
    req = RenameRoverRequest.model_validate({"rover_id": params.get("roverid"), "name": params.get("rovername")})
    rover = _service(request).rename(req.rover_id, req.name)
    return web.json_response(rover.to_wire())


async def move(request: web.Request) -> web.Response:
    params = _query(request)
    req = MoveRoverRequest.model_validate(
        {"rover_id": params.get("roverid"), "commands": params.get("movementinstruction")}
    )
    rover = _service(request).move(req.rover_id, req.commands)
    return web.json_response(rover.to_wire())


def build_store(config: RoverConfig) -> RoverStore:
    if config.store_path:
        return JsonFileRoverStore(config.store_path)
    return InMemoryRoverStore()


def create_app(service: RoverService | None = None, *, config: RoverConfig | None = None) -> web.Application:
    """Build the aiohttp application.

    Pass *service* to share a store with the caller (tests do this);
    otherwise the store is built from *config*.
    """
    if service is None:
        service = RoverService(build_store(config or RoverConfig()))

    app = web.Application(middlewares=[error_middleware])
    app[SERVICE_KEY] = service
    app.router.add_get(API_PREFIX, list_rovers)
    app.router.add_get(f"{API_PREFIX}/Retrieve", retrieve)
    app.router.add_post(f"{API_PREFIX}/Create", create)
    app.router.add_patch(f"{API_PREFIX}/Rename", rename)
    app.router.add_patch(f"{API_PREFIX}/Move", move)
    return app


def run(config: RoverConfig) -> None:
    """Serve the API until interrupted."""
    app = create_app(config=config)
    _logger.info(
        "Serving rover API on http://%s:%d%s (store: %s)",
        config.host,
        config.port,
        API_PREFIX,
        config.store_path or "memory",
    )
    web.run_app(app, host=config.host, port=config.port, print=None)
