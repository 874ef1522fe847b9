"""Async client for the rover HTTP API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

import aiohttp

from marsrover.config import RoverConfig
from marsrover.exceptions import (
    InvalidCommandError,
    RoverConflictError,
    RoverError,
    RoverNotFoundError,
    RoverTransportError,
)
from marsrover.models.rover import Rover

_logger = logging.getLogger(__name__)

_API_PREFIX = "/api/MarsRover"


class RoverClient:
    """Async client for the rover API.

    Usage::

        async with RoverClient(RoverConfig.from_env()) as client:
            await client.create_rover(1, "Curiosity")
            rover = await client.move_rover(1, "MRM")
    """

    def __init__(
        self,
        config: RoverConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config or RoverConfig()
        self._external_session = session is not None
        self._http_session = session

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> RoverClient:
        if self._http_session is None:
            timeout = aiohttp.ClientTimeout(total=self._config.request_timeout)
            self._http_session = aiohttp.ClientSession(timeout=timeout)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
        self._http_session = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_session(self) -> aiohttp.ClientSession:
        if self._http_session is None:
            raise RoverError("Client not initialized. Use 'async with RoverClient(...) as client:'")
        return self._http_session

    async def _request(self, method: str, endpoint: str, params: Mapping[str, Any] | None = None) -> Any:
        """Send a request and return the decoded JSON body.

        Error bodies (``{"error": kind, "message": text}``) are mapped back
        onto the matching :mod:`marsrover.exceptions` class.
        """
        http = self._require_session()
        url = f"{self._config.base_url.rstrip('/')}{endpoint}"
        query = {key: str(value) for key, value in (params or {}).items()}

        _logger.debug("%s %s %s", method, url, query)

        try:
            async with http.request(method, url, params=query) as resp:
                status = resp.status
                text = await resp.text()
        except aiohttp.ClientError as exc:
            raise RoverTransportError(f"Request to {endpoint} failed: {exc}", endpoint=endpoint) from exc

        try:
            body = json.loads(text) if text else None
        except json.JSONDecodeError as exc:
            raise RoverTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            ) from exc

        if status == 200:
            return body
        _raise_for_error(status, endpoint, body, params or {})
        return None

    # ------------------------------------------------------------------
    # Rover operations
    # ------------------------------------------------------------------

    async def list_rovers(self) -> list[Rover]:
        items = await self._request("GET", _API_PREFIX)
        return [Rover.model_validate(item) for item in items or []]

    async def get_rover(self, rover_id: int) -> Rover:
        body = await self._request("GET", f"{_API_PREFIX}/Retrieve", {"RoverId": rover_id})
        return Rover.model_validate(body)

    async def create_rover(self, rover_id: int, name: str) -> Rover:
        body = await self._request("POST", f"{_API_PREFIX}/Create", {"RoverId": rover_id, "RoverName": name})
        return Rover.model_validate(body)

    async def rename_rover(self, rover_id: int, name: str) -> Rover:
        body = await self._request("PATCH", f"{_API_PREFIX}/Rename", {"RoverId": rover_id, "RoverName": name})
        return Rover.model_validate(body)

    async def move_rover(self, rover_id: int, commands: str) -> Rover:
        body = await self._request(
            "PATCH",
            f"{_API_PREFIX}/Move",
            {"RoverId": rover_id, "MovementInstruction": commands},
        )
        return Rover.model_validate(body)


def _raise_for_error(status: int, endpoint: str, body: Any, params: Mapping[str, Any]) -> None:
    kind = ""
    message = ""
    if isinstance(body, dict):
        kind = str(body.get("error", ""))
        message = str(body.get("message", ""))

    rover_id = params.get("RoverId")
    if status == 404 and rover_id is not None:
        raise RoverNotFoundError(int(rover_id), message or None)
    if kind == "conflict" and rover_id is not None:
        raise RoverConflictError(int(rover_id), message or None)
    if kind == "invalid_command":
        position = body.get("position") if isinstance(body, dict) else None
        raise InvalidCommandError(
            str(params.get("MovementInstruction", "")),
            position=position if isinstance(position, int) else None,
            message=message or None,
        )
    raise RoverTransportError(
        f"HTTP {status} from {endpoint}: {message or kind or 'no details'}",
        status_code=status,
        endpoint=endpoint,
    )
