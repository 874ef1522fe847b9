"""JSON file backed rover store.

The whole fleet lives in one JSON document::

    {"rovers": [{"roverId": 1, "roverName": "Curiosity", ...}, ...]}

The file is loaded once at construction and rewritten after every
successful insert or update. Writes go to a sibling temporary file that
is then moved over the original, so readers never see a torn document.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from marsrover.exceptions import RoverStoreError
from marsrover.models.rover import Rover
from marsrover.store.memory import InMemoryRoverStore

_logger = logging.getLogger(__name__)


class JsonFileRoverStore(InMemoryRoverStore):
    """Rover store persisted to a JSON file on every write."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)
        super().__init__(self._load())

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> list[Rover]:
        if not self._path.exists():
            _logger.info("Store file %s does not exist yet; starting empty", self._path)
            return []
        try:
            document = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise RoverStoreError(f"Cannot read store file {self._path}: {exc}") from exc

        items = document.get("rovers") if isinstance(document, dict) else None
        if not isinstance(items, list):
            raise RoverStoreError(f"Store file {self._path} has no 'rovers' list")
        try:
            rovers = [Rover.model_validate(item) for item in items]
        except ValidationError as exc:
            raise RoverStoreError(f"Store file {self._path} holds an invalid rover: {exc}") from exc
        seen: set[int] = set()
        for rover in rovers:
            if rover.id in seen:
                raise RoverStoreError(f"Store file {self._path} holds rover id {rover.id} more than once")
            seen.add(rover.id)
        _logger.debug("Loaded %d rovers from %s", len(rovers), self._path)
        return rovers

    def _flush(self) -> None:
        payload = json.dumps({"rovers": [rover.to_wire() for rover in self.all()]}, indent=2)
        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", dir=self._path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise RoverStoreError(f"Cannot write store file {self._path}: {exc}") from exc

    def insert(self, rover: Rover) -> None:
        super().insert(rover)
        try:
            self._flush()
        except RoverStoreError:
            # Memory must not hold a rover the file does not.
            del self._rovers[rover.id]
            raise

    def update(self, rover: Rover) -> None:
        previous = self.find(rover.id)
        super().update(rover)
        try:
            self._flush()
        except RoverStoreError:
            if previous is not None:
                self._rovers[rover.id] = previous
            raise
