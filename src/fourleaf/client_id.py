"""Persistent anonymous client identifier."""

from __future__ import annotations

import uuid
from pathlib import Path

from loguru import logger

from fourleaf.errors import ClientIdStorageError


class ClientIdStore:
    """Create the client identifier once and keep it on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load_or_create(self) -> str:
        existing = self._read()
        if existing:
            return existing

        client_id = str(uuid.uuid4())
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(client_id + "\n", encoding="utf-8")
        except OSError as exc:
            raise ClientIdStorageError(f"cannot store client id at {self.path}: {exc}") from exc
        logger.info("client_id.created path={}", self.path)
        return client_id

    def _read(self) -> str | None:
        if not self.path.exists():
            return None
        try:
            return self.path.read_text(encoding="utf-8").strip() or None
        except OSError as exc:
            raise ClientIdStorageError(f"cannot read client id at {self.path}: {exc}") from exc
