# blogclient/repositories/session_cache.py
"""
On-device session cache with JSON-based persistence.

Token and stripped user live in ONE file, replaced atomically, so they
are always written and cleared as a pair. A cached snapshot is only a
hint: the Session Manager re-validates the token remotely before
trusting it.
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from blogclient.schemas.session import LocalSessionSnapshot
from blogclient.schemas.user import UserRead

logger = logging.getLogger(__name__)


class LocalSessionCache:
    """Durable key/value storage of `auth_token` + `user_data`."""

    def __init__(self, path: Path):
        self.path = Path(path)

    # ----- Public API -----

    async def load(self) -> LocalSessionSnapshot | None:
        """
        Read the cached snapshot.

        Returns None when nothing is cached, or when the file is
        unreadable / half-filled (which is then treated as absent).
        """
        data = await asyncio.to_thread(self._read)
        if not data or not data.get("auth_token") or not data.get("user_data"):
            return None
        try:
            return LocalSessionSnapshot.model_validate(data)
        except ValidationError:
            logger.warning("Discarding malformed session cache at %s", self.path)
            return None

    async def save(self, token: str, user: UserRead) -> None:
        """Write token and user together."""
        snapshot = LocalSessionSnapshot(auth_token=token, user_data=user)
        await asyncio.to_thread(self._atomic_write, snapshot.model_dump(mode="json"))

    async def save_user(self, user: UserRead) -> None:
        """
        Overwrite the cached user, keeping the cached token.

        No-op when no token is cached (never leaves a user without token).
        """
        snapshot = await self.load()
        if snapshot is None:
            return
        await self.save(snapshot.auth_token, user)

    async def clear(self) -> None:
        """Remove token and user."""
        await asyncio.to_thread(self._remove)

    # ----- File helpers -----

    def _read(self) -> dict[str, Any] | None:
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read session cache %s: %s", self.path, e)
            return None
        return data if isinstance(data, dict) else None

    def _atomic_write(self, data: dict[str, Any]) -> None:
        """Write to a temp file in the same directory, then rename over."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w", dir=self.path.parent, delete=False, encoding="utf-8"
        ) as tf:
            json.dump(data, tf, ensure_ascii=False)
            temp_path = Path(tf.name)

        try:
            os.replace(temp_path, self.path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise

    def _remove(self) -> None:
        self.path.unlink(missing_ok=True)
