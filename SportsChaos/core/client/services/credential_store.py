"""
Credential store: persists the session token and user profile.
Uses async file I/O to avoid blocking the event loop.
"""
import asyncio
import json
import logging
import os
from typing import Optional

import aiofiles
import aiofiles.os

from ..auth.models import StoredSessionRecord
from ..auth.state import ObservableValue
from ..utils.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class CredentialStore:
    """
    Key/value file holding the signed-in user's token and profile.

    The file is a flat JSON object of strings. Writes go to a sibling
    temp file that is then renamed over the real one, so a reader sees
    either the old record or the new one and never a mix.
    """

    def __init__(self, path: str):
        self._path = os.path.abspath(path)
        self._tmp_path = self._path + ".tmp"
        self._write_lock = asyncio.Lock()
        self._record: ObservableValue[Optional[StoredSessionRecord]] = ObservableValue(None)
        self._loaded = False

    @property
    def path(self) -> str:
        return self._path

    def read(self) -> ObservableValue[Optional[StoredSessionRecord]]:
        """
        Live view of the stored record.

        Call ``load`` once at startup so the view reflects what is on
        disk; every later ``write`` or ``clear`` updates it.
        """
        return self._record

    async def current(self) -> Optional[StoredSessionRecord]:
        """Current record, loading it from disk on first use."""
        if not self._loaded:
            await self.load()
        return self._record.value

    async def load(self) -> Optional[StoredSessionRecord]:
        """
        Read the record from disk and publish it.

        Raises:
            PersistenceError: if the file exists but cannot be read
        """
        async with self._write_lock:
            record = await self._read_file()
            self._loaded = True
            self._record.set(record)
        return record

    async def write(self, record: StoredSessionRecord) -> None:
        """
        Replace every stored field with those of ``record``.

        Raises:
            PersistenceError: if the record could not be written
        """
        content = json.dumps(record.encode(), ensure_ascii=False, indent=2)
        async with self._write_lock:
            try:
                await self._ensure_dir()
                async with aiofiles.open(self._tmp_path, "w", encoding="utf-8") as f:
                    await f.write(content)
                    await f.flush()
                await aiofiles.os.replace(self._tmp_path, self._path)
            except OSError as e:
                await self._discard_tmp()
                raise PersistenceError("Failed to save session", {"path": self._path, "error": str(e)}) from e
            self._loaded = True
            self._record.set(record)
        logger.debug("Stored session for user %s", record.user_id)

    async def clear(self) -> None:
        """
        Remove every stored field. Clearing an empty store is a no-op.

        Raises:
            PersistenceError: if the file could not be removed
        """
        async with self._write_lock:
            try:
                await aiofiles.os.remove(self._path)
            except FileNotFoundError:
                pass
            except OSError as e:
                raise PersistenceError("Failed to clear session", {"path": self._path, "error": str(e)}) from e
            self._loaded = True
            self._record.set(None)
        logger.debug("Cleared stored session")

    async def _read_file(self) -> Optional[StoredSessionRecord]:
        try:
            async with aiofiles.open(self._path, "r", encoding="utf-8") as f:
                content = await f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise PersistenceError("Failed to load session", {"path": self._path, "error": str(e)}) from e

        try:
            fields = json.loads(content)
        except json.JSONDecodeError:
            logger.warning("Session file %s is not valid JSON, treating as signed out", self._path)
            return None

        record = StoredSessionRecord.decode(fields)
        if record is None:
            logger.warning("Session file %s holds an incomplete record, treating as signed out", self._path)
        return record

    async def _ensure_dir(self) -> None:
        directory = os.path.dirname(self._path)
        if directory:
            await aiofiles.os.makedirs(directory, exist_ok=True)

    async def _discard_tmp(self) -> None:
        try:
            await aiofiles.os.remove(self._tmp_path)
        except OSError:
            pass
