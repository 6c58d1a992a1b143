"""
JSON File Key-Value Store

DESIGN DECISION: One UTF-8 file per key inside a data directory.
1. Each collection can be inspected (and hand-repaired) with any editor
2. A write replaces a single file, so a crash loses at most one collection
3. No database to install on a site laptop

Filenames are the percent-encoded key plus ``.json`` so ``list_keys``
can recover the exact key. Writes go to a temp file that is moved into
place with ``os.replace``, which is atomic on the same filesystem.

TRADEOFFS:
- Every save rewrites the whole collection file (fine at ledger sizes)
- No cross-file transactions (matches the app's storage API)
"""

import asyncio
import os
import tempfile
from pathlib import Path
from typing import Iterable, Optional
from urllib.parse import quote, unquote

import structlog
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from buildledger.services.storage.interface import (
    KeyValueStore,
    StoreReadError,
    StoreWriteError,
)

logger = structlog.get_logger(__name__)

_SUFFIX = ".json"


def key_to_filename(key: str) -> str:
    """``@buildledger_workers`` -> ``%40buildledger_workers.json``."""
    return quote(key, safe="") + _SUFFIX


def filename_to_key(filename: str) -> Optional[str]:
    if not filename.endswith(_SUFFIX):
        return None
    return unquote(filename[: -len(_SUFFIX)])


class JsonFileKeyValueStore(KeyValueStore):
    """
    Directory-backed key-value store.

    Blocking file I/O runs in a worker thread. Transient OS errors are
    retried with exponential backoff before surfacing as
    StoreReadError / StoreWriteError.
    """

    def __init__(self, data_dir: Path, retry_attempts: int = 3):
        self._dir = Path(data_dir)
        self._retry_attempts = retry_attempts

    @property
    def data_dir(self) -> Path:
        return self._dir

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self._retry_attempts),
            wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )

    def _path(self, key: str) -> Path:
        return self._dir / key_to_filename(key)

    # -------------------------------------------------------------------------
    # Blocking helpers (run in a thread)
    # -------------------------------------------------------------------------

    def _read_file(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def _write_file(self, key: str, value: str) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._dir, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, self._path(key))
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def _delete_file(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            pass

    def _list_files(self) -> list[str]:
        if not self._dir.exists():
            return []
        keys = []
        for entry in sorted(self._dir.iterdir()):
            key = filename_to_key(entry.name)
            if key is not None and entry.is_file():
                keys.append(key)
        return keys

    def _call(self, func, *args):
        return self._retrying()(func, *args)

    # -------------------------------------------------------------------------
    # KeyValueStore
    # -------------------------------------------------------------------------

    async def get(self, key: str) -> Optional[str]:
        try:
            return await asyncio.to_thread(self._call, self._read_file, key)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("store_read_failed", key=key, error=str(e))
            raise StoreReadError(f"Failed to read {key}: {e}") from e

    async def set(self, key: str, value: str) -> None:
        try:
            await asyncio.to_thread(self._call, self._write_file, key, value)
        except OSError as e:
            logger.error("store_write_failed", key=key, error=str(e))
            raise StoreWriteError(f"Failed to write {key}: {e}") from e

    async def delete(self, key: str) -> None:
        try:
            await asyncio.to_thread(self._call, self._delete_file, key)
        except OSError as e:
            logger.error("store_delete_failed", key=key, error=str(e))
            raise StoreWriteError(f"Failed to delete {key}: {e}") from e

    async def delete_many(self, keys: Iterable[str]) -> None:
        for key in list(keys):
            await self.delete(key)

    async def list_keys(self) -> list[str]:
        try:
            return await asyncio.to_thread(self._call, self._list_files)
        except OSError as e:
            logger.error("store_list_failed", error=str(e))
            raise StoreReadError(f"Failed to list keys: {e}") from e
