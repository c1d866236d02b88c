"""JSON file key-value store adapter.

Implements KeyValueStorePort with a single JSON object file mapping keys
to string values, the same shape as browser localStorage. The whole file
is rewritten on every change through a temporary file and an atomic
replace, so a crash mid-write leaves the previous contents intact.
"""

import asyncio
import json
import logging
import os
from pathlib import Path

from simpleshop.core.ports import KeyValueStorePort

logger = logging.getLogger(__name__)


class JSONFileKeyValueStore(KeyValueStorePort):
    """Stores every key in one JSON object file."""

    def __init__(self, path: str):
        """Initialize the file store.

        Args:
            path: Location of the JSON file. Parent directories are created.
        """
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = asyncio.Lock()

    def _read_all(self) -> dict[str, str]:
        """Load the whole file; a missing or unreadable file reads as empty."""
        if not self.path.exists():
            return {}

        try:
            text = self.path.read_text(encoding="utf-8").strip()
            if not text:
                return {}
            data = json.loads(text)
        except (OSError, ValueError, RecursionError) as e:
            logger.warning(
                f"Store file {self.path} is unreadable, treating as empty: {e}",
                extra={"path": str(self.path)},
            )
            return {}

        if not isinstance(data, dict):
            logger.warning(
                f"Store file {self.path} does not hold an object, treating as empty",
                extra={"path": str(self.path)},
            )
            return {}

        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(
            json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8"
        )
        os.replace(tmp_path, self.path)

    async def get(self, key: str) -> str | None:
        async with self._lock:
            data = await asyncio.to_thread(self._read_all)
        return data.get(key)

    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read_all)
            data[key] = value
            try:
                await asyncio.to_thread(self._write_all, data)
            except OSError as e:
                logger.error(
                    f"Failed to write store file: {e}",
                    extra={"path": str(self.path), "key": key},
                    exc_info=True,
                )
                raise

    async def remove(self, key: str) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read_all)
            if key not in data:
                return
            del data[key]
            try:
                await asyncio.to_thread(self._write_all, data)
            except OSError as e:
                logger.error(
                    f"Failed to write store file: {e}",
                    extra={"path": str(self.path), "key": key},
                    exc_info=True,
                )
                raise

    async def close(self) -> None:
        """Nothing is held open between calls."""
