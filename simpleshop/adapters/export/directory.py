"""Directory export sink.

Implements ExportSinkPort by writing the downloaded file into a
configured directory, the terminal counterpart of a browser download.
"""

import asyncio
import logging
import re
from pathlib import Path

from simpleshop.core.ports import ExportSinkPort

logger = logging.getLogger(__name__)


class DirectoryExportSink(ExportSinkPort):
    """Writes exported files into a single directory."""

    def __init__(self, export_dir: str):
        """Initialize the export sink.

        Args:
            export_dir: Directory receiving exported files. Created on first save.

        Raises:
            ValueError: If export_dir is a filesystem root.
        """
        self.base_dir = Path(export_dir).resolve()
        if self.base_dir.parent == self.base_dir:
            raise ValueError(f"export_dir cannot be a filesystem root: {export_dir}")

    @staticmethod
    def _sanitize_filename(filename: str) -> str:
        """Keep only the final path component and filesystem-safe characters.

        Examples:
            >>> DirectoryExportSink._sanitize_filename("../cart.json")
            'cart.json'
        """
        name = Path(filename).name
        sanitized = re.sub(r"[^\w.\-]", "_", name)
        if not sanitized or sanitized in {".", ".."}:
            raise ValueError(f"Invalid export filename: {filename!r}")
        return sanitized

    async def save(self, filename: str, content: str) -> str:
        target = self.base_dir / self._sanitize_filename(filename)
        try:
            await asyncio.to_thread(self.base_dir.mkdir, parents=True, exist_ok=True)
            await asyncio.to_thread(target.write_text, content, encoding="utf-8")
        except OSError as e:
            logger.error(
                f"Failed to write export file: {e}",
                extra={"path": str(target)},
                exc_info=True,
            )
            raise

        logger.info(f"Wrote export file {target}", extra={"path": str(target)})
        return str(target)
