"""
Local directory storage provider.

Browses one directory for graph documents. Only files returned by the most
recent listing can be read or written, mirroring a folder picker that hands
out per-file handles.
"""

import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Sequence

from ..config import DOCUMENT_SUFFIXES
from ..core.errors import AuthError, NotFoundError
from .base import FileMeta

logger = logging.getLogger(__name__)


class LocalDirectoryProvider:
    """
    Documents stored as files in a local directory (non-recursive).

    Args:
        root: Directory to browse.
        suffixes: File suffixes treated as documents.
    """

    provider_name = "Local Hard Drive"

    def __init__(self, root: Path, suffixes: Sequence[str] = DOCUMENT_SUFFIXES):
        self.root = Path(root)
        self.suffixes = tuple(s.lower() for s in suffixes)
        self._directory: Path | None = None
        self._handles: Dict[str, Path] = {}

    async def authenticate(self) -> bool:
        root = self.root.expanduser()
        if not root.is_dir():
            logger.warning(f"Directory not available: {root}")
            return False
        self._directory = root.resolve()
        return True

    def is_authenticated(self) -> bool:
        return self._directory is not None

    def _require_directory(self) -> Path:
        if self._directory is None:
            raise AuthError("Not connected to a folder.")
        return self._directory

    async def list_files(self) -> List[FileMeta]:
        directory = self._require_directory()
        return await asyncio.to_thread(self._scan, directory)

    def _scan(self, directory: Path) -> List[FileMeta]:
        self._handles.clear()
        files = []
        for entry in sorted(directory.iterdir()):
            if not entry.is_file() or entry.suffix.lower() not in self.suffixes:
                continue
            self._handles[entry.name] = entry
            modified = datetime.fromtimestamp(entry.stat().st_mtime, tz=timezone.utc)
            files.append(FileMeta(id=entry.name, name=entry.name, updated_at=modified.isoformat()))
        return files

    def _handle(self, file_id: str) -> Path:
        self._require_directory()
        handle = self._handles.get(file_id)
        if handle is None:
            raise NotFoundError(file_id, f"File {file_id} not found in the current listing.")
        return handle

    async def read_file(self, file_id: str) -> str:
        handle = self._handle(file_id)
        try:
            return await asyncio.to_thread(handle.read_text, encoding="utf-8")
        except FileNotFoundError as e:
            raise NotFoundError(file_id) from e

    async def write_file(self, file_id: str, content: str) -> bool:
        handle = self._handle(file_id)
        await asyncio.to_thread(handle.write_text, content, encoding="utf-8")
        logger.info(f"Saved {file_id} ({len(content)} chars)")
        return True
