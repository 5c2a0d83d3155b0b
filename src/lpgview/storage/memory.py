"""
In-memory storage provider.

Fast ephemeral backend for tests and demos.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

from ..core.errors import AuthError, NotFoundError, UnsupportedOperationError
from .base import FileMeta


class MemoryProvider:
    """Holds documents in a dict keyed by file name."""

    provider_name = "Memory"

    def __init__(
        self,
        files: Optional[Dict[str, str]] = None,
        read_only: bool = False,
        allow_auth: bool = True,
    ):
        self._files: Dict[str, str] = dict(files or {})
        self._updated: Dict[str, str] = {
            name: datetime.now(timezone.utc).isoformat() for name in self._files
        }
        self.read_only = read_only
        self.allow_auth = allow_auth
        self._authenticated = False

    async def authenticate(self) -> bool:
        self._authenticated = self.allow_auth
        return self._authenticated

    def is_authenticated(self) -> bool:
        return self._authenticated

    def _require_auth(self) -> None:
        if not self._authenticated:
            raise AuthError(f"{self.provider_name} provider is not authenticated")

    async def list_files(self) -> List[FileMeta]:
        self._require_auth()
        return [
            FileMeta(id=name, name=name, updated_at=self._updated.get(name))
            for name in sorted(self._files)
        ]

    async def read_file(self, file_id: str) -> str:
        self._require_auth()
        if file_id not in self._files:
            raise NotFoundError(file_id)
        return self._files[file_id]

    async def write_file(self, file_id: str, content: str) -> bool:
        self._require_auth()
        if self.read_only:
            raise UnsupportedOperationError("write_file", self.provider_name)
        if file_id not in self._files:
            raise NotFoundError(file_id)
        self._files[file_id] = content
        self._updated[file_id] = datetime.now(timezone.utc).isoformat()
        return True
