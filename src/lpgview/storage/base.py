"""
Storage Provider Contract.

Any file backend (local directory, cloud drive, in-memory) satisfies this
protocol. The document loader only ever calls these operations and never
inspects backend-specific detail.
"""

from typing import List, Optional, Protocol, runtime_checkable

from pydantic import BaseModel


class FileMeta(BaseModel):
    """A document as listed by a backend."""
    id: str
    name: str
    updated_at: Optional[str] = None


@runtime_checkable
class StorageProvider(Protocol):
    """
    Four-operation file contract plus authentication.

    Implementations raise ``AuthError`` when called unauthenticated,
    ``NotFoundError`` for ids outside the current listing and
    ``UnsupportedOperationError`` for operations they do not offer.
    """

    @property
    def provider_name(self) -> str:
        """Human-readable backend name."""
        ...

    async def authenticate(self) -> bool:
        """Connect the backend; False when refused or cancelled."""
        ...

    def is_authenticated(self) -> bool:
        ...

    async def list_files(self) -> List[FileMeta]:
        ...

    async def read_file(self, file_id: str) -> str:
        ...

    async def write_file(self, file_id: str, content: str) -> bool:
        ...
