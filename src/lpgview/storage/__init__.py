"""
Storage providers for lpgview.

Pluggable document backends behind one contract:
- LocalDirectoryProvider: files in a local folder
- GoogleDriveProvider: read-only Drive documents
- MemoryProvider: fast ephemeral storage for testing
"""

from ..config import ProviderKind, Settings
from ..core.errors import AuthError
from .base import FileMeta, StorageProvider
from .gdrive import GoogleDriveProvider
from .loader import DocumentLoader, LoadedDocument, build_view
from .local import LocalDirectoryProvider
from .memory import MemoryProvider


def create_provider(settings: Settings) -> StorageProvider:
    """Select the storage backend named by the settings."""
    if settings.provider == ProviderKind.GDRIVE:
        if not settings.gdrive_token:
            raise AuthError("LPGVIEW_GDRIVE_TOKEN is required for the Google Drive provider")
        token = settings.gdrive_token
        return GoogleDriveProvider(lambda: token)
    if settings.provider == ProviderKind.MEMORY:
        return MemoryProvider()
    return LocalDirectoryProvider(settings.root_dir, suffixes=settings.suffixes)


__all__ = [
    "DocumentLoader",
    "FileMeta",
    "GoogleDriveProvider",
    "LoadedDocument",
    "LocalDirectoryProvider",
    "MemoryProvider",
    "StorageProvider",
    "build_view",
    "create_provider",
]
