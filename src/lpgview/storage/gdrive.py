"""
Google Drive storage provider.

Read-only access to ``.toml`` documents through the Drive v3 REST API. The
OAuth exchange itself happens elsewhere: the provider receives a token
source (a callable returning an access token, or None when the user
cancels) and sends the token as a bearer credential.
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

import httpx

from ..config import GDRIVE_API_BASE, GDRIVE_PAGE_SIZE
from ..core.errors import AuthError, NotFoundError, StorageError, UnsupportedOperationError
from .base import FileMeta

logger = logging.getLogger(__name__)

TokenSource = Callable[[], Union[Optional[str], Awaitable[Optional[str]]]]

LIST_QUERY = "name contains '.toml' and trashed=false"


class GoogleDriveProvider:
    """
    Drive-backed documents.

    Args:
        token_source: Returns an OAuth access token, or None if refused.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).
    """

    provider_name = "Google Drive"

    def __init__(
        self,
        token_source: TokenSource,
        api_base: str = GDRIVE_API_BASE,
        page_size: int = GDRIVE_PAGE_SIZE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self.token_source = token_source
        self.api_base = api_base.rstrip("/")
        self.page_size = page_size
        self._transport = transport
        self._timeout = timeout
        self._access_token: Optional[str] = None

    async def authenticate(self) -> bool:
        try:
            token = self.token_source()
            if inspect.isawaitable(token):
                token = await token
        except Exception as e:
            logger.error(f"Google Auth Error: {e}")
            self._access_token = None
            return False

        self._access_token = token or None
        return self._access_token is not None

    def is_authenticated(self) -> bool:
        return self._access_token is not None

    def _client(self) -> httpx.AsyncClient:
        if self._access_token is None:
            raise AuthError("Not authenticated with Google Drive")
        return httpx.AsyncClient(
            base_url=self.api_base,
            headers={"Authorization": f"Bearer {self._access_token}"},
            timeout=self._timeout,
            transport=self._transport,
        )

    async def _get(self, path: str, params: Dict[str, Any]) -> httpx.Response:
        async with self._client() as client:
            try:
                return await client.get(path, params=params)
            except httpx.TimeoutException as e:
                raise StorageError(f"Google Drive request timed out: {path}") from e
            except httpx.RequestError as e:
                raise StorageError(f"Cannot reach Google Drive: {e}") from e

    @staticmethod
    def _check(response: httpx.Response, file_id: Optional[str] = None) -> None:
        if response.status_code in (401, 403):
            raise AuthError(f"Google Drive rejected the credentials ({response.status_code})")
        if response.status_code == 404 and file_id is not None:
            raise NotFoundError(file_id)
        if response.is_error:
            raise StorageError(
                f"Google Drive request failed ({response.status_code}): {response.text[:200]}"
            )

    async def list_files(self) -> List[FileMeta]:
        response = await self._get(
            "/files",
            {
                "q": LIST_QUERY,
                "fields": "files(id,name,modifiedTime)",
                "pageSize": self.page_size,
            },
        )
        self._check(response)
        files = response.json().get("files") or []
        return [
            FileMeta(id=f["id"], name=f["name"], updated_at=f.get("modifiedTime"))
            for f in files
        ]

    async def read_file(self, file_id: str) -> str:
        response = await self._get(f"/files/{file_id}", {"alt": "media"})
        self._check(response, file_id)
        return response.text

    async def write_file(self, file_id: str, content: str) -> bool:
        raise UnsupportedOperationError("write_file", self.provider_name)
