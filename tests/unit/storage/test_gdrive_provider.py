"""
Unit tests for the Google Drive provider, using httpx.MockTransport.
"""

import httpx
import pytest

from lpgview.core.errors import AuthError, NotFoundError, StorageError, UnsupportedOperationError
from lpgview.storage.gdrive import LIST_QUERY, GoogleDriveProvider

FILES = {
    "files": [
        {"id": "f1", "name": "physics.toml", "modifiedTime": "2024-01-02T03:04:05Z"},
        {"id": "f2", "name": "philosophy.toml"},
    ]
}


def _provider(handler, token="tok"):
    return GoogleDriveProvider(lambda: token, transport=httpx.MockTransport(handler))


class TestAuthentication:
    @pytest.mark.asyncio
    async def test_sync_token_source(self):
        provider = _provider(lambda request: httpx.Response(200))
        assert await provider.authenticate() is True
        assert provider.is_authenticated()

    @pytest.mark.asyncio
    async def test_async_token_source(self):
        async def token():
            return "async-token"

        provider = GoogleDriveProvider(token)
        assert await provider.authenticate() is True

    @pytest.mark.asyncio
    async def test_cancelled_sign_in(self):
        provider = _provider(lambda request: httpx.Response(200), token=None)
        assert await provider.authenticate() is False
        with pytest.raises(AuthError):
            await provider.list_files()

    @pytest.mark.asyncio
    async def test_token_source_failure(self):
        def broken():
            raise RuntimeError("popup closed")

        provider = GoogleDriveProvider(broken)
        assert await provider.authenticate() is False
        assert not provider.is_authenticated()


class TestOperations:
    @pytest.mark.asyncio
    async def test_list_files(self):
        seen = {}

        def handler(request):
            seen["url"] = request.url
            seen["auth"] = request.headers["Authorization"]
            return httpx.Response(200, json=FILES)

        provider = _provider(handler)
        await provider.authenticate()
        listing = await provider.list_files()

        assert [(f.id, f.name) for f in listing] == [("f1", "physics.toml"), ("f2", "philosophy.toml")]
        assert listing[0].updated_at == "2024-01-02T03:04:05Z"
        assert listing[1].updated_at is None
        assert seen["auth"] == "Bearer tok"
        assert seen["url"].path == "/drive/v3/files"
        assert seen["url"].params["q"] == LIST_QUERY
        assert seen["url"].params["pageSize"] == "10"
        assert seen["url"].params["fields"] == "files(id,name,modifiedTime)"

    @pytest.mark.asyncio
    async def test_read_file(self):
        def handler(request):
            assert request.url.path == "/drive/v3/files/f1"
            assert request.url.params["alt"] == "media"
            return httpx.Response(200, text="[a]\n")

        provider = _provider(handler)
        await provider.authenticate()
        assert await provider.read_file("f1") == "[a]\n"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status,error", [
        (401, AuthError),
        (403, AuthError),
        (404, NotFoundError),
        (500, StorageError),
    ])
    async def test_status_mapping(self, status, error):
        provider = _provider(lambda request: httpx.Response(status, text="nope"))
        await provider.authenticate()
        with pytest.raises(error):
            await provider.read_file("f1")

    @pytest.mark.asyncio
    async def test_write_is_unsupported(self):
        provider = _provider(lambda request: httpx.Response(200))
        await provider.authenticate()
        with pytest.raises(UnsupportedOperationError):
            await provider.write_file("f1", "x")


class TestTransportFailures:
    @pytest.mark.asyncio
    async def test_connection_error_is_storage_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        provider = _provider(handler)
        await provider.authenticate()
        with pytest.raises(StorageError, match="Cannot reach Google Drive") as exc_info:
            await provider.read_file("f1")
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout_is_storage_error(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        provider = _provider(handler)
        await provider.authenticate()
        with pytest.raises(StorageError, match="timed out"):
            await provider.list_files()
