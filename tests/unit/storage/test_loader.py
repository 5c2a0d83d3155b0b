"""
Unit tests for the document loader and provider selection.
"""

import asyncio
from pathlib import Path

import httpx
import pytest

from lpgview.config import ProviderKind, Settings
from lpgview.core.errors import AuthError, NotFoundError, ParseError, StorageError
from lpgview.storage import (
    DocumentLoader,
    GoogleDriveProvider,
    LocalDirectoryProvider,
    MemoryProvider,
    create_provider,
)
from lpgview.storage.loader import build_view

LEGACY = """\
# alpha {"label": "Alpha"}
First node.
alpha -[links]-> beta
"""


class GatedProvider(MemoryProvider):
    """Memory provider whose reads wait until released, to force ordering."""

    def __init__(self, files):
        super().__init__(files)
        self.gates = {name: asyncio.Event() for name in files}

    async def read_file(self, file_id: str) -> str:
        await self.gates[file_id].wait()
        return await super().read_file(file_id)


@pytest.fixture
def provider(particles_text, demo_text):
    return MemoryProvider({
        "particles.toml": particles_text,
        "demo.toml": demo_text,
        "broken.toml": "[a\n",
        "legacy.lpg": LEGACY,
    })


class TestBuildView:
    def test_compiles_enriches_and_indexes(self, demo_text):
        view = build_view(demo_text, name="demo.toml", seed=3)
        assert view.graph.node_count == 12
        assert all("community" in data for _, data in view.graph.iter_node_items())
        assert view.index.search("epistem")[0].node_id == "epistemology"

    def test_format_from_name(self):
        view = build_view(LEGACY, name="notes.lpg", seed=1)
        assert view.graph.get_node("beta").isPlaceholder is True

    def test_view_settings(self, demo_text):
        view = build_view(demo_text, seed=1, emphasis_seconds=0.5, search_limit=2)
        assert view.emphasis.duration == 0.5
        assert len(view.index.search("e")) == 2


class TestDocumentLoader:
    @pytest.mark.asyncio
    async def test_connect_lists_files(self, provider):
        loader = DocumentLoader(provider)
        listing = await loader.connect()
        assert [f.id for f in listing] == ["broken.toml", "demo.toml", "legacy.lpg", "particles.toml"]

    @pytest.mark.asyncio
    async def test_connect_failure(self):
        loader = DocumentLoader(MemoryProvider(allow_auth=False))
        with pytest.raises(AuthError):
            await loader.connect()

    @pytest.mark.asyncio
    async def test_load_publishes_document(self, provider):
        published = []
        loader = DocumentLoader(provider, seed=5, on_load=published.append)
        await loader.connect()

        document = await loader.load("particles.toml")

        assert loader.current is document
        assert published == [document]
        assert document.file_id == "particles.toml"
        assert document.graph.node_count == 3
        assert document.view.graph is document.graph
        assert not loader.loading

    @pytest.mark.asyncio
    async def test_load_legacy_by_name(self, provider):
        loader = DocumentLoader(provider, seed=1)
        await loader.connect()
        document = await loader.load("legacy.lpg")
        assert document.graph.has_node("alpha")

    @pytest.mark.asyncio
    async def test_parse_error_keeps_current_document(self, provider):
        loader = DocumentLoader(provider, seed=1)
        await loader.connect()
        good = await loader.load("particles.toml")

        with pytest.raises(ParseError):
            await loader.load("broken.toml")
        assert loader.current is good

    @pytest.mark.asyncio
    async def test_missing_file_keeps_current_document(self, provider):
        loader = DocumentLoader(provider, seed=1)
        await loader.connect()
        good = await loader.load("particles.toml")

        with pytest.raises(NotFoundError):
            await loader.load("nope.toml")
        assert loader.current is good

    @pytest.mark.asyncio
    async def test_unreachable_drive_is_storage_error(self, particles_text):
        def handler(request):
            if request.url.path.endswith("/files"):
                return httpx.Response(200, json={"files": [{"id": "f1", "name": "a.toml"}]})
            raise httpx.ConnectError("network down", request=request)

        drive = GoogleDriveProvider(lambda: "tok", transport=httpx.MockTransport(handler))
        loader = DocumentLoader(drive, seed=1)
        await loader.connect()
        good = loader.load_text("local.toml", particles_text)

        with pytest.raises(StorageError):
            await loader.load("f1")
        assert loader.current is good

    @pytest.mark.asyncio
    async def test_stale_completion_is_discarded(self, particles_text, demo_text):
        gated = GatedProvider({"slow.toml": demo_text, "fast.toml": particles_text})
        loader = DocumentLoader(gated, seed=1)
        await loader.connect()

        slow = asyncio.create_task(loader.load("slow.toml"))
        fast = asyncio.create_task(loader.load("fast.toml"))
        await asyncio.sleep(0)
        assert loader.loading

        gated.gates["fast.toml"].set()
        fast_doc = await fast
        gated.gates["slow.toml"].set()
        slow_doc = await slow

        assert slow_doc is None
        assert loader.current is fast_doc
        assert loader.current.file_id == "fast.toml"
        assert not loader.loading

    @pytest.mark.asyncio
    async def test_stale_failure_is_discarded(self, particles_text):
        gated = GatedProvider({"gone.toml": "", "ok.toml": particles_text})
        loader = DocumentLoader(gated, seed=1)
        await loader.connect()

        stale = asyncio.create_task(loader.load("gone.toml"))
        await asyncio.sleep(0)
        del gated._files["gone.toml"]
        fresh = asyncio.create_task(loader.load("ok.toml"))
        await asyncio.sleep(0)

        gated.gates["ok.toml"].set()
        gated.gates["gone.toml"].set()
        assert await stale is None
        assert (await fresh).file_id == "ok.toml"

    def test_load_text(self, particles_text):
        loader = DocumentLoader(seed=1)
        document = loader.load_text("upload.toml", particles_text)
        assert loader.current is document
        assert document.file_id is None
        assert document.generation == 1

    @pytest.mark.asyncio
    async def test_save_overwrites_current(self, provider, particles_text):
        loader = DocumentLoader(provider, seed=1)
        await loader.connect()
        await loader.load("particles.toml")

        edited = particles_text + "\n# edited\n"
        assert await loader.save(edited) is True
        assert (await provider.read_file("particles.toml")).endswith("# edited\n")
        assert loader.current.text == edited

    @pytest.mark.asyncio
    async def test_failed_save_keeps_text(self, particles_text):
        read_only = MemoryProvider({"a.toml": particles_text}, read_only=True)
        loader = DocumentLoader(read_only, seed=1)
        await loader.connect()
        await loader.load("a.toml")

        with pytest.raises(StorageError):
            await loader.save("[b]\n")
        assert loader.current.text == particles_text

    @pytest.mark.asyncio
    async def test_save_without_stored_document(self):
        loader = DocumentLoader(MemoryProvider())
        with pytest.raises(StorageError):
            await loader.save("x")

    def test_without_provider(self):
        with pytest.raises(StorageError):
            asyncio.run(DocumentLoader().connect())

    def test_close(self, particles_text):
        loader = DocumentLoader(seed=1)
        loader.load_text("a.toml", particles_text)
        loader.close()
        assert loader.current is None


class TestCreateProvider:
    def test_local(self, tmp_path):
        provider = create_provider(Settings(root_dir=tmp_path))
        assert isinstance(provider, LocalDirectoryProvider)
        assert provider.root == Path(tmp_path).resolve()

    def test_memory(self):
        assert isinstance(create_provider(Settings(provider=ProviderKind.MEMORY)), MemoryProvider)

    def test_gdrive_requires_token(self):
        with pytest.raises(AuthError):
            create_provider(Settings(provider=ProviderKind.GDRIVE))

    @pytest.mark.asyncio
    async def test_gdrive_with_token(self):
        provider = create_provider(Settings(provider=ProviderKind.GDRIVE, gdrive_token="tok"))
        assert isinstance(provider, GoogleDriveProvider)
        assert await provider.authenticate() is True
