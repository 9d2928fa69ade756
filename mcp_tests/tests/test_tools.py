import pytest

from core.errors import ChannelError
from core.models import MethodResult
from tools import copy_to_cache as copy_tool
from tools import delete_document as delete_tool
from tools import list_files as list_files_tool
from tools import pick_directory as pick_tool


class FakeChannel:
    def __init__(self, result):
        self.result = result
        self.calls = []

    async def handle(self, method, arguments=None):
        self.calls.append((method, arguments))
        return self.result


@pytest.mark.asyncio
async def test_pick_directory_tool_forwards_hint(dummy_mcp):
    channel = FakeChannel(MethodResult.success({"uri": "content://a/tree/b", "name": "b"}))
    pick_tool.register(dummy_mcp, channel=channel)

    out = await dummy_mcp.tools["pick_directory"](start_with_downloads=True)

    assert out == {"uri": "content://a/tree/b", "name": "b"}
    assert channel.calls == [("pickDirectory", {"startWithDownloads": True})]


@pytest.mark.asyncio
async def test_pick_directory_tool_no_selection(dummy_mcp):
    pick_tool.register(dummy_mcp, channel=FakeChannel(MethodResult.success(None)))
    assert await dummy_mcp.tools["pick_directory"]() is None


@pytest.mark.asyncio
async def test_list_files_tool_maps_arguments(dummy_mcp):
    entries = [{"uri": "u", "name": "a.jpg", "sizeBytes": 1, "modified": 2, "mimeType": "image/jpeg"}]
    channel = FakeChannel(MethodResult.success(entries))
    list_files_tool.register(dummy_mcp, channel=channel)

    out = await dummy_mcp.tools["list_files"](tree_uri="content://a/tree/b")

    assert out == entries
    assert channel.calls == [("listFiles", {"treeUri": "content://a/tree/b"})]


@pytest.mark.asyncio
async def test_list_files_tool_raises_coded_error(dummy_mcp):
    list_files_tool.register(dummy_mcp, channel=FakeChannel(MethodResult.error("INVALID_ARG", "treeUri is required")))

    with pytest.raises(ChannelError) as ei:
        await dummy_mcp.tools["list_files"]()

    assert ei.value.code == "INVALID_ARG"
    assert ei.value.message == "treeUri is required"


@pytest.mark.asyncio
async def test_delete_document_tool(dummy_mcp):
    channel = FakeChannel(MethodResult.success(False))
    delete_tool.register(dummy_mcp, channel=channel)

    assert await dummy_mcp.tools["delete_document"](uri="u") is False
    assert channel.calls == [("deleteDocument", {"uri": "u"})]


@pytest.mark.asyncio
async def test_copy_to_cache_tool(dummy_mcp):
    channel = FakeChannel(MethodResult.success("/cache/x.jpg"))
    copy_tool.register(dummy_mcp, channel=channel)

    out = await dummy_mcp.tools["copy_to_cache"](uri="u", dest_path="/cache/x.jpg")

    assert out == "/cache/x.jpg"
    assert channel.calls == [("copyToCache", {"uri": "u", "destPath": "/cache/x.jpg"})]


@pytest.mark.asyncio
async def test_copy_to_cache_tool_read_error(dummy_mcp):
    copy_tool.register(dummy_mcp, channel=FakeChannel(MethodResult.error("READ_ERROR", "Cannot open file")))

    with pytest.raises(ChannelError) as ei:
        await dummy_mcp.tools["copy_to_cache"](uri="u", dest_path="/x")

    assert ei.value.code == "READ_ERROR"
