"""Server bootstrap for the documents MCP service.

Creates the FastMCP instance, builds the local documents provider and
the channel components, routes picker results to the broker, registers
the tools and starts the MCP server (stdio transport).
"""

import logging
import sys

from mcp.server.fastmcp import FastMCP

from config import (
    COPY_CHUNK_SIZE,
    DOCUMENTS_AUTHORITY,
    DOCUMENTS_ROOT,
    DOWNLOADS_INITIAL_URI,
    LOG_LEVEL,
    PERMISSIONS_FILE,
    PICK_DIRECTORY_CODE,
    PICKER_DIR,
    PROVIDER_API_LEVEL,
    UNKNOWN_TREE_NAME,
    WORKER_MAX_THREADS,
)
from core.workers import WorkerPool
from documents.broker import DirectoryPicker
from documents.channel import DocumentsChannel
from documents.copier import ContentCopier
from documents.enumerator import TreeEnumerator
from documents.host import ResultRouter
from documents.mutator import DocumentMutator
from providers.local_provider import LocalDocumentsProvider, auto_chooser

from tools.copy_to_cache import register as register_copy_to_cache
from tools.delete_document import register as register_delete_document
from tools.list_files import register as register_list_files
from tools.pick_directory import register as register_pick_directory

mcp = FastMCP("documents-mcp")

router = ResultRouter()

workers = WorkerPool(max_workers=WORKER_MAX_THREADS)


def build_channel() -> DocumentsChannel:
    provider = LocalDocumentsProvider(
        root=DOCUMENTS_ROOT,
        permissions_file=PERMISSIONS_FILE,
        authority=DOCUMENTS_AUTHORITY,
        api_level=PROVIDER_API_LEVEL,
        chooser=auto_chooser(PICKER_DIR),
    )
    picker = DirectoryPicker(
        provider=provider,
        request_code=PICK_DIRECTORY_CODE,
        placeholder_name=UNKNOWN_TREE_NAME,
        downloads_uri=DOWNLOADS_INITIAL_URI,
    )

    # The broker sees completion signals before any other handler.
    router.add(picker.on_grant_completed)
    provider.set_result_listener(router.dispatch)

    return DocumentsChannel(
        picker=picker,
        enumerator=TreeEnumerator(provider=provider, workers=workers),
        mutator=DocumentMutator(provider=provider, workers=workers),
        copier=ContentCopier(provider=provider, workers=workers, chunk_size=COPY_CHUNK_SIZE),
    )


def register_tools() -> None:
    channel = build_channel()

    register_pick_directory(mcp, channel=channel)
    register_list_files(mcp, channel=channel)
    register_delete_document(mcp, channel=channel)
    register_copy_to_cache(mcp, channel=channel)


register_tools()


def main() -> None:
    # stdout carries the stdio transport
    logging.basicConfig(
        level=LOG_LEVEL,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        mcp.run(transport="stdio")
    finally:
        workers.shutdown()


if __name__ == "__main__":
    main()
