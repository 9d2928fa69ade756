"""MCP tool that copies a document's bytes into a local file.

Registers 'copy_to_cache'; parent directories of the destination are
created and an existing file at the destination is overwritten.
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from documents.channel import COPY_TO_CACHE, DocumentsChannel


def register(mcp: FastMCP, *, channel: DocumentsChannel) -> None:
    @mcp.tool(name="copy_to_cache")
    async def copy_to_cache(uri: str = "", dest_path: str = "") -> str:
        """Copy a document to dest_path and return dest_path.

        Params:
          - uri: document URI from list_files (required).
          - dest_path: local file path to write (required).

        Raises:
          ChannelError with code INVALID_ARG, READ_ERROR (source cannot be
          opened) or COPY_ERROR (writing failed).
        """
        result = await channel.handle(COPY_TO_CACHE, {"uri": uri, "destPath": dest_path})
        return result.unwrap()
