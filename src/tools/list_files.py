"""MCP tool that lists the files of a granted directory tree.

Registers the 'list_files' tool which forwards to the documents channel
and returns file entries (directories are skipped, no recursion).
"""

from __future__ import annotations

from typing import Any, Dict, List

from mcp.server.fastmcp import FastMCP

from documents.channel import LIST_FILES, DocumentsChannel


def register(mcp: FastMCP, *, channel: DocumentsChannel) -> None:
    @mcp.tool(name="list_files")
    async def list_files(tree_uri: str = "") -> List[Dict[str, Any]]:
        """List the files directly inside a granted tree.

        Params:
          - tree_uri: tree URI returned by pick_directory (required).

        Returns:
          List of {"uri", "name", "sizeBytes", "modified", "mimeType"}.

        Raises:
          ChannelError with code INVALID_ARG for a missing tree_uri, or
          LIST_ERROR when the tree cannot be queried.
        """
        result = await channel.handle(LIST_FILES, {"treeUri": tree_uri})
        return result.unwrap()
