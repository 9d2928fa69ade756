"""MCP tool that asks the user to grant access to a directory tree.

Registers 'pick_directory', which starts the environment's tree picker
through the documents channel and waits for the user's choice.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP

from config import START_WITH_DOWNLOADS
from documents.channel import PICK_DIRECTORY, DocumentsChannel


def register(mcp: FastMCP, *, channel: DocumentsChannel) -> None:
    @mcp.tool(name="pick_directory")
    async def pick_directory(start_with_downloads: bool = START_WITH_DOWNLOADS) -> Optional[Dict[str, Any]]:
        """Let the user choose a directory and grant persistent read/write access.

        Params:
          - start_with_downloads: open the picker at the Download folder when
            the environment supports a start location (default from config).

        Returns:
          {"uri", "name"} for the granted tree, or None if nothing was chosen.

        Raises:
          ChannelError with code ALREADY_ACTIVE when a picker is already open.
        """
        result = await channel.handle(PICK_DIRECTORY, {"startWithDownloads": start_with_downloads})
        return result.unwrap()
