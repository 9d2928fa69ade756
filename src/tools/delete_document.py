from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from documents.channel import DELETE_DOCUMENT, DocumentsChannel


def register(mcp: FastMCP, *, channel: DocumentsChannel) -> None:
    @mcp.tool(name="delete_document")
    async def delete_document(uri: str = "") -> bool:
        """Delete one document; returns False if it was already gone or not deletable."""
        result = await channel.handle(DELETE_DOCUMENT, {"uri": uri})
        return result.unwrap()
