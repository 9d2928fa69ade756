"""Environment protocol and constants.

Defines the DocumentsProvider protocol: the operating environment that
owns the interactive grant flow, persisted permissions and the document
store. Components only talk to the store through this contract.
"""

from __future__ import annotations

from typing import Any, BinaryIO, Callable, Iterable, List, Mapping, Optional, Protocol, Sequence


RESULT_OK = -1
RESULT_CANCELED = 0

FLAG_GRANT_READ_URI_PERMISSION = 0x1
FLAG_GRANT_WRITE_URI_PERMISSION = 0x2

MIME_TYPE_DIR = "vnd.android.document/directory"
DEFAULT_MIME_TYPE = "application/octet-stream"

# Minimum environment version that honours an initial picker location
INITIAL_URI_MIN_API = 26

COLUMN_DOCUMENT_ID = "document_id"
COLUMN_DISPLAY_NAME = "_display_name"
COLUMN_SIZE = "_size"
COLUMN_LAST_MODIFIED = "last_modified"
COLUMN_MIME_TYPE = "mime_type"

# (request_code, result_code, uri)
ResultListener = Callable[[int, int, Optional[str]], bool]

Row = Mapping[str, Any]


class DocumentsProvider(Protocol):
    """Contract for the environment hosting granted document trees."""

    api_level: int

    def set_result_listener(self, listener: ResultListener) -> None:
        ...

    def launch_tree_picker(self, request_code: int, *, initial_uri: Optional[str] = None) -> None:
        ...

    def take_persistable_uri_permission(self, uri: str, flags: int) -> None:
        ...

    def release_persistable_uri_permission(self, uri: str, flags: int) -> None:
        ...

    def persisted_uri_permissions(self) -> List[str]:
        ...

    def query(self, uri: str, projection: Sequence[str]) -> Optional[Iterable[Row]]:
        ...

    def delete_document(self, uri: str) -> bool:
        ...

    def open_input_stream(self, uri: str) -> Optional[BinaryIO]:
        ...
