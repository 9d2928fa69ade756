"""Tree enumerator: lists the files directly under a granted tree."""

from __future__ import annotations

import logging
from typing import List

from core import contract
from core.errors import ListError, describe
from core.interfaces import (
    COLUMN_DISPLAY_NAME,
    COLUMN_DOCUMENT_ID,
    COLUMN_LAST_MODIFIED,
    COLUMN_MIME_TYPE,
    COLUMN_SIZE,
    DEFAULT_MIME_TYPE,
    MIME_TYPE_DIR,
    DocumentsProvider,
)
from core.models import FileEntry
from core.workers import WorkerPool

_log = logging.getLogger(__name__)

PROJECTION = (
    COLUMN_DOCUMENT_ID,
    COLUMN_DISPLAY_NAME,
    COLUMN_SIZE,
    COLUMN_LAST_MODIFIED,
    COLUMN_MIME_TYPE,
)


def _as_int(value: object) -> int:
    if value is None:
        return 0
    return int(value)


class TreeEnumerator:
    def __init__(self, *, provider: DocumentsProvider, workers: WorkerPool) -> None:
        self._provider = provider
        self._workers = workers

    async def list_files(self, tree_uri: str) -> List[FileEntry]:
        """Return the non-directory children of the tree root.

        No recursion. Raises ListError on a malformed tree URI or a failing query.
        """

        def _do() -> List[FileEntry]:
            tree_doc_id = contract.get_tree_document_id(tree_uri)
            children_uri = contract.build_child_documents_uri_using_tree(tree_uri, tree_doc_id)

            rows = self._provider.query(children_uri, PROJECTION)
            if rows is None:
                return []

            out: List[FileEntry] = []
            for row in rows:
                mime_type = row.get(COLUMN_MIME_TYPE) or DEFAULT_MIME_TYPE
                if mime_type == MIME_TYPE_DIR:
                    continue

                out.append(
                    FileEntry(
                        uri=contract.build_document_uri_using_tree(tree_uri, row[COLUMN_DOCUMENT_ID]),
                        name=row.get(COLUMN_DISPLAY_NAME) or "",
                        size_bytes=max(0, _as_int(row.get(COLUMN_SIZE))),
                        modified=_as_int(row.get(COLUMN_LAST_MODIFIED)),
                        mime_type=mime_type,
                    )
                )
            return out

        try:
            files = await self._workers.run(_do)
        except Exception as e:
            _log.warning("Listing %s failed: %s", tree_uri, describe(e))
            raise ListError(describe(e)) from e

        _log.debug("Listed %d files under %s", len(files), tree_uri)
        return files
