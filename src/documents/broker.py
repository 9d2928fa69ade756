"""Directory grant broker.

Starts the environment's interactive tree picker and correlates its
out-of-band completion signal with the single pending caller. The pending
request is an asyncio.Future held in one slot; a second request while the
slot is taken is rejected rather than queued.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from core import contract
from core.errors import AlreadyActiveError, PickerError, describe
from core.interfaces import (
    COLUMN_DISPLAY_NAME,
    FLAG_GRANT_READ_URI_PERMISSION,
    FLAG_GRANT_WRITE_URI_PERMISSION,
    INITIAL_URI_MIN_API,
    RESULT_OK,
    DocumentsProvider,
)
from core.models import TreeHandle

_log = logging.getLogger(__name__)

_GRANT_FLAGS = FLAG_GRANT_READ_URI_PERMISSION | FLAG_GRANT_WRITE_URI_PERMISSION


class DirectoryPicker:
    def __init__(
        self,
        *,
        provider: DocumentsProvider,
        request_code: int,
        placeholder_name: str = "Unknown",
        downloads_uri: Optional[str] = None,
    ) -> None:
        self._provider = provider
        self._request_code = int(request_code)
        self._placeholder_name = placeholder_name
        self._downloads_uri = downloads_uri

        self._pending: Optional["asyncio.Future[Optional[TreeHandle]]"] = None

    @property
    def request_code(self) -> int:
        return self._request_code

    @property
    def is_pending(self) -> bool:
        return self._pending is not None

    def request_grant(self, *, start_with_downloads: bool = False) -> "asyncio.Future[Optional[TreeHandle]]":
        """Start the picker and return the future the completion resolves.

        Raises AlreadyActiveError, leaving the pending request untouched, if
        a picker is already active.
        """
        if self._pending is not None:
            _log.debug("Picker request rejected: one is already pending")
            raise AlreadyActiveError("A picker is already active")

        fut: "asyncio.Future[Optional[TreeHandle]]" = asyncio.get_running_loop().create_future()
        self._pending = fut

        initial_uri = None
        if start_with_downloads and self._downloads_uri:
            # Older environments have no initial-location extra; drop the hint.
            if self._provider.api_level >= INITIAL_URI_MIN_API:
                initial_uri = self._downloads_uri

        try:
            self._provider.launch_tree_picker(self._request_code, initial_uri=initial_uri)
        except Exception as e:
            self._pending = None
            raise PickerError(f"Cannot start directory picker: {describe(e)}") from e

        _log.info("Directory picker started (request code %s)", self._request_code)
        return fut

    def on_grant_completed(self, request_code: int, result_code: int, uri: Optional[str]) -> bool:
        """Handle a picker completion signal.

        Returns False when the signal carries another request code so the
        caller can route it elsewhere; True once consumed.
        """
        if request_code != self._request_code:
            return False

        fut = self._pending
        if fut is None:
            _log.warning("Picker result arrived with no pending request")
            return True
        self._pending = None

        if fut.done():
            # Caller went away; the grant is not taken.
            _log.debug("Picker result dropped: caller no longer waiting")
            return True

        if result_code != RESULT_OK or not uri:
            _log.info("Directory picker closed without a selection")
            fut.set_result(None)
            return True

        try:
            self._provider.take_persistable_uri_permission(uri, _GRANT_FLAGS)
        except Exception as e:
            _log.warning("Cannot persist grant for %s: %s", uri, describe(e))
            fut.set_exception(PickerError(f"Cannot persist access: {describe(e)}"))
            return True

        name = self._tree_display_name(uri) or self._placeholder_name
        _log.info("Directory granted: %s", name)
        fut.set_result(TreeHandle(uri=uri, name=name))
        return True

    def _tree_display_name(self, tree_uri: str) -> Optional[str]:
        try:
            doc_id = contract.get_tree_document_id(tree_uri)
            doc_uri = contract.build_document_uri_using_tree(tree_uri, doc_id)
            rows = self._provider.query(doc_uri, (COLUMN_DISPLAY_NAME,))
            if rows is None:
                return None
            for row in rows:
                return row.get(COLUMN_DISPLAY_NAME)
            return None
        except Exception as e:
            _log.debug("Display name lookup failed for %s: %s", tree_uri, describe(e))
            return None
