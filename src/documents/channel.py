"""Request dispatcher for the documents channel.

Routes a method name plus its argument mapping to the broker, enumerator,
mutator or copier, and resolves every call exactly once with a
MethodResult. Unknown methods resolve as "not implemented" so callers can
probe for capabilities.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

from core.errors import ChannelError, InvalidArgumentError
from core.models import MethodResult
from documents.broker import DirectoryPicker
from documents.copier import ContentCopier
from documents.enumerator import TreeEnumerator
from documents.mutator import DocumentMutator

_log = logging.getLogger(__name__)

Arguments = Mapping[str, Any]

PICK_DIRECTORY = "pickDirectory"
LIST_FILES = "listFiles"
DELETE_DOCUMENT = "deleteDocument"
COPY_TO_CACHE = "copyToCache"


def _require_str(arguments: Arguments, name: str) -> str:
    value = arguments.get(name)
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"{name} is required")
    return value


def _optional_bool(arguments: Arguments, name: str, default: bool = False) -> bool:
    value = arguments.get(name)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise InvalidArgumentError(f"{name} must be a boolean")
    return value


class DocumentsChannel:
    def __init__(
        self,
        *,
        picker: DirectoryPicker,
        enumerator: TreeEnumerator,
        mutator: DocumentMutator,
        copier: ContentCopier,
    ) -> None:
        self._picker = picker
        self._enumerator = enumerator
        self._mutator = mutator
        self._copier = copier

        self._methods: Dict[str, Callable[[Arguments], Awaitable[Any]]] = {
            PICK_DIRECTORY: self._pick_directory,
            LIST_FILES: self._list_files,
            DELETE_DOCUMENT: self._delete_document,
            COPY_TO_CACHE: self._copy_to_cache,
        }

    async def handle(self, method: str, arguments: Optional[Arguments] = None) -> MethodResult:
        handler = self._methods.get(method)
        if handler is None:
            _log.debug("Method not implemented: %s", method)
            return MethodResult.not_implemented()

        try:
            value = await handler(arguments or {})
        except ChannelError as e:
            return MethodResult.error(e.code, e.message)
        return MethodResult.success(value)

    async def _pick_directory(self, arguments: Arguments) -> Optional[Dict[str, Any]]:
        start_with_downloads = _optional_bool(arguments, "startWithDownloads")
        handle = await self._picker.request_grant(start_with_downloads=start_with_downloads)
        return handle.to_dict() if handle is not None else None

    async def _list_files(self, arguments: Arguments) -> list:
        tree_uri = _require_str(arguments, "treeUri")
        files = await self._enumerator.list_files(tree_uri)
        return [f.to_dict() for f in files]

    async def _delete_document(self, arguments: Arguments) -> bool:
        uri = _require_str(arguments, "uri")
        return await self._mutator.delete_document(uri)

    async def _copy_to_cache(self, arguments: Arguments) -> str:
        uri = _require_str(arguments, "uri")
        dest_path = _require_str(arguments, "destPath")
        return await self._copier.copy_to_cache(uri, dest_path)
