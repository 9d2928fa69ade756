from __future__ import annotations

import logging

from core.errors import DeleteError, describe
from core.interfaces import DocumentsProvider
from core.workers import WorkerPool

_log = logging.getLogger(__name__)


class DocumentMutator:
    # Deletes single documents; one attempt, no retries.
    def __init__(self, *, provider: DocumentsProvider, workers: WorkerPool) -> None:
        self._provider = provider
        self._workers = workers

    async def delete_document(self, uri: str) -> bool:
        def _do() -> bool:
            try:
                return bool(self._provider.delete_document(uri))
            except (FileNotFoundError, PermissionError) as e:
                # Already gone or not ours to delete: an answer, not a fault
                _log.debug("Delete of %s refused: %s", uri, describe(e))
                return False

        try:
            return await self._workers.run(_do)
        except Exception as e:
            _log.warning("Deleting %s failed: %s", uri, describe(e))
            raise DeleteError(describe(e)) from e
