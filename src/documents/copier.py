"""Content copier: streams one document into an ordinary local file.

Opening the source is the read phase (READ_ERROR); creating parent
directories and writing the destination is the copy phase (COPY_ERROR).
Both streams are closed on every path.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import BinaryIO

from core.errors import ChannelError, CopyError, ReadError, describe
from core.interfaces import DocumentsProvider
from core.workers import WorkerPool

_log = logging.getLogger(__name__)


def _same_file(source: BinaryIO, dest: Path) -> bool:
    try:
        return os.path.samestat(os.fstat(source.fileno()), dest.stat())
    except (OSError, ValueError):
        return False


class ContentCopier:
    def __init__(self, *, provider: DocumentsProvider, workers: WorkerPool, chunk_size: int = 64 * 1024) -> None:
        self._provider = provider
        self._workers = workers
        self._chunk_size = max(1, int(chunk_size))

    async def copy_to_cache(self, uri: str, dest_path: str) -> str:
        """Copy the document at uri to dest_path and return dest_path."""

        def _do() -> str:
            try:
                source = self._provider.open_input_stream(uri)
            except Exception as e:
                raise ReadError(f"Cannot open file: {describe(e)}") from e
            if source is None:
                raise ReadError("Cannot open file")

            with source:
                dest = Path(dest_path)
                if _same_file(source, dest):
                    raise CopyError("Destination is the source document")

                try:
                    dest.parent.mkdir(parents=True, exist_ok=True)
                    with dest.open("wb") as out:
                        shutil.copyfileobj(source, out, self._chunk_size)
                except Exception as e:
                    raise CopyError(describe(e)) from e
            return dest_path

        try:
            out = await self._workers.run(_do)
        except ChannelError as e:
            _log.warning("Copying %s failed (%s): %s", uri, e.code, e.message)
            raise
        except Exception as e:
            _log.warning("Copying %s failed: %s", uri, describe(e))
            raise CopyError(describe(e)) from e

        _log.debug("Copied %s to %s", uri, out)
        return out
