from __future__ import annotations

import asyncio
import json
import logging
import mimetypes
import shutil
from pathlib import Path
from typing import BinaryIO, Callable, Dict, Iterable, List, Optional, Sequence, Set

from core import contract
from core.interfaces import (
    COLUMN_DISPLAY_NAME,
    COLUMN_DOCUMENT_ID,
    COLUMN_LAST_MODIFIED,
    COLUMN_MIME_TYPE,
    COLUMN_SIZE,
    MIME_TYPE_DIR,
    RESULT_CANCELED,
    RESULT_OK,
    ResultListener,
    Row,
)


"""Local filesystem DocumentsProvider implementation.

Serves one on-disk directory as the "primary" volume. Document ids are
"primary:<relative posix path>". Every access is checked against the set
of granted trees; grants taken persistable are written to a JSON file and
reloaded on start.
"""

_log = logging.getLogger(__name__)

VOLUME = "primary"

Chooser = Callable[[Optional[Path]], Optional[Path]]


def auto_chooser(picker_dir: str = "") -> Chooser:
    """Non-interactive chooser: the configured directory, else the start hint."""

    def _choose(initial: Optional[Path]) -> Optional[Path]:
        if picker_dir:
            return Path(picker_dir)
        if initial is not None and initial.is_dir():
            return initial
        return None

    return _choose


class LocalDocumentsProvider:
    # Local filesystem implementation of DocumentsProvider.

    def __init__(
        self,
        *,
        root: Path,
        permissions_file: Optional[Path] = None,
        authority: str = "local.externalstorage.documents",
        api_level: int = 33,
        chooser: Optional[Chooser] = None,
    ) -> None:
        self._root = root.resolve()
        self._permissions_file = permissions_file
        self.authority = authority
        self.api_level = int(api_level)
        self._chooser = chooser or auto_chooser()
        self._listener: Optional[ResultListener] = None

        # Tree document ids granted for this process / persisted across restarts
        self._transient: Set[str] = set()
        self._persisted: Dict[str, int] = self._load_permissions()

    # ---- ids and paths ----

    def document_id_for(self, path: Path) -> str:
        rel = path.resolve().relative_to(self._root).as_posix()
        return f"{VOLUME}:" if rel == "." else f"{VOLUME}:{rel}"

    def tree_uri_for(self, path: Path) -> str:
        return contract.build_tree_uri(self.authority, self.document_id_for(path))

    def _path_for(self, doc_id: str) -> Path:
        volume, sep, rel = doc_id.partition(":")
        if volume != VOLUME or not sep:
            raise FileNotFoundError(f"Unknown document: {doc_id}")

        p = (self._root / rel).resolve()
        # Containment check against the volume root
        try:
            p.relative_to(self._root)
        except ValueError as e:
            raise PermissionError(f"Document outside volume: {doc_id}") from e
        return p

    # ---- grant flow ----

    def set_result_listener(self, listener: ResultListener) -> None:
        self._listener = listener

    def launch_tree_picker(self, request_code: int, *, initial_uri: Optional[str] = None) -> None:
        if self._listener is None:
            raise RuntimeError("No result listener registered")

        initial: Optional[Path] = None
        if initial_uri:
            try:
                if contract.authority_of(initial_uri) == self.authority:
                    initial = self._path_for(contract.get_document_id(initial_uri))
            except (ValueError, OSError):
                initial = None

        loop = asyncio.get_running_loop()
        fut = loop.run_in_executor(None, self._chooser, initial)
        fut.add_done_callback(lambda f: self._deliver(request_code, f))

    def _deliver(self, request_code: int, fut: "asyncio.Future[Optional[Path]]") -> None:
        uri: Optional[str] = None
        if fut.cancelled():
            choice = None
        elif fut.exception() is not None:
            _log.warning("Directory chooser failed: %s", fut.exception())
            choice = None
        else:
            choice = fut.result()

        if choice is not None:
            try:
                path = Path(choice).resolve()
                if path.is_dir():
                    uri = self.tree_uri_for(path)
                    self._transient.add(self.document_id_for(path))
            except ValueError:
                _log.warning("Chosen directory is outside the volume: %s", choice)
                uri = None

        result_code = RESULT_OK if uri else RESULT_CANCELED
        if self._listener is not None:
            self._listener(request_code, result_code, uri)

    # ---- permissions ----

    def _load_permissions(self) -> Dict[str, int]:
        if self._permissions_file is None or not self._permissions_file.exists():
            return {}
        try:
            data = json.loads(self._permissions_file.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            _log.warning("Ignoring unreadable permissions file %s: %s", self._permissions_file, e)
            return {}
        return {str(k): int(v) for k, v in data.items()}

    def _save_permissions(self) -> None:
        if self._permissions_file is None:
            return
        self._permissions_file.parent.mkdir(parents=True, exist_ok=True)
        self._permissions_file.write_text(json.dumps(self._persisted, indent=2, sort_keys=True), encoding="utf-8")

    def take_persistable_uri_permission(self, uri: str, flags: int) -> None:
        tree_id = contract.get_tree_document_id(uri)
        if tree_id not in self._transient and tree_id not in self._persisted:
            raise PermissionError(f"No persistable permission grants found for {uri}")
        self._persisted[tree_id] = self._persisted.get(tree_id, 0) | int(flags)
        self._save_permissions()

    def release_persistable_uri_permission(self, uri: str, flags: int) -> None:
        tree_id = contract.get_tree_document_id(uri)
        remaining = self._persisted.get(tree_id, 0) & ~int(flags)
        if remaining:
            self._persisted[tree_id] = remaining
        else:
            self._persisted.pop(tree_id, None)
        self._transient.discard(tree_id)
        self._save_permissions()

    def persisted_uri_permissions(self) -> List[str]:
        return [contract.build_tree_uri(self.authority, tree_id) for tree_id in sorted(self._persisted)]

    def _check_access(self, uri: str) -> Path:
        """Resolve the document a tree URI addresses, enforcing its grant."""
        if contract.authority_of(uri) != self.authority:
            raise FileNotFoundError(f"Unknown authority: {uri}")

        tree_id = contract.get_tree_document_id(uri)
        if tree_id not in self._transient and tree_id not in self._persisted:
            raise PermissionError(f"Permission Denial: no grant for {uri}")

        doc_id = contract.get_document_id(uri)
        tree_path = self._path_for(tree_id)
        path = self._path_for(doc_id)
        try:
            path.relative_to(tree_path)
        except ValueError as e:
            raise PermissionError(f"Document {doc_id} is not a descendant of {tree_id}") from e
        return path

    # ---- documents ----

    def _is_permissions_file(self, path: Path) -> bool:
        if self._permissions_file is None:
            return False
        return path.resolve() == self._permissions_file.resolve()

    def _row(self, path: Path, doc_id: str, projection: Sequence[str]) -> Row:
        st = path.stat()
        is_dir = path.is_dir()
        values = {
            COLUMN_DOCUMENT_ID: doc_id,
            COLUMN_DISPLAY_NAME: path.name or VOLUME,
            COLUMN_SIZE: None if is_dir else st.st_size,
            COLUMN_LAST_MODIFIED: int(st.st_mtime * 1000),
            COLUMN_MIME_TYPE: MIME_TYPE_DIR if is_dir else mimetypes.guess_type(path.name)[0],
        }
        return {col: values.get(col) for col in projection}

    def _child_rows(self, parent: Path, projection: Sequence[str]) -> List[Row]:
        rows: List[Row] = []
        for child in sorted(parent.iterdir()):
            if self._is_permissions_file(child):
                continue
            # Id from the link's own location, not its target
            doc_id = f"{VOLUME}:{child.relative_to(self._root).as_posix()}"
            try:
                rows.append(self._row(child, doc_id, projection))
            except OSError as e:
                _log.debug("Skipping unreadable entry %s: %s", child, e)
        return rows

    def query(self, uri: str, projection: Sequence[str]) -> Optional[Iterable[Row]]:
        path = self._check_access(uri)
        if not path.exists():
            raise FileNotFoundError(f"Missing file for {uri}")

        if contract.is_child_documents_uri(uri):
            if not path.is_dir():
                raise NotADirectoryError(f"Not a directory: {uri}")
            return self._child_rows(path, projection)

        return [self._row(path, self.document_id_for(path), projection)]

    def delete_document(self, uri: str) -> bool:
        path = self._check_access(uri)
        if not path.exists():
            return False
        if self._is_permissions_file(path):
            raise PermissionError(f"Permission Denial: {uri} is reserved")
        if path.is_dir():
            if self._permissions_file is not None and self._permissions_file.resolve().is_relative_to(path):
                raise PermissionError(f"Permission Denial: {uri} holds reserved files")
            shutil.rmtree(path)
        else:
            path.unlink()
        return True

    def open_input_stream(self, uri: str) -> Optional[BinaryIO]:
        path = self._check_access(uri)
        if not path.is_file():
            raise FileNotFoundError(f"Missing file for {uri}")
        return path.open("rb")
