"""Configuration and environment helpers for the project.

Provides small helpers to read typed environment variables and exposes
project-level configuration constants used across the codebase (e.g.
DOCUMENTS_ROOT, PICK_DIRECTORY_CODE, worker and copy limits).
"""

from __future__ import annotations

import os
from pathlib import Path


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_str(name: str, default: str) -> str:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


# Volume exposed by the local documents provider
DOCUMENTS_ROOT = Path(os.environ.get("DOCUMENTS_ROOT", ".")).resolve()
DOCUMENTS_AUTHORITY = _env_str("DOCUMENTS_AUTHORITY", "local.externalstorage.documents")

# Directory granted by the non-interactive picker (empty: use the start hint)
PICKER_DIR = os.environ.get("PICKER_DIR", "").strip()

# Persisted tree grants (survive restarts); kept outside the served volume
PERMISSIONS_FILE = Path(
    _env_str("PERMISSIONS_FILE", str(Path.home() / ".documents_mcp" / "permissions.json"))
).expanduser()

PROVIDER_API_LEVEL = _env_int("PROVIDER_API_LEVEL", 33)

# Grant flow
PICK_DIRECTORY_CODE = _env_int("PICK_DIRECTORY_CODE", 9001)
UNKNOWN_TREE_NAME = _env_str("UNKNOWN_TREE_NAME", "Unknown")
START_WITH_DOWNLOADS = _env_bool("START_WITH_DOWNLOADS", False)
DOWNLOADS_INITIAL_URI = _env_str(
    "DOWNLOADS_INITIAL_URI",
    f"content://{DOCUMENTS_AUTHORITY}/document/primary%3ADownload",
)

# Workers / copying
WORKER_MAX_THREADS = _env_int("WORKER_MAX_THREADS", 4)
COPY_CHUNK_SIZE = _env_int("COPY_CHUNK_SIZE", 64 * 1024)

LOG_LEVEL = _env_str("LOG_LEVEL", "INFO").upper()
