"""Immutable value types passed across the documents channel.

TreeHandle and FileEntry are snapshots handed back to the caller;
MethodResult is the single resolution of one channel invocation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional

from core.errors import ChannelError, NotImplementedMethodError


ResultStatus = Literal["success", "error", "notImplemented"]


@dataclass(frozen=True)
class TreeHandle:
    """User-granted, persistent access to a directory subtree."""

    uri: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"uri": self.uri, "name": self.name}


@dataclass(frozen=True)
class FileEntry:
    """Metadata of one document, captured at listing time.

    - modified: epoch milliseconds
    - mime_type: "application/octet-stream" when the provider has none
    """

    uri: str
    name: str
    size_bytes: int
    modified: int
    mime_type: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "uri": self.uri,
            "name": self.name,
            "sizeBytes": self.size_bytes,
            "modified": self.modified,
            "mimeType": self.mime_type,
        }


@dataclass(frozen=True)
class MethodResult:
    """Outcome of one channel call: success, coded error or not implemented."""

    status: ResultStatus
    value: Any = None
    code: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def success(cls, value: Any = None) -> "MethodResult":
        return cls(status="success", value=value)

    @classmethod
    def error(cls, code: str, message: Optional[str] = None) -> "MethodResult":
        return cls(status="error", code=code, message=message)

    @classmethod
    def not_implemented(cls) -> "MethodResult":
        return cls(status="notImplemented")

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def unwrap(self) -> Any:
        if self.status == "success":
            return self.value
        if self.status == "notImplemented":
            raise NotImplementedMethodError("Method not implemented")

        err = ChannelError(self.message)
        err.code = self.code or ChannelError.code
        raise err
