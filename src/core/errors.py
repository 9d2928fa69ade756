from __future__ import annotations

from typing import Optional


class DocumentsError(Exception):
    """Base error for the documents bridge."""


class ChannelError(DocumentsError):
    """Error reported across the channel with a stable code."""

    code = "ERROR"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or "")
        self.message = message or ""


class InvalidArgumentError(ChannelError):
    """Raised when a required argument is missing or has the wrong type."""

    code = "INVALID_ARG"


class AlreadyActiveError(ChannelError):
    """Raised when a directory picker is started while another is pending."""

    code = "ALREADY_ACTIVE"


class PickerError(ChannelError):
    """Raised when the grant flow cannot be started or the grant cannot be kept."""

    code = "PICKER_ERROR"


class ListError(ChannelError):
    code = "LIST_ERROR"


class DeleteError(ChannelError):
    code = "DELETE_ERROR"


class ReadError(ChannelError):
    """Raised when a document's byte stream cannot be opened."""

    code = "READ_ERROR"


class CopyError(ChannelError):
    """Raised when copying an opened document to local storage fails."""

    code = "COPY_ERROR"


class NotImplementedMethodError(DocumentsError):
    """Raised when unwrapping the result of an unknown method."""


def describe(exc: BaseException) -> str:
    # Fault message, or the exception type when the fault has none
    return str(exc) or type(exc).__name__
