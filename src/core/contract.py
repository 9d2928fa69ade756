from __future__ import annotations

from typing import Tuple
from urllib.parse import quote, unquote, urlsplit

"""
Document URI helpers.

Builds and takes apart the opaque content URIs handed out by the
environment. Nothing outside the provider boundary should need to read
these identifiers; callers pass them back unchanged.

Shapes:
  content://<authority>/tree/<treeId>
  content://<authority>/tree/<treeId>/document/<docId>
  content://<authority>/tree/<treeId>/document/<docId>/children
  content://<authority>/document/<docId>
"""

SCHEME = "content"

_PATH_TREE = "tree"
_PATH_DOCUMENT = "document"
_PATH_CHILDREN = "children"


def _encode(doc_id: str) -> str:
    return quote(doc_id, safe="")


def _split(uri: str) -> Tuple[str, Tuple[str, ...]]:
    """Return (authority, decoded path segments) of a content URI."""
    parts = urlsplit((uri or "").strip())
    if parts.scheme != SCHEME or not parts.netloc:
        raise ValueError(f"Invalid URI: {uri}")
    segments = tuple(unquote(seg) for seg in parts.path.split("/") if seg)
    return parts.netloc, segments


def authority_of(uri: str) -> str:
    return _split(uri)[0]


def get_tree_document_id(uri: str) -> str:
    """Return the document id of the tree root a URI was granted under."""
    _, segments = _split(uri)
    if len(segments) >= 2 and segments[0] == _PATH_TREE:
        return segments[1]
    raise ValueError(f"Invalid URI: {uri}")


def get_document_id(uri: str) -> str:
    """Return the document id addressed by a document (or tree) URI."""
    _, segments = _split(uri)
    if len(segments) >= 4 and segments[0] == _PATH_TREE and segments[2] == _PATH_DOCUMENT:
        return segments[3]
    if len(segments) >= 2 and segments[0] == _PATH_DOCUMENT:
        return segments[1]
    if len(segments) == 2 and segments[0] == _PATH_TREE:
        return segments[1]
    raise ValueError(f"Invalid URI: {uri}")


def is_tree_uri(uri: str) -> bool:
    try:
        _, segments = _split(uri)
    except ValueError:
        return False
    return len(segments) >= 2 and segments[0] == _PATH_TREE


def is_child_documents_uri(uri: str) -> bool:
    _, segments = _split(uri)
    return len(segments) == 5 and segments[0] == _PATH_TREE and segments[4] == _PATH_CHILDREN


def build_tree_uri(authority: str, doc_id: str) -> str:
    return f"{SCHEME}://{authority}/{_PATH_TREE}/{_encode(doc_id)}"


def build_document_uri(authority: str, doc_id: str) -> str:
    return f"{SCHEME}://{authority}/{_PATH_DOCUMENT}/{_encode(doc_id)}"


def build_document_uri_using_tree(tree_uri: str, doc_id: str) -> str:
    authority = authority_of(tree_uri)
    tree_id = get_tree_document_id(tree_uri)
    return f"{build_tree_uri(authority, tree_id)}/{_PATH_DOCUMENT}/{_encode(doc_id)}"


def build_child_documents_uri_using_tree(tree_uri: str, parent_doc_id: str) -> str:
    return f"{build_document_uri_using_tree(tree_uri, parent_doc_id)}/{_PATH_CHILDREN}"
