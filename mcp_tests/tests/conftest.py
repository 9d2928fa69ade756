from pathlib import Path

import pytest

from providers.local_provider import LocalDocumentsProvider


AUTHORITY = "local.externalstorage.documents"


class DummyMCP:
    """Minimal FastMCP stand-in to capture tool registration."""

    def __init__(self) -> None:
        self.tools = {}

    def tool(self, *, name: str):
        def _decorator(fn):
            self.tools[name] = fn
            return fn
        return _decorator


class FakeProvider:
    """Scriptable environment for broker and channel tests."""

    def __init__(self, *, api_level: int = 33, display_name="Pictures") -> None:
        self.api_level = api_level
        self.display_name = display_name
        self.listener = None
        self.launches = []
        self.persisted = []
        self.queries = []
        self.fail_launch = False
        self.fail_persist = False
        self.fail_query = False

    def set_result_listener(self, listener) -> None:
        self.listener = listener

    def launch_tree_picker(self, request_code, *, initial_uri=None) -> None:
        if self.fail_launch:
            raise RuntimeError("no picker available")
        self.launches.append((request_code, initial_uri))

    def take_persistable_uri_permission(self, uri, flags) -> None:
        if self.fail_persist:
            raise PermissionError("No persistable permission grants found")
        self.persisted.append((uri, flags))

    def release_persistable_uri_permission(self, uri, flags) -> None:
        self.persisted = [p for p in self.persisted if p[0] != uri]

    def persisted_uri_permissions(self):
        return [uri for uri, _ in self.persisted]

    def query(self, uri, projection):
        self.queries.append((uri, tuple(projection)))
        if self.fail_query:
            raise RuntimeError("provider crashed")
        return [{"_display_name": self.display_name}]

    def delete_document(self, uri):
        raise AssertionError("unexpected delete")

    def open_input_stream(self, uri):
        raise AssertionError("unexpected open")


def grant(provider: LocalDocumentsProvider, path: Path) -> str:
    """Grant a tree as the picker would and return its URI."""
    provider._transient.add(provider.document_id_for(path))
    return provider.tree_uri_for(path)


@pytest.fixture
def dummy_mcp():
    return DummyMCP()


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def volume(tmp_path):
    root = tmp_path / "volume"
    root.mkdir()
    return root


@pytest.fixture
def local_provider(volume, tmp_path):
    return LocalDocumentsProvider(
        root=volume,
        permissions_file=tmp_path / "state" / "permissions.json",
        authority=AUTHORITY,
    )


@pytest.fixture
def make_fake_provider():
    return FakeProvider
