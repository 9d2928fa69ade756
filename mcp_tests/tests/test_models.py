import pytest

from core.errors import ChannelError, NotImplementedMethodError, describe
from core.models import FileEntry, MethodResult, TreeHandle


def test_file_entry_wire_keys():
    entry = FileEntry(uri="u", name="n", size_bytes=1, modified=2, mime_type="image/png")
    assert entry.to_dict() == {"uri": "u", "name": "n", "sizeBytes": 1, "modified": 2, "mimeType": "image/png"}


def test_tree_handle_wire_keys():
    assert TreeHandle(uri="u", name="Pictures").to_dict() == {"uri": "u", "name": "Pictures"}


def test_unwrap():
    assert MethodResult.success([1]).unwrap() == [1]
    assert MethodResult.success(None).unwrap() is None

    with pytest.raises(ChannelError) as ei:
        MethodResult.error("LIST_ERROR", "boom").unwrap()
    assert ei.value.code == "LIST_ERROR"
    assert ei.value.message == "boom"

    with pytest.raises(NotImplementedMethodError):
        MethodResult.not_implemented().unwrap()


def test_describe_falls_back_to_type_name():
    assert describe(OSError("disk full")) == "disk full"
    assert describe(RuntimeError()) == "RuntimeError"
