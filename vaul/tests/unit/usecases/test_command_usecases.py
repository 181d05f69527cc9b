import pytest

from vaul.adapters.clipboard_pyperclip import MemoryClipboard
from vaul.adapters.store_mock import StoreMock
from vaul.domain.entities import UNCATEGORIZED, Category, CategoryRef, Command
from vaul.domain.errors import BackendUnavailable, ClipboardDenied, NotFound, ValidationRejected
from vaul.usecases.add_command import AddCommand
from vaul.usecases.copy_command import CopyCommand
from vaul.usecases.delete_command import DeleteCommand


def test_add_command_trims_and_passes_raw_category():
    store = StoreMock(categories=[Category(id="c1", name="Git")])

    created = AddCommand(store)("  git status  ", CategoryRef.of("c1"))

    assert created.content == "git status"
    assert store.calls_to("create_command") == [("git status", "c1")]


def test_add_command_uncategorized_or_unselected_uses_empty_sentinel():
    store = StoreMock()
    uc = AddCommand(store)

    uc("ls", UNCATEGORIZED)
    uc("pwd")

    assert store.calls_to("create_command") == [("ls", ""), ("pwd", "")]


def test_add_command_blank_text_never_reaches_store():
    store = StoreMock()

    with pytest.raises(ValidationRejected):
        AddCommand(store)("   ")
    assert store.calls == []


def test_add_command_unknown_category_maps_to_not_found():
    store = StoreMock()

    with pytest.raises(NotFound):
        AddCommand(store)("ls", CategoryRef.of("gone"))


def test_delete_command_maps_backend_failure():
    store = StoreMock()
    store.fail_next("delete_command", OSError("disk full"))

    with pytest.raises(BackendUnavailable):
        DeleteCommand(store)("1")


def test_copy_command_writes_content():
    clipboard = MemoryClipboard()

    CopyCommand(clipboard)(Command(id="1", content="ls -la"))

    assert clipboard.text == "ls -la"


def test_copy_command_failure_is_clipboard_denied():
    class _Broken:
        def write(self, text):
            raise RuntimeError("no display")

    with pytest.raises(ClipboardDenied) as excinfo:
        CopyCommand(_Broken())(Command(id="1", content="ls"))
    assert excinfo.value.message == "Failed to copy: no display"
