import pytest

from vaul.adapters.store_mock import StoreMock
from vaul.domain.entities import Category, Command
from vaul.domain.errors import BackendUnavailable
from vaul.usecases.load_library import LoadLibrary


def test_load_returns_both_lists_as_snapshot():
    store = StoreMock(
        commands=[Command(id="1", content="ls")],
        categories=[Category(id="c1", name="Git")],
    )

    snapshot = LoadLibrary(store)()

    assert [cmd.id for cmd in snapshot.commands] == ["1"]
    assert [cat.id for cat in snapshot.categories] == ["c1"]


def test_load_fails_when_either_list_fails():
    store = StoreMock(commands=[Command(id="1", content="ls")])
    store.fail_next("list_categories", OSError("unreadable"))

    with pytest.raises(BackendUnavailable) as excinfo:
        LoadLibrary(store)()
    assert excinfo.value.message.startswith("Load commands")
