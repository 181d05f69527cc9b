import pytest

from vaul.adapters.store_mock import StoreMock
from vaul.domain.entities import Category, Command


def test_fail_next_raises_once_and_records_call():
    store = StoreMock()
    store.fail_next("list_commands", OSError("disk gone"))

    with pytest.raises(OSError):
        store.list_commands()
    assert store.list_commands() == []
    assert store.calls_to("list_commands") == [(), ()]


def test_create_command_prepends_and_validates_category():
    store = StoreMock(categories=[Category(id="c1", name="Git")])
    first = store.create_command("git status", "c1")
    second = store.create_command("pwd")

    assert store.list_commands() == [second, first]
    with pytest.raises(KeyError):
        store.create_command("x", "missing")


def test_merge_and_delete_follow_store_contract():
    store = StoreMock(
        commands=[Command(id="1", content="docker ps", category="c1")],
        categories=[Category(id="c1", name="Docker"), Category(id="c2", name="Ops")],
    )

    with pytest.raises(ValueError):
        store.merge_categories("c1", "c1")
    store.merge_categories("c1", "c2")
    assert store.list_commands()[0].category.raw == "c2"
    with pytest.raises(ValueError):
        store.delete_category("c2", "c2")
    store.delete_category("c2")
    assert store.list_commands()[0].category.is_uncategorized
    assert store.list_categories() == []
