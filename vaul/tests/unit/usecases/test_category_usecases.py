import pytest

from vaul.adapters.store_mock import StoreMock
from vaul.domain.entities import UNCATEGORIZED, Category, CategoryRef, Command
from vaul.domain.errors import NotFound, ValidationRejected
from vaul.usecases.create_category import CreateCategory
from vaul.usecases.delete_category import DeleteCategory
from vaul.usecases.merge_categories import MergeCategories
from vaul.usecases.update_category import UpdateCategory


def _store() -> StoreMock:
    return StoreMock(
        commands=[
            Command(id="1", content="git status", category="c1"),
            Command(id="2", content="docker ps", category="c2"),
            Command(id="3", content="pwd"),
        ],
        categories=[Category(id="c1", name="Git"), Category(id="c2", name="Docker")],
    )


def test_create_category_blank_name_rejected_without_store_call():
    store = _store()

    with pytest.raises(ValidationRejected) as excinfo:
        CreateCategory(store)("  ", "#fff")
    assert excinfo.value.message == "Category name is required"
    assert store.calls_to("create_category") == []


def test_create_category_trims_name_and_color():
    store = _store()

    category = CreateCategory(store)("  Shell ", " #78b4ff ")

    assert category.name == "Shell"
    assert store.calls_to("create_category") == [("Shell", "#78b4ff")]


def test_create_category_invalid_response_is_rejected():
    class _NullStore(StoreMock):
        def create_category(self, name, color=""):
            return None

    with pytest.raises(ValidationRejected) as excinfo:
        CreateCategory(_NullStore())("Shell")
    assert excinfo.value.message == "Failed to create category: Invalid response"


def test_update_category_blank_name_rejected():
    store = _store()

    with pytest.raises(ValidationRejected):
        UpdateCategory(store)("c1", "")
    assert store.calls_to("update_category") == []


def test_update_unknown_category_is_not_found():
    with pytest.raises(NotFound):
        UpdateCategory(_store())("missing", "Name")


def test_delete_category_defaults_to_uncategorized():
    store = _store()
    before = sum(1 for cmd in store.list_commands() if cmd.category == UNCATEGORIZED)

    DeleteCategory(store)("c1")

    assert store.calls_to("delete_category") == [("c1", "")]
    commands = store.list_commands()
    assert not any(cmd.category == CategoryRef.of("c1") for cmd in commands)
    assert sum(1 for cmd in commands if cmd.category == UNCATEGORIZED) == before + 1


def test_delete_category_rejects_self_reassignment_and_blank_id():
    store = _store()

    with pytest.raises(ValidationRejected):
        DeleteCategory(store)("c1", CategoryRef.of("c1"))
    with pytest.raises(ValidationRejected):
        DeleteCategory(store)("")
    assert store.calls_to("delete_category") == []


def test_merge_counts_add_up():
    store = _store()

    MergeCategories(store)("c2", "c1")

    commands = store.list_commands()
    assert not any(cmd.category == CategoryRef.of("c2") for cmd in commands)
    assert sum(1 for cmd in commands if cmd.category == CategoryRef.of("c1")) == 2
    assert [cat.id for cat in store.list_categories()] == ["c1"]


def test_merge_into_self_rejected():
    store = _store()

    with pytest.raises(ValidationRejected):
        MergeCategories(store)("c1", "c1")
    assert store.calls_to("merge_categories") == []
