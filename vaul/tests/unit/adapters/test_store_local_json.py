from __future__ import annotations

import json

import pytest

from vaul.adapters.store_local import CATEGORIES_FILE, COMMANDS_FILE, StoreLocal
from vaul.domain.entities import UNCATEGORIZED, CategoryRef


def test_missing_files_load_as_empty(tmp_path):
    store = StoreLocal(root_dir=tmp_path)

    assert store.list_commands() == []
    assert store.list_categories() == []
    assert not (tmp_path / COMMANDS_FILE).exists()


def test_invalid_json_loads_as_empty(tmp_path):
    (tmp_path / COMMANDS_FILE).write_text("{not json", encoding="utf-8")
    (tmp_path / CATEGORIES_FILE).write_text('{"id": "c1"}', encoding="utf-8")

    store = StoreLocal(root_dir=tmp_path)

    assert store.list_commands() == []
    assert store.list_categories() == []


def test_new_commands_are_prepended_and_persisted(tmp_path):
    store = StoreLocal(root_dir=tmp_path)
    first = store.create_command("ls -la")
    second = store.create_command("pwd")

    assert [cmd.id for cmd in store.list_commands()] == [second.id, first.id]
    assert first.id != second.id

    with (tmp_path / COMMANDS_FILE).open("r", encoding="utf-8") as fh:
        persisted = json.load(fh)
    assert [entry["content"] for entry in persisted] == ["pwd", "ls -la"]

    reopened = StoreLocal(root_dir=tmp_path)
    assert [cmd.content for cmd in reopened.list_commands()] == ["pwd", "ls -la"]


def test_writes_leave_no_temp_files(tmp_path):
    store = StoreLocal(root_dir=tmp_path)
    store.create_category("Git")
    store.create_command("git status")

    assert sorted(p.name for p in tmp_path.iterdir()) == [CATEGORIES_FILE, COMMANDS_FILE]


def test_create_command_with_unknown_category_raises_key_error(tmp_path):
    store = StoreLocal(root_dir=tmp_path)

    with pytest.raises(KeyError):
        store.create_command("git status", "missing")
    assert store.list_commands() == []


def test_duplicate_category_name_returns_existing(tmp_path):
    store = StoreLocal(root_dir=tmp_path)
    git = store.create_category("Git", "#f00")

    again = store.create_category("  git ")

    assert again == git
    assert len(store.list_categories()) == 1


def test_blank_category_name_is_rejected(tmp_path):
    store = StoreLocal(root_dir=tmp_path)

    with pytest.raises(ValueError):
        store.create_category("   ")


def test_update_category_keeps_id(tmp_path):
    store = StoreLocal(root_dir=tmp_path)
    git = store.create_category("Git")

    store.update_category(git.id, " Git tools ", "#0f0")

    (updated,) = store.list_categories()
    assert updated.id == git.id
    assert updated.name == "Git tools"
    assert updated.color == "#0f0"
    with pytest.raises(KeyError):
        store.update_category("missing", "X")


def test_delete_category_reassigns_to_uncategorized(tmp_path):
    store = StoreLocal(root_dir=tmp_path)
    git = store.create_category("Git")
    store.create_command("git status", git.id)
    store.create_command("git log", git.id)
    store.create_command("pwd")

    store.delete_category(git.id, "")

    assert store.list_categories() == []
    assert all(cmd.category == UNCATEGORIZED for cmd in store.list_commands())
    assert len(store.list_commands()) == 3


def test_delete_category_rejects_self_and_unknown_targets(tmp_path):
    store = StoreLocal(root_dir=tmp_path)
    git = store.create_category("Git")

    with pytest.raises(ValueError):
        store.delete_category(git.id, git.id)
    with pytest.raises(KeyError):
        store.delete_category(git.id, "missing")
    with pytest.raises(KeyError):
        store.delete_category("missing")
    assert store.list_categories() == [git]


def test_merge_repoints_commands_and_removes_source(tmp_path):
    store = StoreLocal(root_dir=tmp_path)
    source = store.create_category("Docker")
    target = store.create_category("Containers")
    store.create_command("docker ps", source.id)
    store.create_command("podman ps", target.id)

    store.merge_categories(source.id, target.id)

    assert [cat.id for cat in store.list_categories()] == [target.id]
    assert {cmd.category for cmd in store.list_commands()} == {CategoryRef.of(target.id)}
    with pytest.raises(ValueError):
        store.merge_categories(target.id, target.id)


def test_delete_command_unknown_id_is_noop(tmp_path):
    store = StoreLocal(root_dir=tmp_path)
    events = []
    store.subscribe(lambda: events.append("changed"))
    kept = store.create_command("ls")

    store.delete_command("missing")

    assert store.list_commands() == [kept]
    assert events == ["changed"]


def test_mutations_notify_subscribers_until_unsubscribed(tmp_path):
    store = StoreLocal(root_dir=tmp_path)
    events = []
    unsubscribe = store.subscribe(lambda: events.append("changed"))

    cmd = store.create_command("ls")
    store.delete_command(cmd.id)
    unsubscribe()
    store.create_command("pwd")

    assert events == ["changed", "changed"]
