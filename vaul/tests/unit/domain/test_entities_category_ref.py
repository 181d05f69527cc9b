from __future__ import annotations

from datetime import datetime, timezone

import pytest

from vaul.domain.entities import (
    UNCATEGORIZED,
    Category,
    CategoryRef,
    Command,
    LibrarySnapshot,
)


def test_category_ref_from_raw_maps_blank_to_uncategorized():
    assert CategoryRef.from_raw("") == UNCATEGORIZED
    assert CategoryRef.from_raw(None) == UNCATEGORIZED
    assert CategoryRef.from_raw("  ") == UNCATEGORIZED
    assert CategoryRef.from_raw("c1") == CategoryRef.of("c1")


def test_category_ref_raw_round_trips_store_encoding():
    assert UNCATEGORIZED.raw == ""
    assert UNCATEGORIZED.is_uncategorized
    assert CategoryRef.of("c9").raw == "c9"
    assert not CategoryRef.of("c9").is_uncategorized


def test_category_ref_rejects_blank_id():
    with pytest.raises(ValueError):
        CategoryRef("")


def test_command_coerces_raw_category_string():
    cmd = Command(id="1", content="ls", category="c1")

    assert cmd.category == CategoryRef.of("c1")
    assert Command(id="2", content="pwd", category="").category == UNCATEGORIZED


def test_command_requires_id():
    with pytest.raises(ValueError):
        Command(id="", content="ls")


def test_command_from_payload_reads_store_keys():
    cmd = Command.from_payload(
        {
            "id": "20240305101530.123456",
            "content": "git status",
            "category": "c1",
            "createdAt": "2024-03-05T10:15:30.123456789Z",
        }
    )

    assert cmd.id == "20240305101530.123456"
    assert cmd.category == CategoryRef.of("c1")
    assert cmd.created_at == datetime(2024, 3, 5, 10, 15, 30, 123456, tzinfo=timezone.utc)


def test_command_to_payload_omits_uncategorized():
    payload = Command(id="1", content="ls").to_payload()

    assert "category" not in payload
    assert payload["content"] == "ls"
    assert Command(id="2", content="pwd", category="c1").to_payload()["category"] == "c1"


def test_category_payload_and_ref():
    category = Category.from_payload({"id": "c1", "name": "Git", "color": "#78b4ff"})

    assert category.ref == CategoryRef.of("c1")
    assert category.to_payload()["color"] == "#78b4ff"
    assert "color" not in Category(id="c2", name="Docker").to_payload()


def test_snapshot_category_lookup():
    git = Category(id="c1", name="Git")
    snapshot = LibrarySnapshot(commands=(), categories=(git,))

    assert snapshot.category_by_ref(CategoryRef.of("c1")) is git
    assert snapshot.category_by_ref(CategoryRef.of("missing")) is None
    assert snapshot.category_by_ref(UNCATEGORIZED) is None
