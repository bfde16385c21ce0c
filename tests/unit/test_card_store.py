from __future__ import annotations

import json
from pathlib import Path

import pytest

from driver_cards.models.contributor import ContributorRecord
from driver_cards.services.card_store import CardSetStore, StorageError


def _cards(n: int) -> list[ContributorRecord]:
    return [ContributorRecord(id=f"contrib-{i}-1-0", npc=f"NPC-{i:03d}", nom="KOFFI") for i in range(1, n + 1)]


def test_missing_file_is_empty(temp_workdir: Path):
    store = CardSetStore(temp_workdir / "data" / "absent.json")
    assert store.list_for_user("u1") == []
    assert store.get("set_1_abcdef12") is None


def test_save_and_list_per_user(temp_workdir: Path):
    store = CardSetStore(temp_workdir / "data" / "cards.json")
    saved = store.save("u1", "Lot de mars", _cards(2))
    store.save("u2", "Autre", _cards(1))

    assert saved.id.startswith("set_")
    assert saved.created_at.endswith("Z")
    sets = store.list_for_user("u1")
    assert [s.name for s in sets] == ["Lot de mars"]
    assert sets[0].cards == saved.cards

    raw = json.loads((temp_workdir / "data" / "cards.json").read_text(encoding="utf-8"))
    assert {"id", "name", "userId", "createdAt", "cards"} <= set(raw[0].keys())
    assert raw[0]["cards"][0]["npc"] == "NPC-001"


def test_update_rename_and_replace_cards(temp_workdir: Path):
    store = CardSetStore(temp_workdir / "cards.json")
    saved = store.save("u1", "Lot", _cards(3))

    renamed = store.update(saved.id, name="Lot corrigé")
    assert renamed is not None and renamed.name == "Lot corrigé"
    assert len(renamed.cards) == 3

    edited = saved.cards[0].replace_fields(nom="ZINSOU")
    replaced = store.update(saved.id, records=[edited])
    assert replaced is not None
    assert store.get(saved.id).cards == (edited,)
    assert store.get(saved.id).name == "Lot corrigé"
    assert store.update("set_0_unknown0", name="x") is None


def test_delete(temp_workdir: Path):
    store = CardSetStore(temp_workdir / "cards.json")
    saved = store.save("u1", "Lot", _cards(1))
    assert store.delete(saved.id) is True
    assert store.delete(saved.id) is False
    assert store.list_for_user("u1") == []


def test_corrupt_file_raises(temp_workdir: Path):
    path = temp_workdir / "cards.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError):
        CardSetStore(path).list_for_user("u1")

    path.write_text('{"id": "x"}', encoding="utf-8")
    with pytest.raises(StorageError):
        CardSetStore(path).list_for_user("u1")
