from __future__ import annotations

import pytest

from driver_cards.excel.aliases import DEFAULT_ALIASES, FieldAliasTable
from driver_cards.models.field_key import FieldKey


def test_default_table_covers_every_field():
    assert set(DEFAULT_ALIASES) == set(FieldKey)
    for key in FieldKey:
        assert DEFAULT_ALIASES[key], key


def test_aliases_are_normalized_and_deduplicated():
    aliases = {key: ["x" + key.value.lower()] for key in FieldKey}
    aliases[FieldKey.PRENOMS] = ["Prénoms", "PRENOMS", "prénom"]
    table = FieldAliasTable(aliases)
    assert table[FieldKey.PRENOMS] == ("prenoms", "prenom")


def test_missing_key_rejected():
    aliases = {key: ["a"] for key in FieldKey if key is not FieldKey.RESIDENCE}
    with pytest.raises(ValueError, match="residence"):
        FieldAliasTable(aliases)


def test_empty_alias_set_rejected():
    aliases = {key: ["alias" + key.value.lower()] for key in FieldKey}
    aliases[FieldKey.NOM] = ["  ", "--"]
    with pytest.raises(ValueError, match="nom"):
        FieldAliasTable(aliases)


def test_table_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_ALIASES[FieldKey.NOM] = ("x",)  # type: ignore[index]


def test_with_extra_aliases_appends_with_lower_priority():
    table = DEFAULT_ALIASES.with_extra_aliases({FieldKey.RESIDENCE: ["Lieu d'habitation"]})
    assert table[FieldKey.RESIDENCE][-1] == "lieudhabitation"
    assert table[FieldKey.RESIDENCE][0] == DEFAULT_ALIASES[FieldKey.RESIDENCE][0]
    # the original table is untouched
    assert "lieudhabitation" not in DEFAULT_ALIASES[FieldKey.RESIDENCE]
