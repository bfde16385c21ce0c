from __future__ import annotations

import pytest

from driver_cards.excel.aliases import DEFAULT_ALIASES, FieldAliasTable, normalize
from driver_cards.excel.header import resolve_field_key
from driver_cards.models.field_key import FieldKey

"""Unit tests for header normalization and FieldKey resolution."""


def _table(**overrides: list[str]) -> FieldAliasTable:
    """Synthetic table: every key gets a dummy alias unless overridden."""
    aliases = {key: [f"zz{key.value.lower()}"] for key in FieldKey}
    for name, variants in overrides.items():
        aliases[FieldKey(name)] = variants
    return FieldAliasTable(aliases)


@pytest.mark.parametrize(
    "text",
    ["Résidence", " N° NPC ", "Prénom(s)", "Téléphone | Tél.", "", "   ", "ÉÈÊË àç", "123-456"],
)
def test_normalize_idempotent(text: str):
    once = normalize(text)
    assert normalize(once) == once


def test_normalize_strips_accents_case_and_punctuation():
    assert normalize("Résidence") == "residence"
    assert normalize(" résidence ") == "residence"
    assert normalize("RÉSIDENCE ") == "residence"
    assert normalize("N° NPC") == "nnpc"
    assert normalize("Prénom(s)") == "prenoms"
    assert normalize("Caractéristiques Moto") == "caracteristiquesmoto"


def test_normalize_blank_input():
    assert normalize("") == ""
    assert normalize("   \t ") == ""
    assert normalize("---") == ""


def test_residence_spellings_resolve_to_same_field():
    for header in ["Résidence", "RESIDANCE", " résidence ", "Residance"]:
        assert resolve_field_key(header) is FieldKey.RESIDENCE


def test_exact_match_wins_over_containment():
    # prenoms listed first on purpose: "nom" must still resolve to nom
    aliases = {FieldKey.PRENOMS: ["prenom", "prenoms"], FieldKey.NOM: ["nom"]}
    for key in FieldKey:
        aliases.setdefault(key, [f"zz{key.value.lower()}"])
    table = FieldAliasTable(aliases)
    assert resolve_field_key("Nom", table) is FieldKey.NOM
    assert resolve_field_key("NOM ", table) is FieldKey.NOM
    assert resolve_field_key("Prénoms", table) is FieldKey.PRENOMS


def test_short_header_only_matches_exactly():
    table = _table(telephone=["telephone"], arrondissement=["te"])
    # "tel" is shorter than 4: no containment either way
    assert resolve_field_key("Tél", table) is None
    assert resolve_field_key("Tél", DEFAULT_ALIASES) is FieldKey.TELEPHONE


def test_short_alias_never_matches_inside_longer_word():
    # "arr" (arrondissement) and "nom" are too short for containment
    assert resolve_field_key("Carrefour") is None
    assert resolve_field_key("Nomenclature") is None
    assert resolve_field_key("Arr") is FieldKey.ARRONDISSEMENT


def test_prenom_override():
    assert resolve_field_key("Nom Prénoms conducteur") is FieldKey.PRENOMS
    assert resolve_field_key("PRENOM") is FieldKey.PRENOMS
    assert resolve_field_key("Prnoms") is FieldKey.PRENOMS


@pytest.mark.parametrize(
    "header,expected",
    [
        ("N° NPC", FieldKey.NPC),
        ("NPC", FieldKey.NPC),
        ("Numéro", FieldKey.NPC),
        ("Nom", FieldKey.NOM),
        ("Noms", FieldKey.NOM),
        ("Téléphone", FieldKey.TELEPHONE),
        ("Numéro de téléphone", FieldKey.TELEPHONE),
        ("Téléph.", FieldKey.TELEPHONE),
        ("Personne à contacter", FieldKey.PERSONNE_CONTACT),
        ("Tél. contact", FieldKey.TELEPHONE_CONTACT),
        ("Propriétaire", FieldKey.PROPRIETAIRE),
        ("Nom du propriétaire", FieldKey.PROPRIETAIRE),
        ("Tél. Propriétaire", FieldKey.TELEPHONE_PROPRIETAIRE),
        ("Caractéristiques de la moto", FieldKey.CARACTERISTIQUES_MOTO),
        ("Arrondissement", FieldKey.ARRONDISSEMENT),
        ("Quartier", FieldKey.ARRONDISSEMENT),
        ("Numéro d'immatriculation", FieldKey.CARACTERISTIQUES_MOTO),
        ("Numéro de la moto", FieldKey.CARACTERISTIQUES_MOTO),
    ],
)
def test_resolve_real_world_headers(header: str, expected: FieldKey):
    assert resolve_field_key(header) is expected


@pytest.mark.parametrize("header", ["Rapport mensuel", "Observations", "", "   ", "12"])
def test_resolve_unknown_headers(header: str):
    assert resolve_field_key(header) is None


def test_longest_contained_alias_wins_over_table_order():
    # npc is listed before caracteristiquesMoto; "numero" is shorter than "immatriculation"
    table = _table(npc=["numero"], caracteristiquesMoto=["immatriculation"])
    assert resolve_field_key("Numéro d'immatriculation", table) is FieldKey.CARACTERISTIQUES_MOTO
    assert resolve_field_key("Numéro NPC du conducteur", table) is FieldKey.NPC


def test_shortest_containing_alias_wins_for_abbreviated_header():
    table = _table(telephoneContact=["telephonecontact"], telephone=["telephone"])
    assert resolve_field_key("Téléph.", table) is FieldKey.TELEPHONE


def test_equally_specific_matches_keep_table_order():
    table = _table(npc=["plaque"], caracteristiquesMoto=["numero"])
    assert resolve_field_key("Numéro plaque", table) is FieldKey.NPC
