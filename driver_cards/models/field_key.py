from __future__ import annotations

from enum import Enum

"""FieldKey enumeration for the contributor extraction.

One member per logical column the importer understands. The value is the
attribute name used on ContributorRecord and in JSON payloads (camelCase
kept for compatibility with saved card sets).
"""

__all__ = [
    "FieldKey",
    "FIELD_LABELS",
    "MANDATORY_FIELDS",
    "SENTINEL",
]

# Placeholder for missing / blank values (en dash)
SENTINEL = "–"


class FieldKey(Enum):
    NPC = "npc"
    NOM = "nom"
    PRENOMS = "prenoms"
    TELEPHONE = "telephone"
    PERSONNE_CONTACT = "personneContact"
    TELEPHONE_CONTACT = "telephoneContact"
    PROPRIETAIRE = "proprietaire"
    TELEPHONE_PROPRIETAIRE = "telephoneProprietaire"
    RESIDENCE = "residence"
    CARACTERISTIQUES_MOTO = "caracteristiquesMoto"
    ARRONDISSEMENT = "arrondissement"


# Display labels, used in warnings shown to municipal agents
FIELD_LABELS: dict[FieldKey, str] = {
    FieldKey.NPC: "N° NPC",
    FieldKey.NOM: "Nom",
    FieldKey.PRENOMS: "Prénoms",
    FieldKey.TELEPHONE: "Téléphone",
    FieldKey.PERSONNE_CONTACT: "Personne à contacter",
    FieldKey.TELEPHONE_CONTACT: "Téléphone contact",
    FieldKey.PROPRIETAIRE: "Propriétaire",
    FieldKey.TELEPHONE_PROPRIETAIRE: "Téléphone propriétaire",
    FieldKey.RESIDENCE: "Résidence",
    FieldKey.CARACTERISTIQUES_MOTO: "Caractéristiques moto",
    FieldKey.ARRONDISSEMENT: "Arrondissement",
}

# Always checked, whatever the configuration adds
MANDATORY_FIELDS: tuple[FieldKey, ...] = (
    FieldKey.NPC,
    FieldKey.NOM,
    FieldKey.PRENOMS,
    FieldKey.TELEPHONE,
)
