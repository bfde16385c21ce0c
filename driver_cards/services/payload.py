from __future__ import annotations

from ..models.contributor import ContributorRecord

"""QR code payload printed on the back of a B2 card."""

__all__ = [
    "build_qr_payload",
]


def build_qr_payload(record: ContributorRecord) -> str:
    """Newline separated ``label: value`` lines, in card order."""
    lines = [
        f"N° NPC: {record.npc}",
        f"Nom & Prénoms: {record.nom} {record.prenoms}",
        f"Tél conducteur: {record.telephone}",
        f"Personne à contacter: {record.personneContact}",
        f"Tél contact: {record.telephoneContact}",
        f"Propriétaire: {record.proprietaire}",
        f"Tél propriétaire: {record.telephoneProprietaire}",
        f"Résidence: {record.residence}",
        f"Caract. Moto: {record.caracteristiquesMoto}",
    ]
    return "\n".join(lines)
