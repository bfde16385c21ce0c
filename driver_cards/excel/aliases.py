from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from ..models.field_key import FieldKey

"""Header vocabulary: FieldKey -> accepted header spellings.

The table is an immutable value passed to the resolver; tests and the
configuration layer build their own instead of patching a global. Key order
is significant: it breaks ties between equally specific partial matches. The
generic ``telephone`` precedes the contact / owner phone roles; a second
phone column is redirected by the column assignment, not by the vocabulary.
"""

__all__ = [
    "FieldAliasTable",
    "DEFAULT_ALIASES",
    "normalize",
]

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")


def normalize(text: str) -> str:
    """Lowercase, strip diacritics and drop everything outside [a-z0-9].

    >>> normalize(" Résidence ")
    'residence'
    >>> normalize("N° NPC")
    'nnpc'
    """
    decomposed = unicodedata.normalize("NFD", str(text).lower())
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return _NON_ALNUM_RE.sub("", stripped)


class FieldAliasTable(Mapping[FieldKey, tuple[str, ...]]):
    """Read-only, validated FieldKey -> normalized aliases mapping.

    Aliases are normalized once here; duplicates within a key are dropped
    while keeping first-seen order.
    """

    def __init__(self, aliases: Mapping[FieldKey, Iterable[str]]):
        missing = [k.value for k in FieldKey if k not in aliases]
        extra = [str(k) for k in aliases if not isinstance(k, FieldKey)]
        if missing or extra:
            raise ValueError(f"alias table keys mismatch: missing={missing} unexpected={extra}")
        table: dict[FieldKey, tuple[str, ...]] = {}
        for key, variants in aliases.items():
            seen: list[str] = []
            for v in variants:
                n = normalize(v)
                if n and n not in seen:
                    seen.append(n)
            if not seen:
                raise ValueError(f"no alias for field {key.value!r}")
            table[key] = tuple(seen)
        self._table = MappingProxyType(table)

    def __getitem__(self, key: FieldKey) -> tuple[str, ...]:
        return self._table[key]

    def __iter__(self) -> Iterator[FieldKey]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:  # pragma: no cover (debug aid)
        return f"FieldAliasTable({dict(self._table)!r})"

    def with_extra_aliases(self, extra: Mapping[FieldKey, Iterable[str]]) -> FieldAliasTable:
        """New table with ``extra`` appended after the existing aliases of each key."""
        merged = {key: list(variants) + list(extra.get(key, ())) for key, variants in self.items()}
        return FieldAliasTable(merged)


DEFAULT_ALIASES = FieldAliasTable({
    FieldKey.PRENOMS: ("prenoms", "prenom", "firstname", "firstnames", "prnoms"),
    FieldKey.TELEPHONE: (
        "telephone", "tel", "phone", "mobile", "telephoneconducteur", "telconducteur",
        "cellulaire", "portable",
    ),
    FieldKey.TELEPHONE_CONTACT: (
        "telephonecontact", "telcontact", "telephonedecontact", "telephoneducontact",
        "telephonepersonneacontacter", "telpersonneacontacter", "contacttelephone",
        "telurgence", "telephoneurgence",
    ),
    FieldKey.TELEPHONE_PROPRIETAIRE: (
        "telephoneproprietaire", "telproprietaire", "telephoneduproprietaire",
        "telephonedeproprietaire", "telprop", "contactproprietaire",
    ),
    FieldKey.PERSONNE_CONTACT: (
        "personneacontacter", "personnecontact", "personneaprevenir", "contacturgence",
        "encasdurgence", "contact",
    ),
    FieldKey.PROPRIETAIRE: ("proprietaire", "proprio", "owner", "nomproprietaire", "proprietairemoto"),
    FieldKey.NPC: ("nnpc", "npc", "numeronpc", "numero", "no", "n", "matricule"),
    FieldKey.NOM: ("nom", "noms", "name", "lastname", "nomdefamille", "nomconducteur"),
    FieldKey.RESIDENCE: ("residence", "residance", "domicile", "adresse", "lieuderesidence"),
    FieldKey.CARACTERISTIQUES_MOTO: (
        "caracteristiquesmoto", "caracteristiquemoto", "caractmoto", "caracteristiques",
        "moto", "numeromoto", "numerodemoto", "numerodelamoto", "immatriculation", "marquemoto", "engin",
    ),
    FieldKey.ARRONDISSEMENT: ("arrondissement", "arr", "district", "quartier", "zone"),
})
