from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

from .field_key import SENTINEL, FieldKey

"""ContributorRecord: one sentinel-filled driver registration row.

Attribute names match FieldKey values so records serialize to the same JSON
shape the saved card sets use.
"""

__all__ = [
    "ContributorRecord",
]


@dataclass(frozen=True)
class ContributorRecord:
    """A fully resolved spreadsheet row ready for rendering / export / storage.

    Every field holds a non-empty string; missing values are the SENTINEL.
    """
    id: str
    npc: str = SENTINEL
    nom: str = SENTINEL
    prenoms: str = SENTINEL
    telephone: str = SENTINEL
    personneContact: str = SENTINEL
    telephoneContact: str = SENTINEL
    proprietaire: str = SENTINEL
    telephoneProprietaire: str = SENTINEL
    residence: str = SENTINEL
    caracteristiquesMoto: str = SENTINEL
    arrondissement: str = SENTINEL

    @staticmethod
    def from_values(record_id: str, values: dict[FieldKey, str]) -> ContributorRecord:
        """Build a record from FieldKey -> text, filling blanks with the sentinel."""
        kwargs = {key.value: _or_sentinel(values.get(key)) for key in FieldKey}
        return ContributorRecord(id=record_id, **kwargs)

    def get(self, key: FieldKey) -> str:
        return getattr(self, key.value)

    def replace_fields(self, **changes: str) -> ContributorRecord:
        """Return an edited copy. The id cannot be changed; blank values become the sentinel."""
        known = {f.name for f in fields(self)} - {"id"}
        unknown = set(changes) - known
        if unknown:
            raise ValueError(f"unknown contributor fields: {sorted(unknown)}")
        current = asdict(self)
        current.update({k: _or_sentinel(v) for k, v in changes.items()})
        return ContributorRecord(**current)

    def to_dict(self) -> dict[str, str]:
        return asdict(self)

    @staticmethod
    def from_dict(data: dict[str, Any]) -> ContributorRecord:
        """Rebuild from a stored dict; unknown keys are ignored, missing ones get the sentinel."""
        if not data.get("id"):
            raise ValueError("contributor record without id")
        values: dict[FieldKey, str] = {}
        for key in FieldKey:
            raw = data.get(key.value)
            values[key] = "" if raw is None else str(raw)
        return ContributorRecord.from_values(str(data["id"]), values)


def _or_sentinel(value: str | None) -> str:
    if value is None:
        return SENTINEL
    text = str(value).strip()
    return text if text else SENTINEL
