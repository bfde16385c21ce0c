from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .contributor import ContributorRecord

"""SavedCardSet: a named batch of contributor records owned by one user."""

__all__ = [
    "SavedCardSet",
]


@dataclass(frozen=True)
class SavedCardSet:
    id: str
    name: str
    user_id: str
    created_at: str  # ISO8601 UTC, 'Z' suffix
    cards: tuple[ContributorRecord, ...]

    def to_dict(self) -> dict[str, Any]:
        # camelCase keys: storage format shared with earlier versions of the tool
        return {
            "id": self.id,
            "name": self.name,
            "userId": self.user_id,
            "createdAt": self.created_at,
            "cards": [c.to_dict() for c in self.cards],
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> SavedCardSet:
        return SavedCardSet(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            user_id=str(data["userId"]),
            created_at=str(data.get("createdAt", "")),
            cards=tuple(ContributorRecord.from_dict(c) for c in data.get("cards", [])),
        )
