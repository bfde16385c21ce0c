from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..models.card_set import SavedCardSet
from ..models.contributor import ContributorRecord

logger = logging.getLogger(__name__)

"""Saved card sets, persisted as one JSON file.

The file holds a list of ``{id, name, userId, createdAt, cards[]}`` objects
for every user. Each operation reads the file, applies the change and writes
it back (write to a temp file then replace). Single process use only.
"""

__all__ = [
    "StorageError",
    "CardSetStore",
]


class StorageError(Exception):
    pass


class CardSetStore:
    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    # -- raw file access ---------------------------------------------------

    def _load(self) -> list[dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "[]")
        except OSError as e:
            raise StorageError(f"cannot read {self.path}: {e}") from e
        except json.JSONDecodeError as e:
            raise StorageError(f"corrupt card store {self.path}: {e}") from e
        if not isinstance(data, list):
            raise StorageError(f"corrupt card store {self.path}: expected a list")
        return data

    def _dump(self, sets: list[dict[str, Any]]) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(sets, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp.replace(self.path)
        except OSError as e:
            raise StorageError(f"cannot write {self.path}: {e}") from e

    def _all(self) -> list[SavedCardSet]:
        try:
            return [SavedCardSet.from_dict(d) for d in self._load()]
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"corrupt card store {self.path}: {e}") from e

    # -- operations --------------------------------------------------------

    def save(self, user_id: str, name: str, records: Sequence[ContributorRecord]) -> SavedCardSet:
        created = datetime.now(UTC)
        card_set = SavedCardSet(
            id=f"set_{int(created.timestamp() * 1000)}_{uuid.uuid4().hex[:8]}",
            name=name,
            user_id=user_id,
            created_at=created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            cards=tuple(records),
        )
        sets = self._all()
        sets.append(card_set)
        self._dump([s.to_dict() for s in sets])
        logger.info("saved card set %s (%d cards) for user %s", card_set.id, len(card_set.cards), user_id)
        return card_set

    def list_for_user(self, user_id: str) -> list[SavedCardSet]:
        return [s for s in self._all() if s.user_id == user_id]

    def get(self, set_id: str) -> SavedCardSet | None:
        for s in self._all():
            if s.id == set_id:
                return s
        return None

    def update(
        self,
        set_id: str,
        name: str | None = None,
        records: Sequence[ContributorRecord] | None = None,
    ) -> SavedCardSet | None:
        """Rename and/or replace the cards of a set. None when the id is unknown."""
        sets = self._all()
        for i, s in enumerate(sets):
            if s.id != set_id:
                continue
            updated = SavedCardSet(
                id=s.id,
                name=s.name if name is None else name,
                user_id=s.user_id,
                created_at=s.created_at,
                cards=s.cards if records is None else tuple(records),
            )
            sets[i] = updated
            self._dump([x.to_dict() for x in sets])
            return updated
        return None

    def delete(self, set_id: str) -> bool:
        sets = self._all()
        kept = [s for s in sets if s.id != set_id]
        if len(kept) == len(sets):
            return False
        self._dump([s.to_dict() for s in kept])
        return True
