from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, replace
from functools import partial, reduce
from typing import Any

from ..models.field_key import FieldKey
from .aliases import DEFAULT_ALIASES, FieldAliasTable, normalize
from .reader import cell_to_str

"""Header heuristics: field resolution, header row detection, column assignment.

Real files are messy: a title line above the header, accented or misspelled
titles, several titles pasted into one merged cell, and up to three
"Téléphone" columns (driver, contact person, owner).

Resolution order for one header text:
1. anything containing "prenom" -> prenoms ("nom" is a substring of "prenoms")
2. exact alias match
3. containment match in either direction, only when both sides are >= 4 chars;
   the most specific alias wins (see _partial_match)
"""

__all__ = [
    "HEADER_SCAN_LIMIT",
    "MIN_PARTIAL_LENGTH",
    "ColumnIndexMap",
    "resolve_field_key",
    "split_cell",
    "detect_header_row",
    "assign_column_indices",
]

HEADER_SCAN_LIMIT = 10
MIN_PARTIAL_LENGTH = 4

_DELIMITER_RE = re.compile(r"[,;|\t]")

ColumnIndexMap = dict[FieldKey, int]


def _partial_match(key: str, aliases: FieldAliasTable) -> FieldKey | None:
    """Containment match for ``key`` (already normalized, >= MIN_PARTIAL_LENGTH).

    An alias found inside the header beats a header found inside an alias.
    Among aliases found inside the header the longest wins ("immatriculation"
    over "numero"); among aliases containing the header the shortest wins
    ("telephone" over "telephonecontact"). Table order breaks ties.
    """
    inside: tuple[int, FieldKey] | None = None
    around: tuple[int, FieldKey] | None = None
    for field_key, variants in aliases.items():
        for alias in variants:
            if len(alias) < MIN_PARTIAL_LENGTH:
                continue
            if alias in key:
                if inside is None or len(alias) > inside[0]:
                    inside = (len(alias), field_key)
            elif key in alias:
                if around is None or len(alias) < around[0]:
                    around = (len(alias), field_key)
    if inside is not None:
        return inside[1]
    if around is not None:
        return around[1]
    return None


def resolve_field_key(header_text: str, aliases: FieldAliasTable = DEFAULT_ALIASES) -> FieldKey | None:
    """Map one header text to a FieldKey, or None when nothing matches."""
    key = normalize(header_text)
    if not key:
        return None
    # "Nom Prénoms conducteur", "Prénom(s)" ... ("prnoms" is in the alias table)
    if "prenom" in key:
        return FieldKey.PRENOMS
    for field_key, variants in aliases.items():
        if key in variants:
            return field_key
    if len(key) < MIN_PARTIAL_LENGTH:
        return None
    return _partial_match(key, aliases)


def has_delimiter(text: str) -> bool:
    return _DELIMITER_RE.search(text) is not None


def split_cell(text: str) -> list[str]:
    """Split a merged header cell on , ; | or tab. Positions are preserved (blank parts kept)."""
    if not has_delimiter(text):
        return [text.strip()]
    return [part.strip() for part in _DELIMITER_RE.split(text)]


def _row_field_keys(row: Sequence[Any], aliases: FieldAliasTable) -> set[FieldKey]:
    found: set[FieldKey] = set()
    for cell in row:
        text = cell_to_str(cell)
        if not text:
            continue
        for token in split_cell(text):
            key = resolve_field_key(token, aliases)
            if key is not None:
                found.add(key)
    return found


def detect_header_row(
    rows: Sequence[Sequence[Any]],
    aliases: FieldAliasTable = DEFAULT_ALIASES,
) -> int:
    """Index of the most header-like row among the first HEADER_SCAN_LIMIT rows.

    Score = number of distinct FieldKeys recognized in the row. Ties keep the
    earliest row; a sheet where nothing is recognized yields 0.
    """
    best_index = 0
    best_score = -1
    for index, row in enumerate(rows[:HEADER_SCAN_LIMIT]):
        score = len(_row_field_keys(row, aliases))
        if score > best_score:
            best_index, best_score = index, score
    return best_index


@dataclass(frozen=True)
class _AssignState:
    """Accumulator of the column assignment fold."""
    columns: tuple[tuple[FieldKey, int], ...] = ()
    previous: FieldKey | None = None  # key assigned to the preceding token

    def claimed(self, key: FieldKey) -> bool:
        return any(k is key for k, _ in self.columns)


def _redirect_phone(state: _AssignState) -> FieldKey | None:
    """Target for a duplicate "Téléphone" column, or None to discard it."""
    if state.previous is FieldKey.PERSONNE_CONTACT and not state.claimed(FieldKey.TELEPHONE_CONTACT):
        return FieldKey.TELEPHONE_CONTACT
    if state.previous is FieldKey.PROPRIETAIRE and not state.claimed(FieldKey.TELEPHONE_PROPRIETAIRE):
        return FieldKey.TELEPHONE_PROPRIETAIRE
    if not state.claimed(FieldKey.TELEPHONE_CONTACT):
        return FieldKey.TELEPHONE_CONTACT
    if not state.claimed(FieldKey.TELEPHONE_PROPRIETAIRE):
        return FieldKey.TELEPHONE_PROPRIETAIRE
    return None


def _assign_step(state: _AssignState, token: tuple[int, str], aliases: FieldAliasTable) -> _AssignState:
    index, text = token
    key = resolve_field_key(text, aliases)
    if key is None:
        target = None
    elif not state.claimed(key):
        target = key
    elif key is FieldKey.TELEPHONE:
        target = _redirect_phone(state)
    else:
        # first assignment wins
        target = None
    if target is None:
        return replace(state, previous=None)
    return _AssignState(columns=state.columns + ((target, index),), previous=target)


def _header_tokens(cells: list[str]) -> list[tuple[int, str]]:
    non_blank = [(i, text) for i, text in enumerate(cells) if text]
    if len(non_blank) == 1 and has_delimiter(non_blank[0][1]):
        # whole header pasted into a single cell: token position is the column
        return [(pos, tok) for pos, tok in enumerate(split_cell(non_blank[0][1])) if tok]
    tokens: list[tuple[int, str]] = []
    for index, text in non_blank:
        for offset, tok in enumerate(split_cell(text)):
            if tok:
                tokens.append((index + offset, tok))
    return tokens


def assign_column_indices(
    header_row: Sequence[Any],
    aliases: FieldAliasTable = DEFAULT_ALIASES,
) -> ColumnIndexMap:
    """Build the FieldKey -> column index map from the header row cells."""
    cells = [cell_to_str(c) for c in header_row]
    state = reduce(partial(_assign_step, aliases=aliases), _header_tokens(cells), _AssignState())
    columns: ColumnIndexMap = dict(state.columns)
    if FieldKey.PRENOMS not in columns:
        for index, text in enumerate(cells):
            if "prenom" in normalize(text):
                columns[FieldKey.PRENOMS] = index
                break
    return columns
