from __future__ import annotations

import itertools
import logging
import time
from collections.abc import Iterable, Sequence
from pathlib import Path

from ..models.contributor import ContributorRecord
from ..models.extraction_result import ExtractionResult
from ..models.field_key import FIELD_LABELS, MANDATORY_FIELDS, FieldKey
from .aliases import DEFAULT_ALIASES, FieldAliasTable
from .header import ColumnIndexMap, assign_column_indices, detect_header_row
from .reader import RawSheet, cell_to_str, read_source_bytes, read_workbook

logger = logging.getLogger(__name__)

"""Contributor extraction: sheet selection -> header -> columns -> records.

Only unreadable input aborts (ReadError / DecodeError from the reader). An
empty sheet or missing required columns still produce a result; the problems
are reported as warnings next to whatever records could be built.
"""

__all__ = [
    "EMPTY_INPUT_WARNING",
    "missing_field_warning",
    "select_sheet",
    "extract_records",
    "extract_sheet",
    "extract_workbook",
    "extract_bytes",
    "extract_file",
]

EMPTY_INPUT_WARNING = "Le fichier est vide ou ne contient pas de données"

# one value per extraction call, keeps ids unique across repeated imports
_batch_seq = itertools.count(1)


def missing_field_warning(key: FieldKey) -> str:
    return f"Colonne requise non détectée : {FIELD_LABELS[key]}"


def select_sheet(sheets: Sequence[RawSheet]) -> int:
    """Index of the sheet with the largest declared row extent (earliest wins ties)."""
    if not sheets:
        raise ValueError("no sheet to select")
    best = 0
    for index, sheet in enumerate(sheets):
        if sheet.row_extent > sheets[best].row_extent:
            best = index
    return best


def _is_blank(row: Sequence[object]) -> bool:
    return all(cell_to_str(c) == "" for c in row)


def extract_records(
    sheet: RawSheet,
    header_row_index: int,
    column_map: ColumnIndexMap,
    required_fields: Iterable[FieldKey] = MANDATORY_FIELDS,
) -> ExtractionResult:
    """Turn every non-blank row below the header into a ContributorRecord."""
    warnings: list[str] = []
    for key in required_fields:
        if key not in column_map:
            msg = missing_field_warning(key)
            logger.warning("%s: %s", sheet.name, msg)
            warnings.append(msg)

    batch = next(_batch_seq)
    stamp = time.time_ns()
    data_rows = sheet.rows[header_row_index + 1:]
    records: list[ContributorRecord] = []
    for offset, row in enumerate(data_rows):
        if _is_blank(row):
            continue
        row_index = header_row_index + 1 + offset
        values: dict[FieldKey, str] = {}
        for key, col in column_map.items():
            if col < len(row):
                values[key] = cell_to_str(row[col])
        records.append(ContributorRecord.from_values(f"contrib-{row_index}-{batch}-{stamp}", values))

    logger.debug(
        "sheet=%s header_row=%d rows=%d records=%d", sheet.name, header_row_index, len(data_rows), len(records)
    )
    return ExtractionResult(
        records=tuple(records),
        warnings=tuple(warnings),
        total_rows=len(data_rows),
        sheet_name=sheet.name,
        header_row_index=header_row_index,
        column_map=column_map,
    )


def extract_sheet(
    sheet: RawSheet,
    aliases: FieldAliasTable = DEFAULT_ALIASES,
    required_fields: Iterable[FieldKey] = MANDATORY_FIELDS,
) -> ExtractionResult:
    if sheet.row_extent < 2:
        logger.warning("%s: %s", sheet.name, EMPTY_INPUT_WARNING)
        return ExtractionResult(records=(), warnings=(EMPTY_INPUT_WARNING,), total_rows=0, sheet_name=sheet.name)
    header_row_index = detect_header_row(sheet.rows, aliases)
    column_map = assign_column_indices(sheet.rows[header_row_index], aliases)
    logger.debug(
        "sheet=%s columns=%s", sheet.name, {k.value: i for k, i in column_map.items()}
    )
    return extract_records(sheet, header_row_index, column_map, required_fields)


def extract_workbook(
    sheets: Sequence[RawSheet],
    aliases: FieldAliasTable = DEFAULT_ALIASES,
    required_fields: Iterable[FieldKey] = MANDATORY_FIELDS,
) -> ExtractionResult:
    index = select_sheet(sheets)
    if len(sheets) > 1:
        logger.debug("selected sheet %r (%d of %d)", sheets[index].name, index + 1, len(sheets))
    return extract_sheet(sheets[index], aliases, required_fields)


def extract_bytes(
    data: bytes,
    aliases: FieldAliasTable = DEFAULT_ALIASES,
    required_fields: Iterable[FieldKey] = MANDATORY_FIELDS,
) -> ExtractionResult:
    return extract_workbook(read_workbook(data), aliases, required_fields)


def extract_file(
    path: Path,
    aliases: FieldAliasTable = DEFAULT_ALIASES,
    required_fields: Iterable[FieldKey] = MANDATORY_FIELDS,
) -> ExtractionResult:
    return extract_bytes(read_source_bytes(path), aliases, required_fields)
