from __future__ import annotations

import io
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

"""Spreadsheet reader.

Decodes .xlsx (openpyxl) and legacy .xls (xlrd) content through pandas into
RawSheet objects. No header row is assumed here: sheets are parsed with
header=None and every cell is kept as the raw python object so the header
heuristics can look at the first rows themselves.
"""

__all__ = [
    "ExtractionError",
    "DecodeError",
    "ReadError",
    "RawSheet",
    "cell_to_str",
    "read_source_bytes",
    "read_workbook",
]


class ExtractionError(Exception):
    """Base class for errors that abort an extraction."""

class DecodeError(ExtractionError):
    """Raised when bytes cannot be parsed as a spreadsheet."""

class ReadError(ExtractionError):
    """Raised when the input file cannot be read."""


@dataclass(frozen=True)
class RawSheet:
    name: str
    rows: tuple[tuple[Any, ...], ...]  # row-major raw cell values (jagged allowed)
    declared_rows: int = 0  # used-range height reported by the workbook, 0 if unknown

    @property
    def row_extent(self) -> int:
        """Declared used-range height.

        pandas drops trailing blank rows, so a sheet whose used range extends
        below its last value keeps its declared height here. Falls back to
        the number of decoded rows when the workbook declares nothing.
        """
        return max(self.declared_rows, len(self.rows))


def _declared_rows(book: Any, name: str) -> int:
    if hasattr(book, "sheet_by_name"):
        # xlrd (.xls)
        return int(book.sheet_by_name(name).nrows)
    if name in getattr(book, "sheetnames", ()):
        # openpyxl: <dimension> of the sheet, None when the writer omitted it
        return int(book[name].max_row or 0)
    return 0


def cell_to_str(value: Any) -> str:
    """Coerce a raw cell value to trimmed text ('' for blanks)."""
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        # phone numbers / NPC stored as numbers come back as floats from xls
        if value.is_integer():
            return str(int(value))
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        # array-like values: pd.isna does not reduce to a bool
        pass
    return str(value).strip()


def read_source_bytes(path: Path) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise ReadError(f"cannot read {path}: {e}") from e


def read_workbook(source: bytes | Path | str) -> list[RawSheet]:
    """Decode every sheet of a workbook.

    Parameters
    ----------
    source: raw file content, or a path (read through read_source_bytes)

    keep_default_na=False so that strings such as "NA" or "None" (which do
    occur as surnames or placeholders) stay text; blank cells still come back
    as NaN and are handled by cell_to_str.
    """
    data = source if isinstance(source, bytes) else read_source_bytes(Path(source))
    try:
        xls = pd.ExcelFile(io.BytesIO(data))
        sheets: list[RawSheet] = []
        for name in xls.sheet_names:
            # before parse: pandas resets the dimensions of read-only openpyxl sheets
            declared = _declared_rows(xls.book, name)
            df = xls.parse(name, header=None, dtype=object, keep_default_na=False)
            rows = tuple(tuple(r) for r in df.itertuples(index=False, name=None))
            sheets.append(RawSheet(name=str(name), rows=rows, declared_rows=declared))
    except Exception as e:
        # openpyxl / xlrd / zipfile raise a wide range of types on corrupt input
        raise DecodeError(f"unreadable spreadsheet: {e}") from e
    if not sheets:
        raise DecodeError("workbook contains no sheet")
    return sheets
