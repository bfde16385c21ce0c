from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .contributor import ContributorRecord
from .field_key import FieldKey

"""ExtractionResult: aggregate output of one spreadsheet extraction."""

__all__ = [
    "ExtractionResult",
]


@dataclass(frozen=True)
class ExtractionResult:
    """Records, diagnostic warnings and row counters of one extraction.

    ``total_rows`` counts every row after the header row, blank ones included.
    ``header_row_index`` is None when the sheet was too short to hold a header
    and data. ``column_map`` is a read-only copy of the mapping it was given.
    """
    records: tuple[ContributorRecord, ...]
    warnings: tuple[str, ...]
    total_rows: int
    sheet_name: str = ""
    header_row_index: int | None = None
    column_map: Mapping[FieldKey, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "column_map", MappingProxyType(dict(self.column_map)))

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    @property
    def skipped_rows(self) -> int:
        return self.total_rows - len(self.records)
