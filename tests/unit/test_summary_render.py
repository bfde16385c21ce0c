from __future__ import annotations

import re

from driver_cards.models.contributor import ContributorRecord
from driver_cards.models.extraction_result import ExtractionResult
from driver_cards.services.summary import render_summary_line

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY file=\S+ sheet=\S* header_row=([0-9]+|-) rows=([0-9]+) records=([0-9]+) warnings=([0-9]+)$"
)


def test_summary_line_counts():
    result = ExtractionResult(
        records=(ContributorRecord(id="a"), ContributorRecord(id="b")),
        warnings=("Colonne requise non détectée : Téléphone",),
        total_rows=3,
        sheet_name="Conducteurs",
        header_row_index=1,
    )
    line = render_summary_line("conducteurs.xlsx", result)
    assert line == "SUMMARY file=conducteurs.xlsx sheet=Conducteurs header_row=2 rows=3 records=2 warnings=1"
    m = SUMMARY_PATTERN.match(line)
    assert m is not None
    assert result.skipped_rows == 1


def test_summary_line_empty_sheet():
    result = ExtractionResult(records=(), warnings=("vide",), total_rows=0, sheet_name="Feuil1")
    line = render_summary_line("vide.xlsx", result)
    assert "header_row=-" in line
    assert SUMMARY_PATTERN.match(line) is not None
