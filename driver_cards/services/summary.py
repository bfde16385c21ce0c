from __future__ import annotations

from ..models.extraction_result import ExtractionResult

"""SUMMARY line rendering for one spreadsheet import."""


def render_summary_line(file_name: str, result: ExtractionResult) -> str:
    """Render the SUMMARY line of an extraction.

    Format:
    SUMMARY file={name} sheet={sheet} header_row={n|-} rows={n} records={n} warnings={n}

    header_row is 1-based (as displayed by spreadsheet programs), '-' when the
    sheet was empty.

    Examples:
        >>> result = ExtractionResult(records=(), warnings=("x",), total_rows=0, sheet_name="Feuil1")
        >>> render_summary_line("drivers.xlsx", result)
        'SUMMARY file=drivers.xlsx sheet=Feuil1 header_row=- rows=0 records=0 warnings=1'
    """
    header = "-" if result.header_row_index is None else str(result.header_row_index + 1)
    return (
        f"SUMMARY file={file_name} "
        f"sheet={result.sheet_name} "
        f"header_row={header} "
        f"rows={result.total_rows} "
        f"records={len(result.records)} "
        f"warnings={len(result.warnings)}"
    )
