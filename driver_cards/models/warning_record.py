from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""WarningRecord model for the warning log.

One JSON Lines entry per diagnostic warning raised while importing a
spreadsheet. ``row`` is the 1-based spreadsheet row the warning is about, or
-1 when it concerns the whole sheet (missing column, empty file).
"""

__all__ = [
    "WarningRecord",
]


@dataclass(frozen=True)
class WarningRecord:
    """Structured warning record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Spreadsheet filename being imported
        sheet: Sheet name within the file
        row: Row number (1-based). -1 for sheet-level warnings
        warning_type: Classification in UPPER_SNAKE_CASE format
        message: Human readable warning, as shown to the user
    """
    timestamp: str
    file: str
    sheet: str
    row: int
    warning_type: str
    message: str

    @staticmethod
    def create(file: str, sheet: str, row: int, warning_type: str, message: str) -> WarningRecord:
        """Create a new WarningRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return WarningRecord(
            timestamp=ts,
            file=file,
            sheet=sheet,
            row=row,
            warning_type=warning_type,
            message=message,
        )

    def to_json_line(self) -> str:
        # fixed key set: dataclass -> dict -> json
        return json.dumps(asdict(self), ensure_ascii=False)
