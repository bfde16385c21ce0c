from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.warning_record import WarningRecord

"""Warning log buffering.

Diagnostic warnings of an import are collected as WarningRecord and written
as JSON Lines to ``<logs_dir>/warnings-YYYYMMDD-HHMMSS.log`` (UTC). The file is
only created when there is something to write.
"""

__all__ = [
    "WarningRecord",
    "WarningLogBuffer",
]

TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class WarningLogBuffer:
    """In-memory buffer of warning records; flush() appends them to the log file.

    Serial use only (one import at a time).
    """
    def __init__(self, logs_dir: Path = Path("./logs")) -> None:
        self._logs_dir = Path(logs_dir)
        self._records: list[WarningRecord] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"warnings-{stamp}.log"
        return self._file_path

    def append(self, record: WarningRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the log path, or None when nothing was buffered."""
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
