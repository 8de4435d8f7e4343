"""CSV log of copy, paste and clear actions.

One row per action in data/history.csv. The log is append-only and is never
read back to drive behavior; it exists so a recruiter can see which candidate
went into which ATS and how many fields made it.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from circus_copier.models import HistoryEntry

logger = logging.getLogger("circus_copier")

CSV_HEADERS = [
    "timestamp",
    "action",
    "candidate_id",
    "candidate_name",
    "url",
    "ats_name",
    "filled_count",
    "total_count",
    "success",
    "notes",
]


class HistoryLog:
    """Append copy/paste records to a CSV file."""

    def __init__(self, data_dir: Path | str = "data"):
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._path = self._data_dir / "history.csv"

    @property
    def path(self) -> Path:
        return self._path

    def record(self, entry: HistoryEntry) -> None:
        is_new_file = not self._path.exists() or self._path.stat().st_size == 0

        with open(self._path, "a", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=CSV_HEADERS)
            if is_new_file:
                writer.writeheader()
            writer.writerow({
                "timestamp": entry.timestamp.isoformat(),
                "action": entry.action.value,
                "candidate_id": entry.candidate_id,
                "candidate_name": entry.candidate_name,
                "url": entry.url,
                "ats_name": entry.ats_name,
                "filled_count": entry.filled_count,
                "total_count": entry.total_count,
                "success": "true" if entry.success else "false",
                "notes": entry.notes,
            })

        logger.debug("Recorded %s for %s -> %s", entry.action.value, entry.candidate_name, self._path.name)

    def summary(self) -> dict[str, int]:
        """Return row counts by action."""
        counts: dict[str, int] = {}
        if not self._path.exists():
            return counts

        with open(self._path, newline="", encoding="utf-8") as f:
            for row in csv.DictReader(f):
                action = row.get("action", "unknown")
                counts[action] = counts.get(action, 0) + 1
        return counts
