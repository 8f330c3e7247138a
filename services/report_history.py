"""In-memory store of underwriting runs, newest first."""

import threading
from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class SavedReport:
    address: str
    summary: str
    record: dict
    files: list = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)

    def to_summary(self) -> dict:
        return {
            "address": self.address,
            "date": self.created_at.strftime("%Y-%m-%d"),
            "summary": self.summary,
        }


class ReportHistory:
    def __init__(self):
        self._lock = threading.Lock()
        self._reports: list[SavedReport] = []

    def add(self, report: SavedReport) -> SavedReport:
        with self._lock:
            self._reports.append(report)
        return report

    def recent(self, limit: int = 10) -> list[SavedReport]:
        with self._lock:
            ordered = list(reversed(self._reports))
        return ordered[:limit]

    def clear(self):
        with self._lock:
            self._reports.clear()

    def __len__(self):
        with self._lock:
            return len(self._reports)
