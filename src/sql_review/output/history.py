import asyncio
import json
import threading
from pathlib import Path
from typing import Any

from sql_review.domain import MergedReport
from sql_review.output.serialization import report_to_json


class HistoryFileOutput:
    """Append-only history of reports stored as JSON lines.

    File writes run in a worker thread; one lock serializes appends so
    concurrent sends never interleave lines.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "history"

    @property
    def path(self) -> Path:
        return self._path

    async def send(self, report: MergedReport) -> None:
        await asyncio.to_thread(self._append, report_to_json(report) + "\n")

    def _append(self, line: str) -> None:
        with self._lock:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "a", encoding="utf-8") as handle:
                handle.write(line)

    def read_all(self) -> list[dict[str, Any]]:
        with self._lock:
            if not self._path.exists():
                return []
            with open(self._path, encoding="utf-8") as handle:
                return [json.loads(line) for line in handle if line.strip()]
