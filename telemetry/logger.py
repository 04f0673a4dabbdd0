from __future__ import annotations

import json
import os
import threading
from typing import Any, Dict, List, Optional, TextIO


class TelemetryLogger:
    """Structured JSONL logger for rover command telemetry.

    Thread-safe, append-only logging of dict records, one JSON object per line.
    Usable as a context manager so the file is closed after a run.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        self._lock = threading.Lock()
        self._fp: Optional[TextIO] = open(self.path, "a", encoding="utf-8")
        self.records_written = 0

    def __enter__(self) -> "TelemetryLogger":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def log_step(self, record: Dict[str, Any]) -> None:
        """Append a single telemetry record to the JSONL file."""
        if self._fp is None:
            return
        line = json.dumps(record, separators=(",", ":"))
        with self._lock:
            self._fp.write(line + "\n")
            self._fp.flush()
            self.records_written += 1

    def close(self) -> None:
        if self._fp is not None:
            self._fp.close()
            self._fp = None


def load_records(path: str) -> List[Dict[str, Any]]:
    """Read back a JSONL telemetry file, skipping blank or corrupt lines."""
    if not os.path.exists(path):
        return []
    records: List[Dict[str, Any]] = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError:
                continue
    return records
