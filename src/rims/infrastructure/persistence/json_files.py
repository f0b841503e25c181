"""File helpers shared by the JSON collection repositories.

Each collection is one JSON array in one file.  Writes go to a sibling
temporary file that is then renamed over the collection file, so a reader never
sees a half-written collection.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path


def ensure_file(file_path: Path) -> None:
    if not file_path.exists():
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text("[]", encoding="utf-8")


def load_records(file_path: Path) -> list[dict]:
    return json.loads(file_path.read_text(encoding="utf-8"))


def persist_records(file_path: Path, records: list[dict]) -> None:
    tmp_path = file_path.with_suffix(file_path.suffix + ".tmp")
    tmp_path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
    tmp_path.replace(file_path)


def next_numeric_id(records: list[dict]) -> str:
    numeric = [int(r["id"]) for r in records if str(r.get("id", "")).isdigit()]
    return str(max(numeric) + 1) if numeric else "1"


def to_iso(value: datetime) -> str:
    return value.isoformat()


def from_iso(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
