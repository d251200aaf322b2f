"""JSON export of a derivation record.

Why JSON:
- A human-readable note of which context/version/length produced a password,
  so the user can re-derive it later.
- The record never carries the master secret or pepper.
"""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path

from core.domain.models import ExportRecord

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def build_export_filename(site_name: str, when: datetime | None = None) -> str:
    """`password-<site>-<timestamp>.json`, with every non-alphanumeric site char as `_`."""

    when = when or datetime.now(timezone.utc)
    timestamp = when.astimezone(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S")
    site = _UNSAFE_FILENAME_CHARS.sub("_", site_name)
    return f"password-{site}-{timestamp}.json"


def export_record_json(*, record: ExportRecord, output_path: Path) -> Path:
    """Export `ExportRecord` as UTF-8 JSON with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = record.model_dump(mode="json", by_alias=True)
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )
    return output_path


def export_record_to_dir(*, record: ExportRecord, directory: Path) -> Path:
    filename = build_export_filename(record.site_name, record.export_date)
    return export_record_json(record=record, output_path=directory / filename)
