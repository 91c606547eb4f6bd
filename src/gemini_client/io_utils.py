"""Input/output helpers."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

from gemini_client.models.run_report import RunReport

ReportWriter = Callable[[RunReport, str], Path]


def read_json_file(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def read_json_if_exists(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    data = read_json_file(path)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}.")
    return data


def write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_report_writer(source_path: Path, results_dir: Path) -> ReportWriter:
    """
    Returns a writer that stores reports as "<source stem>-<label>-<timestamp>.json".
    """
    base_name = source_path.stem

    def write_report(report: RunReport, label: str) -> Path:
        timestamp = utc_timestamp().replace(":", "-").replace(".", "-")
        target = results_dir / f"{base_name}-{label}-{timestamp}.json"
        return write_json(target, report.model_dump(mode="json", by_alias=True))

    return write_report
