import csv
import io
import json
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from dhcp_activity.models import ReportRow
from dhcp_activity.storage.registry import REPORT_COLUMNS, format_online, register_sink, row_values


def _write_text(text: str, output_file: Optional[str], kind: str):
    if not output_file:
        sys.stdout.write(text)
        return

    path = Path(output_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    logger.info(f"[REPORT] Сохранён {kind}: {path}")


def render_csv(rows: List[ReportRow]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow([header for header, _ in REPORT_COLUMNS])
    for row in rows:
        writer.writerow(row_values(row))
    return buffer.getvalue()


def render_json(rows: List[ReportRow]) -> str:
    data = []
    for row in rows:
        item = row.model_dump(mode="json")
        item["online"] = format_online(row.online) if row.online is None else row.online
        data.append(item)
    return json.dumps(data, ensure_ascii=False, indent=2) + "\n"


def save_csv(rows: List[ReportRow], output_file: Optional[str] = None, **kwargs):
    _write_text(render_csv(rows), output_file, "CSV")


def save_json(rows: List[ReportRow], output_file: Optional[str] = None, **kwargs):
    _write_text(render_json(rows), output_file, "JSON")


register_sink("csv", save_csv)
register_sink("json", save_json)
