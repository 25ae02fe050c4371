"""
Report export: JSON documents and Excel workbooks written to DOWNLOAD_DIR.

The JSON document is the wire contract (camelCase keys, nesting as built by
the engine); parse_report() in report_models reverses it. The workbook is a
flattened view of the same document:
  - "Summary" sheet: report header, then every scalar / nested-object section
  - one sheet per list section (Department Breakdown, Budget Alerts, ...)
"""
import os
import re
import logging
from typing import Any, Dict, List, Optional

import xlsxwriter

logger = logging.getLogger("workforce-reports.export")

DOWNLOAD_DIR = os.getenv("DOWNLOAD_DIR", "/tmp/downloads")
EXPORT_FORMATS = ("json", "xlsx")

_HEADER_KEYS = ("reportId", "reportType", "generatedAt")


def _ensure_dir(directory: str):
    os.makedirs(directory, exist_ok=True)


def report_to_dict(report) -> Dict[str, Any]:
    return report.model_dump(mode="json", by_alias=True)


def report_to_json(report, indent: Optional[int] = 2) -> str:
    return report.model_dump_json(by_alias=True, indent=indent)


def export_filename(report, fmt: str) -> str:
    return f"{report.report_type}-{report.report_id}.{fmt}"


def _title(key: str) -> str:
    """'departmentBreakdown' -> 'Department Breakdown' (Excel caps sheet names at 31 chars)."""
    words = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", " ", key)
    return (words[:1].upper() + words[1:])[:31]


def write_json(report, directory: Optional[str] = None) -> str:
    directory = directory or DOWNLOAD_DIR
    _ensure_dir(directory)
    path = os.path.join(directory, export_filename(report, "json"))
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(report_to_json(report))
    logger.info(f"JSON export written: {path}", extra={"report_id": report.report_id})
    return path


def write_excel(report, directory: Optional[str] = None) -> str:
    directory = directory or DOWNLOAD_DIR
    _ensure_dir(directory)
    path = os.path.join(directory, export_filename(report, "xlsx"))
    doc = report_to_dict(report)

    wb = xlsxwriter.Workbook(path)
    bold = wb.add_format({"bold": True})
    section = wb.add_format({"bold": True, "bg_color": "#DCE6F1"})

    summary = wb.add_worksheet("Summary")
    summary.set_column(0, 0, 28)
    summary.set_column(1, 1, 24)
    row = 0
    for key in _HEADER_KEYS:
        summary.write(row, 0, _title(key), bold)
        summary.write(row, 1, doc[key])
        row += 1

    tables: List[str] = []
    for key, value in doc.items():
        if key in _HEADER_KEYS:
            continue
        if isinstance(value, list):
            tables.append(key)
            continue
        row += 1
        summary.write(row, 0, _title(key), section)
        row += 1
        for field, field_value in (value.items() if isinstance(value, dict) else [(key, value)]):
            summary.write(row, 0, _title(field))
            summary.write(row, 1, field_value)
            row += 1

    for key in tables:
        ws = wb.add_worksheet(_title(key))
        rows = doc[key]
        headers = list(rows[0].keys()) if rows else []
        for c, header in enumerate(headers):
            ws.write(0, c, _title(header), bold)
            ws.set_column(c, c, max(12, len(header) + 2))
        for r, item in enumerate(rows, 1):
            for c, header in enumerate(headers):
                ws.write(r, c, item.get(header))

    wb.close()
    logger.info(f"Excel export written: {path}", extra={"report_id": report.report_id})
    return path


def write_export(report, fmt: str, directory: Optional[str] = None) -> str:
    if fmt == "xlsx":
        return write_excel(report, directory)
    if fmt == "json":
        return write_json(report, directory)
    raise ValueError(f"Unsupported export format: {fmt!r}")
