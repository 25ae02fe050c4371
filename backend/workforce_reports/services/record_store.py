"""
Record store accessors: read-only sources of contractor, timesheet and
baseline snapshot data for the report service.

Two implementations:
  - InMemoryRecordStore: wraps already-loaded records (built-in demo data by default)
  - JsonRecordStore: reads contractors.json / timesheets.json / reports.json
    from a directory (REPORT_DATA_DIR)

A missing timesheet feed raises TimesheetsUnavailableError so the service can
switch to synthetic records; every other failure is a DataUnavailableError.
"""
import os
import json
import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from pydantic import ValidationError

from workforce_reports.models.report_models import BaselineSnapshot, Contractor, TimesheetEntry
from workforce_reports.services import mock_data
from workforce_reports.services.errors import DataUnavailableError, TimesheetsUnavailableError

logger = logging.getLogger("workforce-reports.store")

REPORT_DATA_DIR = os.getenv("REPORT_DATA_DIR", "")

CONTRACTORS_FILE = "contractors.json"
TIMESHEETS_FILE = "timesheets.json"
SNAPSHOT_FILE = "reports.json"


class RecordStore(Protocol):
    async def get_all_contractors(self) -> List[Contractor]: ...

    async def get_all_timesheet_entries(self) -> List[TimesheetEntry]: ...

    async def get_baseline_report_snapshot(self) -> BaselineSnapshot: ...


def _parse_contractors(rows: Any) -> List[Contractor]:
    if not isinstance(rows, list):
        raise DataUnavailableError("contractors", f"expected a list of records, got {type(rows).__name__}")
    try:
        return [Contractor.model_validate(row) for row in rows]
    except ValidationError as e:
        raise DataUnavailableError("contractors", f"malformed record: {e.errors()[0]['msg']}") from e


def _parse_timesheets(rows: Any) -> List[TimesheetEntry]:
    if not isinstance(rows, list):
        raise TimesheetsUnavailableError(f"expected a list of records, got {type(rows).__name__}")
    try:
        return [TimesheetEntry.model_validate(row) for row in rows]
    except ValidationError as e:
        raise TimesheetsUnavailableError(f"malformed record: {e.errors()[0]['msg']}") from e


def _parse_snapshot(data: Any) -> BaselineSnapshot:
    if not isinstance(data, dict):
        raise DataUnavailableError("baseline snapshot", f"expected an object, got {type(data).__name__}")
    try:
        return BaselineSnapshot.model_validate(data)
    except ValidationError as e:
        raise DataUnavailableError("baseline snapshot", f"malformed snapshot: {e.errors()[0]['msg']}") from e


class InMemoryRecordStore:
    """
    Serves records held in memory.

    ``timesheets=None`` models a deployment without a timesheet feed:
    get_all_timesheet_entries() raises TimesheetsUnavailableError.
    """

    def __init__(
        self,
        contractors: List[Dict[str, Any]],
        snapshot: Dict[str, Any],
        timesheets: Optional[List[Dict[str, Any]]] = None,
    ):
        self._contractors = _parse_contractors(contractors)
        self._snapshot = _parse_snapshot(snapshot)
        self._timesheets = None if timesheets is None else _parse_timesheets(timesheets)

    @classmethod
    def from_mock_data(cls) -> "InMemoryRecordStore":
        return cls(
            contractors=mock_data.contractors(),
            snapshot=mock_data.reports(),
            timesheets=mock_data.timesheets(),
        )

    async def get_all_contractors(self) -> List[Contractor]:
        return list(self._contractors)

    async def get_all_timesheet_entries(self) -> List[TimesheetEntry]:
        if self._timesheets is None:
            raise TimesheetsUnavailableError("no timesheet feed configured")
        return list(self._timesheets)

    async def get_baseline_report_snapshot(self) -> BaselineSnapshot:
        return self._snapshot


class JsonRecordStore:
    """
    Reads each collection from its JSON file on every call. File access runs
    in a worker thread so the event loop is not blocked.
    """

    def __init__(self, data_dir: str):
        self.data_dir = Path(data_dir)

    def _load(self, filename: str, collection: str) -> Any:
        path = self.data_dir / filename
        if not path.is_file():
            raise DataUnavailableError(collection, f"{path} not found")
        try:
            with path.open(encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            raise DataUnavailableError(collection, f"cannot read {path}: {e}") from e

    async def get_all_contractors(self) -> List[Contractor]:
        rows = await asyncio.to_thread(self._load, CONTRACTORS_FILE, "contractors")
        return _parse_contractors(rows)

    async def get_all_timesheet_entries(self) -> List[TimesheetEntry]:
        try:
            rows = await asyncio.to_thread(self._load, TIMESHEETS_FILE, "timesheets")
        except DataUnavailableError as e:
            raise TimesheetsUnavailableError(e.reason) from e
        return _parse_timesheets(rows)

    async def get_baseline_report_snapshot(self) -> BaselineSnapshot:
        data = await asyncio.to_thread(self._load, SNAPSHOT_FILE, "baseline snapshot")
        return _parse_snapshot(data)


def build_record_store(data_dir: Optional[str] = None) -> RecordStore:
    """JSON store when a data directory is configured, built-in demo data otherwise."""
    data_dir = data_dir if data_dir is not None else REPORT_DATA_DIR
    if data_dir:
        logger.info(f"Serving report data from {data_dir}")
        return JsonRecordStore(data_dir)
    logger.info("REPORT_DATA_DIR not set: serving built-in demo data")
    return InMemoryRecordStore.from_mock_data()
