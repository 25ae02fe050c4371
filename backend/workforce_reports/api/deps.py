"""
FastAPI dependency providers for the report routes.

The record store is built once per process; engines are built per request so
concurrent requests never share a random source.
"""
import os
from functools import lru_cache
from typing import Optional

from fastapi import Depends

from workforce_reports.services.record_store import RecordStore, build_record_store
from workforce_reports.services.report_engine import ReportEngine
from workforce_reports.services.report_service import ReportService

_seed_env = os.getenv("REPORT_RANDOM_SEED", "")
REPORT_RANDOM_SEED: Optional[int] = int(_seed_env) if _seed_env.strip() else None


@lru_cache(maxsize=1)
def get_record_store() -> RecordStore:
    return build_record_store()


def get_report_engine() -> ReportEngine:
    return ReportEngine(seed=REPORT_RANDOM_SEED)


def get_report_service(
    store: RecordStore = Depends(get_record_store),
    engine: ReportEngine = Depends(get_report_engine),
) -> ReportService:
    return ReportService(store, engine)
