"""
Report service: fetches records from the store and hands them to the engine.

Entry points:
  - build_contractor_summary()
  - build_budget_analysis()
  - build_performance_metrics()
  - generate(report_type)   dispatches to one of the three above
  - get_overview()          stats-card figures from the baseline snapshot

Contractor and snapshot failures propagate as DataUnavailableError. A missing
timesheet feed is logged and replaced with synthetic records.
"""
import logging
import time
from typing import Awaitable, Callable, Dict, Union

from workforce_reports.models.report_models import (
    BudgetAnalysisReport,
    ContractorSummaryReport,
    PerformanceMetricsReport,
    ReportOverview,
)
from workforce_reports.services.errors import TimesheetsUnavailableError, UnknownReportTypeError
from workforce_reports.services.perf_monitor import tracker
from workforce_reports.services.record_store import RecordStore
from workforce_reports.services.report_engine import ReportEngine

logger = logging.getLogger("workforce-reports.service")

AnyReport = Union[ContractorSummaryReport, BudgetAnalysisReport, PerformanceMetricsReport]

REPORT_TYPES = ("contractor-summary", "budget-analysis", "performance-metrics")


class ReportService:

    def __init__(self, store: RecordStore, engine: ReportEngine):
        self.store = store
        self.engine = engine
        self._builders: Dict[str, Callable[[], Awaitable[AnyReport]]] = {
            "contractor-summary": self.build_contractor_summary,
            "budget-analysis": self.build_budget_analysis,
            "performance-metrics": self.build_performance_metrics,
        }

    async def generate(self, report_type: str) -> AnyReport:
        builder = self._builders.get(report_type)
        if builder is None:
            raise UnknownReportTypeError(report_type)

        start = time.perf_counter()
        try:
            report = await builder()
        except Exception as e:
            tracker.record_error(report_type)
            logger.error(f"{report_type} generation failed: {e}", extra={"report_type": report_type})
            raise
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        tracker.record_report(report_type, duration_ms)
        logger.info(
            f"{report_type} report generated",
            extra={"report_id": report.report_id, "report_type": report_type, "duration_ms": duration_ms},
        )
        return report

    async def build_contractor_summary(self) -> ContractorSummaryReport:
        contractors = await self.store.get_all_contractors()
        return self.engine.contractor_summary(contractors)

    async def build_budget_analysis(self) -> BudgetAnalysisReport:
        contractors = await self.store.get_all_contractors()
        snapshot = await self.store.get_baseline_report_snapshot()
        return self.engine.budget_analysis(contractors, snapshot)

    async def build_performance_metrics(self) -> PerformanceMetricsReport:
        contractors = await self.store.get_all_contractors()
        try:
            timesheets = await self.store.get_all_timesheet_entries()
        except TimesheetsUnavailableError as e:
            logger.warning(f"Timesheets unavailable ({e}); using synthetic performance records")
            tracker.record_fallback()
            timesheets = None
        return self.engine.performance_metrics(contractors, timesheets)

    async def get_overview(self) -> ReportOverview:
        snapshot = await self.store.get_baseline_report_snapshot()
        return ReportOverview(
            total_contractors=snapshot.total_contractors,
            active_departments=snapshot.active_departments,
            monthly_spend=snapshot.monthly_spend,
            avg_contract_length=snapshot.avg_contract_length,
        )
