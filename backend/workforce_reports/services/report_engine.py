"""
report_engine.py: Contractor workforce report aggregation.

Covers:
  - Contractor summary: status distribution, department headcount rollup,
    contract-expiry buckets
  - Budget analysis: per-department ceiling variance, usage alerts,
    monthly budget trend, cost analysis
  - Performance metrics: efficiency categories, department performance,
    top-performer ranking, rule-based insights, KPI block

Every builder is pure: it consumes flat record lists and returns a frozen
report model. Nothing here talks to the record store. The random source,
clock and report-id factory are constructor arguments so a seeded engine
produces identical reports (apart from reportId / generatedAt) for identical
input.

Percentages and averages are rounded half-up to whole numbers, the same
rounding the dashboard applies client-side.
"""

import logging
import math
import random
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from workforce_reports.models.report_models import (
    BaselineSnapshot,
    BudgetAlert,
    BudgetAnalysisReport,
    BudgetSummary,
    ContractAnalysis,
    Contractor,
    ContractorPerformance,
    ContractorSummaryReport,
    ContractorSummaryTotals,
    CostAnalysis,
    DepartmentBudget,
    DepartmentHeadcount,
    DepartmentPerformance,
    Insight,
    KpiMetrics,
    MonthlyBudgetTrend,
    MonthlyPerformance,
    PerformanceCategories,
    PerformanceMetricsReport,
    PerformanceSummary,
    StatusShare,
    TimesheetEntry,
)
from workforce_reports.services.perf_monitor import timed

logger = logging.getLogger("workforce-reports.engine")


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Monthly budget ceilings per department
DEPARTMENT_BUDGETS: Dict[str, int] = {
    "Technology":      220_000,
    "Risk Management":  95_000,
    "Operations":       85_000,
    "Finance":          75_000,
    "Compliance":       65_000,
    "Analytics":        60_000,
}
DEFAULT_DEPARTMENT_BUDGET: int = 50_000

# Organisation-wide ceiling is always the table total (600k)
TOTAL_BUDGET: int = sum(DEPARTMENT_BUDGETS.values())

# Budget usage alert thresholds (% of ceiling)
WARNING_USAGE_PCT: int = 90
CRITICAL_USAGE_PCT: int = 100

# Synthetic monthly budget = ceiling * (0.95 + U[0, 0.10))
MONTHLY_BUDGET_FLOOR: float = 0.95
MONTHLY_BUDGET_SPREAD: float = 0.10
TREND_UP_FACTOR: float = 1.05
TREND_DOWN_FACTOR: float = 0.90

# Contract expiry buckets (days remaining)
ENDING_SOON_DAYS: int = 30
ENDING_LATER_DAYS: int = 60

# Substituted for an active contractor with no timesheet record
PLACEHOLDER_HOURS: float = 150
PLACEHOLDER_PROJECTS: int = 5
PLACEHOLDER_EFFICIENCY: float = 75

# Inclusive ranges used when the timesheet feed is unavailable
SYNTHETIC_HOURS_RANGE: Tuple[int, int] = (120, 279)
SYNTHETIC_PROJECTS_RANGE: Tuple[int, int] = (2, 9)
SYNTHETIC_EFFICIENCY_RANGE: Tuple[int, int] = (70, 99)

HIGH_PERFORMER_EFFICIENCY: int = 90
GOOD_PERFORMER_EFFICIENCY: int = 75

RATING_BANDS: Tuple[Tuple[int, str], ...] = (
    (90, "Excellent"),
    (80, "Good"),
    (70, "Average"),
)
RATING_FLOOR_LABEL: str = "Needs Improvement"

TOP_PERFORMER_LIMIT: int = 10

# Per-contractor monthly targets behind the KPI block
TARGET_PROJECTS_PER_CONTRACTOR: int = 6
TARGET_HOURS_PER_CONTRACTOR: int = 160
CLIENT_SATISFACTION_CAP: int = 95
CLIENT_SATISFACTION_MAX_BONUS: int = 9

# Insight rules
STRONG_EFFICIENCY: int = 85
WEAK_EFFICIENCY: int = 75
TALENT_POOL_RATIO: float = 0.30

# (month, avgEfficiency, projectsCompleted, hoursWorked)
HISTORICAL_PERFORMANCE: Tuple[Tuple[str, int, int, int], ...] = (
    ("Jan 2024", 78, 145, 6240),
    ("Feb 2024", 82, 167, 6890),
)


# ---------------------------------------------------------------------------
# Arithmetic helpers
# ---------------------------------------------------------------------------

def round_half_up(value: float) -> int:
    """Nearest integer, .5 rounds toward +inf (-8.5 -> -8, 2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def percentage(part: float, whole: float) -> int:
    """Whole-number percentage; 0 when ``whole`` is 0."""
    if not whole:
        return 0
    return round_half_up(part / whole * 100)


def average(total: float, count: int) -> int:
    return round_half_up(total / count) if count else 0


def new_report_id() -> str:
    return uuid.uuid4().hex[:12]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def rating_for(efficiency: float) -> str:
    for floor, label in RATING_BANDS:
        if efficiency >= floor:
            return label
    return RATING_FLOOR_LABEL


# ---------------------------------------------------------------------------
# Department accumulators (live for one builder call only)
# ---------------------------------------------------------------------------

@dataclass
class _HeadcountTally:
    department: str
    active_count: int = 0
    inactive_count: int = 0
    total_rate: float = 0.0
    rate_count: int = 0
    monthly_cost: float = 0.0

    def add(self, contractor: Contractor) -> None:
        if contractor.is_active:
            self.active_count += 1
            self.monthly_cost += contractor.monthly_cost or 0
        else:
            self.inactive_count += 1
        if contractor.hourly_rate:
            self.total_rate += contractor.hourly_rate
            self.rate_count += 1

    def finalise(self) -> DepartmentHeadcount:
        return DepartmentHeadcount(
            department=self.department,
            active_count=self.active_count,
            inactive_count=self.inactive_count,
            total_rate=self.total_rate,
            rate_count=self.rate_count,
            monthly_cost=self.monthly_cost,
            average_rate=average(self.total_rate, self.rate_count),
        )


@dataclass
class _PerformanceTally:
    department: str
    contractor_count: int = 0
    total_hours: float = 0.0
    total_projects: int = 0
    total_efficiency: float = 0.0
    high_performers: int = 0

    def add(self, record: TimesheetEntry) -> None:
        self.contractor_count += 1
        self.total_hours += record.hours_worked
        self.total_projects += record.projects_completed
        self.total_efficiency += record.efficiency
        if record.efficiency >= HIGH_PERFORMER_EFFICIENCY:
            self.high_performers += 1

    def finalise(self) -> DepartmentPerformance:
        n = self.contractor_count
        return DepartmentPerformance(
            department=self.department,
            contractor_count=n,
            avg_hours=average(self.total_hours, n),
            avg_projects=average(self.total_projects, n),
            avg_efficiency=average(self.total_efficiency, n),
            high_performer_rate=percentage(self.high_performers, n),
            total_projects=self.total_projects,
        )


# ---------------------------------------------------------------------------
# ReportEngine
# ---------------------------------------------------------------------------

class ReportEngine:
    """
    Builds contractor-summary, budget-analysis and performance-metrics
    reports from in-memory record lists.

    ``seed`` is ignored when an explicit ``rng`` is passed.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_report_id,
        department_budgets: Optional[Dict[str, int]] = None,
    ) -> None:
        self.rng = rng or random.Random(seed)
        self.clock = clock
        self.id_factory = id_factory
        self.department_budgets = dict(department_budgets or DEPARTMENT_BUDGETS)
        self.total_budget = sum(self.department_budgets.values())

    def _stamp(self) -> Tuple[str, str, str]:
        """Return (report_id, generatedAt ISO string, 'Month YYYY' period label)."""
        now = self.clock()
        generated_at = now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
        return self.id_factory(), generated_at, now.strftime("%B %Y")

    def budget_for(self, department: str) -> int:
        return self.department_budgets.get(department, DEFAULT_DEPARTMENT_BUDGET)

    # -----------------------------------------------------------------------
    # 1. Contractor Summary
    # -----------------------------------------------------------------------

    @timed
    def contractor_summary(self, contractors: Sequence[Contractor]) -> ContractorSummaryReport:
        total = len(contractors)
        active = [c for c in contractors if c.is_active]

        departments: Dict[str, _HeadcountTally] = {}
        status_counts: Dict[str, int] = {}
        for contractor in contractors:
            tally = departments.setdefault(contractor.department, _HeadcountTally(contractor.department))
            tally.add(contractor)
            status_counts[contractor.status] = status_counts.get(contractor.status, 0) + 1

        breakdown = [tally.finalise() for tally in departments.values()]
        distribution = [
            StatusShare(
                status=status[:1].upper() + status[1:],
                count=count,
                percentage=percentage(count, total),
            )
            for status, count in status_counts.items()
        ]

        ending_30 = ending_60 = long_term = 0
        for contractor in active:
            days = contractor.days_remaining or 0
            if days <= ENDING_SOON_DAYS:
                ending_30 += 1
            elif days <= ENDING_LATER_DAYS:
                ending_60 += 1
            else:
                long_term += 1

        report_id, generated_at, _ = self._stamp()
        report = ContractorSummaryReport(
            report_id=report_id,
            report_type="contractor-summary",
            generated_at=generated_at,
            summary=ContractorSummaryTotals(
                total_contractors=total,
                active_contractors=len(active),
                active_departments=sum(1 for d in breakdown if d.active_count > 0),
                total_monthly_cost=sum(c.monthly_cost or 0 for c in active),
            ),
            department_breakdown=tuple(sorted(breakdown, key=lambda d: d.active_count, reverse=True)),
            status_distribution=tuple(sorted(distribution, key=lambda s: s.count, reverse=True)),
            contract_analysis=ContractAnalysis(
                ending_in30_days=ending_30,
                ending_in60_days=ending_60,
                long_term=long_term,
            ),
        )
        logger.info(
            f"Contractor summary: {total} contractors across {len(breakdown)} departments",
            extra={"report_id": report_id, "report_type": report.report_type},
        )
        return report

    # -----------------------------------------------------------------------
    # 2. Budget Analysis
    # -----------------------------------------------------------------------

    @timed
    def budget_analysis(
        self,
        contractors: Sequence[Contractor],
        snapshot: BaselineSnapshot,
    ) -> BudgetAnalysisReport:
        total_budget = self.total_budget
        actual_spend = snapshot.monthly_spend
        variance = total_budget - actual_spend

        breakdown: List[DepartmentBudget] = []
        for dept in snapshot.department_breakdown:
            budget = self.budget_for(dept.department)
            breakdown.append(DepartmentBudget(
                department=dept.department,
                budget=budget,
                actual=dept.spend,
                variance=budget - dept.spend,
                usage_percentage=percentage(dept.spend, budget),
                contractors=dept.contractors,
            ))

        alerts = [alert for alert in map(self._budget_alert, breakdown) if alert is not None]
        trends = [self._month_trend(month.month, month.spend) for month in snapshot.monthly_trends]

        active_count = sum(1 for c in contractors if c.is_active)
        highest: Optional[DepartmentBudget] = None
        for dept in breakdown:
            if highest is None or dept.actual > highest.actual:
                highest = dept

        report_id, generated_at, period = self._stamp()
        report = BudgetAnalysisReport(
            report_id=report_id,
            report_type="budget-analysis",
            generated_at=generated_at,
            summary=BudgetSummary(
                budget_period=period,
                total_budget=total_budget,
                actual_spend=actual_spend,
                variance=variance,
                variance_percentage=percentage(variance, total_budget),
            ),
            department_breakdown=tuple(sorted(breakdown, key=lambda d: d.actual, reverse=True)),
            budget_alerts=tuple(alerts),
            monthly_trends=tuple(trends),
            cost_analysis=CostAnalysis(
                avg_cost_per_contractor=average(actual_spend, active_count),
                highest_spend_dept=highest.department if highest else None,
                highest_spend_amount=highest.actual if highest else 0,
                budget_utilization=percentage(actual_spend, total_budget),
            ),
        )
        logger.info(
            f"Budget analysis: spend {actual_spend:,.0f} of {total_budget:,} "
            f"({len(alerts)} alerts)",
            extra={"report_id": report_id, "report_type": report.report_type},
        )
        return report

    def _budget_alert(self, dept: DepartmentBudget) -> Optional[BudgetAlert]:
        usage = dept.usage_percentage
        if usage > CRITICAL_USAGE_PCT:
            return BudgetAlert(
                department=dept.department,
                severity="critical",
                message=f"Over budget by {usage - 100}% (${abs(dept.variance):,.0f})",
            )
        if usage > WARNING_USAGE_PCT:
            return BudgetAlert(
                department=dept.department,
                severity="warning",
                message=f"At {usage}% of budget - monitor closely",
            )
        return None

    def _month_trend(self, month: str, spend: float) -> MonthlyBudgetTrend:
        budget = round_half_up(
            self.total_budget * MONTHLY_BUDGET_FLOOR
            + self.rng.random() * MONTHLY_BUDGET_SPREAD * self.total_budget
        )
        if spend > budget * TREND_UP_FACTOR:
            trend = "up"
        elif spend < budget * TREND_DOWN_FACTOR:
            trend = "down"
        else:
            trend = "neutral"
        return MonthlyBudgetTrend(
            month=month,
            budget=budget,
            actual=spend,
            variance=budget - spend,
            trend=trend,
        )

    # -----------------------------------------------------------------------
    # 3. Performance Metrics
    # -----------------------------------------------------------------------

    def synthesise_timesheets(self, contractors: Sequence[Contractor]) -> List[TimesheetEntry]:
        """
        One plausible record per contractor, drawn from the engine's random
        source. Used when the timesheet feed is unavailable.
        """
        return [
            TimesheetEntry(
                contractor_id=c.id,
                hours_worked=self.rng.randint(*SYNTHETIC_HOURS_RANGE),
                projects_completed=self.rng.randint(*SYNTHETIC_PROJECTS_RANGE),
                efficiency=self.rng.randint(*SYNTHETIC_EFFICIENCY_RANGE),
            )
            for c in contractors
        ]

    @timed
    def performance_metrics(
        self,
        contractors: Sequence[Contractor],
        timesheets: Optional[Sequence[TimesheetEntry]] = None,
    ) -> PerformanceMetricsReport:
        """
        Performance rollup over the active population.

        ``timesheets=None`` means the feed is unavailable and synthetic
        records are generated; an empty list means "no records", so every
        active contractor gets the fixed placeholder.
        """
        if timesheets is None:
            timesheets = self.synthesise_timesheets(contractors)

        by_contractor: Dict[object, TimesheetEntry] = {}
        for entry in timesheets:
            by_contractor.setdefault(entry.contractor_id, entry)

        active = [c for c in contractors if c.is_active]
        resolved: List[Tuple[Contractor, TimesheetEntry]] = []
        for contractor in active:
            record = by_contractor.get(contractor.id)
            if record is None:
                record = TimesheetEntry(
                    contractor_id=contractor.id,
                    hours_worked=PLACEHOLDER_HOURS,
                    projects_completed=PLACEHOLDER_PROJECTS,
                    efficiency=PLACEHOLDER_EFFICIENCY,
                )
            resolved.append((contractor, record))

        count = len(resolved)
        records = [record for _, record in resolved]
        total_hours = sum(r.hours_worked for r in records)
        total_projects = sum(r.projects_completed for r in records)
        avg_efficiency = average(sum(r.efficiency for r in records), count)

        high = sum(1 for r in records if r.efficiency >= HIGH_PERFORMER_EFFICIENCY)
        good = sum(1 for r in records if GOOD_PERFORMER_EFFICIENCY <= r.efficiency < HIGH_PERFORMER_EFFICIENCY)
        weak = sum(1 for r in records if r.efficiency < GOOD_PERFORMER_EFFICIENCY)

        departments: Dict[str, _PerformanceTally] = {}
        for contractor, record in resolved:
            departments.setdefault(contractor.department, _PerformanceTally(contractor.department)).add(record)
        dept_performance = sorted(
            (tally.finalise() for tally in departments.values()),
            key=lambda d: d.avg_efficiency,
            reverse=True,
        )

        ranked = sorted(resolved, key=lambda pair: pair[1].efficiency, reverse=True)
        top_performers = [
            ContractorPerformance(
                name=contractor.name,
                department=contractor.department,
                hours_worked=record.hours_worked,
                projects_completed=record.projects_completed,
                efficiency=record.efficiency,
                rating=rating_for(record.efficiency),
            )
            for contractor, record in ranked[:TOP_PERFORMER_LIMIT]
        ]

        report_id, generated_at, period = self._stamp()
        monthly = [
            MonthlyPerformance(month=m, avg_efficiency=eff, projects_completed=proj, hours_worked=hrs)
            for m, eff, proj, hrs in HISTORICAL_PERFORMANCE
        ]
        monthly.append(MonthlyPerformance(
            month=period,
            avg_efficiency=avg_efficiency,
            projects_completed=total_projects,
            hours_worked=total_hours,
        ))

        report = PerformanceMetricsReport(
            report_id=report_id,
            report_type="performance-metrics",
            generated_at=generated_at,
            summary=PerformanceSummary(
                total_contractors=count,
                avg_efficiency=avg_efficiency,
                total_projects_completed=total_projects,
                avg_hours_per_contractor=average(total_hours, count),
                performance_period=period,
            ),
            performance_categories=PerformanceCategories(
                high_performers=high,
                good_performers=good,
                needs_improvement=weak,
                high_performer_percentage=percentage(high, count),
            ),
            department_performance=tuple(dept_performance),
            top_performers=tuple(top_performers),
            monthly_performance=tuple(monthly),
            insights=tuple(self._insights(avg_efficiency, dept_performance, high, count)),
            kpi_metrics=KpiMetrics(
                project_completion_rate=percentage(total_projects, count * TARGET_PROJECTS_PER_CONTRACTOR),
                utilization_rate=percentage(total_hours, count * TARGET_HOURS_PER_CONTRACTOR),
                quality_score=avg_efficiency,
                client_satisfaction=min(
                    CLIENT_SATISFACTION_CAP,
                    avg_efficiency + self.rng.randint(0, CLIENT_SATISFACTION_MAX_BONUS),
                ),
            ),
        )
        logger.info(
            f"Performance metrics: {count} active contractors, avg efficiency {avg_efficiency}%",
            extra={"report_id": report_id, "report_type": report.report_type},
        )
        return report

    def _insights(
        self,
        avg_efficiency: int,
        departments: Sequence[DepartmentPerformance],
        high_performers: int,
        count: int,
    ) -> List[Insight]:
        insights: List[Insight] = []
        if not count:
            return insights

        if avg_efficiency >= STRONG_EFFICIENCY:
            insights.append(Insight(
                type="success",
                title="Strong Overall Performance",
                message=f"Team efficiency of {avg_efficiency}% exceeds target benchmarks",
            ))
        elif avg_efficiency < WEAK_EFFICIENCY:
            insights.append(Insight(
                type="warning",
                title="Performance Below Target",
                message=f"Team efficiency of {avg_efficiency}% requires attention and improvement plans",
            ))

        if departments:
            top = departments[0]
            insights.append(Insight(
                type="info",
                title="Top Performing Department",
                message=f"{top.department} leads with {top.avg_efficiency}% efficiency",
            ))

        if high_performers / count > TALENT_POOL_RATIO:
            insights.append(Insight(
                type="success",
                title="Strong Talent Pool",
                message=f"{percentage(high_performers, count)}% of contractors are high performers",
            ))
        return insights
