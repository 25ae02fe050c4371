"""
Report payload models.

Input entities (Contractor, TimesheetEntry, BaselineSnapshot) are parsed from
the record store; report models are what the engine hands back to callers.
Every report model is frozen and serialises with camelCase keys, which is the
JSON export contract consumed by the dashboard:

    report.model_dump(mode="json", by_alias=True)
"""
from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ── Input entities ───────────────────────────────────────────────────────────

class Contractor(_WireModel):
    # Mock data keys contractors by "Id"; the JSON store uses "id".
    id: Union[int, str] = Field(validation_alias=AliasChoices("id", "Id"))
    name: str = ""
    department: str = ""
    status: str
    hourly_rate: Optional[float] = None
    monthly_cost: Optional[float] = None
    days_remaining: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.status == "active"


class TimesheetEntry(_WireModel):
    contractor_id: Union[int, str]
    hours_worked: float = 0
    projects_completed: int = 0
    efficiency: float = 0


class DepartmentSpend(_WireModel):
    department: str
    spend: float = 0
    contractors: int = 0


class MonthlySpend(_WireModel):
    month: str
    spend: float = 0


class BaselineSnapshot(_WireModel):
    """Pre-aggregated dashboard figures supplied by the record store."""
    total_contractors: int = 0
    active_departments: int = 0
    monthly_spend: float = 0
    avg_contract_length: int = 0
    department_breakdown: Tuple[DepartmentSpend, ...] = ()
    monthly_trends: Tuple[MonthlySpend, ...] = ()


class ReportOverview(_WireModel):
    """Stats-card values shown above the report launcher."""
    total_contractors: int
    active_departments: int
    monthly_spend: float
    avg_contract_length: int


# ── Contractor summary ───────────────────────────────────────────────────────

class ContractorSummaryTotals(_WireModel):
    total_contractors: int
    active_contractors: int
    active_departments: int
    total_monthly_cost: float


class DepartmentHeadcount(_WireModel):
    department: str
    active_count: int
    inactive_count: int
    total_rate: float
    rate_count: int
    monthly_cost: float
    average_rate: int


class StatusShare(_WireModel):
    status: str
    count: int
    percentage: int


class ContractAnalysis(_WireModel):
    ending_in30_days: int = Field(alias="endingIn30Days")
    ending_in60_days: int = Field(alias="endingIn60Days")
    long_term: int


class ContractorSummaryReport(_WireModel):
    report_id: str
    report_type: Literal["contractor-summary"] = "contractor-summary"
    generated_at: str
    summary: ContractorSummaryTotals
    department_breakdown: Tuple[DepartmentHeadcount, ...]
    status_distribution: Tuple[StatusShare, ...]
    contract_analysis: ContractAnalysis


# ── Budget analysis ──────────────────────────────────────────────────────────

class BudgetSummary(_WireModel):
    budget_period: str
    total_budget: float
    actual_spend: float
    variance: float
    variance_percentage: int


class DepartmentBudget(_WireModel):
    department: str
    budget: float
    actual: float
    variance: float
    usage_percentage: int
    contractors: int


class BudgetAlert(_WireModel):
    department: str
    severity: Literal["critical", "warning"]
    message: str


class MonthlyBudgetTrend(_WireModel):
    month: str
    budget: int
    actual: float
    variance: float
    trend: Literal["up", "down", "neutral"]


class CostAnalysis(_WireModel):
    avg_cost_per_contractor: int
    highest_spend_dept: Optional[str]
    highest_spend_amount: float
    budget_utilization: int


class BudgetAnalysisReport(_WireModel):
    report_id: str
    report_type: Literal["budget-analysis"] = "budget-analysis"
    generated_at: str
    summary: BudgetSummary
    department_breakdown: Tuple[DepartmentBudget, ...]
    budget_alerts: Tuple[BudgetAlert, ...]
    monthly_trends: Tuple[MonthlyBudgetTrend, ...]
    cost_analysis: CostAnalysis


# ── Performance metrics ──────────────────────────────────────────────────────

class PerformanceSummary(_WireModel):
    total_contractors: int
    avg_efficiency: int
    total_projects_completed: int
    avg_hours_per_contractor: int
    performance_period: str


class PerformanceCategories(_WireModel):
    high_performers: int
    good_performers: int
    needs_improvement: int
    high_performer_percentage: int


class DepartmentPerformance(_WireModel):
    department: str
    contractor_count: int
    avg_hours: int
    avg_projects: int
    avg_efficiency: int
    high_performer_rate: int
    total_projects: int


class ContractorPerformance(_WireModel):
    name: str
    department: str
    hours_worked: float
    projects_completed: int
    efficiency: float
    rating: str


class MonthlyPerformance(_WireModel):
    month: str
    avg_efficiency: int
    projects_completed: int
    hours_worked: float


class Insight(_WireModel):
    type: Literal["success", "warning", "info"]
    title: str
    message: str


class KpiMetrics(_WireModel):
    project_completion_rate: int
    utilization_rate: int
    quality_score: int
    client_satisfaction: int


class PerformanceMetricsReport(_WireModel):
    report_id: str
    report_type: Literal["performance-metrics"] = "performance-metrics"
    generated_at: str
    summary: PerformanceSummary
    performance_categories: PerformanceCategories
    department_performance: Tuple[DepartmentPerformance, ...]
    top_performers: Tuple[ContractorPerformance, ...]
    monthly_performance: Tuple[MonthlyPerformance, ...]
    insights: Tuple[Insight, ...]
    kpi_metrics: KpiMetrics


Report = Annotated[
    Union[ContractorSummaryReport, BudgetAnalysisReport, PerformanceMetricsReport],
    Field(discriminator="report_type"),
]

_report_adapter = TypeAdapter(Report)


def parse_report(payload: Union[str, bytes, dict]):
    """Rebuild a report from its exported JSON (string or already-decoded dict)."""
    if isinstance(payload, dict):
        return _report_adapter.validate_python(payload)
    return _report_adapter.validate_json(payload)
