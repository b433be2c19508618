"""
Derived metric models.
Typed dataclasses for the results of dashboard calculations.
"""

from dataclasses import dataclass, field
from typing import Optional

from founderhq.models.records import Deal, FinancialLog, MarketingCampaign


# ─── Cash Flow ───

@dataclass
class CashFlowPeriod:
    """Revenue vs expenses for one month or quarter."""
    period: str  # YYYY-MM or "Q1 2024"
    label: str
    revenue: float = 0.0
    expenses: float = 0.0
    net_cash_flow: float = 0.0


@dataclass
class CashFlowSummary:
    """Trailing-window summary of the cash-flow series."""
    total_revenue: float = 0.0
    total_expenses: float = 0.0
    net_cash_flow: float = 0.0
    avg_monthly_revenue: float = 0.0
    avg_monthly_expenses: float = 0.0
    burn_rate: float = 0.0
    estimated_cash_balance: float = 0.0
    runway: Optional["Runway"] = None
    growth_rate: float = 0.0


@dataclass
class CashFlowForecast:
    """One forecast month."""
    month: str
    opening_balance: float = 0.0
    income: float = 0.0
    expenses: float = 0.0
    closing_balance: float = 0.0


# ─── Burn Rate ───

@dataclass
class BurnRate:
    """Average monthly spend."""
    monthly_average: float = 0.0
    months_used: int = 0
    monthly_breakdown: list = field(default_factory=list)


# ─── Runway ───

@dataclass
class Runway:
    """Months of operation left."""
    months: float = 0.0
    is_infinite: bool = False


@dataclass
class RunwayOutlook:
    """Runway with run-out month and recommendations."""
    current_cash: float
    monthly_burn_rate: float
    runway: Runway
    runout_month: Optional[str] = None
    recommendations: list[str] = field(default_factory=list)


# ─── Revenue ───

@dataclass
class RevenueProjection:
    """Projected revenue for a future month."""
    month: str
    projected_revenue: float
    confidence: str  # high, medium, low
    actual_revenue: Optional[float] = None


@dataclass
class RevenueForecast:
    """Trend forecast for a month plus weighted pipeline deals closing in it."""
    month: str
    trend_revenue: float
    pipeline_revenue: float
    forecasted_revenue: float
    confidence: str  # high when pipeline deals close in the month, else medium
    deal_ids: list[str] = field(default_factory=list)


@dataclass
class CustomerRevenue:
    """Paid revenue of one CRM customer."""
    crm_item_id: Optional[str]
    total_revenue: float = 0.0
    transaction_count: int = 0
    first_transaction: str = ""
    latest_transaction: str = ""


@dataclass
class CustomerCounts:
    total: int = 0
    active: int = 0


# ─── Rollups ───

@dataclass
class CategoryTotal:
    """Amount for one group of a rollup."""
    key: str
    name: str
    amount: float = 0.0
    count: int = 0
    percentage: float = 0.0


# ─── Health ───

@dataclass
class HealthReport:
    """Warning and success messages, evaluated per metric."""
    warnings: list[str] = field(default_factory=list)
    successes: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.warnings and not self.successes


# ─── Dashboard adapter ───

@dataclass
class PipelineData:
    open_count: int = 0
    open_value: float = 0.0
    high_probability_count: int = 0
    average_probability: float = 0.0
    next_closing: Optional[Deal] = None
    top_deals: list[Deal] = field(default_factory=list)
    weighted_value: float = 0.0
    won_value: float = 0.0
    won_count: int = 0
    average_won_value: float = 0.0


@dataclass
class MarketingData:
    active_count: int = 0
    planned_count: int = 0
    overdue_count: int = 0
    next_campaign: Optional[MarketingCampaign] = None


@dataclass
class FinancialData:
    latest: Optional[FinancialLog] = None
    previous: Optional[FinancialLog] = None
    mrr_delta: Optional[float] = None
    gmv_delta: Optional[float] = None
    signup_delta: Optional[int] = None
    mrr_delta_percent: float = 0.0


@dataclass
class DashboardMetrics:
    pipeline: PipelineData
    marketing: MarketingData
    financial: FinancialData
