"""
Dashboard Metrics.

Builds the pipeline, marketing and financial summaries shown on the
dashboard home. Each summary is memoized on the identity of its input list,
so a rerun with the same records reuses the previous result.
"""

from datetime import date

from founderhq.config import HIGH_PROBABILITY_THRESHOLD, TOP_DEALS
from founderhq.models.financial_models import (
    DashboardMetrics,
    FinancialData,
    MarketingData,
    PipelineData,
)
from founderhq.models.records import (
    DashboardData,
    Deal,
    FinancialLog,
    MarketingCampaign,
)
from founderhq.utils.caching import memoize_by_identity

ACTIVE_CAMPAIGN_STATUSES = ("In Progress", "Published")
FINISHED_CAMPAIGN_STATUSES = ("Completed", "Published", "Cancelled")


# ─── Pipeline ───

def partition_deals(deals: list[Deal]) -> tuple[list[Deal], list[Deal]]:
    """Split deals into (open, closed); every deal lands in exactly one."""
    open_deals, closed_deals = [], []
    for deal in deals:
        (open_deals if deal.is_open else closed_deals).append(deal)
    return open_deals, closed_deals


def average_deal_size(deals: list[Deal]) -> float:
    """Mean amount of closed-won deals; 0 when none were won."""
    won = [d for d in deals if d.is_won]
    if not won:
        return 0.0
    return sum(d.amount for d in won) / len(won)


def pipeline_data(deals: list[Deal]) -> PipelineData:
    open_deals, closed_deals = partition_deals(deals)
    won = [d for d in closed_deals if d.is_won]

    dated = [d for d in open_deals if d.expected_close_date]
    next_closing = min(dated, key=lambda d: d.expected_close_date) if dated else None

    return PipelineData(
        open_count=len(open_deals),
        open_value=sum(d.amount for d in open_deals),
        high_probability_count=sum(
            1 for d in open_deals if d.probability >= HIGH_PROBABILITY_THRESHOLD
        ),
        average_probability=(
            sum(d.probability for d in open_deals) / len(open_deals) if open_deals else 0.0
        ),
        next_closing=next_closing,
        top_deals=sorted(open_deals, key=lambda d: d.amount, reverse=True)[:TOP_DEALS],
        weighted_value=sum(d.amount * d.probability / 100 for d in open_deals),
        won_value=sum(d.amount for d in won),
        won_count=len(won),
        average_won_value=average_deal_size(won),
    )


# ─── Marketing ───

def marketing_data(campaigns: list[MarketingCampaign], today: date = None) -> MarketingData:
    today_str = (today or date.today()).isoformat()

    pending = [c for c in campaigns if c.status not in FINISHED_CAMPAIGN_STATUSES]
    upcoming = [c for c in pending if c.due_date and c.due_date[:10] >= today_str]

    return MarketingData(
        active_count=sum(1 for c in campaigns if c.status in ACTIVE_CAMPAIGN_STATUSES),
        planned_count=sum(1 for c in campaigns if c.status == "Planned"),
        overdue_count=sum(1 for c in pending if c.due_date and c.due_date[:10] < today_str),
        next_campaign=min(upcoming, key=lambda c: c.due_date) if upcoming else None,
    )


# ─── Financials ───

def financial_data(logs: list[FinancialLog]) -> FinancialData:
    ordered = sorted(logs, key=lambda log: log.date, reverse=True)
    latest = ordered[0] if ordered else None
    previous = ordered[1] if len(ordered) > 1 else None

    if latest is None or previous is None:
        return FinancialData(latest=latest, previous=previous)

    mrr_delta = latest.mrr - previous.mrr
    return FinancialData(
        latest=latest,
        previous=previous,
        mrr_delta=mrr_delta,
        gmv_delta=latest.gmv - previous.gmv,
        signup_delta=latest.signups - previous.signups,
        mrr_delta_percent=(mrr_delta / previous.mrr * 100) if previous.mrr else 0.0,
    )


# ─── Adapter ───

_pipeline = memoize_by_identity(pipeline_data)
_marketing = memoize_by_identity(marketing_data)
_financial = memoize_by_identity(financial_data)


def use_dashboard_metrics(data: DashboardData, today: date = None) -> DashboardMetrics:
    """All three dashboard summaries, recomputed only for replaced inputs."""
    return DashboardMetrics(
        pipeline=_pipeline(data.deals),
        marketing=_marketing(data.marketing_items, today or date.today()),
        financial=_financial(data.financial_logs),
    )


def clear_dashboard_cache():
    for fn in (_pipeline, _marketing, _financial):
        fn.cache_clear()
