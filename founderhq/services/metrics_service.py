"""
Financial Metrics Service.

Responsibilities:
- MRR / ARR
- CAC / LTV and their ratios
- Burn Rate and Runway
- Growth rate, profit margin, Rule of 40
- Revenue projection, pipeline forecast and burn multiple
"""

import logging
import math
from datetime import date, timedelta
from typing import Optional

from founderhq.config import (
    ACQUISITION_CATEGORIES,
    ACTIVE_CUSTOMER_DAYS,
    BURN_RATE_MONTHS,
    FORECAST_MONTHS,
    GROWTH_WINDOW,
    PIPELINE_CLOSE_WEIGHT,
    PIPELINE_FORECAST_STAGES,
    RULE_OF_40_MARGIN_PLACEHOLDER,
)
from founderhq.models.financial_models import (
    BurnRate,
    CustomerCounts,
    RevenueForecast,
    RevenueProjection,
    Runway,
    RunwayOutlook,
)
from founderhq.models.records import CrmItem, Deal, Expense, RevenueTransaction
from founderhq.utils.periods import add_months, month_key, trailing_months

logger = logging.getLogger(__name__)


def _paid_total(transactions: list[RevenueTransaction]) -> float:
    return sum(tx.amount for tx in transactions if tx.is_paid)


# ─── MRR / ARR ───

def calculate_mrr(transactions: list[RevenueTransaction], month: str) -> float:
    """Paid recurring revenue booked in `month` (YYYY-MM or YYYY-MM-DD)."""
    target = month_key(month)
    return sum(
        tx.amount
        for tx in transactions
        if tx.transaction_type == "recurring"
        and tx.is_paid
        and month_key(tx.transaction_date) == target
    )


def calculate_arr(transactions: list[RevenueTransaction], month: str) -> float:
    """Simple annualization: MRR x 12."""
    return calculate_mrr(transactions, month) * 12


# ─── CAC / LTV ───

def calculate_cac(
    expenses: list[Expense],
    crm_items: list[CrmItem],
    start: str,
    end: str,
    categories=ACQUISITION_CATEGORIES,
) -> float:
    """
    Acquisition spend divided by customers won in [start, end].

    A customer counts as acquired when its CRM item was created in the
    window and carries a deal value. Returns 0 when no customer was acquired.
    """
    spend = sum(
        exp.amount
        for exp in expenses
        if exp.category in categories and start <= exp.date[:10] <= end
    )
    customers = sum(
        1
        for item in crm_items
        if item.deal_value is not None and start <= item.created_at[:10] <= end
    )
    if customers == 0:
        return 0.0
    return spend / customers


def calculate_ltv(transactions: list[RevenueTransaction]) -> float:
    """Average paid revenue per CRM customer; 0 without customers."""
    per_customer: dict[str, float] = {}
    for tx in transactions:
        if not tx.is_paid or not tx.crm_item_id:
            continue
        per_customer[tx.crm_item_id] = per_customer.get(tx.crm_item_id, 0) + tx.amount
    if not per_customer:
        return 0.0
    return sum(per_customer.values()) / len(per_customer)


def ltv_cac_ratio(ltv: float, cac: float) -> Optional[float]:
    """LTV / CAC, None (N/A) when CAC is zero."""
    if cac <= 0:
        return None
    return ltv / cac


def cac_payback_months(cac: float, mrr: float) -> Optional[float]:
    """Months of MRR needed to recover CAC, None (N/A) when CAC or MRR is zero."""
    if cac <= 0 or mrr <= 0:
        return None
    return cac / mrr


def count_customers(transactions: list[RevenueTransaction], today: date = None) -> CustomerCounts:
    """Distinct CRM customers overall and with a payment in the active window."""
    today = today or date.today()
    cutoff = (today - timedelta(days=ACTIVE_CUSTOMER_DAYS)).isoformat()

    total = {tx.crm_item_id for tx in transactions if tx.crm_item_id}
    active = {
        tx.crm_item_id
        for tx in transactions
        if tx.crm_item_id and tx.is_paid and tx.transaction_date[:10] >= cutoff
    }
    return CustomerCounts(total=len(total), active=len(active))


# ─── Burn Rate ───

def calculate_burn_rate(
    expenses: list[Expense],
    months: int = BURN_RATE_MONTHS,
    today: date = None,
) -> BurnRate:
    """
    Average monthly expense over the trailing `months` months, current
    month included. An empty window gives a burn rate of 0.
    """
    today = today or date.today()
    window = trailing_months(today, months) if months > 0 else []
    monthly_expenses: dict[str, float] = {mk: 0.0 for mk in window}

    for exp in expenses:
        mk = month_key(exp.date)
        if mk in monthly_expenses:
            monthly_expenses[mk] += exp.amount

    total = sum(monthly_expenses.values())
    count = max(len(window), 1)

    return BurnRate(
        monthly_average=total / count,
        months_used=len(window),
        monthly_breakdown=[
            {"month": mk, "expense": v} for mk, v in monthly_expenses.items()
        ],
    )


# ─── Runway ───

def calculate_runway(cash: float, burn_rate: float) -> Runway:
    """
    Months of operation left.

    runway_months = cash / burn_rate, unlimited when nothing is burned.
    """
    if burn_rate <= 0:
        return Runway(months=float("inf"), is_infinite=True)

    months = cash / burn_rate
    return Runway(months=max(months, 0), is_infinite=False)


def estimate_cash_balance(
    transactions: list[RevenueTransaction],
    expenses: list[Expense],
) -> float:
    """Paid revenue minus all expenses, floored at zero."""
    return max(_paid_total(transactions) - sum(exp.amount for exp in expenses), 0.0)


def runway_outlook(cash: float, burn_rate: float, today: date = None) -> RunwayOutlook:
    """Runway plus the month cash runs out and what to do about it."""
    today = today or date.today()
    runway = calculate_runway(cash, burn_rate)

    runout_month = None
    if not runway.is_infinite:
        runout_month = add_months(today.strftime("%Y-%m"), math.floor(runway.months))

    recommendations = []
    if runway.months < 3:
        recommendations.append(
            "Critical: less than 3 months of runway. Raise funding or cut expenses immediately."
        )
    elif runway.months < 6:
        recommendations.append(
            "Warning: less than 6 months of runway. Start fundraising or reduce spend."
        )
    elif runway.months < 12:
        recommendations.append(
            "Healthy: 6-12 months of runway. Plan the next funding round."
        )
    else:
        recommendations.append(
            "Excellent: 12+ months of runway. Focus on growth and product."
        )

    if burn_rate > 0:
        extended = calculate_runway(cash, burn_rate * 0.8).months
        recommendations.append(
            f"Cutting burn by 20% would add {extended - runway.months:.1f} months of runway."
        )

    return RunwayOutlook(
        current_cash=cash,
        monthly_burn_rate=burn_rate,
        runway=runway,
        runout_month=runout_month,
        recommendations=recommendations,
    )


# ─── Growth ───

def calculate_growth_rate(series: list[float], window: int = GROWTH_WINDOW) -> float:
    """
    Percent change from the first to the last value of the trailing window.

    Returns 0 with fewer than two periods or a zero baseline, which also
    hides growth from a zero start.
    """
    recent = series[-window:] if window > 0 else []
    if len(recent) < 2:
        return 0.0
    first, last = recent[0], recent[-1]
    if first <= 0:
        return 0.0
    return (last - first) / first * 100


def quarter_over_quarter_growth(
    transactions: list[RevenueTransaction],
    today: date = None,
) -> float:
    """Paid revenue of the last 3 months vs the 3 months before, in percent."""
    today = today or date.today()
    three_ago = add_months(today.strftime("%Y-%m"), -3) + today.strftime("-%d")
    six_ago = add_months(today.strftime("%Y-%m"), -6) + today.strftime("-%d")

    recent = previous = 0.0
    for tx in transactions:
        if not tx.is_paid:
            continue
        d = tx.transaction_date[:10]
        if d >= three_ago:
            recent += tx.amount
        elif d >= six_ago:
            previous += tx.amount

    if previous <= 0:
        return 0.0
    return (recent - previous) / previous * 100


# ─── Profitability ───

def calculate_profit_margin(
    transactions: list[RevenueTransaction],
    expenses: list[Expense],
) -> Optional[float]:
    """(paid revenue - expenses) / paid revenue, in percent. None without revenue."""
    revenue = _paid_total(transactions)
    if revenue <= 0:
        return None
    return (revenue - sum(exp.amount for exp in expenses)) / revenue * 100


def rule_of_40(growth_rate: float, profit_margin: Optional[float] = None) -> float:
    """
    Growth % + profit margin %.

    Without a computed margin the placeholder margin is used.
    """
    if profit_margin is None:
        profit_margin = RULE_OF_40_MARGIN_PLACEHOLDER
    return growth_rate + profit_margin


# ─── Projection ───

def _average_growth(monthly_revenue: dict[str, float]) -> tuple[list[str], float]:
    """Sorted month keys and the mean month-over-month growth (as a fraction)."""
    months = sorted(monthly_revenue)
    rates = []
    for prev, curr in zip(months, months[1:]):
        if monthly_revenue[prev] > 0:
            rates.append((monthly_revenue[curr] - monthly_revenue[prev]) / monthly_revenue[prev])
    return months, (sum(rates) / len(rates) if rates else 0.0)


def project_revenue(
    monthly_revenue: dict[str, float],
    months_ahead: int = FORECAST_MONTHS,
    today: date = None,
) -> list[RevenueProjection]:
    """
    Compound the last month's revenue by the average month-over-month growth.

    monthly_revenue maps YYYY-MM keys to revenue.
    """
    today = today or date.today()
    months, avg_rate = _average_growth(monthly_revenue)

    if len(months) >= 6 and -0.1 < avg_rate < 0.5:
        confidence = "high"
    elif len(months) < 3 or abs(avg_rate) > 0.5:
        confidence = "low"
    else:
        confidence = "medium"

    projection = monthly_revenue[months[-1]] if months else 0.0
    start = today.strftime("%Y-%m")
    results = []
    for i in range(1, months_ahead + 1):
        mk = add_months(start, i)
        projection *= 1 + avg_rate
        results.append(RevenueProjection(
            month=mk,
            projected_revenue=round(projection),
            confidence=confidence,
            actual_revenue=monthly_revenue.get(mk),
        ))

    logger.debug("Projected %d months at %.1f%% monthly growth", months_ahead, avg_rate * 100)
    return results


def pipeline_revenue_forecast(
    monthly_revenue: dict[str, float],
    deals: list[Deal],
    months_ahead: int = FORECAST_MONTHS,
    today: date = None,
) -> list[RevenueForecast]:
    """
    Growth-trend forecast plus late-stage deals expected to close each month.

    Each pipeline deal contributes its amount times PIPELINE_CLOSE_WEIGHT to
    the month of its expected close date. Months with pipeline revenue are
    high confidence, the rest medium.
    """
    today = today or date.today()
    months, avg_rate = _average_growth(monthly_revenue)
    last_revenue = monthly_revenue[months[-1]] if months else 0.0

    pipeline = [
        d for d in deals
        if d.stage in PIPELINE_FORECAST_STAGES and d.expected_close_date
    ]

    start = today.strftime("%Y-%m")
    results = []
    for i in range(1, months_ahead + 1):
        mk = add_months(start, i)
        closing = [d for d in pipeline if month_key(d.expected_close_date) == mk]
        trend = last_revenue * (1 + avg_rate) ** i
        weighted = sum(d.amount for d in closing) * PIPELINE_CLOSE_WEIGHT
        results.append(RevenueForecast(
            month=mk,
            trend_revenue=round(trend, 2),
            pipeline_revenue=round(weighted, 2),
            forecasted_revenue=round(trend + weighted, 2),
            confidence="high" if weighted > 0 else "medium",
            deal_ids=[d.id for d in closing],
        ))
    return results


def burn_multiple(burn_rate: float, projections: list[RevenueProjection]) -> float:
    """Monthly burn over next month's projected revenue; 0 without burn or projection."""
    if burn_rate <= 0 or not projections:
        return 0.0
    return round(burn_rate / (projections[0].projected_revenue or 1), 2)
