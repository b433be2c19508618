"""
Cash Flow Service.

Responsibilities:
- Monthly / quarterly revenue vs expense rollup
- Trailing-window summary (burn, runway, growth)
- Rolling cash-flow forecast
"""

import logging
from datetime import date

import pandas as pd

from founderhq.config import ESTIMATED_BALANCE_MONTHS, FORECAST_MONTHS, GROWTH_WINDOW
from founderhq.models.financial_models import CashFlowForecast, CashFlowPeriod, CashFlowSummary
from founderhq.models.records import Expense, RevenueTransaction
from founderhq.services.metrics_service import calculate_growth_rate, calculate_runway
from founderhq.utils.formatting import format_month_label
from founderhq.utils.periods import add_months, month_key, quarter_key

logger = logging.getLogger(__name__)

MONTHLY = "monthly"
QUARTERLY = "quarterly"


# ─── Rollup ───

def compute_cash_flow(
    revenue_transactions: list[RevenueTransaction],
    expenses: list[Expense],
    mode: str = MONTHLY,
) -> list[CashFlowPeriod]:
    """
    Aggregate paid revenue and expenses per month, or per quarter.

    Quarters are built from the monthly figures, not from the raw records.
    """
    revenue: dict[str, float] = {}
    spend: dict[str, float] = {}

    for tx in revenue_transactions:
        if not tx.is_paid:
            continue
        mk = month_key(tx.transaction_date)
        revenue[mk] = revenue.get(mk, 0) + tx.amount

    for exp in expenses:
        mk = month_key(exp.date)
        spend[mk] = spend.get(mk, 0) + exp.amount

    monthly = []
    for mk in sorted(set(revenue) | set(spend)):
        r = revenue.get(mk, 0.0)
        e = spend.get(mk, 0.0)
        monthly.append(CashFlowPeriod(
            period=mk,
            label=format_month_label(mk),
            revenue=r,
            expenses=e,
            net_cash_flow=r - e,
        ))

    if mode != QUARTERLY:
        return monthly

    quarters: dict[str, CashFlowPeriod] = {}
    for row in monthly:
        qk = quarter_key(row.period)
        if qk not in quarters:
            quarters[qk] = CashFlowPeriod(period=qk, label=qk)
        quarters[qk].revenue += row.revenue
        quarters[qk].expenses += row.expenses
        quarters[qk].net_cash_flow += row.net_cash_flow

    # Months are sorted, so quarters come out in chronological order
    return list(quarters.values())


def cash_flow_frame(periods: list[CashFlowPeriod]) -> pd.DataFrame:
    """Chart-ready frame: period, label, revenue, expenses, net_cash_flow."""
    columns = ["period", "label", "revenue", "expenses", "net_cash_flow"]
    return pd.DataFrame(
        [[getattr(p, c) for c in columns] for p in periods],
        columns=columns,
    )


# ─── Summary ───

def summarize_cash_flow(
    periods: list[CashFlowPeriod],
    window: int = GROWTH_WINDOW,
) -> CashFlowSummary:
    """
    Summarize the last `window` periods.

    The cash balance is estimated as net cash flow times
    ESTIMATED_BALANCE_MONTHS until a real ledger balance is available.
    """
    recent = periods[-window:] if window > 0 else []
    count = max(len(recent), 1)

    total_revenue = sum(p.revenue for p in recent)
    total_expenses = sum(p.expenses for p in recent)
    net = total_revenue - total_expenses
    burn_rate = total_expenses / count
    estimated_balance = net * ESTIMATED_BALANCE_MONTHS

    return CashFlowSummary(
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        net_cash_flow=net,
        avg_monthly_revenue=total_revenue / count,
        avg_monthly_expenses=burn_rate,
        burn_rate=burn_rate,
        estimated_cash_balance=estimated_balance,
        runway=calculate_runway(estimated_balance, burn_rate),
        growth_rate=calculate_growth_rate([p.revenue for p in periods], window),
    )


# ─── Forecast ───

def forecast_cash_flow(
    periods: list[CashFlowPeriod],
    opening_balance: float,
    months_ahead: int = FORECAST_MONTHS,
    window: int = GROWTH_WINDOW,
    today: date = None,
) -> list[CashFlowForecast]:
    """
    Roll the balance forward using the average monthly income and expenses
    of the last `window` monthly periods.
    """
    today = today or date.today()
    recent = periods[-window:] if window > 0 else []
    count = max(window, 1)
    income = sum(p.revenue for p in recent) / count
    spend = sum(p.expenses for p in recent) / count

    start = today.strftime("%Y-%m")
    balance = opening_balance
    forecasts = []
    for i in range(1, months_ahead + 1):
        closing = balance + income - spend
        forecasts.append(CashFlowForecast(
            month=add_months(start, i),
            opening_balance=round(balance),
            income=round(income),
            expenses=round(spend),
            closing_balance=round(closing),
        ))
        balance = closing

    logger.debug(
        "Forecast %d months from %.2f (income %.2f, expenses %.2f)",
        months_ahead, opening_balance, income, spend,
    )
    return forecasts
