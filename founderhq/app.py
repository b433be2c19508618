"""
FounderHQ GTM metrics dashboard.
Financial KPIs, cash flow, pipeline and marketing health for one workspace.

Run:
    streamlit run founderhq/app.py
"""

import logging
import sys
from datetime import date, timedelta
from pathlib import Path

# Make the project root importable when launched via `streamlit run`
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import plotly.graph_objects as go
import streamlit as st

from founderhq.api.data_loader import load_dashboard_data
from founderhq.components import (
    dashboard_header,
    empty_state,
    footer,
    section_header,
    signal_banner,
)
from founderhq.config import BACKEND_ENABLED, WORKSPACE_ID, configure_logging
from founderhq.services.cashflow_service import (
    MONTHLY,
    QUARTERLY,
    cash_flow_frame,
    compute_cash_flow,
    forecast_cash_flow,
    summarize_cash_flow,
)
from founderhq.services.dashboard_metrics import clear_dashboard_cache, use_dashboard_metrics
from founderhq.services.health_service import evaluate_health
from founderhq.services.metrics_service import (
    burn_multiple,
    cac_payback_months,
    calculate_arr,
    calculate_burn_rate,
    calculate_cac,
    calculate_ltv,
    calculate_mrr,
    calculate_profit_margin,
    count_customers,
    estimate_cash_balance,
    ltv_cac_ratio,
    pipeline_revenue_forecast,
    project_revenue,
    quarter_over_quarter_growth,
    rule_of_40,
    runway_outlook,
)
from founderhq.services.rollup_service import (
    expenses_by_category,
    revenue_by_customer,
    revenue_by_product,
    top_n,
)
from founderhq.styles import CHART_COLORS, COLORS, CUSTOM_CSS, PLOTLY_TEMPLATE
from founderhq.utils.caching import cached, clear_all_caches
from founderhq.utils.formatting import (
    format_currency,
    format_date_label,
    format_delta,
    format_months,
    format_number,
    format_percent,
    format_ratio,
    format_spend,
)

configure_logging()
logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════
# PAGE CONFIG
# ═══════════════════════════════════════════════════════

st.set_page_config(page_title="FounderHQ", layout="wide", initial_sidebar_state="expanded")
st.markdown(CUSTOM_CSS, unsafe_allow_html=True)

source = "Workspace API" if BACKEND_ENABLED else "Sample data"


# ═══════════════════════════════════════════════════════
# DATA LOADING (cached)
# ═══════════════════════════════════════════════════════

@cached()
def load_workspace(workspace_id: str):
    """Fetch every workspace table (5 min cache per workspace)."""
    return load_dashboard_data(workspace_id=workspace_id)


# ═══════════════════════════════════════════════════════
# SIDEBAR
# ═══════════════════════════════════════════════════════

with st.sidebar:
    st.title("Settings")
    if st.button("Refresh data", use_container_width=True):
        clear_all_caches()
        clear_dashboard_cache()
        st.rerun()
    view_mode = st.radio("Cash flow view", [MONTHLY, QUARTERLY], format_func=str.title)
    time_range = st.radio("CAC window (days)", [30, 90, 180], index=1)
    st.caption("Cache: 5 minutes")


st.markdown(
    dashboard_header(workspace=WORKSPACE_ID or "Sample workspace", source=source),
    unsafe_allow_html=True,
)


# ═══════════════════════════════════════════════════════
# LOAD & COMPUTE
# ═══════════════════════════════════════════════════════

try:
    with st.spinner("Loading workspace..."):
        data = load_workspace(WORKSPACE_ID or "sample")
except Exception as e:
    logger.exception("Workspace load failed")
    st.error(f"Could not load the workspace: {e}")
    st.info("Check FOUNDERHQ_API_URL, FOUNDERHQ_API_KEY and FOUNDERHQ_WORKSPACE_ID.")
    st.stop()

today = date.today()
current_month = today.strftime("%Y-%m")

cash_flow = compute_cash_flow(data.revenue_transactions, data.expenses, mode=view_mode)
monthly_flow = cash_flow if view_mode == MONTHLY else compute_cash_flow(
    data.revenue_transactions, data.expenses
)
summary = summarize_cash_flow(monthly_flow)

mrr = calculate_mrr(data.revenue_transactions, current_month)
arr = calculate_arr(data.revenue_transactions, current_month)
cac = calculate_cac(
    data.expenses,
    data.crm_items,
    (today - timedelta(days=time_range)).isoformat(),
    today.isoformat(),
)
ltv = calculate_ltv(data.revenue_transactions)
burn = calculate_burn_rate(data.expenses, today=today)
cash_balance = estimate_cash_balance(data.revenue_transactions, data.expenses)
outlook = runway_outlook(cash_balance, burn.monthly_average, today=today)
growth = quarter_over_quarter_growth(data.revenue_transactions, today=today)
ratio = ltv_cac_ratio(ltv, cac)
payback = cac_payback_months(cac, mrr)
margin = calculate_profit_margin(data.revenue_transactions, data.expenses)
customers = count_customers(data.revenue_transactions, today=today)
health = evaluate_health(outlook.runway, ratio, payback, growth)
dashboard = use_dashboard_metrics(data, today=today)

monthly_revenue = {p.period: p.revenue for p in monthly_flow}
projection = project_revenue(monthly_revenue, today=today)
pipeline_forecast = pipeline_revenue_forecast(monthly_revenue, data.deals, today=today)
multiple = burn_multiple(burn.monthly_average, projection)


# ═══════════════════════════════════════════════════════
# HEALTH SIGNALS
# ═══════════════════════════════════════════════════════

if not health.is_empty:
    st.markdown(
        "".join(signal_banner(w, "warning") for w in health.warnings)
        + "".join(signal_banner(s, "success") for s in health.successes),
        unsafe_allow_html=True,
    )


# ═══════════════════════════════════════════════════════
# ROW 1: SNAPSHOT
# ═══════════════════════════════════════════════════════

fin = dashboard.financial
st.markdown(
    section_header(
        "Financial Snapshot",
        f"Latest entry: {format_date_label(fin.latest.date)}" if fin.latest
        else "Log your first financial snapshot to unlock insights",
    ),
    unsafe_allow_html=True,
)

c1, c2, c3, c4 = st.columns(4)
with c1:
    st.metric(
        "MRR (latest log)",
        format_currency(fin.latest.mrr if fin.latest else 0),
        delta=f"{format_delta(fin.mrr_delta, currency=True)} vs prior entry"
        if fin.mrr_delta is not None else None,
    )
with c2:
    st.metric(
        "GMV",
        format_currency(fin.latest.gmv if fin.latest else 0),
        delta=f"{format_delta(fin.gmv_delta, currency=True)} vs prior entry"
        if fin.gmv_delta is not None else None,
    )
with c3:
    st.metric(
        "Signups",
        format_number(fin.latest.signups if fin.latest else 0, 0),
        delta=f"{format_delta(fin.signup_delta)} vs prior entry"
        if fin.signup_delta is not None else None,
    )
with c4:
    st.metric("MRR change", format_percent(fin.mrr_delta_percent))


# ═══════════════════════════════════════════════════════
# ROW 2: UNIT ECONOMICS
# ═══════════════════════════════════════════════════════

st.markdown(section_header("Key Metrics", f"CAC window: last {time_range} days"), unsafe_allow_html=True)

k1, k2, k3, k4 = st.columns(4)
with k1:
    st.metric("MRR (recurring, this month)", format_currency(mrr))
    st.metric("ARR", format_currency(arr))
with k2:
    st.metric("CAC", format_currency(cac))
    st.metric("LTV", format_currency(ltv))
with k3:
    st.metric("LTV:CAC", format_ratio(ratio))
    st.metric("CAC payback", format_months(payback))
with k4:
    st.metric("Burn rate", format_currency(burn.monthly_average),
              help=f"Average of the last {burn.months_used} months")
    st.metric("Runway", format_months(outlook.runway.months),
              help=f"Estimated cash {format_currency(cash_balance)} / burn rate")

k5, k6, k7, k8 = st.columns(4)
with k5:
    st.metric("Revenue growth (QoQ)", format_percent(growth))
    st.metric("Burn multiple", format_ratio(multiple) if multiple else "N/A",
              help="Monthly burn / next month's projected revenue")
with k6:
    st.metric("Profit margin", format_percent(margin) if margin is not None else "N/A")
with k7:
    st.metric("Rule of 40", format_number(rule_of_40(growth, margin), 1),
              help="Growth % + profit margin %")
with k8:
    st.metric("Customers", f"{customers.active} active / {customers.total}")

with st.expander("Runway recommendations"):
    for rec in outlook.recommendations:
        st.write(rec)
    if outlook.runout_month:
        st.caption(f"Cash runs out around {outlook.runout_month}")


# ═══════════════════════════════════════════════════════
# ROW 3: CASH FLOW
# ═══════════════════════════════════════════════════════

st.markdown(section_header("Cash Flow", view_mode.title()), unsafe_allow_html=True)

if cash_flow:
    df = cash_flow_frame(cash_flow)
    fig = go.Figure()
    fig.add_trace(go.Bar(x=df["label"], y=df["revenue"], name="Revenue", marker_color=COLORS["success"]))
    fig.add_trace(go.Bar(x=df["label"], y=df["expenses"], name="Expenses", marker_color=COLORS["danger"]))
    fig.add_trace(go.Scatter(
        x=df["label"], y=df["net_cash_flow"], name="Net cash flow",
        mode="lines+markers", line=dict(color=COLORS["primary"], width=2),
    ))
    fig.update_layout(template=PLOTLY_TEMPLATE, barmode="group", height=360)
    st.plotly_chart(fig, use_container_width=True)

    s1, s2, s3, s4 = st.columns(4)
    s1.caption(f"Revenue (3 mo): **{format_currency(summary.total_revenue)}**")
    s2.caption(f"Expenses (3 mo): **{format_currency(summary.total_expenses)}**")
    s3.caption(f"Net (3 mo): **{format_currency(summary.net_cash_flow)}**")
    s4.caption(f"Runway (est.): **{format_months(summary.runway.months)}**")
else:
    st.markdown(empty_state("No paid revenue or expenses recorded yet."), unsafe_allow_html=True)


# ═══════════════════════════════════════════════════════
# ROW 4: FORECAST
# ═══════════════════════════════════════════════════════

st.markdown(section_header("Forecast", "Next 6 months"), unsafe_allow_html=True)

forecast = forecast_cash_flow(monthly_flow, opening_balance=cash_balance, today=today)

f1, f2 = st.columns(2)
with f1:
    fig_fc = go.Figure(go.Scatter(
        x=[f.month for f in forecast], y=[f.closing_balance for f in forecast],
        mode="lines+markers", name="Closing balance", line=dict(color=COLORS["primary"]),
    ))
    fig_fc.update_layout(template=PLOTLY_TEMPLATE, height=300, title="Projected cash balance")
    st.plotly_chart(fig_fc, use_container_width=True)
with f2:
    fig_rev = go.Figure()
    fig_rev.add_trace(go.Bar(
        x=[f.month for f in pipeline_forecast], y=[f.trend_revenue for f in pipeline_forecast],
        marker_color=COLORS["violet"], name="Growth trend",
    ))
    fig_rev.add_trace(go.Bar(
        x=[f.month for f in pipeline_forecast], y=[f.pipeline_revenue for f in pipeline_forecast],
        marker_color=COLORS["success"], name="Weighted pipeline",
    ))
    confidence = projection[0].confidence if projection else "low"
    fig_rev.update_layout(
        template=PLOTLY_TEMPLATE, height=300, barmode="stack",
        title=f"Projected revenue ({confidence} trend confidence)",
    )
    st.plotly_chart(fig_rev, use_container_width=True)


# ═══════════════════════════════════════════════════════
# ROW 5: BREAKDOWNS
# ═══════════════════════════════════════════════════════

st.markdown(section_header("Breakdowns"), unsafe_allow_html=True)

b1, b2 = st.columns(2)
with b1:
    categories = top_n(expenses_by_category(data.expenses), 8)
    if categories:
        fig_exp = go.Figure(go.Pie(
            labels=[c.name for c in categories],
            values=[c.amount for c in categories],
            hole=0.5,
            marker=dict(colors=CHART_COLORS[:len(categories)]),
        ))
        fig_exp.update_layout(template=PLOTLY_TEMPLATE, height=320, title="Expenses by category")
        st.plotly_chart(fig_exp, use_container_width=True)
        for c in categories:
            st.caption(f"{c.name}: {format_spend(c.amount)} ({format_percent(c.percentage)})")
    else:
        st.markdown(empty_state("Track your first expense."), unsafe_allow_html=True)

with b2:
    products = revenue_by_product(data.deals)
    if products:
        fig_prod = go.Figure(go.Bar(
            x=[p.amount for p in products], y=[p.name for p in products],
            orientation="h", marker_color=COLORS["success"],
            text=[format_percent(p.percentage) for p in products],
        ))
        fig_prod.update_layout(
            template=PLOTLY_TEMPLATE, height=320, title="Won revenue by product",
            yaxis=dict(autorange="reversed"),
        )
        st.plotly_chart(fig_prod, use_container_width=True)
    else:
        st.markdown(empty_state("No closed-won deals yet."), unsafe_allow_html=True)

    st.caption("Top customers")
    for row in revenue_by_customer(data.revenue_transactions)[:5]:
        st.caption(
            f"{row.crm_item_id or 'Unassigned'}: {format_currency(row.total_revenue)} "
            f"· {row.transaction_count} payments since {format_date_label(row.first_transaction)}"
        )


# ═══════════════════════════════════════════════════════
# ROW 6: PIPELINE & MARKETING
# ═══════════════════════════════════════════════════════

pipe = dashboard.pipeline
mkt = dashboard.marketing

st.markdown(section_header("Pipeline & Marketing"), unsafe_allow_html=True)

p1, p2, p3, p4 = st.columns(4)
with p1:
    st.metric("Open deals", pipe.open_count, help=f"{format_currency(pipe.open_value)} in pipeline")
with p2:
    st.metric("High probability", pipe.high_probability_count,
              help=f"Average probability {format_percent(pipe.average_probability, 0)}")
with p3:
    st.metric("Weighted pipeline", format_currency(pipe.weighted_value))
with p4:
    st.metric("Won", format_currency(pipe.won_value),
              help=f"{pipe.won_count} deals, average {format_currency(pipe.average_won_value)}")

d1, d2 = st.columns(2)
with d1:
    st.subheader("Top deals")
    for deal in pipe.top_deals:
        st.write(f"**{deal.title}** · {format_currency(deal.amount)} · {format_percent(deal.probability, 0)}")
    if pipe.next_closing:
        st.caption(
            f"Next close: {pipe.next_closing.title} on "
            f"{format_date_label(pipe.next_closing.expected_close_date)}"
        )
with d2:
    st.subheader("Campaigns")
    st.write(f"{mkt.active_count} active · {mkt.planned_count} planned · {mkt.overdue_count} overdue")
    if mkt.next_campaign:
        st.caption(f"Next: {mkt.next_campaign.title} on {format_date_label(mkt.next_campaign.due_date)}")


st.markdown(footer(source=source), unsafe_allow_html=True)
