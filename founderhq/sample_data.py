"""
Sample workspace used when no backend is configured.
Six months of activity ending in the current month.
"""

from datetime import date, timedelta

from founderhq.models.records import (
    CrmItem,
    DashboardData,
    Deal,
    Expense,
    FinancialLog,
    MarketingCampaign,
    RevenueTransaction,
)
from founderhq.utils.periods import add_months, trailing_months


def build_sample_workspace(today: date = None) -> DashboardData:
    today = today or date.today()
    months = trailing_months(today, 6)

    financial_logs = []
    revenue = []
    expenses = []
    crm_items = []

    for i, mk in enumerate(months):
        mrr = 8000 + 1200 * i
        financial_logs.append(FinancialLog(
            id=f"log-{i}",
            date=f"{mk}-01",
            mrr=mrr,
            gmv=mrr * 4.5,
            signups=40 + 6 * i,
        ))

        for c in range(3 + i):
            customer = f"cust-{c}"
            revenue.append(RevenueTransaction(
                id=f"rec-{mk}-{c}",
                transaction_date=f"{mk}-05",
                amount=mrr / (3 + i),
                transaction_type="recurring",
                status="paid",
                revenue_category="subscription",
                crm_item_id=customer,
                product_service_id="plan-pro" if c % 2 else "plan-starter",
            ))
        revenue.append(RevenueTransaction(
            id=f"inv-{mk}",
            transaction_date=f"{mk}-20",
            amount=2500,
            transaction_type="invoice",
            status="pending" if mk == months[-1] else "paid",
            revenue_category="services",
            crm_item_id="cust-0",
        ))
        crm_items.append(CrmItem(id=f"cust-{2 + i}", created_at=f"{mk}-03", deal_value=9000))

        expenses.extend([
            Expense(id=f"exp-saas-{mk}", date=f"{mk}-02", category="Software/SaaS",
                    amount=1800, description="Cloud hosting", vendor="AWS"),
            Expense(id=f"exp-mkt-{mk}", date=f"{mk}-10", category="Marketing",
                    amount=3500 + 250 * i, description="Paid acquisition"),
            Expense(id=f"exp-ctr-{mk}", date=f"{mk}-15", category="Contractors",
                    amount=6000, description="Design contractor"),
        ])

    def _in(days: int) -> str:
        return (today + timedelta(days=days)).isoformat()

    deals = [
        Deal(id="d1", title="Acme annual", stage="negotiation", value=48000, probability=75,
             expected_close_date=_in(12), product_service_id="plan-pro", product_service_name="Pro plan"),
        Deal(id="d2", title="Globex pilot", stage="proposal", value=15000, probability=40,
             expected_close_date=_in(30), product_service_id="plan-starter", product_service_name="Starter plan"),
        Deal(id="d3", title="Initech rollout", stage="qualified", total_value=62000, value=50000,
             probability=60, expected_close_date=_in(45)),
        Deal(id="d4", title="Umbrella seats", stage="lead", value=8000),
        Deal(id="d5", title="Hooli expansion", stage="closed_won", value=36000, probability=100,
             product_service_id="plan-pro", product_service_name="Pro plan"),
        Deal(id="d6", title="Stark onboarding", stage="closed_won", value=12000, probability=100,
             product_service_id="onboarding", product_service_name="Onboarding"),
        Deal(id="d7", title="Wayne trial", stage="closed_lost", value=20000, probability=0),
    ]

    marketing = [
        MarketingCampaign(id="m1", title="Launch week", status="Published", due_date=_in(-20)),
        MarketingCampaign(id="m2", title="Founder newsletter", status="In Progress", due_date=_in(5)),
        MarketingCampaign(id="m3", title="Pricing webinar", status="Planned", due_date=_in(21)),
        MarketingCampaign(id="m4", title="Case study", status="Planned", due_date=_in(-3)),
        MarketingCampaign(id="m5", title="Q-end social push", status="Planned",
                          due_date=f"{add_months(months[-1], 1)}-15"),
    ]

    return DashboardData(
        financial_logs=financial_logs,
        expenses=expenses,
        revenue_transactions=revenue,
        deals=deals,
        marketing_items=marketing,
        crm_items=crm_items,
    )
