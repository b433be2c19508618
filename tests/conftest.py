"""Shared pytest fixtures for the metrics suite."""

from datetime import date

import pytest

from founderhq.models.records import (
    CrmItem,
    Deal,
    Expense,
    FinancialLog,
    MarketingCampaign,
    RevenueTransaction,
)


@pytest.fixture
def today():
    return date(2024, 3, 15)


@pytest.fixture
def make_tx():
    counter = iter(range(10_000))

    def _make(day, amount, status="paid", transaction_type="payment", **kwargs):
        return RevenueTransaction(
            id=f"tx-{next(counter)}",
            transaction_date=day,
            amount=amount,
            status=status,
            transaction_type=transaction_type,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_expense():
    counter = iter(range(10_000))

    def _make(day, amount, category="Other", **kwargs):
        return Expense(id=f"exp-{next(counter)}", date=day, amount=amount, category=category, **kwargs)

    return _make


@pytest.fixture
def deals():
    return [
        Deal(id="a", title="A", stage="negotiation", value=5000, probability=80, expected_close_date="2024-04-10"),
        Deal(id="b", title="B", stage="proposal", value=12000, probability=30, expected_close_date="2024-03-20"),
        Deal(id="c", title="C", stage="lead", value=5000),
        Deal(id="d", title="D", stage="qualified", total_value=9000, value=1000, probability=60),
        Deal(id="e", title="E", stage="closed_won", value=20000, probability=100,
             product_service_id="pro", product_service_name="Pro"),
        Deal(id="f", title="F", stage="closed_won", value=10000, probability=100),
        Deal(id="g", title="G", stage="closed_lost", value=7000),
    ]


@pytest.fixture
def campaigns():
    return [
        MarketingCampaign(id="1", title="Launch", status="Published", due_date="2024-02-01"),
        MarketingCampaign(id="2", title="Newsletter", status="In Progress", due_date="2024-03-20"),
        MarketingCampaign(id="3", title="Webinar", status="Planned", due_date="2024-04-02"),
        MarketingCampaign(id="4", title="Case study", status="Planned", due_date="2024-03-01"),
        MarketingCampaign(id="5", title="Podcast", status="Planned"),
    ]


@pytest.fixture
def financial_logs():
    return [
        FinancialLog(id="1", date="2024-01-01", mrr=1000, gmv=5000, signups=10),
        FinancialLog(id="2", date="2024-02-01", mrr=1500, gmv=6000, signups=15),
    ]


@pytest.fixture
def crm_items():
    return [
        CrmItem(id="c1", created_at="2024-02-10T09:00:00Z", deal_value=5000),
        CrmItem(id="c2", created_at="2024-03-01", deal_value=1000),
        CrmItem(id="c3", created_at="2024-03-02", deal_value=None),
        CrmItem(id="c4", created_at="2023-11-01", deal_value=800),
    ]
