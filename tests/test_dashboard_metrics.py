from datetime import date

import pytest

from founderhq.models.records import DashboardData, FinancialLog
from founderhq.services.dashboard_metrics import (
    average_deal_size,
    clear_dashboard_cache,
    financial_data,
    marketing_data,
    partition_deals,
    pipeline_data,
    use_dashboard_metrics,
)
from founderhq.utils.formatting import format_delta


@pytest.fixture(autouse=True)
def _fresh_cache():
    clear_dashboard_cache()
    yield
    clear_dashboard_cache()


# ─── Pipeline ───

def test_partition_is_complete(deals):
    open_deals, closed_deals = partition_deals(deals)

    assert len(open_deals) + len(closed_deals) == len(deals)
    assert {d.id for d in open_deals} & {d.id for d in closed_deals} == set()
    assert {d.id for d in open_deals} == {"a", "b", "c", "d"}


def test_pipeline_summary(deals):
    pipe = pipeline_data(deals)

    assert pipe.open_count == 4
    assert pipe.open_value == 5000 + 12000 + 5000 + 9000
    assert pipe.high_probability_count == 2
    assert pipe.average_probability == pytest.approx((80 + 30 + 0 + 60) / 4)
    assert pipe.next_closing.id == "b"
    assert pipe.won_value == 30000
    assert pipe.won_count == 2
    assert pipe.weighted_value == pytest.approx(4000 + 3600 + 0 + 5400)


def test_top_deals_sorted_by_value_with_stable_ties(deals):
    pipe = pipeline_data(deals)
    assert [d.id for d in pipe.top_deals] == ["b", "d", "a"]


def test_empty_pipeline():
    pipe = pipeline_data([])
    assert pipe.open_count == 0
    assert pipe.average_probability == 0
    assert pipe.next_closing is None
    assert pipe.top_deals == []


# ─── Marketing ───

def test_marketing_counts(campaigns):
    mkt = marketing_data(campaigns, today=date(2024, 3, 15))

    assert mkt.active_count == 2
    assert mkt.planned_count == 3
    assert mkt.overdue_count == 1
    assert mkt.next_campaign.id == "2"


def test_marketing_without_upcoming(campaigns):
    mkt = marketing_data(campaigns, today=date(2025, 1, 1))
    assert mkt.next_campaign is None
    assert mkt.overdue_count == 3


# ─── Financials ───

def test_latest_vs_previous(financial_logs):
    fin = financial_data(financial_logs)

    assert fin.latest.id == "2"
    assert fin.previous.id == "1"
    assert fin.mrr_delta == 500
    assert fin.signup_delta == 5
    assert fin.gmv_delta == 1000
    assert fin.mrr_delta_percent == pytest.approx(50.0)
    assert format_delta(fin.mrr_delta, currency=True) == "+$500"
    assert format_delta(fin.signup_delta) == "+5"


def test_single_log_has_no_deltas():
    fin = financial_data([FinancialLog(id="1", date="2024-01-01", mrr=100)])
    assert fin.latest.id == "1"
    assert fin.previous is None
    assert fin.mrr_delta is None
    assert fin.mrr_delta_percent == 0


def test_zero_previous_mrr_gives_zero_percent():
    logs = [
        FinancialLog(id="1", date="2024-01-01", mrr=0),
        FinancialLog(id="2", date="2024-02-01", mrr=900),
    ]
    fin = financial_data(logs)
    assert fin.mrr_delta == 900
    assert fin.mrr_delta_percent == 0


def test_duplicate_dates_are_both_kept():
    logs = [
        FinancialLog(id="1", date="2024-02-01", mrr=100),
        FinancialLog(id="2", date="2024-02-01", mrr=150),
    ]
    fin = financial_data(logs)
    assert (fin.latest.id, fin.previous.id) == ("1", "2")


# ─── Adapter ───

def test_adapter_reuses_results_for_same_lists(deals, campaigns, financial_logs):
    data = DashboardData(deals=deals, marketing_items=campaigns, financial_logs=financial_logs)
    today = date(2024, 3, 15)

    first = use_dashboard_metrics(data, today=today)
    second = use_dashboard_metrics(data, today=today)

    assert first.pipeline is second.pipeline
    assert first.marketing is second.marketing
    assert first.financial is second.financial


def test_adapter_recomputes_replaced_list(deals, financial_logs):
    data = DashboardData(deals=deals, financial_logs=financial_logs)
    today = date(2024, 3, 15)
    first = use_dashboard_metrics(data, today=today)

    data.deals = list(deals[:2])
    second = use_dashboard_metrics(data, today=today)

    assert second.pipeline is not first.pipeline
    assert second.pipeline.open_count == 2
    assert second.financial is first.financial


def test_average_won_deal_size(deals):
    assert average_deal_size(deals) == 15000
    assert pipeline_data(deals).average_won_value == 15000
    assert average_deal_size([d for d in deals if not d.is_won]) == 0
