import pytest

from founderhq.models.records import Deal
from founderhq.services.rollup_service import (
    expenses_by_category,
    revenue_by_category,
    revenue_by_customer,
    revenue_by_product,
    rollup,
    top_n,
)


def test_single_category_gets_full_share(make_expense):
    expenses = [
        make_expense("2024-03-05", 100, category="Travel"),
        make_expense("2024-03-20", 50, category="Travel"),
    ]
    totals = expenses_by_category(expenses)

    assert len(totals) == 1
    assert totals[0].name == "Travel"
    assert totals[0].amount == 150
    assert totals[0].count == 2
    assert totals[0].percentage == 100


def test_categories_sorted_descending(make_expense):
    expenses = [
        make_expense("2024-03-01", 20, category="Meals"),
        make_expense("2024-03-01", 70, category="Legal"),
        make_expense("2024-03-01", 10, category="Office"),
    ]
    totals = expenses_by_category(expenses)
    assert [t.name for t in totals] == ["Legal", "Meals", "Office"]
    assert sum(t.percentage for t in totals) == pytest.approx(100)


def test_revenue_by_product_uses_won_deals_and_fallback(deals):
    totals = revenue_by_product(deals)

    assert [(t.key, t.name, t.amount) for t in totals] == [
        ("pro", "Pro", 20000),
        ("other", "Other", 10000),
    ]
    assert totals[0].percentage == pytest.approx(200 / 3)


def test_rollup_conserves_source_total(deals):
    won = [d for d in deals if d.is_won]
    totals = revenue_by_product(deals)
    assert sum(t.amount for t in totals) == pytest.approx(sum(d.amount for d in won))


def test_zero_total_gives_zero_percentages():
    deals = [Deal(id="x", stage="closed_won", value=0, product_service_id="p")]
    totals = revenue_by_product(deals)
    assert totals[0].percentage == 0


def test_ties_keep_input_order():
    items = [("b", 5), ("a", 5), ("c", 9)]
    totals = rollup(items, key=lambda i: i[0], amount=lambda i: i[1])
    assert [t.key for t in totals] == ["c", "b", "a"]


def test_revenue_by_category_counts_paid_only(make_tx):
    txs = [
        make_tx("2024-01-01", 100, revenue_category="subscription"),
        make_tx("2024-01-01", 40, revenue_category="services"),
        make_tx("2024-01-01", 999, revenue_category="services", status="pending"),
    ]
    totals = revenue_by_category(txs)
    assert [(t.key, t.amount) for t in totals] == [("subscription", 100), ("services", 40)]


def test_empty_rollups():
    assert expenses_by_category([]) == []
    assert revenue_by_product([]) == []


def test_top_n_folds_the_tail(make_expense):
    expenses = [make_expense("2024-01-01", amt, category=cat)
                for cat, amt in (("A", 50), ("B", 30), ("C", 15), ("D", 5))]
    totals = top_n(expenses_by_category(expenses), 2)

    assert [t.name for t in totals] == ["A", "B", "Other"]
    assert totals[-1].amount == 20
    assert totals[-1].percentage == pytest.approx(20)
    assert top_n(totals, 10) is totals


def test_product_without_name_is_labelled_other():
    deals = [Deal(id="x", stage="closed_won", value=300, product_service_id="sku-9")]
    totals = revenue_by_product(deals)
    assert [(t.key, t.name) for t in totals] == [("sku-9", "Other")]


def test_revenue_by_customer(make_tx):
    txs = [
        make_tx("2024-01-05", 100, crm_item_id="c1"),
        make_tx("2024-03-01", 50, crm_item_id="c1"),
        make_tx("2024-03-02", 999, crm_item_id="c1", status="pending"),
        make_tx("2024-02-10", 300, crm_item_id="c2"),
        make_tx("2024-02-15", 20),
    ]

    rows = revenue_by_customer(txs)

    assert [(r.crm_item_id, r.total_revenue, r.transaction_count) for r in rows] == [
        ("c2", 300, 1),
        ("c1", 150, 2),
        (None, 20, 1),
    ]
    c1 = rows[1]
    assert (c1.first_transaction, c1.latest_transaction) == ("2024-01-05", "2024-03-01")


def test_revenue_by_customer_date_filters(make_tx):
    txs = [
        make_tx("2024-01-05", 100, crm_item_id="c1"),
        make_tx("2024-03-01", 50, crm_item_id="c1"),
        make_tx("2024-02-10", 300, crm_item_id="c2"),
    ]
    assert [r.crm_item_id for r in revenue_by_customer(txs, start="2024-02-01")] == ["c2"]
    assert [r.crm_item_id for r in revenue_by_customer(txs, end="2024-02-28")] == ["c2"]
    assert revenue_by_customer([]) == []
