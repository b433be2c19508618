"""
Rollup Service.

Groups records by a key, sums an amount per group and computes each
group's share of the total. Results are sorted by amount, largest first;
ties keep input order.
"""

from typing import Callable, Optional

from founderhq.models.financial_models import CategoryTotal, CustomerRevenue
from founderhq.models.records import Deal, Expense, RevenueTransaction


def rollup(
    items: list,
    key: Callable,
    amount: Callable,
    name: Optional[Callable] = None,
    fallback_key: str = "other",
    fallback_name: str = "Other",
) -> list[CategoryTotal]:
    """Generic group-by / sum with percentage of the grand total."""
    groups: dict[str, CategoryTotal] = {}

    for item in items:
        group_key = key(item) or fallback_key
        if group_key not in groups:
            label = (name(item) if name else None) or (
                fallback_name if group_key == fallback_key else group_key
            )
            groups[group_key] = CategoryTotal(key=group_key, name=label)
        groups[group_key].amount += amount(item)
        groups[group_key].count += 1

    total = sum(g.amount for g in groups.values())
    for g in groups.values():
        g.percentage = (g.amount / total * 100) if total > 0 else 0.0

    return sorted(groups.values(), key=lambda g: g.amount, reverse=True)


def revenue_by_product(deals: list[Deal]) -> list[CategoryTotal]:
    """Closed-won deal value per product or service."""
    return rollup(
        [d for d in deals if d.is_won],
        key=lambda d: d.product_service_id,
        amount=lambda d: d.amount,
        name=lambda d: d.product_service_name or "Other",
    )


def expenses_by_category(expenses: list[Expense]) -> list[CategoryTotal]:
    """Spend per expense category."""
    return rollup(
        expenses,
        key=lambda e: e.category,
        amount=lambda e: e.amount,
        fallback_key="Other",
    )


def revenue_by_category(transactions: list[RevenueTransaction]) -> list[CategoryTotal]:
    """Paid revenue per revenue category."""
    return rollup(
        [tx for tx in transactions if tx.is_paid],
        key=lambda tx: tx.revenue_category,
        amount=lambda tx: tx.amount,
    )


def revenue_by_customer(
    transactions: list[RevenueTransaction],
    start: str = None,
    end: str = None,
) -> list[CustomerRevenue]:
    """
    Paid revenue per CRM customer, largest first.

    Transactions without a customer are grouped under crm_item_id None.
    start / end keep customers whose first payment is on or after start and
    whose latest payment is on or before end.
    """
    customers: dict[Optional[str], CustomerRevenue] = {}
    for tx in transactions:
        if not tx.is_paid:
            continue
        day = tx.transaction_date[:10]
        customer_id = tx.crm_item_id or None
        row = customers.get(customer_id)
        if row is None:
            row = customers[customer_id] = CustomerRevenue(
                crm_item_id=customer_id, first_transaction=day, latest_transaction=day,
            )
        row.total_revenue += tx.amount
        row.transaction_count += 1
        row.first_transaction = min(row.first_transaction, day)
        row.latest_transaction = max(row.latest_transaction, day)

    rows = [
        r for r in customers.values()
        if (start is None or r.first_transaction >= start)
        and (end is None or r.latest_transaction <= end)
    ]
    return sorted(rows, key=lambda r: r.total_revenue, reverse=True)


def top_n(totals: list[CategoryTotal], n: int, others_name: str = "Other") -> list[CategoryTotal]:
    """Keep the n largest groups and fold the rest into one bucket."""
    if len(totals) <= n:
        return totals
    head, tail = totals[:n], totals[n:]
    rest = CategoryTotal(
        key="__others__",
        name=others_name,
        amount=sum(t.amount for t in tail),
        count=sum(t.count for t in tail),
        percentage=sum(t.percentage for t in tail),
    )
    return head + [rest]
