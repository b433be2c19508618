from founderhq.models.records import (
    CrmItem,
    DashboardData,
    Deal,
    Expense,
    FinancialLog,
    MarketingCampaign,
    RevenueTransaction,
)


def test_expense_amount_is_sanitized():
    assert Expense(id="1", date="2024-01-01", amount=-50).amount == 0
    assert Expense.from_row({"id": 2, "date": "2024-01-01", "amount": "12.5"}).amount == 12.5


def test_transaction_accepts_both_key_styles():
    snake = RevenueTransaction.from_row({
        "id": "t1", "transaction_date": "2024-02-01", "amount": "99.90",
        "transaction_type": "recurring", "status": "paid", "crm_item_id": "c1",
        "unit_price": "9.99",
    })
    camel = RevenueTransaction.from_row({
        "id": "t1", "transactionDate": "2024-02-01", "amount": 99.9,
        "transactionType": "recurring", "status": "paid", "crmItemId": "c1",
        "unitPrice": 9.99,
    })
    assert snake == camel
    assert snake.is_paid
    assert snake.quantity is None


def test_deal_amount_precedence():
    assert Deal(id="1", total_value=900, value=100).amount == 900
    assert Deal(id="2", value=100).amount == 100
    assert Deal(id="3").amount == 0
    assert Deal(id="4", total_value=0, value=100).amount == 0


def test_deal_probability_defaults_to_zero():
    assert Deal.from_row({"id": "1", "stage": "lead"}).probability == 0
    assert Deal(id="2", probability=None).probability == 0


def test_deal_open_and_won():
    assert Deal(id="1", stage="proposal").is_open
    assert not Deal(id="2", stage="closed_lost").is_open
    assert Deal(id="3", stage="closed_won").is_won


def test_dashboard_data_from_backend_rows():
    data = DashboardData.from_dict({
        "financial_logs": [{"id": 1, "date": "2024-01-01", "mrr": 10, "gmv": 20, "signups": 3}],
        "expenses": [{"id": 1, "date": "2024-01-01", "amount": 5, "category": "Travel",
                      "payment_method": "Cash"}],
        "deals": [{"id": 1, "stage": "qualified", "totalValue": "1500", "probability": 40,
                   "expectedCloseDate": "2024-05-01"}],
        "marketing_items": [{"id": 1, "title": "Post", "status": "Planned", "due_date": "2024-04-01"}],
        "crm_items": [{"id": 7, "created_at": "2024-01-02", "deal_value": 100}],
    })

    assert data.financial_logs == [FinancialLog(id="1", date="2024-01-01", mrr=10, gmv=20, signups=3)]
    assert data.expenses[0].payment_method == "Cash"
    assert data.deals[0].amount == 1500
    assert data.deals[0].expected_close_date == "2024-05-01"
    assert data.marketing_items == [MarketingCampaign(id="1", title="Post", status="Planned", due_date="2024-04-01")]
    assert data.crm_items == [CrmItem(id="7", created_at="2024-01-02", deal_value=100)]
    assert data.revenue_transactions == []


def test_dashboard_data_defaults_to_empty_lists():
    data = DashboardData.from_dict(None)
    assert data.deals == [] and data.expenses == [] and data.financial_logs == []
