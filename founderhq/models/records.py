"""
Workspace records consumed by the metrics layer.

Records are owned and persisted by the workspace backend; this package only
reads them. Each record accepts backend rows (snake_case) and front-end
payloads (camelCase) through ``from_row``.
"""

from dataclasses import dataclass, field
from typing import Optional


# ─── Enumerations ───

EXPENSE_CATEGORIES = [
    "Software/SaaS",
    "Marketing",
    "Office",
    "Legal",
    "Contractors",
    "Travel",
    "Meals",
    "Equipment",
    "Subscriptions",
    "Other",
]

TRANSACTION_TYPES = ("invoice", "payment", "refund", "recurring")
TRANSACTION_STATUSES = ("pending", "paid", "overdue", "cancelled")

DEAL_STAGES = ["lead", "qualified", "proposal", "negotiation", "closed_won", "closed_lost"]
CLOSED_STAGES = ("closed_won", "closed_lost")

CAMPAIGN_STATUSES = ("Planned", "In Progress", "Completed", "Published", "Cancelled")


def _pick(row: dict, *keys, default=None):
    """First non-None value among the given keys."""
    for key in keys:
        value = row.get(key)
        if value is not None:
            return value
    return default


def _as_float(value) -> float:
    return float(value or 0)


def _as_optional_float(value) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


# ─── Financial log ───

@dataclass
class FinancialLog:
    """Point-in-time snapshot of MRR, GMV and signups."""
    id: str
    date: str  # YYYY-MM-DD
    mrr: float = 0.0
    gmv: float = 0.0
    signups: int = 0

    @classmethod
    def from_row(cls, row: dict) -> "FinancialLog":
        return cls(
            id=str(_pick(row, "id", default="")),
            date=_pick(row, "date", default=""),
            mrr=_as_float(row.get("mrr")),
            gmv=_as_float(row.get("gmv")),
            signups=int(row.get("signups") or 0),
        )


# ─── Expense ───

@dataclass
class Expense:
    """A logged expense. Amounts are never negative."""
    id: str
    date: str  # YYYY-MM-DD
    amount: float = 0.0
    category: str = "Other"
    description: str = ""
    vendor: Optional[str] = None
    payment_method: Optional[str] = None

    def __post_init__(self):
        self.amount = max(0.0, float(self.amount or 0))

    @classmethod
    def from_row(cls, row: dict) -> "Expense":
        return cls(
            id=str(_pick(row, "id", default="")),
            date=_pick(row, "date", default=""),
            amount=_as_float(row.get("amount")),
            category=_pick(row, "category", default="Other"),
            description=_pick(row, "description", default=""),
            vendor=row.get("vendor"),
            payment_method=_pick(row, "payment_method", "paymentMethod"),
        )


# ─── Revenue transaction ───

@dataclass
class RevenueTransaction:
    """Invoice, payment, refund or recurring charge."""
    id: str
    transaction_date: str  # YYYY-MM-DD
    amount: float = 0.0
    currency: str = "USD"
    transaction_type: str = "payment"
    status: str = "pending"
    revenue_category: str = "other"
    crm_item_id: Optional[str] = None
    contact_id: Optional[str] = None
    product_service_id: Optional[str] = None
    quantity: Optional[float] = None
    unit_price: Optional[float] = None

    @property
    def is_paid(self) -> bool:
        return self.status == "paid"

    @classmethod
    def from_row(cls, row: dict) -> "RevenueTransaction":
        return cls(
            id=str(_pick(row, "id", default="")),
            transaction_date=_pick(row, "transaction_date", "transactionDate", default=""),
            amount=_as_float(row.get("amount")),
            currency=_pick(row, "currency", default="USD"),
            transaction_type=_pick(row, "transaction_type", "transactionType", default="payment"),
            status=_pick(row, "status", default="pending"),
            revenue_category=_pick(row, "revenue_category", "revenueCategory", default="other"),
            crm_item_id=_pick(row, "crm_item_id", "crmItemId"),
            contact_id=_pick(row, "contact_id", "contactId"),
            product_service_id=_pick(row, "product_service_id", "productServiceId"),
            quantity=_as_optional_float(row.get("quantity")),
            unit_price=_as_optional_float(_pick(row, "unit_price", "unitPrice")),
        )


# ─── Deal ───

@dataclass
class Deal:
    """CRM deal in the sales pipeline."""
    id: str
    title: str = ""
    stage: str = "lead"
    value: Optional[float] = None
    total_value: Optional[float] = None
    probability: float = 0.0
    expected_close_date: Optional[str] = None
    product_service_id: Optional[str] = None
    product_service_name: Optional[str] = None
    category: Optional[str] = None
    created_at: Optional[str] = None

    def __post_init__(self):
        if self.probability is None:
            self.probability = 0.0

    @property
    def amount(self) -> float:
        """Deal amount: total_value, then value, then 0."""
        if self.total_value is not None:
            return self.total_value
        if self.value is not None:
            return self.value
        return 0.0

    @property
    def is_open(self) -> bool:
        return self.stage not in CLOSED_STAGES

    @property
    def is_won(self) -> bool:
        return self.stage == "closed_won"

    @classmethod
    def from_row(cls, row: dict) -> "Deal":
        return cls(
            id=str(_pick(row, "id", default="")),
            title=_pick(row, "title", default=""),
            stage=_pick(row, "stage", default="lead"),
            value=_as_optional_float(row.get("value")),
            total_value=_as_optional_float(_pick(row, "total_value", "totalValue")),
            probability=_as_float(row.get("probability")),
            expected_close_date=_pick(row, "expected_close_date", "expectedCloseDate"),
            product_service_id=_pick(row, "product_service_id", "productServiceId"),
            product_service_name=_pick(row, "product_service_name", "productServiceName"),
            category=row.get("category"),
            created_at=_pick(row, "created_at", "createdAt"),
        )


# ─── Marketing campaign ───

@dataclass
class MarketingCampaign:
    """Marketing calendar item."""
    id: str
    title: str = ""
    status: str = "Planned"
    due_date: Optional[str] = None  # YYYY-MM-DD

    @classmethod
    def from_row(cls, row: dict) -> "MarketingCampaign":
        return cls(
            id=str(_pick(row, "id", default="")),
            title=_pick(row, "title", default=""),
            status=_pick(row, "status", default="Planned"),
            due_date=_pick(row, "due_date", "dueDate"),
        )


# ─── CRM item ───

@dataclass
class CrmItem:
    """Investor, customer or partner account."""
    id: str
    created_at: str = ""
    deal_value: Optional[float] = None

    @classmethod
    def from_row(cls, row: dict) -> "CrmItem":
        return cls(
            id=str(_pick(row, "id", default="")),
            created_at=str(_pick(row, "created_at", "createdAt", default="")),
            deal_value=_as_optional_float(_pick(row, "deal_value", "dealValue")),
        )


# ─── Aggregate ───

@dataclass
class DashboardData:
    """All workspace records the dashboard derives metrics from."""
    financial_logs: list[FinancialLog] = field(default_factory=list)
    expenses: list[Expense] = field(default_factory=list)
    revenue_transactions: list[RevenueTransaction] = field(default_factory=list)
    deals: list[Deal] = field(default_factory=list)
    marketing_items: list[MarketingCampaign] = field(default_factory=list)
    crm_items: list[CrmItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: dict) -> "DashboardData":
        payload = payload or {}
        return cls(
            financial_logs=[FinancialLog.from_row(r) for r in _pick(payload, "financial_logs", "financials", default=[])],
            expenses=[Expense.from_row(r) for r in payload.get("expenses") or []],
            revenue_transactions=[
                RevenueTransaction.from_row(r)
                for r in _pick(payload, "revenue_transactions", "revenueTransactions", default=[])
            ],
            deals=[Deal.from_row(r) for r in payload.get("deals") or []],
            marketing_items=[
                MarketingCampaign.from_row(r)
                for r in _pick(payload, "marketing_items", "marketing", default=[])
            ],
            crm_items=[CrmItem.from_row(r) for r in _pick(payload, "crm_items", "crmItems", default=[])],
        )
