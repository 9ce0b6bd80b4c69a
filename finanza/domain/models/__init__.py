"""Domain models package."""

from .accounts import Account
from .budgets import Budget
from .enums import (
    AccountType,
    AdjustmentDirection,
    BudgetStatus,
    Currency,
    InvestmentCategory,
    PoolKind,
    TransactionType,
    WorkPoolStatus,
    WorkStatus,
    YieldPeriod,
)
from .finance import (
    BudgetOverview,
    BudgetProgress,
    CreditSummary,
    CustodyOwnerBalance,
    CustodySummary,
    NetWorthSummary,
    PersonalFlowSummary,
    WorkPoolSummary,
)
from .investments import Investment
from .snapshot import EntitySnapshot
from .transactions import (
    CustodyTag,
    PersonalTag,
    PoolTag,
    Transaction,
    WorkTag,
)

__all__ = [
    "Account",
    "Budget",
    "Investment",
    "Transaction",
    "EntitySnapshot",
    "PersonalTag",
    "WorkTag",
    "CustodyTag",
    "PoolTag",
    "AccountType",
    "AdjustmentDirection",
    "BudgetStatus",
    "Currency",
    "InvestmentCategory",
    "PoolKind",
    "TransactionType",
    "WorkPoolStatus",
    "WorkStatus",
    "YieldPeriod",
    "BudgetOverview",
    "BudgetProgress",
    "CreditSummary",
    "CustodyOwnerBalance",
    "CustodySummary",
    "NetWorthSummary",
    "PersonalFlowSummary",
    "WorkPoolSummary",
]
