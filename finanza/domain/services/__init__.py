"""Domain services package."""

from .budgets import (
    active_budget,
    active_budgets,
    budget_overview,
    budget_status,
    compute_spent,
    evaluate_budget,
    replace_budget,
)
from .credit import compute_credit_summary, credit_overview, debt_to_balance
from .currency import convert, to_usd, to_ves
from .investments import (
    compute_performance,
    liquidate_position,
    mark_to_market,
    open_position,
    projected_annual_yield,
)
from .ledger import APPLY, REVERT, apply_impact, balance_deltas, reapply_impact
from .net_worth import compute_net_worth_summary
from .pools import (
    custody_summary,
    custody_transactions,
    pending_work_transactions,
    personal_flow_summary,
    personal_transactions,
    pool_of,
    work_pool_summary,
)
from .validation import validate_balance_sign

__all__ = [
    "active_budget",
    "active_budgets",
    "budget_overview",
    "budget_status",
    "compute_spent",
    "evaluate_budget",
    "replace_budget",
    "compute_credit_summary",
    "credit_overview",
    "debt_to_balance",
    "convert",
    "to_usd",
    "to_ves",
    "compute_performance",
    "liquidate_position",
    "mark_to_market",
    "open_position",
    "projected_annual_yield",
    "APPLY",
    "REVERT",
    "apply_impact",
    "balance_deltas",
    "reapply_impact",
    "compute_net_worth_summary",
    "custody_summary",
    "custody_transactions",
    "pending_work_transactions",
    "personal_flow_summary",
    "personal_transactions",
    "pool_of",
    "work_pool_summary",
    "validate_balance_sign",
]
