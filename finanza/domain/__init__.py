"""Domain package for ledger rules and core models."""

from .constants import DEFAULT_EXCHANGE_RATE
from .models import (
    Account,
    Budget,
    EntitySnapshot,
    Investment,
    Transaction,
)
from .services import (
    active_budget,
    apply_impact,
    compute_credit_summary,
    compute_net_worth_summary,
    to_usd,
    to_ves,
)

__all__ = [
    "DEFAULT_EXCHANGE_RATE",
    "Account",
    "Budget",
    "EntitySnapshot",
    "Investment",
    "Transaction",
    "active_budget",
    "apply_impact",
    "compute_credit_summary",
    "compute_net_worth_summary",
    "to_usd",
    "to_ves",
]
