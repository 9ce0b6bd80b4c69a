"""Enumeration types for ledger entities.

Values match the labels stored in persisted snapshots.
"""

from enum import Enum


class Currency(str, Enum):
    USD = "USD"
    VES = "VES"


class AccountType(str, Enum):
    SAVINGS = "Ahorros"
    CHECKING = "Corriente"
    CASH = "Efectivo"
    CREDIT_CARD = "Tarjeta de Crédito"
    E_WALLET = "Billetera Virtual"
    BROKER = "Broker"


class TransactionType(str, Enum):
    INCOME = "Ingreso"
    EXPENSE = "Gasto"
    TRANSFER = "Transferencia"
    ADJUSTMENT = "Ajuste"


class AdjustmentDirection(str, Enum):
    PLUS = "plus"
    MINUS = "minus"


class WorkStatus(str, Enum):
    PENDING = "pending"
    SETTLED = "settled"


class PoolKind(str, Enum):
    PERSONAL = "personal"
    WORK = "work"
    WORK_SETTLED = "work_settled"
    CUSTODY = "custody"


class WorkPoolStatus(str, Enum):
    FUNDED = "funded"
    OWED = "owed"


class InvestmentCategory(str, Enum):
    STOCKS = "Acciones / ETFs"
    CRYPTO = "Criptomonedas"
    FIXED_INCOME = "Renta Fija / Préstamos"
    REAL_ESTATE = "Bienes Raíces"
    OTHER = "Otros"


class YieldPeriod(str, Enum):
    MONTHLY = "Mensual"
    ANNUAL = "Anual"


class BudgetStatus(str, Enum):
    ON_TRACK = "on-track"
    NEAR_LIMIT = "near-limit"
    EXCEEDED = "exceeded"


__all__ = [
    "Currency",
    "AccountType",
    "TransactionType",
    "AdjustmentDirection",
    "WorkStatus",
    "PoolKind",
    "WorkPoolStatus",
    "InvestmentCategory",
    "YieldPeriod",
    "BudgetStatus",
]
