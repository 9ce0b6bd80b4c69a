"""Domain constants for ledger computations."""

from decimal import Decimal

DEFAULT_EXCHANGE_RATE = Decimal("45.50")

DEFAULT_EXPENSE_CATEGORIES = (
    "Comida",
    "Transporte",
    "Servicios",
    "Salud",
    "Educación",
    "Ocio",
    "Compras",
    "Comisiones",
    "Otros",
)

DEFAULT_INCOME_CATEGORIES = (
    "Sueldo",
    "Freelance",
    "Ventas",
    "Inversiones",
    "Regalos",
    "Otros",
)

INVESTMENT_CATEGORY_LABEL = "Inversiones"
UNKNOWN_OWNER = "Unknown"

HIGH_UTILIZATION_PCT = Decimal("85")
NEAR_LIMIT_PCT = Decimal("80")


__all__ = [
    "DEFAULT_EXCHANGE_RATE",
    "DEFAULT_EXPENSE_CATEGORIES",
    "DEFAULT_INCOME_CATEGORIES",
    "INVESTMENT_CATEGORY_LABEL",
    "UNKNOWN_OWNER",
    "HIGH_UTILIZATION_PCT",
    "NEAR_LIMIT_PCT",
]
