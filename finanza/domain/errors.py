"""Error hierarchy for ledger operations and I/O boundaries.

Validation and lookup errors are raised synchronously by ledger mutations and
leave state untouched. Boundary errors are raised by adapters and are caught
by the application use cases that own the fallback behavior.
"""


class LedgerError(Exception):
    """Base class for every error raised by the ledger."""


class LedgerValidationError(LedgerError, ValueError):
    """A mutation was rejected before any state change."""


class TransactionValidationError(LedgerValidationError):
    """Transaction fields violate the ledger contract."""


class InsufficientFundsError(LedgerValidationError):
    """A funding account cannot cover the requested debit."""

    def __init__(self, account_name: str, balance, required) -> None:
        super().__init__(
            f"Insufficient funds in {account_name}: "
            f"balance={balance}, required={required}"
        )
        self.account_name = account_name
        self.balance = balance
        self.required = required


class BudgetValidationError(LedgerValidationError):
    """Budget fields violate the ledger contract."""


class EntityNotFoundError(LedgerError, KeyError):
    """A referenced entity does not exist in the snapshot."""

    def __init__(self, entity: str, entity_id: str | None) -> None:
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id

    def __str__(self) -> str:
        return str(self.args[0])


class BoundaryError(LedgerError):
    """An external collaborator failed."""


class SnapshotStorageError(BoundaryError):
    """Loading, saving or deleting a snapshot failed."""


class ExchangeRateUnavailableError(BoundaryError):
    """The exchange rate source could not provide a usable rate."""


class AssetLookupError(BoundaryError):
    """The asset price source failed for a ticker."""


__all__ = [
    "LedgerError",
    "LedgerValidationError",
    "TransactionValidationError",
    "InsufficientFundsError",
    "BudgetValidationError",
    "EntityNotFoundError",
    "BoundaryError",
    "SnapshotStorageError",
    "ExchangeRateUnavailableError",
    "AssetLookupError",
]
