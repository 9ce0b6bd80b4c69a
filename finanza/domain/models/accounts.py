"""Domain model for money stores."""

from dataclasses import dataclass
from decimal import Decimal

from finanza.domain.models.enums import AccountType, Currency


@dataclass(frozen=True)
class Account:
    """A bank account, wallet, cash box, broker or credit card.

    Credit card balances are stored as the negative of the current debt.
    Every other type stores owned funds in ``balance``.

    Attributes:
        id: Unique account identifier.
        name: Display name.
        type: Kind of money store.
        balance: Signed balance in ``currency``.
        currency: Account currency.
        color: Display color, unused by computations.
        credit_limit: Credit line for credit cards.
        closing_day: Statement closing day for credit cards.
        due_day: Payment due day for credit cards.
    """

    id: str
    name: str
    type: AccountType
    balance: Decimal
    currency: Currency
    color: str = "#3b82f6"
    credit_limit: Decimal | None = None
    closing_day: int | None = None
    due_day: int | None = None

    @property
    def is_credit(self) -> bool:
        """Return True for credit card accounts."""
        return self.type == AccountType.CREDIT_CARD


__all__ = ["Account"]
