"""Domain model for ledger events and their pool membership."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Union

from finanza.domain.constants import UNKNOWN_OWNER
from finanza.domain.models.enums import (
    AdjustmentDirection,
    Currency,
    TransactionType,
    WorkStatus,
)


@dataclass(frozen=True)
class PersonalTag:
    """Money that belongs to the user."""


@dataclass(frozen=True)
class WorkTag:
    """Employer advance or work expense awaiting settlement."""

    status: WorkStatus = WorkStatus.PENDING


@dataclass(frozen=True)
class CustodyTag:
    """Money held on behalf of a third party."""

    owner: str = UNKNOWN_OWNER


PoolTag = Union[PersonalTag, WorkTag, CustodyTag]


@dataclass(frozen=True)
class Transaction:
    """A single financial event touching one or two accounts.

    Attributes:
        id: Unique transaction identifier.
        description: Free-form description.
        amount: Positive amount in ``currency``.
        type: Income, expense, transfer or adjustment.
        category: Free-form category label.
        date: Calendar date formatted as YYYY-MM-DD.
        currency: Currency of ``amount``.
        account_id: Source or primary account, absent on proceeds transfers.
        commission: Fee charged on the event.
        to_account_id: Destination account for transfers.
        target_amount: Amount arriving at the destination, in its currency.
        adjustment_direction: Sign of an adjustment.
        related_investment_id: Investment funded or liquidated by the event.
        pool: Pool the event belongs to.
    """

    id: str
    description: str
    amount: Decimal
    type: TransactionType
    category: str
    date: str
    currency: Currency
    account_id: str | None = None
    commission: Decimal = Decimal("0")
    to_account_id: str | None = None
    target_amount: Decimal | None = None
    adjustment_direction: AdjustmentDirection | None = None
    related_investment_id: str | None = None
    pool: PoolTag = field(default_factory=PersonalTag)

    @property
    def month(self) -> str:
        """Return the YYYY-MM month of the transaction date."""
        return self.date[:7]

    @property
    def is_work_related(self) -> bool:
        return isinstance(self.pool, WorkTag)

    @property
    def is_third_party(self) -> bool:
        return isinstance(self.pool, CustodyTag)


__all__ = [
    "PersonalTag",
    "WorkTag",
    "CustodyTag",
    "PoolTag",
    "Transaction",
]
