"""Tests for the ledger engine balance impacts."""

from decimal import Decimal

import pytest

from finanza.domain.models import (
    Account,
    AccountType,
    AdjustmentDirection,
    Currency,
    Transaction,
    TransactionType,
)
from finanza.domain.services.ledger import (
    APPLY,
    REVERT,
    apply_impact,
    balance_deltas,
    reapply_impact,
)


def _accounts() -> list[Account]:
    return [
        Account(
            id="usd",
            name="Zelle",
            type=AccountType.CHECKING,
            balance=Decimal("1000"),
            currency=Currency.USD,
        ),
        Account(
            id="ves",
            name="Banco",
            type=AccountType.SAVINGS,
            balance=Decimal("20000"),
            currency=Currency.VES,
        ),
        Account(
            id="card",
            name="Visa",
            type=AccountType.CREDIT_CARD,
            balance=Decimal("-300"),
            currency=Currency.USD,
            credit_limit=Decimal("1000"),
        ),
    ]


def _tx(**overrides) -> Transaction:
    fields = {
        "id": "t1",
        "description": "test",
        "amount": Decimal("100"),
        "type": TransactionType.EXPENSE,
        "category": "Comida",
        "date": "2024-03-10",
        "currency": Currency.USD,
        "account_id": "usd",
    }
    fields.update(overrides)
    return Transaction(**fields)


SAMPLE_TRANSACTIONS = [
    _tx(commission=Decimal("2.5")),
    _tx(type=TransactionType.INCOME, commission=Decimal("1")),
    _tx(
        type=TransactionType.TRANSFER,
        to_account_id="ves",
        target_amount=Decimal("4550"),
        commission=Decimal("5"),
    ),
    _tx(type=TransactionType.TRANSFER, to_account_id="card"),
    _tx(type=TransactionType.TRANSFER, account_id=None, to_account_id="usd"),
    _tx(
        type=TransactionType.ADJUSTMENT,
        adjustment_direction=AdjustmentDirection.PLUS,
    ),
    _tx(
        type=TransactionType.ADJUSTMENT,
        adjustment_direction=AdjustmentDirection.MINUS,
    ),
    _tx(account_id="card", amount=Decimal("0.01")),
]


@pytest.mark.parametrize("transaction", SAMPLE_TRANSACTIONS)
def test_revert_then_apply_restores_accounts(transaction) -> None:
    """Reverting then re-applying must return the original balances."""
    accounts = _accounts()

    result = apply_impact(apply_impact(accounts, transaction, REVERT), transaction, APPLY)

    assert result == accounts


@pytest.mark.parametrize("transaction", SAMPLE_TRANSACTIONS)
def test_apply_then_revert_restores_accounts(transaction) -> None:
    """Applying then reverting must return the original balances."""
    accounts = _accounts()

    result = apply_impact(apply_impact(accounts, transaction, APPLY), transaction, REVERT)

    assert result == accounts


def test_expense_debits_amount_plus_commission() -> None:
    """Expenses remove the amount and the commission."""
    deltas = balance_deltas(_tx(commission=Decimal("2.5")))

    assert deltas == {"usd": Decimal("-102.5")}


def test_income_credits_amount_minus_commission() -> None:
    """Income adds the amount net of commission."""
    deltas = balance_deltas(
        _tx(type=TransactionType.INCOME, commission=Decimal("1"))
    )

    assert deltas == {"usd": Decimal("99")}


def test_cross_currency_transfer_uses_target_amount_and_commission() -> None:
    """Source loses the amount, destination gains target minus commission."""
    transfer = _tx(
        type=TransactionType.TRANSFER,
        to_account_id="ves",
        target_amount=Decimal("4550"),
        commission=Decimal("5"),
    )

    updated = {a.id: a.balance for a in apply_impact(_accounts(), transfer)}

    assert updated["usd"] == Decimal("900")
    assert updated["ves"] == Decimal("24545")


def test_transfer_without_source_only_credits_destination() -> None:
    """Proceeds transfers have no source leg."""
    transfer = _tx(
        type=TransactionType.TRANSFER,
        account_id=None,
        to_account_id="usd",
        amount=Decimal("240"),
        commission=Decimal("2"),
    )

    assert balance_deltas(transfer) == {"usd": Decimal("238")}


def test_transfer_to_same_account_has_single_leg() -> None:
    """A self transfer never credits its own source twice."""
    transfer = _tx(type=TransactionType.TRANSFER, to_account_id="usd")

    assert balance_deltas(transfer) == {"usd": Decimal("-100")}


def test_adjustment_without_direction_decreases_balance() -> None:
    """Adjustments missing a direction behave as a decrease."""
    adjustment = _tx(type=TransactionType.ADJUSTMENT)

    assert balance_deltas(adjustment) == {"usd": Decimal("-100")}


def test_credit_card_expense_increases_debt() -> None:
    """Spending on a card makes its balance more negative."""
    expense = _tx(account_id="card", amount=Decimal("50"))

    updated = {a.id: a for a in apply_impact(_accounts(), expense)}

    assert updated["card"].balance == Decimal("-350")


def test_transfer_to_card_pays_debt() -> None:
    """A payment transfer brings the card balance toward zero."""
    payment = _tx(type=TransactionType.TRANSFER, to_account_id="card")

    updated = {a.id: a for a in apply_impact(_accounts(), payment)}

    assert updated["card"].balance == Decimal("-200")
    assert updated["usd"].balance == Decimal("900")


def test_missing_account_leg_is_skipped() -> None:
    """Legs pointing at unknown accounts leave the set unchanged."""
    orphan = _tx(account_id="deleted")

    assert apply_impact(_accounts(), orphan) == _accounts()


def test_invalid_direction_raises() -> None:
    """Only +1 and -1 are accepted as directions."""
    with pytest.raises(ValueError):
        balance_deltas(_tx(), direction=2)


def test_reapply_impact_swaps_old_for_new() -> None:
    """Editing reverts the original before applying the update."""
    accounts = apply_impact(_accounts(), _tx())
    updated = _tx(amount=Decimal("40"), account_id="ves", currency=Currency.VES)

    result = {a.id: a.balance for a in reapply_impact(accounts, _tx(), updated)}

    assert result["usd"] == Decimal("1000")
    assert result["ves"] == Decimal("19960")
