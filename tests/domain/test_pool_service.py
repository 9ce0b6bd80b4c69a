"""Tests for pool segregation and pool summaries."""

from decimal import Decimal

from finanza.domain.models import (
    Currency,
    CustodyTag,
    PersonalTag,
    PoolKind,
    Transaction,
    TransactionType,
    WorkPoolStatus,
    WorkStatus,
    WorkTag,
)
from finanza.domain.services.pools import (
    custody_summary,
    custody_transactions,
    pending_work_transactions,
    personal_flow_summary,
    personal_transactions,
    pool_of,
    work_pool_summary,
)

RATE = Decimal("40")


def _tx(tx_id: str, amount: str, kind: TransactionType, pool=None, **overrides) -> Transaction:
    fields = {
        "id": tx_id,
        "description": tx_id,
        "amount": Decimal(amount),
        "type": kind,
        "category": "Otros",
        "date": "2024-05-10",
        "currency": Currency.USD,
        "account_id": "acc",
        "pool": pool or PersonalTag(),
    }
    fields.update(overrides)
    return Transaction(**fields)


HISTORY = [
    _tx("salary", "1000", TransactionType.INCOME),
    _tx("food", "200", TransactionType.EXPENSE),
    _tx("advance", "100", TransactionType.INCOME, WorkTag()),
    _tx("taxi", "50", TransactionType.EXPENSE, WorkTag(), date="2024-05-12"),
    _tx("old", "70", TransactionType.EXPENSE, WorkTag(WorkStatus.SETTLED)),
    _tx("ana-in", "300", TransactionType.INCOME, CustodyTag("Ana")),
    _tx("ana-out", "4000", TransactionType.EXPENSE, CustodyTag("Ana"), currency=Currency.VES),
    _tx("luis-in", "80", TransactionType.INCOME, CustodyTag("Luis")),
]


def test_every_transaction_lands_in_exactly_one_pool() -> None:
    """Personal, pending work and custody sets are disjoint and complete."""
    personal = {t.id for t in personal_transactions(HISTORY)}
    work = {t.id for t in pending_work_transactions(HISTORY)}
    custody = {t.id for t in custody_transactions(HISTORY)}
    settled = {t.id for t in HISTORY if pool_of(t) == PoolKind.WORK_SETTLED}

    assert not personal & work
    assert not personal & custody
    assert not work & custody
    assert personal | work | custody | settled == {t.id for t in HISTORY}


def test_settled_work_is_not_personal() -> None:
    """Settled work transactions stay out of personal totals."""
    assert "old" not in {t.id for t in personal_transactions(HISTORY)}


def test_pending_work_is_sorted_newest_first() -> None:
    """The work pool lists its newest transaction first."""
    assert [t.id for t in pending_work_transactions(HISTORY)] == ["taxi", "advance"]


def test_work_pool_summary_balance_and_status() -> None:
    """Advances minus expenses gives the funded balance."""
    summary = work_pool_summary(HISTORY, RATE)

    assert summary.total_advances == Decimal("100")
    assert summary.total_expenses == Decimal("50")
    assert summary.balance == Decimal("50")
    assert summary.status == WorkPoolStatus.FUNDED
    assert summary.spend_ratio_pct == Decimal("50")


def test_work_pool_owed_when_expenses_exceed_advances() -> None:
    """Spending beyond the advances means the employer owes money."""
    summary = work_pool_summary(
        [_tx("taxi", "30", TransactionType.EXPENSE, WorkTag())],
        RATE,
    )

    assert summary.balance == Decimal("-30")
    assert summary.status == WorkPoolStatus.OWED


def test_custody_summary_per_owner_in_usd() -> None:
    """Custody balances are entries minus exits per owner."""
    summary = custody_summary(HISTORY, RATE)

    balances = {owner.owner: owner.balance for owner in summary.owners}
    assert balances == {"Ana": Decimal("200"), "Luis": Decimal("80")}
    assert summary.total_liability == Decimal("280")


def test_personal_flow_excludes_pools_and_transfers() -> None:
    """Only personal income and expense count toward the month flow."""
    history = [
        *HISTORY,
        _tx("move", "500", TransactionType.TRANSFER, to_account_id="other"),
        _tx("fix", "5", TransactionType.ADJUSTMENT),
        _tx("april", "999", TransactionType.INCOME, date="2024-04-30"),
    ]

    flow = personal_flow_summary(history, "2024-05", RATE)

    assert flow.income == Decimal("1000")
    assert flow.expense == Decimal("200")
    assert flow.net == Decimal("800")
