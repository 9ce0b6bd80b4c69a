"""Ledger store owning the entity collections of one user session.

Every mutation validates its input, computes the new collections in full and
only then swaps them in, so readers never observe a partially applied
operation. After each mutation the store hands a fresh snapshot to its change
listener (usually the snapshot sync service).
"""

import uuid
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import date
from decimal import Decimal

from finanza.domain.constants import INVESTMENT_CATEGORY_LABEL, UNKNOWN_OWNER
from finanza.domain.errors import (
    BudgetValidationError,
    EntityNotFoundError,
    InsufficientFundsError,
    LedgerValidationError,
    TransactionValidationError,
)
from finanza.domain.models import (
    Account,
    AccountType,
    Budget,
    Currency,
    CustodyTag,
    EntitySnapshot,
    Investment,
    InvestmentCategory,
    PoolKind,
    Transaction,
    TransactionType,
    WorkStatus,
    WorkTag,
    YieldPeriod,
)
from finanza.domain.services.budgets import replace_budget
from finanza.domain.services.credit import debt_to_balance
from finanza.domain.services.investments import (
    liquidate_position,
    mark_to_market,
    open_position,
)
from finanza.domain.services.ledger import (
    APPLY,
    REVERT,
    apply_impact,
    balance_deltas,
    reapply_impact,
)
from finanza.domain.services.periods import is_valid_date, is_valid_month
from finanza.domain.services.pools import pool_of
from finanza.infrastructure.logging.logger import (
    get_app_logger,
    get_audit_logger,
)

ChangeListener = Callable[[EntitySnapshot], None]


def _new_id() -> str:
    return str(uuid.uuid4())


class LedgerStore:
    """Single write surface over accounts, transactions, investments and budgets."""

    def __init__(
        self,
        snapshot: EntitySnapshot | None = None,
        *,
        on_change: ChangeListener | None = None,
        id_factory: Callable[[], str] | None = None,
        today: Callable[[], date] | None = None,
        logger=None,
        audit_logger=None,
    ) -> None:
        """Initialize the store.

        Args:
            snapshot: Initial entities, empty defaults when omitted.
            on_change: Callback receiving the snapshot after each mutation.
            id_factory: Generator of entity identifiers.
            today: Clock used to date generated transactions.
            logger: Optional logger compatible with logging.Logger-like API.
            audit_logger: Optional logger receiving one line per mutation.
        """
        self._on_change = on_change
        self._new_id = id_factory or _new_id
        self._today = today or date.today
        self._logger = logger or get_app_logger()
        self._audit = audit_logger or get_audit_logger()
        self._load(snapshot or EntitySnapshot.empty())

    def _load(self, snapshot: EntitySnapshot) -> None:
        self._accounts = tuple(snapshot.accounts)
        self._transactions = tuple(snapshot.transactions)
        self._investments = tuple(snapshot.investments)
        self._budgets = tuple(snapshot.budgets)
        self._expense_categories = tuple(snapshot.expense_categories)
        self._income_categories = tuple(snapshot.income_categories)

    @property
    def accounts(self) -> tuple[Account, ...]:
        return self._accounts

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return self._transactions

    @property
    def investments(self) -> tuple[Investment, ...]:
        return self._investments

    @property
    def budgets(self) -> tuple[Budget, ...]:
        return self._budgets

    @property
    def expense_categories(self) -> tuple[str, ...]:
        return self._expense_categories

    @property
    def income_categories(self) -> tuple[str, ...]:
        return self._income_categories

    def snapshot(self) -> EntitySnapshot:
        """Return the current entities as an immutable snapshot."""
        return EntitySnapshot(
            accounts=self._accounts,
            transactions=self._transactions,
            investments=self._investments,
            budgets=self._budgets,
            expense_categories=self._expense_categories,
            income_categories=self._income_categories,
        )

    def replace_snapshot(self, snapshot: EntitySnapshot) -> None:
        """Swap in a loaded snapshot without notifying the listener."""
        self._load(snapshot)
        self._logger.info(
            f"Ledger loaded: accounts={len(self._accounts)}, "
            f"transactions={len(self._transactions)}, "
            f"investments={len(self._investments)}, "
            f"budgets={len(self._budgets)}"
        )

    def find_account(self, account_id: str | None) -> Account | None:
        """Return the account with ``account_id`` or None."""
        return next((a for a in self._accounts if a.id == account_id), None)

    def get_account(self, account_id: str | None) -> Account:
        account = self.find_account(account_id)
        if account is None:
            raise EntityNotFoundError("Account", account_id)
        return account

    def get_transaction(self, transaction_id: str) -> Transaction:
        for transaction in self._transactions:
            if transaction.id == transaction_id:
                return transaction
        raise EntityNotFoundError("Transaction", transaction_id)

    def get_investment(self, investment_id: str) -> Investment:
        for investment in self._investments:
            if investment.id == investment_id:
                return investment
        raise EntityNotFoundError("Investment", investment_id)

    # Accounts

    def open_account(
        self,
        name: str,
        account_type: AccountType,
        currency: Currency,
        opening_amount: Decimal = Decimal("0"),
        *,
        credit_limit: Decimal | None = None,
        closing_day: int | None = None,
        due_day: int | None = None,
        color: str = "#3b82f6",
    ) -> Account:
        """Create an account from an opening balance or initial debt.

        For credit cards ``opening_amount`` is the debt owed, stored as a
        negative balance. Credit fields are dropped for other types.

        Raises:
            LedgerValidationError: If the name or credit fields are invalid.
        """
        if not name or not name.strip():
            raise LedgerValidationError("Account name is required")
        if account_type == AccountType.CREDIT_CARD:
            limit = credit_limit if credit_limit is not None else Decimal("0")
            if limit < 0:
                raise LedgerValidationError("Credit limit cannot be negative")
            for label, day in (("closing", closing_day), ("due", due_day)):
                if day is not None and not 1 <= day <= 31:
                    raise LedgerValidationError(
                        f"Credit card {label} day must be within 1-31: {day}"
                    )
            account = Account(
                id=self._new_id(),
                name=name.strip(),
                type=account_type,
                balance=debt_to_balance(opening_amount),
                currency=currency,
                color=color,
                credit_limit=limit,
                closing_day=closing_day,
                due_day=due_day,
            )
        else:
            account = Account(
                id=self._new_id(),
                name=name.strip(),
                type=account_type,
                balance=opening_amount,
                currency=currency,
                color=color,
            )
        self._accounts = (*self._accounts, account)
        self._record(
            f"open_account id={account.id} type={account.type.value} "
            f"balance={account.balance} {account.currency.value}"
        )
        return account

    def delete_account(self, account_id: str) -> Account:
        """Remove an account; its historical transactions are kept."""
        account = self.get_account(account_id)
        self._accounts = tuple(a for a in self._accounts if a.id != account_id)
        self._record(f"delete_account id={account_id}")
        return account

    # Transactions

    def add_transaction(self, draft: Transaction) -> Transaction:
        """Book a new transaction and prepend it to history.

        A blank ``draft.id`` is replaced with a generated identifier.

        Raises:
            TransactionValidationError: If the fields are inconsistent.
            EntityNotFoundError: If a referenced account does not exist.
        """
        transaction = self._normalize(draft)
        if not transaction.id:
            transaction = replace(transaction, id=self._new_id())
        elif any(t.id == transaction.id for t in self._transactions):
            raise TransactionValidationError(
                f"Duplicate transaction id: {transaction.id}"
            )
        self._validate_transaction(transaction)
        self._require_accounts(balance_deltas(transaction))

        self._accounts = tuple(apply_impact(self._accounts, transaction, APPLY))
        self._transactions = (transaction, *self._transactions)
        self._record(
            f"add_transaction id={transaction.id} "
            f"type={transaction.type.value} amount={transaction.amount} "
            f"{transaction.currency.value}"
        )
        return transaction

    def update_transaction(self, updated: Transaction) -> Transaction:
        """Replace a transaction, reverting its old impact first.

        Only accounts newly referenced by the edit must exist, so entries
        pointing at deleted accounts stay editable.

        Raises:
            EntityNotFoundError: If the transaction or a new account is missing.
            TransactionValidationError: If the new fields are inconsistent.
        """
        original = self.get_transaction(updated.id)
        transaction = self._normalize(updated)
        self._validate_transaction(transaction)
        new_ids = set(balance_deltas(transaction)) - set(balance_deltas(original))
        self._require_accounts(new_ids)

        self._accounts = tuple(
            reapply_impact(self._accounts, original, transaction)
        )
        self._transactions = tuple(
            transaction if t.id == transaction.id else t
            for t in self._transactions
        )
        self._record(f"update_transaction id={transaction.id}")
        return transaction

    def delete_transaction(self, transaction_id: str) -> Transaction:
        """Revert a transaction's impact and drop it from history."""
        transaction = self.get_transaction(transaction_id)
        self._accounts = tuple(apply_impact(self._accounts, transaction, REVERT))
        self._transactions = tuple(
            t for t in self._transactions if t.id != transaction_id
        )
        self._record(f"delete_transaction id={transaction_id}")
        return transaction

    def settle_work_pool(self) -> list[Transaction]:
        """Mark every pending work transaction as settled.

        Settlement is a label change only; no balance moves.

        Returns:
            list[Transaction]: The transactions that were settled.
        """
        settled: list[Transaction] = []
        relabeled: list[Transaction] = []
        for transaction in self._transactions:
            if pool_of(transaction) == PoolKind.WORK:
                transaction = replace(
                    transaction,
                    pool=WorkTag(status=WorkStatus.SETTLED),
                )
                settled.append(transaction)
            relabeled.append(transaction)
        if not settled:
            return []
        self._transactions = tuple(relabeled)
        self._record(f"settle_work_pool count={len(settled)}")
        return settled

    # Investments

    def open_investment(
        self,
        *,
        name: str,
        funding_account_id: str | None,
        capital: Decimal,
        buy_price: Decimal,
        currency: Currency,
        buy_commission: Decimal = Decimal("0"),
        category: InvestmentCategory = InvestmentCategory.STOCKS,
        quantity: Decimal | None = None,
        current_market_price: Decimal | None = None,
        ticker: str | None = None,
        yield_rate: Decimal | None = None,
        yield_period: YieldPeriod | None = None,
        date: str | None = None,
    ) -> tuple[Investment, Transaction]:
        """Open a position funded by one of the user's accounts.

        The funding account is debited by capital plus commission through a
        transfer transaction linked to the new position.

        Raises:
            LedgerValidationError: If the funding account is missing or its
                currency differs.
            EntityNotFoundError: If the funding account does not exist.
            InsufficientFundsError: If the account cannot cover the cost.
        """
        if not funding_account_id:
            raise LedgerValidationError("A funding account is required")
        if buy_commission < 0:
            raise LedgerValidationError("Commission cannot be negative")
        account = self.get_account(funding_account_id)
        if account.currency != currency:
            raise LedgerValidationError(
                f"Funding account {account.name} holds "
                f"{account.currency.value}, investment is in {currency.value}"
            )
        total_cost = capital + buy_commission
        if account.balance < total_cost:
            raise InsufficientFundsError(account.name, account.balance, total_cost)

        opened_on = date or self._today().isoformat()
        investment = open_position(
            investment_id=self._new_id(),
            name=name,
            capital=capital,
            buy_price=buy_price,
            currency=currency,
            category=category,
            quantity=quantity,
            current_market_price=current_market_price,
            ticker=ticker or None,
            broker_id=account.id if account.type == AccountType.BROKER else None,
            yield_rate=yield_rate,
            yield_period=yield_period,
            date=opened_on,
        )
        transaction = Transaction(
            id=self._new_id(),
            description=f"Inversión: {name}",
            amount=total_cost,
            commission=buy_commission,
            type=TransactionType.TRANSFER,
            category=INVESTMENT_CATEGORY_LABEL,
            date=opened_on,
            currency=currency,
            account_id=account.id,
            related_investment_id=investment.id,
        )
        self._validate_transaction(transaction)

        self._accounts = tuple(apply_impact(self._accounts, transaction, APPLY))
        self._transactions = (transaction, *self._transactions)
        self._investments = (*self._investments, investment)
        self._record(
            f"open_investment id={investment.id} cost={total_cost} "
            f"{currency.value} from={account.id}"
        )
        return investment, transaction

    def update_investment(self, investment: Investment) -> Investment | None:
        """Replace a position; positions without units are removed.

        Returns:
            Investment | None: The stored position, None if it was closed.
        """
        self.get_investment(investment.id)
        self._store_investment(investment)
        self._record(f"update_investment id={investment.id}")
        return None if investment.is_closed else investment

    def update_investment_price(
        self,
        investment_id: str,
        price: Decimal,
    ) -> Investment:
        """Revalue a position at a new market price."""
        investment = mark_to_market(self.get_investment(investment_id), price)
        self._store_investment(investment)
        self._record(f"update_investment_price id={investment_id} price={price}")
        return investment

    def liquidate_investment(
        self,
        investment_id: str,
        units_sold: Decimal,
        sell_price: Decimal,
        *,
        commission: Decimal = Decimal("0"),
        target_account_id: str | None = None,
        date: str | None = None,
    ) -> tuple[Investment | None, Transaction | None]:
        """Sell part or all of a position.

        Proceeds minus commission are credited to ``target_account_id``
        through a transfer, so they never count as personal income.

        Returns:
            tuple: Remaining position (None once closed) and the proceeds
            transfer (None when no target account was given).
        """
        if commission < 0:
            raise LedgerValidationError("Commission cannot be negative")
        investment = self.get_investment(investment_id)
        remaining, proceeds = liquidate_position(investment, units_sold, sell_price)

        transaction = None
        accounts = self._accounts
        if target_account_id and proceeds > 0:
            self.get_account(target_account_id)
            transaction = Transaction(
                id=self._new_id(),
                description=f"Venta/Liquidación: {investment.name}",
                amount=proceeds,
                commission=commission,
                type=TransactionType.TRANSFER,
                category=INVESTMENT_CATEGORY_LABEL,
                date=date or self._today().isoformat(),
                currency=investment.currency,
                to_account_id=target_account_id,
                related_investment_id=investment.id,
            )
            self._validate_transaction(transaction)
            accounts = tuple(apply_impact(accounts, transaction, APPLY))

        self._accounts = accounts
        if transaction is not None:
            self._transactions = (transaction, *self._transactions)
        self._store_investment(remaining)
        self._record(
            f"liquidate_investment id={investment_id} units={units_sold} "
            f"proceeds={proceeds}"
        )
        return (None if remaining.is_closed else remaining), transaction

    def record_yield(
        self,
        investment_id: str,
        amount: Decimal,
        target_account_id: str,
        *,
        date: str | None = None,
    ) -> Transaction:
        """Book a dividend or interest payment as income.

        The position itself is left untouched.
        """
        investment = self.get_investment(investment_id)
        draft = Transaction(
            id="",
            description=f"Rendimiento: {investment.name}",
            amount=amount,
            type=TransactionType.INCOME,
            category=INVESTMENT_CATEGORY_LABEL,
            date=date or self._today().isoformat(),
            currency=investment.currency,
            account_id=target_account_id,
            related_investment_id=investment.id,
        )
        return self.add_transaction(draft)

    def delete_investment(self, investment_id: str) -> Investment:
        """Remove a position without touching any balance."""
        investment = self.get_investment(investment_id)
        self._investments = tuple(
            i for i in self._investments if i.id != investment_id
        )
        self._record(f"delete_investment id={investment_id}")
        return investment

    def _store_investment(self, investment: Investment) -> None:
        self._investments = tuple(
            investment if i.id == investment.id else i
            for i in self._investments
            if i.id != investment.id or not investment.is_closed
        )

    # Budgets

    def set_budget(
        self,
        category: str,
        limit: Decimal,
        currency: Currency,
        month: str,
    ) -> Budget:
        """Create or replace the budget of a category for ``month``."""
        if not category or not category.strip():
            raise BudgetValidationError("Budget category is required")
        if limit <= 0:
            raise BudgetValidationError(f"Budget limit must be positive: {limit}")
        if not is_valid_month(month):
            raise BudgetValidationError(f"Invalid budget month: {month}")
        budget = Budget(
            id=self._new_id(),
            category=category.strip(),
            limit=limit,
            currency=currency,
            month=month,
        )
        self._budgets = tuple(replace_budget(self._budgets, budget))
        self._record(
            f"set_budget category={budget.category} month={month} "
            f"limit={limit} {currency.value}"
        )
        return budget

    def delete_budget(self, budget_id: str) -> Budget:
        """Delete a stored budget record."""
        budget = next((b for b in self._budgets if b.id == budget_id), None)
        if budget is None:
            raise EntityNotFoundError("Budget", budget_id)
        self._budgets = tuple(b for b in self._budgets if b.id != budget_id)
        self._record(f"delete_budget id={budget_id}")
        return budget

    # Categories

    def set_expense_categories(self, categories: Iterable[str]) -> tuple[str, ...]:
        self._expense_categories = self._clean_categories(categories)
        self._record(f"set_expense_categories count={len(self._expense_categories)}")
        return self._expense_categories

    def set_income_categories(self, categories: Iterable[str]) -> tuple[str, ...]:
        self._income_categories = self._clean_categories(categories)
        self._record(f"set_income_categories count={len(self._income_categories)}")
        return self._income_categories

    @staticmethod
    def _clean_categories(categories: Iterable[str]) -> tuple[str, ...]:
        cleaned = (c.strip() for c in categories if isinstance(c, str))
        return tuple(dict.fromkeys(c for c in cleaned if c))

    # Helpers

    @staticmethod
    def _normalize(transaction: Transaction) -> Transaction:
        if isinstance(transaction.pool, CustodyTag):
            owner = transaction.pool.owner.strip() or UNKNOWN_OWNER
            if owner != transaction.pool.owner:
                return replace(transaction, pool=CustodyTag(owner=owner))
        return transaction

    @staticmethod
    def _validate_transaction(transaction: Transaction) -> None:
        if transaction.amount <= 0:
            raise TransactionValidationError(
                f"Amount must be positive: {transaction.amount}"
            )
        if transaction.commission < 0:
            raise TransactionValidationError(
                f"Commission cannot be negative: {transaction.commission}"
            )
        if not is_valid_date(transaction.date):
            raise TransactionValidationError(
                f"Date must be formatted YYYY-MM-DD: {transaction.date}"
            )
        if transaction.type == TransactionType.TRANSFER:
            if not transaction.account_id and not transaction.to_account_id:
                raise TransactionValidationError(
                    "Transfer needs a source or destination account"
                )
            if transaction.account_id == transaction.to_account_id:
                raise TransactionValidationError(
                    "Transfer source and destination must differ"
                )
            if transaction.target_amount is not None and transaction.target_amount <= 0:
                raise TransactionValidationError(
                    f"Target amount must be positive: {transaction.target_amount}"
                )
            return
        if not transaction.account_id:
            raise TransactionValidationError(
                f"{transaction.type.value} needs an account"
            )
        if (
            transaction.type == TransactionType.ADJUSTMENT
            and transaction.adjustment_direction is None
        ):
            raise TransactionValidationError(
                "Adjustment needs a direction"
            )

    def _require_accounts(self, account_ids: Iterable[str]) -> None:
        for account_id in account_ids:
            self.get_account(account_id)

    def _record(self, message: str) -> None:
        self._audit.info(message)
        if self._on_change is not None:
            self._on_change(self.snapshot())


__all__ = ["LedgerStore", "ChangeListener"]
