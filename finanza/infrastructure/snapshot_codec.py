"""JSON wire format for entity snapshots.

The payload keeps the historical camelCase keys and Spanish enum labels so
state written by earlier clients still loads. Pool membership is stored as
the legacy ``isWorkRelated``/``workStatus``/``isThirdParty``/``thirdPartyOwner``
flags and mapped to a pool tag on load. Amounts are JSON numbers, except
Decimals a float cannot hold exactly, which are written as numeric strings.

On load every field is type-checked. Malformed records are
skipped with a warning, and a payload that is not an object yields empty
defaults.
"""

import json
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, TypeVar

from finanza.domain.constants import UNKNOWN_OWNER
from finanza.domain.models import (
    Account,
    AccountType,
    AdjustmentDirection,
    Budget,
    Currency,
    CustodyTag,
    EntitySnapshot,
    Investment,
    InvestmentCategory,
    PersonalTag,
    Transaction,
    TransactionType,
    WorkStatus,
    WorkTag,
    YieldPeriod,
)
from finanza.infrastructure.logging.logger import get_app_logger
from finanza.utils.decimal_utils import parse_decimal

E = TypeVar("E", bound=Enum)
R = TypeVar("R")


class _InvalidRecord(ValueError):
    """Raised internally when a record cannot be decoded."""


def json_number(value: Decimal) -> int | float | str:
    """Return a JSON-ready number, or its text when a float would drop digits."""
    if value == value.to_integral_value():
        return int(value)
    as_float = float(value)
    if Decimal(repr(as_float)) == value:
        return as_float
    return str(value)


def _optional_number(value: Decimal | None) -> int | float | str | None:
    return None if value is None else json_number(value)


def _prune(record: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in record.items() if value is not None}


def encode_account(account: Account) -> dict[str, Any]:
    return _prune(
        {
            "id": account.id,
            "name": account.name,
            "type": account.type.value,
            "balance": json_number(account.balance),
            "currency": account.currency.value,
            "color": account.color,
            "creditLimit": _optional_number(account.credit_limit),
            "closingDay": account.closing_day,
            "dueDay": account.due_day,
        }
    )


def encode_transaction(transaction: Transaction) -> dict[str, Any]:
    record = {
        "id": transaction.id,
        "description": transaction.description,
        "amount": json_number(transaction.amount),
        "commission": json_number(transaction.commission),
        "type": transaction.type.value,
        "category": transaction.category,
        "date": transaction.date,
        "currency": transaction.currency.value,
        "accountId": transaction.account_id or "",
        "toAccountId": transaction.to_account_id,
        "targetAmount": _optional_number(transaction.target_amount),
        "relatedInvestmentId": transaction.related_investment_id,
        "adjustmentDirection": (
            transaction.adjustment_direction.value
            if transaction.adjustment_direction
            else None
        ),
    }
    pool = transaction.pool
    if isinstance(pool, WorkTag):
        record["isWorkRelated"] = True
        record["workStatus"] = pool.status.value
    elif isinstance(pool, CustodyTag):
        record["isThirdParty"] = True
        record["thirdPartyOwner"] = pool.owner
    return _prune(record)


def encode_investment(investment: Investment) -> dict[str, Any]:
    return _prune(
        {
            "id": investment.id,
            "name": investment.name,
            "ticker": investment.ticker,
            "brokerId": investment.broker_id,
            "initialInvestment": json_number(investment.initial_investment),
            "quantity": json_number(investment.quantity),
            "buyPrice": json_number(investment.buy_price),
            "currentMarketPrice": json_number(investment.current_market_price),
            "value": json_number(investment.value),
            "currency": investment.currency.value,
            "performance": json_number(investment.performance),
            "category": investment.category.value,
            "date": investment.date,
            "yieldRate": _optional_number(investment.yield_rate),
            "yieldPeriod": (
                investment.yield_period.value if investment.yield_period else None
            ),
        }
    )


def encode_budget(budget: Budget) -> dict[str, Any]:
    return {
        "id": budget.id,
        "category": budget.category,
        "limit": json_number(budget.limit),
        "currency": budget.currency.value,
        "month": budget.month,
    }


def encode_snapshot(snapshot: EntitySnapshot) -> dict[str, Any]:
    """Convert a snapshot to its JSON-compatible payload.

    Args:
        snapshot: Entities to serialize.

    Returns:
        dict[str, Any]: Payload with camelCase keys.
    """
    return {
        "accounts": [encode_account(a) for a in snapshot.accounts],
        "transactions": [encode_transaction(t) for t in snapshot.transactions],
        "investments": [encode_investment(i) for i in snapshot.investments],
        "budgets": [encode_budget(b) for b in snapshot.budgets],
        "expenseCategories": list(snapshot.expense_categories),
        "incomeCategories": list(snapshot.income_categories),
    }


def _require_id(record: dict[str, Any]) -> str:
    value = record.get("id")
    if not isinstance(value, str) or not value.strip():
        raise _InvalidRecord(f"invalid id {value!r}")
    return value


def _text(record: dict[str, Any], key: str, default: str = "") -> str:
    value = record.get(key)
    return value if isinstance(value, str) else default


def _optional_text(record: dict[str, Any], key: str) -> str | None:
    value = record.get(key)
    if isinstance(value, str) and value.strip():
        return value
    return None


def _enum(enum_cls: type[E], value: Any) -> E:
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise _InvalidRecord(f"invalid {enum_cls.__name__} {value!r}") from exc


def _optional_enum(enum_cls: type[E], value: Any) -> E | None:
    if value is None or value == "":
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return None


def _amount(record: dict[str, Any], key: str) -> Decimal:
    value = parse_decimal(record.get(key))
    if value is None:
        raise _InvalidRecord(f"invalid {key} {record.get(key)!r}")
    return value


def _optional_amount(
    record: dict[str, Any],
    key: str,
    default: Decimal | None = None,
) -> Decimal | None:
    value = parse_decimal(record.get(key))
    return default if value is None else value


def _day(record: dict[str, Any], key: str) -> int | None:
    value = parse_decimal(record.get(key))
    if value is None or value != value.to_integral_value():
        return None
    day = int(value)
    return day if 1 <= day <= 31 else None


def decode_account(record: dict[str, Any]) -> Account:
    account_type = _enum(AccountType, record.get("type"))
    is_credit = account_type == AccountType.CREDIT_CARD
    return Account(
        id=_require_id(record),
        name=_text(record, "name"),
        type=account_type,
        balance=_amount(record, "balance"),
        currency=_enum(Currency, record.get("currency")),
        color=_text(record, "color", "#3b82f6"),
        credit_limit=(
            _optional_amount(record, "creditLimit", Decimal("0"))
            if is_credit
            else None
        ),
        closing_day=_day(record, "closingDay") if is_credit else None,
        due_day=_day(record, "dueDay") if is_credit else None,
    )


def decode_pool(record: dict[str, Any], logger=None):
    """Map the legacy pool flags to a pool tag.

    Custody wins when both flags are set.
    """
    is_work = record.get("isWorkRelated") is True
    is_custody = record.get("isThirdParty") is True
    if is_custody:
        if is_work and logger is not None:
            logger.warning(
                f"Transaction {record.get('id')!r} flagged as work and "
                "custody, keeping custody"
            )
        owner = _text(record, "thirdPartyOwner").strip() or UNKNOWN_OWNER
        return CustodyTag(owner=owner)
    if is_work:
        status = _optional_enum(WorkStatus, record.get("workStatus"))
        return WorkTag(status=status or WorkStatus.PENDING)
    return PersonalTag()


def decode_transaction(record: dict[str, Any], logger=None) -> Transaction:
    date = record.get("date")
    if not isinstance(date, str):
        raise _InvalidRecord(f"invalid date {date!r}")
    return Transaction(
        id=_require_id(record),
        description=_text(record, "description"),
        amount=_amount(record, "amount"),
        commission=_optional_amount(record, "commission", Decimal("0")),
        type=_enum(TransactionType, record.get("type")),
        category=_text(record, "category"),
        date=date,
        currency=_enum(Currency, record.get("currency")),
        account_id=_optional_text(record, "accountId"),
        to_account_id=_optional_text(record, "toAccountId"),
        target_amount=_optional_amount(record, "targetAmount"),
        related_investment_id=_optional_text(record, "relatedInvestmentId"),
        adjustment_direction=_optional_enum(
            AdjustmentDirection, record.get("adjustmentDirection")
        ),
        pool=decode_pool(record, logger),
    )


def decode_investment(record: dict[str, Any], logger=None) -> Investment:
    name = record.get("name")
    if not isinstance(name, str):
        raise _InvalidRecord(f"invalid name {name!r}")
    category = _optional_enum(InvestmentCategory, record.get("category"))
    if category is None:
        if logger is not None:
            logger.warning(
                f"Investment {record.get('id')!r} has unknown category "
                f"{record.get('category')!r}, using {InvestmentCategory.OTHER.value}"
            )
        category = InvestmentCategory.OTHER
    buy_price = _optional_amount(record, "buyPrice", Decimal("0"))
    return Investment(
        id=_require_id(record),
        name=name,
        ticker=_optional_text(record, "ticker"),
        broker_id=_optional_text(record, "brokerId"),
        initial_investment=_optional_amount(
            record, "initialInvestment", Decimal("0")
        ),
        quantity=_optional_amount(record, "quantity", Decimal("0")),
        buy_price=buy_price,
        current_market_price=_optional_amount(
            record, "currentMarketPrice", buy_price
        ),
        value=_optional_amount(record, "value", Decimal("0")),
        currency=_enum(Currency, record.get("currency")),
        performance=_optional_amount(record, "performance", Decimal("0")),
        category=category,
        date=_optional_text(record, "date"),
        yield_rate=_optional_amount(record, "yieldRate"),
        yield_period=_optional_enum(YieldPeriod, record.get("yieldPeriod")),
    )


def decode_budget(record: dict[str, Any]) -> Budget:
    category = record.get("category")
    month = record.get("month")
    if not isinstance(category, str) or not isinstance(month, str):
        raise _InvalidRecord("budget needs a category and a month")
    return Budget(
        id=_require_id(record),
        category=category,
        limit=_amount(record, "limit"),
        currency=_enum(Currency, record.get("currency")),
        month=month,
    )


def _decode_list(
    payload: dict[str, Any],
    key: str,
    decoder: Callable[[dict[str, Any]], R],
    logger,
) -> tuple[R, ...]:
    raw = payload.get(key)
    if raw is None:
        return ()
    if not isinstance(raw, list):
        logger.warning(f"Ignoring {key}: expected a list")
        return ()
    decoded = []
    for index, record in enumerate(raw):
        if not isinstance(record, dict):
            logger.warning(f"Skipping {key}[{index}]: not an object")
            continue
        try:
            decoded.append(decoder(record))
        except _InvalidRecord as exc:
            logger.warning(f"Skipping {key}[{index}]: {exc}")
    return tuple(decoded)


def _decode_categories(
    payload: dict[str, Any],
    key: str,
    default: tuple[str, ...],
) -> tuple[str, ...]:
    raw = payload.get(key)
    if not isinstance(raw, list):
        return default
    return tuple(item for item in raw if isinstance(item, str))


def decode_snapshot(payload: Any, logger=None) -> EntitySnapshot:
    """Build a snapshot from an untrusted payload.

    Args:
        payload: Parsed JSON value.
        logger: Optional logger compatible with logging.Logger-like API.

    Returns:
        EntitySnapshot: Decoded entities, empty defaults for a non-object.
    """
    logger = logger or get_app_logger()
    if not isinstance(payload, dict):
        logger.warning("Snapshot payload is not an object, using defaults")
        return EntitySnapshot.empty()
    defaults = EntitySnapshot.empty()
    return EntitySnapshot(
        accounts=_decode_list(payload, "accounts", decode_account, logger),
        transactions=_decode_list(
            payload,
            "transactions",
            lambda record: decode_transaction(record, logger),
            logger,
        ),
        investments=_decode_list(
            payload,
            "investments",
            lambda record: decode_investment(record, logger),
            logger,
        ),
        budgets=_decode_list(payload, "budgets", decode_budget, logger),
        expense_categories=_decode_categories(
            payload, "expenseCategories", defaults.expense_categories
        ),
        income_categories=_decode_categories(
            payload, "incomeCategories", defaults.income_categories
        ),
    )


def dumps_snapshot(snapshot: EntitySnapshot) -> str:
    """Serialize a snapshot to JSON text."""
    return json.dumps(encode_snapshot(snapshot), ensure_ascii=False)


def loads_snapshot(text: str, logger=None) -> EntitySnapshot:
    """Parse JSON text into a snapshot, reading numbers as Decimal.

    Raises:
        ValueError: If ``text`` is not valid JSON.
    """
    payload = json.loads(text, parse_float=Decimal)
    return decode_snapshot(payload, logger=logger)


__all__ = [
    "encode_snapshot",
    "decode_snapshot",
    "dumps_snapshot",
    "loads_snapshot",
    "decode_pool",
    "json_number",
]
