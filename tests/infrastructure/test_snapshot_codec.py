"""Tests for the snapshot JSON codec."""

import json
from dataclasses import replace
from decimal import Decimal
from unittest.mock import MagicMock

from finanza.domain.models import (
    AccountType,
    Currency,
    CustodyTag,
    EntitySnapshot,
    InvestmentCategory,
    PersonalTag,
    TransactionType,
    WorkStatus,
    WorkTag,
)
from finanza.infrastructure.snapshot_codec import (
    decode_pool,
    decode_snapshot,
    dumps_snapshot,
    encode_snapshot,
    json_number,
    loads_snapshot,
)

PAYLOAD = {
    "accounts": [
        {
            "id": "a1",
            "name": "Zelle",
            "type": "Corriente",
            "balance": 1200.5,
            "currency": "USD",
        },
        {
            "id": "a2",
            "name": "Visa",
            "type": "Tarjeta de Crédito",
            "balance": -300,
            "currency": "USD",
            "creditLimit": 1000,
            "closingDay": 15,
            "dueDay": 40,
        },
    ],
    "transactions": [
        {
            "id": "t1",
            "description": "Viáticos",
            "amount": 100,
            "type": "Ingreso",
            "category": "Trabajo",
            "date": "2024-05-01",
            "currency": "USD",
            "accountId": "a1",
            "isWorkRelated": True,
            "workStatus": "settled",
        },
        {
            "id": "t2",
            "description": "Para Ana",
            "amount": 50,
            "type": "Ingreso",
            "category": "Custodia",
            "date": "2024-05-02",
            "currency": "USD",
            "accountId": "a1",
            "isThirdParty": True,
            "thirdPartyOwner": "  ",
        },
        {
            "id": "t3",
            "description": "Venta",
            "amount": 10,
            "type": "Transferencia",
            "category": "Inversiones",
            "date": "2024-05-03",
            "currency": "USD",
            "accountId": "",
            "toAccountId": "a1",
        },
    ],
    "investments": [
        {
            "id": "i1",
            "name": "Casa",
            "initialInvestment": 5000,
            "quantity": 1,
            "buyPrice": 5000,
            "value": 5000,
            "currency": "USD",
            "category": "Terrenos",
        }
    ],
    "budgets": [
        {"id": "b1", "category": "Comida", "limit": 200, "currency": "USD", "month": "2024-05"}
    ],
    "expenseCategories": ["Comida", 7, "Casa"],
}


def test_decode_snapshot_reads_legacy_payload() -> None:
    logger = MagicMock()

    snapshot = decode_snapshot(PAYLOAD, logger=logger)

    zelle, visa = snapshot.accounts
    assert zelle.type == AccountType.CHECKING
    assert zelle.credit_limit is None
    assert visa.credit_limit == Decimal("1000")
    assert visa.closing_day == 15
    assert visa.due_day is None
    work, custody, proceeds = snapshot.transactions
    assert work.pool == WorkTag(WorkStatus.SETTLED)
    assert custody.pool == CustodyTag("Unknown")
    assert proceeds.account_id is None
    assert proceeds.type == TransactionType.TRANSFER
    [investment] = snapshot.investments
    assert investment.category == InvestmentCategory.OTHER
    assert investment.current_market_price == Decimal("5000")
    assert snapshot.expense_categories == ("Comida", "Casa")
    assert snapshot.income_categories == EntitySnapshot.empty().income_categories


def test_decode_pool_prefers_custody_when_both_flags_set() -> None:
    logger = MagicMock()

    pool = decode_pool(
        {"id": "t9", "isWorkRelated": True, "isThirdParty": True, "thirdPartyOwner": "Luis"},
        logger,
    )

    assert pool == CustodyTag("Luis")
    logger.warning.assert_called_once()


def test_decode_pool_defaults() -> None:
    assert decode_pool({}) == PersonalTag()
    assert decode_pool({"isWorkRelated": True, "workStatus": "??"}) == WorkTag()


def test_decode_snapshot_skips_malformed_records() -> None:
    """Bad records are dropped with a warning and the rest survive."""
    logger = MagicMock()
    payload = {
        "accounts": [
            {"id": "ok", "name": "Caja", "type": "Efectivo", "balance": 5, "currency": "VES"},
            {"id": "", "name": "Sin id", "type": "Efectivo", "balance": 5, "currency": "VES"},
            {"id": "x", "name": "Moneda", "type": "Efectivo", "balance": 5, "currency": "EUR"},
            {"id": "y", "name": "Saldo", "type": "Efectivo", "balance": "mucho", "currency": "USD"},
            "not-a-dict",
        ],
        "transactions": {"id": "t1"},
    }

    snapshot = decode_snapshot(payload, logger=logger)

    assert [a.id for a in snapshot.accounts] == ["ok"]
    assert snapshot.transactions == ()
    assert logger.warning.call_count == 5


def test_decode_snapshot_non_object_yields_defaults() -> None:
    logger = MagicMock()

    assert decode_snapshot(["nope"], logger=logger) == EntitySnapshot.empty()
    logger.warning.assert_called_once()


def test_encode_snapshot_writes_wire_keys() -> None:
    snapshot = decode_snapshot(PAYLOAD, logger=MagicMock())

    payload = encode_snapshot(snapshot)

    work, custody, proceeds = payload["transactions"]
    assert work["isWorkRelated"] is True
    assert work["workStatus"] == "settled"
    assert "isThirdParty" not in work
    assert custody["thirdPartyOwner"] == "Unknown"
    assert proceeds["accountId"] == ""
    assert payload["accounts"][0]["balance"] == 1200.5
    assert payload["accounts"][1]["creditLimit"] == 1000
    assert "creditLimit" not in payload["accounts"][0]


def test_dumps_and_loads_keep_decimal_precision() -> None:
    snapshot = decode_snapshot(PAYLOAD, logger=MagicMock())

    text = dumps_snapshot(snapshot)
    restored = loads_snapshot(text, logger=MagicMock())

    assert json.loads(text)["budgets"][0]["month"] == "2024-05"
    assert restored == snapshot
    assert restored.accounts[0].balance == Decimal("1200.5")


def test_json_number_falls_back_to_text_for_inexact_floats() -> None:
    third = Decimal(1) / Decimal(3)

    assert json_number(Decimal("1200")) == 1200
    assert json_number(Decimal("1200.5")) == 1200.5
    assert json_number(third) == str(third)


def test_exact_decimal_survives_wire_text() -> None:
    snapshot = decode_snapshot(PAYLOAD, logger=MagicMock())
    balance = Decimal("98765432109876.123456789012")
    snapshot = EntitySnapshot(
        accounts=(replace(snapshot.accounts[0], balance=balance),)
    )

    text = dumps_snapshot(snapshot)

    assert json.loads(text)["accounts"][0]["balance"] == str(balance)
    assert loads_snapshot(text).accounts[0].balance == balance
