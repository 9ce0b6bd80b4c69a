"""Tests for the command-line adapters."""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

from finanza.adapters import (
    db_connection_cli,
    ledger_summary_cli,
    purge_user_data_cli,
    update_prices_cli,
)
from finanza.application.ports.asset_prices import AssetQuote
from finanza.application.ports.exchange_rate import ExchangeRateQuote
from finanza.application.use_cases.ledger_store import LedgerStore
from finanza.application.use_cases.purge_snapshot import PurgeResult
from finanza.application.use_cases.snapshot_sync import SyncStatus
from finanza.domain.models import AccountType, Currency
from finanza.infrastructure.settings import LedgerSettings


class _DummyConnection:
    def __init__(self) -> None:
        self.executed: list[str] = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def exec_driver_sql(self, statement: str) -> None:
        self.executed.append(statement)


class _DummyEngine:
    def __init__(self, url: str) -> None:
        self.url = url
        self.connection = _DummyConnection()

    def connect(self):
        return self.connection


def _rate_provider(rate: str = "40"):
    provider = MagicMock()
    provider.fetch_rate.return_value = ExchangeRateQuote(
        rate=Decimal(rate),
        source_name="TCambio",
        fetched_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
    )
    return provider


def _store() -> LedgerStore:
    return LedgerStore(logger=MagicMock(), audit_logger=MagicMock())


def test_db_connection_main_logs_successful_check(monkeypatch):
    """The CLI should log the connection URL and execute SELECT 1."""
    engine = _DummyEngine("postgresql://state")
    adapter = MagicMock()
    adapter.get_engine.return_value = engine
    log_messages: list[str] = []

    class _Logger:
        def info(self, msg: str) -> None:
            log_messages.append(msg)

    monkeypatch.setattr(db_connection_cli, "build_database_adapter", lambda: adapter)
    monkeypatch.setattr(db_connection_cli, "get_app_logger", lambda: _Logger())

    db_connection_cli.main()

    assert "postgresql://state" in log_messages[0]
    assert engine.connection.executed == ["SELECT 1"]


def test_ledger_summary_prints_totals(monkeypatch, capsys):
    store = _store()
    store.open_account("Caja", AccountType.CASH, Currency.VES, Decimal("4000"))
    sync = MagicMock()
    monkeypatch.setattr(ledger_summary_cli.LedgerSettings, "from_env", lambda: LedgerSettings())
    monkeypatch.setattr(
        ledger_summary_cli,
        "build_ledger_session",
        lambda settings: (store, sync),
    )
    monkeypatch.setattr(
        ledger_summary_cli,
        "build_exchange_rate_provider",
        lambda settings: _rate_provider("40"),
    )

    ledger_summary_cli.main()

    out = capsys.readouterr().out
    assert "Rate: 40 Bs/USD (TCambio)" in out
    assert "Net worth: $100.00" in out
    sync.close.assert_called_once()


def test_update_prices_flushes_sync(monkeypatch, capsys):
    store = _store()
    broker = store.open_account("IBKR", AccountType.BROKER, Currency.USD, Decimal("500"))
    store.open_investment(
        name="Apple",
        funding_account_id=broker.id,
        capital=Decimal("300"),
        buy_price=Decimal("150"),
        currency=Currency.USD,
        ticker="AAPL",
    )
    sync = MagicMock()
    sync.flush.return_value = SyncStatus.SAVED
    prices = MagicMock()
    prices.lookup.return_value = AssetQuote(
        name="Apple Inc.", price=Decimal("200"), source="yahoo", symbol="AAPL"
    )
    monkeypatch.setattr(update_prices_cli.LedgerSettings, "from_env", lambda: LedgerSettings())
    monkeypatch.setattr(update_prices_cli, "build_ledger_session", lambda settings: (store, sync))
    monkeypatch.setattr(
        update_prices_cli,
        "build_exchange_rate_provider",
        lambda settings: _rate_provider(),
    )
    monkeypatch.setattr(update_prices_cli, "build_asset_price_provider", lambda settings: prices)

    update_prices_cli.main()

    assert "Updated 1 positions (sync: saved)." in capsys.readouterr().out
    assert store.investments[0].value == Decimal("400")


def test_purge_reports_failures(monkeypatch, capsys):
    use_case = MagicMock()
    use_case.execute.return_value = PurgeResult(
        removed=["ana"],
        failures={"f360_user": "locked"},
    )
    monkeypatch.setattr(
        purge_user_data_cli.LedgerSettings,
        "from_env",
        lambda: LedgerSettings(user_id="ana"),
    )
    monkeypatch.setattr(purge_user_data_cli, "build_purge_use_case", lambda settings: use_case)

    purge_user_data_cli.main()

    out = capsys.readouterr().out
    use_case.execute.assert_called_once_with("ana")
    assert "Removed 1 stored snapshots." in out
    assert "Could not remove f360_user: locked" in out
