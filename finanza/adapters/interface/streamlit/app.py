"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal, InvalidOperation

import streamlit as st
import altair as alt

from finanza.application.ports.exchange_rate import ExchangeRateQuote
from finanza.application.use_cases.get_budget_overview import (
    GetBudgetOverviewUseCase,
)
from finanza.application.use_cases.get_credit_overview import (
    GetCreditOverviewUseCase,
)
from finanza.application.use_cases.get_monthly_flow import GetMonthlyFlowUseCase
from finanza.application.use_cases.get_net_worth_summary import (
    GetNetWorthSummaryUseCase,
)
from finanza.application.use_cases.get_pool_balances import (
    GetCustodySummaryUseCase,
    GetWorkPoolUseCase,
)
from finanza.application.use_cases.ledger_store import LedgerStore
from finanza.application.use_cases.refresh_exchange_rate import (
    RefreshExchangeRateUseCase,
)
from finanza.domain.errors import LedgerError, TransactionValidationError
from finanza.domain.models import (
    Account,
    AdjustmentDirection,
    BudgetOverview,
    CustodySummary,
    CustodyTag,
    PersonalTag,
    PoolTag,
    Transaction,
    TransactionType,
    WorkTag,
)
from finanza.domain.services.periods import current_month, is_valid_month
from finanza.infrastructure.container import (
    build_exchange_rate_provider,
    build_ledger_session,
)
from finanza.infrastructure.settings import LedgerSettings

POOL_OPTIONS = ["Personal", "Trabajo", "Custodia"]
ADJUSTMENT_OPTIONS = {
    "Sumar": AdjustmentDirection.PLUS,
    "Restar": AdjustmentDirection.MINUS,
}


def _check_altair_dependencies() -> tuple[bool, str | None]:
    """Verify that the numpy/pandas installs Altair relies on are usable."""
    try:
        import numpy
        import pandas
    except ImportError as exc:
        return False, f"Altair dependencies missing: {exc}"
    if not hasattr(numpy, "ndarray"):
        return False, "numpy is installed but incomplete (no ndarray)."
    if not hasattr(pandas, "Timestamp"):
        return False, "pandas is installed but incomplete (no Timestamp)."
    return True, None


def _fetch_session():
    """Build the ledger store and its sync service from settings."""
    return build_ledger_session(LedgerSettings.from_env())


@st.cache_resource(show_spinner=False)
def _load_session():
    """Cached wrapper around _fetch_session, one per server process."""
    return _fetch_session()


def _fetch_rate_quote() -> ExchangeRateQuote:
    """Fetch the current exchange rate, falling back to the default."""
    settings = LedgerSettings.from_env()
    use_case = RefreshExchangeRateUseCase(
        build_exchange_rate_provider(settings),
        default_rate=settings.default_rate,
    )
    return use_case.execute()


@st.cache_data(show_spinner=False, ttl=300)
def _load_rate_quote() -> ExchangeRateQuote:
    """Cached wrapper around _fetch_rate_quote."""
    return _fetch_rate_quote()


def _format_currency(value: Decimal, currency_code: str = "USD") -> str:
    """Format currency values for display."""
    symbol = "$" if currency_code == "USD" else "Bs"
    return f"{symbol} {value:,.2f}"


def _parse_amount(raw: str) -> Decimal | None:
    try:
        value = Decimal(raw.strip().replace(",", "."))
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def _prepare_custody_chart_data(
    summary: CustodySummary,
) -> list[dict[str, str | float]]:
    """Prepare donut chart data for owners with funds still held.

    Args:
        summary: Custody balances per owner in USD.

    Returns:
        list: Altair-ready rows with labels and shares.
    """
    held = [owner for owner in summary.owners if owner.balance > 0]
    total = sum((owner.balance for owner in held), start=Decimal("0"))
    data: list[dict[str, str | float]] = []
    for owner in sorted(held, key=lambda item: item.balance, reverse=True):
        share = (owner.balance / total) * Decimal("100") if total else Decimal("0")
        data.append(
            {
                "owner": owner.owner,
                "amount": float(owner.balance),
                "amount_label": _format_currency(owner.balance),
                "share_label": f"{share:.1f}%",
            }
        )
    return data


def _render_custody_chart(summary: CustodySummary, chart_size: int = 300) -> None:
    """Render a donut chart of custody balances by owner."""
    data = _prepare_custody_chart_data(summary)
    if not data:
        st.info("No hay fondos de terceros en custodia.")
        return
    ok, message = _check_altair_dependencies()
    if not ok:
        st.warning(message)
        st.dataframe(data, hide_index=True)
        return
    hover = alt.selection_point(
        name="hover",
        fields=["owner"],
        on="view:mouseover",
        clear="view:mouseout",
        empty=False,
    )
    base = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.4,
        cornerRadius=8,
        padAngle=0.02,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "owner:N",
            legend=alt.Legend(orient="bottom", title=None),
        ),
        opacity=alt.condition(hover, alt.value(1.0), alt.value(0.4)),
        tooltip=[
            alt.Tooltip("owner:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    )
    hover_text = alt.Chart(alt.Data(values=data)).transform_filter(
        hover
    ).mark_text(
        align="center",
        baseline="middle",
        fontSize=16,
        fontWeight="bold",
    ).encode(
        text="amount_label:N"
    )
    chart = alt.layer(base, hover_text).add_params(hover).properties(
        width=chart_size,
        height=chart_size,
    ).configure_view(stroke=None)
    st.altair_chart(chart)


def _budget_rows(overview: BudgetOverview) -> list[dict[str, str]]:
    """Convert budget progress into table rows."""
    rows = []
    for item in overview.items:
        code = item.budget.currency.value
        rows.append(
            {
                "Categoría": item.budget.category,
                "Límite": _format_currency(item.budget.limit, code),
                "Gastado": _format_currency(item.spent, code),
                "Restante": _format_currency(item.remaining, code),
                "Progreso": f"{item.percentage:.0f}%",
                "Estado": item.status.value,
                "Origen": (
                    f"desde {item.budget.month}"
                    if item.is_carried_forward
                    else "este mes"
                ),
            }
        )
    return rows


def _transaction_rows(
    transactions: Sequence[Transaction],
    store: LedgerStore,
) -> list[dict[str, str]]:
    """Convert transactions into table rows."""
    names = {account.id: account.name for account in store.accounts}
    rows = []
    for transaction in transactions:
        pool = transaction.pool
        if isinstance(pool, WorkTag):
            pool_label = f"Trabajo ({pool.status.value})"
        elif isinstance(pool, CustodyTag):
            pool_label = f"Custodia: {pool.owner}"
        else:
            pool_label = "Personal"
        rows.append(
            {
                "Fecha": transaction.date,
                "Descripción": transaction.description,
                "Tipo": transaction.type.value,
                "Categoría": transaction.category,
                "Monto": _format_currency(
                    transaction.amount, transaction.currency.value
                ),
                "Cuenta": names.get(transaction.account_id, "—"),
                "Destino": names.get(transaction.to_account_id, "—"),
                "Fondo": pool_label,
            }
        )
    return rows


def _render_dashboard(store: LedgerStore, rate: Decimal, month: str) -> None:
    net_worth = GetNetWorthSummaryUseCase(store).execute(rate)
    flow = GetMonthlyFlowUseCase(store).execute(rate, month)
    work = GetWorkPoolUseCase(store).execute(rate)
    custody = GetCustodySummaryUseCase(store).execute(rate)

    worth_col, own_col, debt_col = st.columns(3)
    worth_col.metric("Patrimonio neto", _format_currency(net_worth.net_worth))
    own_col.metric("Fondos propios", _format_currency(net_worth.own_funds))
    debt_col.metric(
        "Deuda de tarjetas",
        _format_currency(net_worth.credit_debt_total),
    )

    income_col, expense_col, net_col = st.columns(3)
    income_col.metric("Ingresos", _format_currency(flow.income))
    expense_col.metric("Gastos", _format_currency(flow.expense))
    net_col.metric("Balance del mes", _format_currency(flow.net))

    work_col, custody_col = st.columns(2)
    with work_col:
        st.subheader("Fondo de trabajo")
        st.metric(
            "Saldo pendiente",
            _format_currency(work.balance),
            work.status.value,
        )
        st.progress(min(int(work.spend_ratio_pct), 100))
        if work.transactions and st.button("Liquidar fondo de trabajo"):
            settled = store.settle_work_pool()
            st.success(f"{len(settled)} movimientos liquidados.")
    with custody_col:
        st.subheader("Fondos de terceros")
        _render_custody_chart(custody)


def _render_accounts(store: LedgerStore) -> None:
    st.subheader("Cuentas")
    st.dataframe(
        [
            {
                "Nombre": account.name,
                "Tipo": account.type.value,
                "Saldo": _format_currency(account.balance, account.currency.value),
            }
            for account in store.accounts
        ],
        hide_index=True,
    )
    credit = GetCreditOverviewUseCase(store).execute()
    if credit:
        st.subheader("Tarjetas de crédito")
        for summary in credit:
            st.caption(
                f"{summary.account_name}: deuda "
                f"{_format_currency(summary.debt)} de "
                f"{_format_currency(summary.limit)}"
            )
            st.progress(int(summary.utilization_pct))


def _render_budgets(store: LedgerStore, rate: Decimal, month: str) -> None:
    overview = GetBudgetOverviewUseCase(store).execute(rate, month)
    st.subheader(f"Presupuestos {month}")
    if not overview.items:
        st.info("No hay presupuestos activos para este mes.")
        return
    st.dataframe(_budget_rows(overview), hide_index=True)


def _build_transaction_draft(
    kind: TransactionType,
    account: Account,
    *,
    description: str,
    amount_raw: str,
    category: str,
    on_date: date,
    pool: PoolTag,
    commission_raw: str = "0",
    to_account: Account | None = None,
    target_raw: str = "",
    direction: AdjustmentDirection | None = None,
) -> Transaction:
    """Turn the raw form inputs into a transaction draft.

    Transfers between accounts of different currencies need the amount
    received at the destination, in the destination currency.

    Raises:
        TransactionValidationError: If an input cannot be used.
    """
    amount = _parse_amount(amount_raw)
    if amount is None:
        raise TransactionValidationError("Monto inválido.")
    commission = _parse_amount(commission_raw or "0")
    if commission is None:
        raise TransactionValidationError("Comisión inválida.")
    to_account_id = None
    target_amount = None
    if kind == TransactionType.TRANSFER:
        if to_account is None:
            raise TransactionValidationError("Selecciona la cuenta destino.")
        to_account_id = to_account.id
        if to_account.currency != account.currency:
            target_amount = _parse_amount(target_raw)
            if target_amount is None:
                raise TransactionValidationError(
                    f"Indica el monto recibido en {to_account.currency.value}."
                )
    return Transaction(
        id="",
        description=description,
        amount=amount,
        type=kind,
        category=category,
        date=on_date.isoformat(),
        currency=account.currency,
        account_id=account.id,
        commission=commission,
        to_account_id=to_account_id,
        target_amount=target_amount,
        adjustment_direction=(
            direction if kind == TransactionType.ADJUSTMENT else None
        ),
        pool=pool,
    )


def _render_transaction_form(store: LedgerStore) -> None:
    if not store.accounts:
        st.warning("Crea una cuenta antes de registrar movimientos.")
        return
    accounts = {account.name: account for account in store.accounts}
    # Outside the form so the category list follows the chosen type.
    kind = TransactionType(
        st.selectbox("Tipo", [t.value for t in TransactionType])
    )
    categories = (
        store.income_categories
        if kind == TransactionType.INCOME
        else store.expense_categories
    )
    with st.form("new_transaction", clear_on_submit=True):
        description = st.text_input("Descripción")
        amount_raw = st.text_input("Monto", value="0")
        commission_raw = st.text_input("Comisión", value="0")
        category = st.selectbox("Categoría", list(categories))
        account_name = st.selectbox("Cuenta", list(accounts))
        to_account = None
        target_raw = ""
        direction = None
        if kind == TransactionType.TRANSFER:
            to_name = st.selectbox("Destino", list(accounts))
            to_account = accounts[to_name]
            target_raw = st.text_input(
                "Monto recibido (si la moneda del destino es distinta)",
                value="",
            )
        elif kind == TransactionType.ADJUSTMENT:
            direction = ADJUSTMENT_OPTIONS[
                st.selectbox("Dirección", list(ADJUSTMENT_OPTIONS))
            ]
        on_date = st.date_input("Fecha", value=date.today())
        pool_label = st.selectbox("Fondo", POOL_OPTIONS)
        owner = st.text_input("Dueño (custodia)")
        submitted = st.form_submit_button("Guardar")
    if not submitted:
        return
    if pool_label == "Trabajo":
        pool = WorkTag()
    elif pool_label == "Custodia":
        pool = CustodyTag(owner=owner)
    else:
        pool = PersonalTag()
    try:
        draft = _build_transaction_draft(
            kind,
            accounts[account_name],
            description=description,
            amount_raw=amount_raw,
            category=category,
            on_date=on_date,
            pool=pool,
            commission_raw=commission_raw,
            to_account=to_account,
            target_raw=target_raw,
            direction=direction,
        )
        store.add_transaction(draft)
    except LedgerError as exc:
        st.error(str(exc))
        return
    st.success("Movimiento registrado.")


def _render_transactions(store: LedgerStore, month: str) -> None:
    st.subheader(f"Movimientos {month}")
    _render_transaction_form(store)
    in_month = [t for t in store.transactions if t.month == month]
    st.caption(f"{len(in_month)} movimientos")
    st.dataframe(_transaction_rows(in_month, store), hide_index=True)


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Finanza", layout="wide")
    st.title("Finanza")

    store, sync = _load_session()
    quote = _load_rate_quote()
    rate = quote.rate

    page = st.sidebar.selectbox(
        "Página",
        ["Resumen", "Cuentas", "Movimientos", "Presupuestos"],
    )
    month = st.sidebar.text_input("Mes (YYYY-MM)", value=current_month())
    if not is_valid_month(month):
        st.sidebar.error("Mes inválido, usando el mes actual.")
        month = current_month()
    st.sidebar.caption(
        f"Tasa: {rate} Bs/USD ({quote.source_name})"
        + (f" · {quote.source_date_text}" if quote.source_date_text else "")
    )
    st.sidebar.caption(f"Sincronización: {sync.status.value}")

    if page == "Resumen":
        _render_dashboard(store, rate, month)
    elif page == "Cuentas":
        _render_accounts(store)
    elif page == "Movimientos":
        _render_transactions(store, month)
    else:
        _render_budgets(store, rate, month)


if __name__ == "__main__":  # pragma: no cover
    main()

