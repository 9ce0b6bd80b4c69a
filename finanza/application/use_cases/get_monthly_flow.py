"""Use case to compute personal income and expense for a month."""

from collections.abc import Callable
from datetime import date

from finanza.application.use_cases.ledger_store import LedgerStore
from finanza.domain.models import PersonalFlowSummary
from finanza.domain.services.periods import current_month
from finanza.domain.services.pools import personal_flow_summary
from finanza.infrastructure.logging.logger import get_app_logger


class GetMonthlyFlowUseCase:
    """Sum personal income and expense, excluding work and custody."""

    def __init__(
        self,
        store: LedgerStore,
        logger=None,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._store = store
        self._logger = logger or get_app_logger()
        self._today = today or date.today

    def execute(self, rate, month: str | None = None) -> PersonalFlowSummary:
        """Return the personal flow for ``month`` in USD.

        Args:
            rate: VES per USD.
            month: Month formatted as YYYY-MM, current month when omitted.

        Returns:
            PersonalFlowSummary: Income, expense and net.
        """
        month = month or current_month(self._today())
        summary = personal_flow_summary(self._store.transactions, month, rate)
        self._logger.info(
            f"Personal flow {month}: income={summary.income}, "
            f"expense={summary.expense}"
        )
        return summary


__all__ = ["GetMonthlyFlowUseCase"]
