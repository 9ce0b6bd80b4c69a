"""Use case to evaluate monthly budgets."""

from collections.abc import Callable
from datetime import date

from finanza.application.use_cases.ledger_store import LedgerStore
from finanza.domain.errors import BudgetValidationError
from finanza.domain.models import BudgetOverview
from finanza.domain.services.budgets import budget_overview
from finanza.domain.services.periods import current_month, is_valid_month
from finanza.infrastructure.logging.logger import get_app_logger


class GetBudgetOverviewUseCase:
    """Evaluate the budgets active in a month, with carry-forward."""

    def __init__(
        self,
        store: LedgerStore,
        logger=None,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._store = store
        self._logger = logger or get_app_logger()
        self._today = today or date.today

    def execute(self, rate, month: str | None = None) -> BudgetOverview:
        """Return progress for every budget active in ``month``.

        Args:
            rate: VES per USD used to convert spending.
            month: Month formatted as YYYY-MM, current month when omitted.

        Returns:
            BudgetOverview: Progress items and per-currency totals.

        Raises:
            BudgetValidationError: If ``month`` is malformed.
        """
        month = month or current_month(self._today())
        if not is_valid_month(month):
            raise BudgetValidationError(f"Invalid budget month: {month}")
        overview = budget_overview(
            self._store.budgets,
            self._store.transactions,
            month,
            rate,
        )
        exceeded = sum(1 for item in overview.items if item.remaining < 0)
        self._logger.info(
            f"Budgets evaluated for {month}: items={len(overview.items)}, "
            f"exceeded={exceeded}"
        )
        return overview


__all__ = ["GetBudgetOverviewUseCase"]
