"""Use case to summarize credit card usage."""

from finanza.application.use_cases.ledger_store import LedgerStore
from finanza.domain.models import CreditSummary
from finanza.domain.services.credit import credit_overview
from finanza.infrastructure.logging.logger import get_app_logger


class GetCreditOverviewUseCase:
    """Compute debt, availability and utilization per credit card."""

    def __init__(self, store: LedgerStore, logger=None) -> None:
        self._store = store
        self._logger = logger or get_app_logger()

    def execute(self) -> list[CreditSummary]:
        """Return one summary per credit card account."""
        summaries = credit_overview(self._store.accounts)
        for summary in summaries:
            if summary.is_high_usage:
                self._logger.warning(
                    f"High credit usage on {summary.account_name}: "
                    f"{summary.utilization_pct}%"
                )
        return summaries


__all__ = ["GetCreditOverviewUseCase"]
