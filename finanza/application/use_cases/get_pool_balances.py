"""Use cases for the work and custody pools."""

from finanza.application.use_cases.ledger_store import LedgerStore
from finanza.domain.models import CustodySummary, WorkPoolSummary
from finanza.domain.services.pools import custody_summary, work_pool_summary
from finanza.infrastructure.logging.logger import get_app_logger


class GetWorkPoolUseCase:
    """Summarize pending work advances and expenses."""

    def __init__(self, store: LedgerStore, logger=None) -> None:
        self._store = store
        self._logger = logger or get_app_logger()

    def execute(self, rate) -> WorkPoolSummary:
        summary = work_pool_summary(self._store.transactions, rate)
        self._logger.info(
            f"Work pool: balance={summary.balance}, "
            f"status={summary.status.value}, "
            f"pending={len(summary.transactions)}"
        )
        return summary


class GetCustodySummaryUseCase:
    """Summarize funds held on behalf of third parties."""

    def __init__(self, store: LedgerStore, logger=None) -> None:
        self._store = store
        self._logger = logger or get_app_logger()

    def execute(self, rate) -> CustodySummary:
        summary = custody_summary(self._store.transactions, rate)
        self._logger.info(
            f"Custody: owners={len(summary.owners)}, "
            f"liability={summary.total_liability}"
        )
        return summary


__all__ = ["GetWorkPoolUseCase", "GetCustodySummaryUseCase"]
