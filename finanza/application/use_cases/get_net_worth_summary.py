"""Use case to compute the household net worth."""

from finanza.application.use_cases.ledger_store import LedgerStore
from finanza.domain.models import NetWorthSummary
from finanza.domain.services.net_worth import compute_net_worth_summary
from finanza.infrastructure.logging.logger import get_app_logger


class GetNetWorthSummaryUseCase:
    """Compute net worth from the ledger store."""

    def __init__(self, store: LedgerStore, logger=None) -> None:
        """Initialize the use case.

        Args:
            store: Ledger store holding the current entities.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._store = store
        self._logger = logger or get_app_logger()

    def execute(self, rate) -> NetWorthSummary:
        """Return the net worth summary in USD.

        Args:
            rate: VES per USD used to normalize balances.

        Returns:
            NetWorthSummary: Liquid funds, liabilities and investments.
        """
        summary = compute_net_worth_summary(
            self._store.accounts,
            self._store.transactions,
            self._store.investments,
            rate=rate,
            logger=self._logger,
        )
        self._logger.info(
            f"Net worth computed: net_worth={summary.net_worth}, "
            f"liquid={summary.liquid_total}, "
            f"custody={summary.custody_liability}"
        )
        return summary


__all__ = ["GetNetWorthSummaryUseCase"]
