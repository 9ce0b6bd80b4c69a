"""Use case to refresh the USD/VES exchange rate."""

from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal

from finanza.application.ports.exchange_rate import (
    ExchangeRatePort,
    ExchangeRateQuote,
)
from finanza.domain.constants import DEFAULT_EXCHANGE_RATE
from finanza.domain.errors import ExchangeRateUnavailableError
from finanza.infrastructure.logging.logger import get_app_logger

FALLBACK_SOURCE = "fallback"


class RefreshExchangeRateUseCase:
    """Fetch the current rate, degrading to a fixed default on failure."""

    def __init__(
        self,
        provider: ExchangeRatePort,
        logger=None,
        default_rate: Decimal = DEFAULT_EXCHANGE_RATE,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            provider: Port returning the latest exchange rate.
            logger: Optional logger compatible with logging.Logger-like API.
            default_rate: Rate used when the provider fails.
            clock: Source of the fallback timestamp.
        """
        self._provider = provider
        self._logger = logger or get_app_logger()
        self._default_rate = default_rate
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def execute(self) -> ExchangeRateQuote:
        """Return the provider's quote, or the default rate on failure."""
        try:
            quote = self._provider.fetch_rate()
        except ExchangeRateUnavailableError as exc:
            self._logger.warning(f"Exchange rate unavailable, using fallback: {exc}")
            return self._fallback()
        if quote.rate <= 0:
            self._logger.warning(
                f"Discarding non-positive rate {quote.rate} from {quote.source_name}"
            )
            return self._fallback()
        self._logger.info(f"Exchange rate {quote.rate} from {quote.source_name}")
        return quote

    def _fallback(self) -> ExchangeRateQuote:
        return ExchangeRateQuote(
            rate=self._default_rate,
            source_name=FALLBACK_SOURCE,
            fetched_at=self._clock(),
        )


__all__ = ["RefreshExchangeRateUseCase", "FALLBACK_SOURCE"]
