"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
from decimal import Decimal
import os
from pathlib import Path
from typing import Optional

from finanza.domain.constants import DEFAULT_EXCHANGE_RATE
from finanza.infrastructure.logging.logger import get_app_logger
from finanza.utils.decimal_utils import parse_decimal
from finanza.utils.utils import get_project_root

DEFAULT_RATE_SOURCE_URL = "https://www.tcambio.app/"
STORAGE_BACKENDS = ("json", "sqlalchemy")


@dataclass(frozen=True)
class LedgerSettings:
    """Runtime settings for the ledger adapters.

    Attributes:
        user_id: Key under which the user's snapshot is stored.
        storage_backend: Remote backend identifier (json or sqlalchemy).
        snapshot_file: Path of the local JSON snapshot.
        default_rate: Exchange rate used when the rate source fails.
        sync_debounce_seconds: Quiet period before a remote save.
        rate_source_url: Page scraped for the USD/VES rate.
        http_timeout: Timeout in seconds for outbound HTTP calls.
    """

    user_id: str = "local"
    storage_backend: str = "json"
    snapshot_file: Optional[Path] = None
    default_rate: Decimal = DEFAULT_EXCHANGE_RATE
    sync_debounce_seconds: float = 1.5
    rate_source_url: str = DEFAULT_RATE_SOURCE_URL
    http_timeout: float = 12.0

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        backend = os.getenv("FINANZA_STORAGE_BACKEND", "json").strip().lower()
        if backend not in STORAGE_BACKENDS:
            logger.warning(
                f"Unknown storage backend {backend!r}, using json"
            )
            backend = "json"
        raw_file = os.getenv("FINANZA_SNAPSHOT_FILE")
        if raw_file:
            snapshot_file = Path(raw_file).expanduser().resolve()
        else:
            snapshot_file = get_project_root() / "data" / "snapshot.json"
        return cls(
            user_id=os.getenv("FINANZA_USER_ID", "").strip() or "local",
            storage_backend=backend,
            snapshot_file=snapshot_file,
            default_rate=cls._positive_decimal(
                "FINANZA_DEFAULT_RATE", DEFAULT_EXCHANGE_RATE, logger
            ),
            sync_debounce_seconds=float(
                cls._positive_decimal(
                    "FINANZA_SYNC_DEBOUNCE_SECONDS", Decimal("1.5"), logger
                )
            ),
            rate_source_url=(
                os.getenv("FINANZA_RATE_SOURCE_URL", "").strip()
                or DEFAULT_RATE_SOURCE_URL
            ),
            http_timeout=float(
                cls._positive_decimal(
                    "FINANZA_HTTP_TIMEOUT", Decimal("12"), logger
                )
            ),
        )

    @staticmethod
    def _positive_decimal(name: str, default: Decimal, logger) -> Decimal:
        """Read a positive number, falling back to ``default`` when invalid.

        Args:
            name: Environment variable to read.
            default: Value used when unset or invalid.
            logger: Logger used for warnings.

        Returns:
            Decimal: Parsed value or the default.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        value = parse_decimal(raw.strip())
        if value is None or value <= 0:
            logger.warning(f"Invalid {name}={raw!r}, using {default}")
            return default
        return value


__all__ = ["LedgerSettings", "DEFAULT_RATE_SOURCE_URL", "STORAGE_BACKENDS"]
