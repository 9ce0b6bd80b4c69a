"""CLI adapter to erase every stored copy of the user's ledger."""

from finanza.infrastructure.container import build_purge_use_case
from finanza.infrastructure.settings import LedgerSettings


def main() -> None:
    """Delete the configured user's snapshot under all known keys."""
    settings = LedgerSettings.from_env()
    result = build_purge_use_case(settings).execute(settings.user_id)

    print(f"Removed {len(result.removed)} stored snapshots.")
    for key, error in result.failures.items():
        print(f"Could not remove {key}: {error}")


if __name__ == "__main__":  # pragma: no cover
    main()
