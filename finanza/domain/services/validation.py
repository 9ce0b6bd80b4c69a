"""Domain validation helpers."""

from logging import Logger

from finanza.domain.models import Account


def validate_balance_sign(account: Account, logger: Logger) -> None:
    """Warn when a balance violates the expected sign convention.

    Negative owned funds usually come from an adjustment and point at an
    operational error. They are surfaced, never rejected.

    Args:
        account: Account to check.
        logger: Logger used for warnings.
    """
    if account.is_credit and account.balance > 0:
        logger.warning(
            f"Credit card balance is positive for account={account.name}: "
            f"{account.balance}"
        )
    if not account.is_credit and account.balance < 0:
        logger.warning(
            f"Balance is negative for account={account.name} "
            f"({account.type.value}): {account.balance}"
        )


__all__ = ["validate_balance_sign"]
