"""Exception hierarchy: every failure aborts the whole call."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import HealthReport


class LendingError(Exception):
    """Base exception for all lending-core errors."""


class Unauthorized(LendingError):
    """Raised when the current invocation was not authorized by the required identity."""

    def __init__(self, identity: str) -> None:
        super().__init__(f"Invocation not authorized by '{identity}'")
        self.identity = identity


class NotInitialized(LendingError):
    """Raised when the protocol configuration record has not been written yet."""


class AlreadyInitialized(LendingError):
    """Raised on a second call to initialize."""


class InvalidConfiguration(LendingError):
    """Raised when initialize receives parameters outside their allowed range."""


class InvalidAmount(LendingError):
    """Raised for non-positive or out-of-range amounts."""


class ArithmeticOverflow(LendingError):
    """Raised when a checked operation leaves the signed 128-bit range."""


class InsufficientBalance(LendingError):
    """Raised when an asset transfer exceeds the sender's balance."""


class InsufficientHealthFactor(LendingError):
    """Raised when a borrow would leave the position below 100% health."""

    def __init__(self, account: str, report: HealthReport) -> None:
        super().__init__(
            f"Health factor too low to borrow: {report.health_factor_bps} bps "
            f"for '{account}'"
        )
        self.account = account
        self.report = report
