# SPDX-License-Identifier: Apache-2.0
"""Retry policy, per-call retry state, and failure classification."""

from __future__ import annotations

from dataclasses import dataclass

from i18n_exporter.translators.base import FailureKind

RATE_LIMIT_STATUS = 429
OVERLOADED_STATUS = 503

_STATUS_KINDS: dict[int, FailureKind] = {
    RATE_LIMIT_STATUS: FailureKind.RATE_LIMITED,
    OVERLOADED_STATUS: FailureKind.OVERLOADED,
}


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt ceiling and exponential backoff schedule.

    Attributes:
        max_attempts: Total requests allowed per call, first one included.
        base_delay: Wait after the first failed attempt, in seconds.
    """

    max_attempts: int = 5
    base_delay: float = 3.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0:
            raise ValueError("base_delay must not be negative")

    def delay_for(self, attempt: int) -> float:
        """Wait before the attempt following ``attempt`` (1-based), no jitter."""
        return self.base_delay * (2 ** (attempt - 1))

    def schedule(self) -> list[float]:
        """All waits a call can go through (3s, 6s, 12s, 24s by default)."""
        return [self.delay_for(n) for n in range(1, self.max_attempts)]


@dataclass
class RetryState:
    """Retry bookkeeping for a single translate call."""

    attempt: int = 0
    last_error: Exception | None = None
    last_delay: float = 0.0
    total_delay: float = 0.0

    def begin_attempt(self) -> int:
        self.attempt += 1
        return self.attempt

    def record_wait(self, delay: float) -> None:
        self.last_delay = delay
        self.total_delay += delay


def extract_status_code(error: BaseException) -> int | None:
    """Read an HTTP status code from a structured error field, if any.

    Checks ``status_code``, ``status`` and ``code`` on the error, then
    ``response.status_code``.
    """
    for attr in ("status_code", "status", "code"):
        value = getattr(error, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str) and value.isdigit():
            return int(value)

    response = getattr(error, "response", None)
    value = getattr(response, "status_code", None)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def classify_failure(status_code: int | None, message: str = "") -> FailureKind:
    """Decide whether a failed attempt is worth retrying.

    Args:
        status_code: Structured status code from the networking layer.
        message: Error text, inspected only when no status code is available.

    Returns:
        RATE_LIMITED for 429, OVERLOADED for 503, TERMINAL otherwise.
    """
    if status_code is not None:
        return _STATUS_KINDS.get(status_code, FailureKind.TERMINAL)

    if str(RATE_LIMIT_STATUS) in message:
        return FailureKind.RATE_LIMITED
    if str(OVERLOADED_STATUS) in message:
        return FailureKind.OVERLOADED
    return FailureKind.TERMINAL


def classify_error(error: BaseException) -> FailureKind:
    """Classify an exception raised by the networking layer."""
    return classify_failure(extract_status_code(error), str(error))
