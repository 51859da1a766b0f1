# SPDX-License-Identifier: Apache-2.0
"""Base classes and protocols for translation backends."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from i18n_exporter.core.models import TranslationRecord

RATE_LIMITED_MESSAGE = (
    "Usage limit reached and requests are being throttled. "
    "Please try again in about a minute."
)
SERVICE_OVERLOADED_MESSAGE = (
    "The AI service is temporarily unstable. Please try again shortly."
)
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred during translation."


class FailureKind(str, Enum):
    """Retryability of a failed attempt."""

    RATE_LIMITED = "rate_limited"  # 429
    OVERLOADED = "overloaded"  # 503
    TERMINAL = "terminal"

    @property
    def is_transient(self) -> bool:
        return self is not FailureKind.TERMINAL


class TranslatorError(Exception):
    """Base exception for translator module."""

    pass


class ConfigurationError(TranslatorError):
    """Configuration error (missing API key, invalid parameters, etc.).

    This error type is NOT retryable - fix the configuration first.
    """

    pass


class TranslationError(TranslatorError):
    """Error reported by (or about) the translation service.

    Attributes:
        attempts: Number of requests made before giving up (0 if unknown).
    """

    def __init__(self, message: str, attempts: int = 0) -> None:
        super().__init__(message)
        self.attempts = attempts


class TransientServiceError(TranslationError):
    """Rate limiting or overload; retried until the attempt ceiling.

    The message is the user-facing text shown once retries are exhausted.
    """

    kind: FailureKind

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        attempts: int = 0,
    ) -> None:
        super().__init__(message, attempts=attempts)
        self.status_code = status_code


class RateLimitedError(TransientServiceError):
    """Service returned 429."""

    kind = FailureKind.RATE_LIMITED

    def __init__(self, status_code: int | None = 429, attempts: int = 0) -> None:
        super().__init__(RATE_LIMITED_MESSAGE, status_code=status_code, attempts=attempts)


class ServiceOverloadedError(TransientServiceError):
    """Service returned 503."""

    kind = FailureKind.OVERLOADED

    def __init__(self, status_code: int | None = 503, attempts: int = 0) -> None:
        super().__init__(
            SERVICE_OVERLOADED_MESSAGE, status_code=status_code, attempts=attempts
        )


class MalformedResponseError(TranslationError):
    """Response body empty or not decodable into the record list."""

    pass


class SourceEchoMismatchError(MalformedResponseError):
    """Returned records do not echo the submitted source strings."""

    def __init__(self, expected: list[str], actual: list[str], attempts: int = 0) -> None:
        if len(expected) != len(actual):
            message = f"Expected {len(expected)} records but got {len(actual)}"
        else:
            mismatched = sum(1 for e, a in zip(expected, actual) if e != a)
            message = f"{mismatched} record(s) do not echo the source text"
        super().__init__(message, attempts=attempts)
        self.expected = expected
        self.actual = actual


class UnclassifiedServiceError(TranslationError):
    """Any other failure from the network layer, surfaced with its native message."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        attempts: int = 0,
    ) -> None:
        super().__init__(message, attempts=attempts)
        self.status_code = status_code


def describe_error(error: BaseException) -> str:
    """User-displayable text for a failed translation.

    Args:
        error: Exception raised by a translation call.

    Returns:
        The exception message, or a generic fallback when it is empty.
    """
    message = str(error).strip()
    return message or UNKNOWN_ERROR_MESSAGE


@runtime_checkable
class TranslatorBackend(Protocol):
    """Protocol definition for batch translation backends."""

    @property
    def name(self) -> str:
        """Backend name ("gemini", "openai", ...)."""
        ...

    async def translate(self, items: list[str]) -> list[TranslationRecord]:
        """Translate a batch of source strings into every supported language.

        Args:
            items: Source strings in order.

        Returns:
            One record per non-blank input item, in input order.

        Raises:
            ConfigurationError: If the backend is not configured.
            TranslationError: On translation failure.
        """
        ...
