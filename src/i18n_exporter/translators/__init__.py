# SPDX-License-Identifier: Apache-2.0
"""Translation backend modules.

Usage:
    from i18n_exporter.translators import GeminiTranslator
    translator = GeminiTranslator(api_key="your-api-key")
    records = await translator.translate(["안녕하세요"])
"""

from i18n_exporter.translators.base import (
    ConfigurationError,
    FailureKind,
    MalformedResponseError,
    RateLimitedError,
    ServiceOverloadedError,
    SourceEchoMismatchError,
    TransientServiceError,
    TranslationError,
    TranslatorBackend,
    TranslatorError,
    UnclassifiedServiceError,
    describe_error,
)
from i18n_exporter.translators.gemini import GeminiTranslator
from i18n_exporter.translators.retry import (
    RetryPolicy,
    RetryState,
    classify_error,
    classify_failure,
)

__all__ = [
    # Protocol and exceptions
    "TranslatorBackend",
    "TranslatorError",
    "ConfigurationError",
    "TranslationError",
    "TransientServiceError",
    "RateLimitedError",
    "ServiceOverloadedError",
    "MalformedResponseError",
    "SourceEchoMismatchError",
    "UnclassifiedServiceError",
    "describe_error",
    # Retry
    "FailureKind",
    "RetryPolicy",
    "RetryState",
    "classify_error",
    "classify_failure",
    # Backends
    "GeminiTranslator",
]
