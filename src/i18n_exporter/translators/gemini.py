# SPDX-License-Identifier: Apache-2.0
"""Gemini batch translation backend.

Translates a batch of Korean strings into every supported language with a
single schema-constrained completion, retrying rate-limit (429) and
overload (503) failures with exponential backoff.
"""

from __future__ import annotations

import asyncio
import json
import logging

from pydantic import ValidationError

from i18n_exporter.config import missing_api_key_message
from i18n_exporter.core.batch import drop_blank
from i18n_exporter.core.languages import LANGUAGE_KEYS, SOURCE_LANGUAGE
from i18n_exporter.core.models import (
    RECORD_LIST_ADAPTER,
    RESPONSE_SCHEMA,
    TranslationRecord,
)
from i18n_exporter.llm.client import LLMClient, LLMConfig
from i18n_exporter.translators.base import (
    ConfigurationError,
    FailureKind,
    MalformedResponseError,
    RateLimitedError,
    ServiceOverloadedError,
    SourceEchoMismatchError,
    TranslationError,
    UnclassifiedServiceError,
)
from i18n_exporter.translators.retry import (
    RetryPolicy,
    RetryState,
    classify_error,
    extract_status_code,
)

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are a specialized multi-lingual translation engine designed to export "
    "data for i18n/localization. Your translations must be accurate, culturally "
    "sensitive, and formatted perfectly as a JSON list. Treat each element in the "
    "input list as a separate translation task."
)

PROMPT_TEMPLATE = """Translate the following list of {source_language} text items into the specified languages and generate a snake_case key for each.

Input Items: {items_json}

Target Languages: {languages}

Requirements:
1. Output a JSON list where each object corresponds to exactly one input item, in the same order.
2. Generate a "key" field: A concise, meaningful snake_case identifier based on the English translation (e.g. "hello_world").
3. The "{source_language}" field in the output must match the input item exactly.
4. Act as a professional native translator for each language.
5. Preserve the cultural context, nuance, and tone of the original {source_language} text.
6. Return ONLY the JSON data."""


def build_prompt(items: list[str]) -> str:
    """Build the user prompt for a batch of source strings."""
    return PROMPT_TEMPLATE.format(
        source_language=SOURCE_LANGUAGE,
        items_json=json.dumps(items, ensure_ascii=False),
        languages=", ".join(LANGUAGE_KEYS),
    )


class GeminiTranslator:
    """Gemini translation backend (via LiteLLM).

    Each ``translate`` call is an independent batch: it owns its request and
    retry state, so overlapping calls need no coordination.

    Attributes:
        name: Backend identifier (the LiteLLM provider, "gemini" by default).
    """

    def __init__(
        self,
        api_key: str | None,
        model: str | None = None,
        provider: str = "gemini",
        retry_policy: RetryPolicy | None = None,
        strict: bool = False,
        client: LLMClient | None = None,
    ) -> None:
        """Initialize GeminiTranslator.

        Args:
            api_key: Provider API key. A missing key is reported by
                ``translate`` as a ConfigurationError.
            model: Model name. Defaults to the provider default.
            provider: LiteLLM provider name.
            retry_policy: Attempt ceiling and backoff (default: 5 attempts,
                3 s base delay).
            strict: Reject responses whose records do not echo the inputs.
            client: Pre-built LLM client (mainly for tests).
        """
        self._config = LLMConfig(provider=provider, model=model, api_key=api_key)
        self._policy = retry_policy or RetryPolicy()
        self._strict = strict
        self._client = client

    @property
    def name(self) -> str:
        """Return backend name."""
        return self._config.provider

    @property
    def model(self) -> str:
        """Return the model in use."""
        return self._config.effective_model

    @property
    def retry_policy(self) -> RetryPolicy:
        """Return the retry policy."""
        return self._policy

    def _ensure_client(self) -> LLMClient:
        if self._client is None:
            self._client = LLMClient(self._config)
        return self._client

    async def translate(self, items: list[str]) -> list[TranslationRecord]:
        """Translate a batch of Korean strings into all supported languages.

        Args:
            items: Source strings in order. Blank entries are dropped.

        Returns:
            Decoded records, one per non-blank item, as returned by the service.

        Raises:
            ConfigurationError: If no API key is configured (no request made).
            RateLimitedError: If every attempt was rate limited.
            ServiceOverloadedError: If every attempt hit an overloaded service.
            MalformedResponseError: If the response is empty or undecodable.
            UnclassifiedServiceError: On any other service failure.
        """
        if not self._config.api_key:
            raise ConfigurationError(missing_api_key_message(self._config.provider))

        batch = drop_blank(items)
        if not batch:
            return []

        prompt = build_prompt(batch)
        client = self._ensure_client()
        state = RetryState()

        while True:
            attempt = state.begin_attempt()
            try:
                body = await client.generate_json(
                    prompt,
                    RESPONSE_SCHEMA,
                    system=SYSTEM_INSTRUCTION,
                    schema_name="translation_records",
                )
                records = self._decode(body, attempt)
            except MalformedResponseError as exc:
                logger.error("Translation attempt %d returned a malformed response: %s", attempt, exc)
                raise
            except Exception as exc:
                state.last_error = exc
                kind = classify_error(exc)
                logger.warning(
                    "Translation attempt %d/%d failed: %s",
                    attempt,
                    self._policy.max_attempts,
                    exc,
                )
                if kind.is_transient and attempt < self._policy.max_attempts:
                    delay = self._policy.delay_for(attempt)
                    state.record_wait(delay)
                    logger.warning("Retrying in %.0fs...", delay)
                    await asyncio.sleep(delay)
                    continue

                logger.error("Final translation error: %s", exc)
                raise self._final_error(state, kind) from exc

            self._check_source_echo(batch, records, attempt)
            logger.info("Translated %d item(s) in %d attempt(s)", len(records), attempt)
            return records

    def _decode(self, body: str | None, attempt: int) -> list[TranslationRecord]:
        if not body or not body.strip():
            raise MalformedResponseError(
                "No response received from the translation service", attempts=attempt
            )
        try:
            return RECORD_LIST_ADAPTER.validate_json(body)
        except ValidationError as e:
            raise MalformedResponseError(
                f"Could not decode translation response: {e.error_count()} error(s), "
                f"first: {e.errors()[0]['msg']}",
                attempts=attempt,
            ) from e

    def _final_error(self, state: RetryState, kind: FailureKind) -> TranslationError:
        error = state.last_error
        attempt = state.attempt
        status_code = extract_status_code(error) if error is not None else None
        if kind is FailureKind.RATE_LIMITED:
            return RateLimitedError(status_code=status_code, attempts=attempt)
        if kind is FailureKind.OVERLOADED:
            return ServiceOverloadedError(status_code=status_code, attempts=attempt)
        message = str(error) or type(error).__name__
        return UnclassifiedServiceError(message, status_code=status_code, attempts=attempt)

    def _check_source_echo(
        self, batch: list[str], records: list[TranslationRecord], attempt: int
    ) -> None:
        echoed = [record.source_text for record in records]
        if echoed == batch:
            return
        if self._strict:
            raise SourceEchoMismatchError(batch, echoed, attempts=attempt)
        logger.warning(
            "Response does not echo the source text (%d item(s) sent, %d record(s) received)",
            len(batch),
            len(records),
        )
