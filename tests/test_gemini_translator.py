# SPDX-License-Identifier: Apache-2.0
"""Tests for the Gemini batch translator: request, retry, and error handling."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from i18n_exporter.core.languages import LANGUAGE_KEYS
from i18n_exporter.core.models import RESPONSE_SCHEMA, TranslationRecord
from i18n_exporter.llm.client import LLMConfig
from i18n_exporter.translators import (
    ConfigurationError,
    GeminiTranslator,
    MalformedResponseError,
    RateLimitedError,
    RetryPolicy,
    ServiceOverloadedError,
    SourceEchoMismatchError,
    TranslatorBackend,
    UnclassifiedServiceError,
)
from i18n_exporter.translators.base import (
    RATE_LIMITED_MESSAGE,
    SERVICE_OVERLOADED_MESSAGE,
)
from i18n_exporter.translators.gemini import SYSTEM_INSTRUCTION, build_prompt

SLEEP_TARGET = "i18n_exporter.translators.gemini.asyncio.sleep"


class FakeStatusError(Exception):
    """Stand-in for a provider exception carrying an HTTP status code."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


def make_record(korean: str, key: str = "hello") -> dict[str, str]:
    """Build a complete record dict with placeholder translations."""
    record = {"key": key}
    for lang in LANGUAGE_KEYS:
        record[lang] = f"{lang}:{korean}"
    record["Korean"] = korean
    return record


def response_body(*korean: str) -> str:
    return json.dumps([make_record(k, key=f"item_{i}") for i, k in enumerate(korean)], ensure_ascii=False)


@pytest.fixture
def mock_client() -> MagicMock:
    client = MagicMock()
    client.generate_json = AsyncMock()
    return client


@pytest.fixture
def translator(mock_client: MagicMock) -> GeminiTranslator:
    return GeminiTranslator(api_key="test-key", client=mock_client)


class TestGeminiTranslatorBasics:
    """Tests for construction and properties."""

    def test_implements_protocol(self, translator: GeminiTranslator) -> None:
        """GeminiTranslator should implement TranslatorBackend protocol."""
        assert isinstance(translator, TranslatorBackend)

    def test_name_and_default_model(self, translator: GeminiTranslator) -> None:
        assert translator.name == "gemini"
        assert translator.model == LLMConfig.PROVIDER_DEFAULTS["gemini"]

    def test_default_model_follows_provider(self, mock_client: MagicMock) -> None:
        translator = GeminiTranslator(api_key="k", provider="openai", client=mock_client)
        assert translator.model == LLMConfig.PROVIDER_DEFAULTS["openai"]

    def test_custom_model(self, mock_client: MagicMock) -> None:
        translator = GeminiTranslator(api_key="k", model="gemini-2.5-flash", client=mock_client)
        assert translator.model == "gemini-2.5-flash"

    def test_default_retry_policy(self, translator: GeminiTranslator) -> None:
        assert translator.retry_policy == RetryPolicy(max_attempts=5, base_delay=3.0)


class TestInputHandling:
    """Tests for blank filtering and configuration checks."""

    @pytest.mark.asyncio
    async def test_all_blank_returns_empty_without_request(
        self, translator: GeminiTranslator, mock_client: MagicMock
    ) -> None:
        """All-blank input should short-circuit with zero network calls."""
        result = await translator.translate(["", "   ", "\t"])

        assert result == []
        mock_client.generate_json.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_list_returns_empty(
        self, translator: GeminiTranslator, mock_client: MagicMock
    ) -> None:
        assert await translator.translate([]) == []
        mock_client.generate_json.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_api_key_raises_configuration_error(
        self, mock_client: MagicMock
    ) -> None:
        """Missing credential should fail immediately with guidance."""
        translator = GeminiTranslator(api_key=None, client=mock_client)

        with pytest.raises(ConfigurationError) as exc_info:
            await translator.translate(["안녕하세요"])

        assert "GEMINI_API_KEY" in str(exc_info.value)
        mock_client.generate_json.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_api_key_raises_configuration_error(
        self, mock_client: MagicMock
    ) -> None:
        translator = GeminiTranslator(api_key="", client=mock_client)

        with pytest.raises(ConfigurationError):
            await translator.translate(["안녕하세요"])
        mock_client.generate_json.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_blank_entries_removed_before_request(
        self, translator: GeminiTranslator, mock_client: MagicMock
    ) -> None:
        """["안녕하세요", "", "  "] should be sent as a single item."""
        mock_client.generate_json.return_value = response_body("안녕하세요")

        result = await translator.translate(["안녕하세요", "", "  "])

        assert len(result) == 1
        assert result[0].Korean == "안녕하세요"
        prompt = mock_client.generate_json.await_args.args[0]
        assert json.dumps(["안녕하세요"], ensure_ascii=False) in prompt


class TestRequestConstruction:
    """Tests for the prompt, schema, and system instruction."""

    @pytest.mark.asyncio
    async def test_request_carries_schema_and_system_instruction(
        self, translator: GeminiTranslator, mock_client: MagicMock
    ) -> None:
        mock_client.generate_json.return_value = response_body("확인")

        await translator.translate(["확인"])

        call = mock_client.generate_json.await_args
        assert call.args[1] is RESPONSE_SCHEMA
        assert call.kwargs["system"] == SYSTEM_INSTRUCTION
        assert mock_client.generate_json.await_count == 1

    def test_prompt_lists_items_and_languages(self) -> None:
        prompt = build_prompt(["안녕하세요", "저장"])

        assert '["안녕하세요", "저장"]' in prompt
        assert "snake_case" in prompt
        assert "JSON" in prompt
        for lang in LANGUAGE_KEYS:
            assert lang in prompt

    def test_system_instruction_describes_role(self) -> None:
        assert "i18n" in SYSTEM_INSTRUCTION
        assert "JSON list" in SYSTEM_INSTRUCTION


class TestSuccessfulTranslation:
    """Tests for decoding successful responses."""

    @pytest.mark.asyncio
    async def test_returns_one_record_per_item_in_order(
        self, translator: GeminiTranslator, mock_client: MagicMock
    ) -> None:
        items = ["안녕하세요", "저장하기", "취소"]
        mock_client.generate_json.return_value = response_body(*items)

        result = await translator.translate(items)

        assert len(result) == len(items)
        assert all(isinstance(r, TranslationRecord) for r in result)
        assert [r.Korean for r in result] == items
        for record in result:
            for lang in LANGUAGE_KEYS:
                assert record.translation(lang)

    @pytest.mark.asyncio
    async def test_echo_mismatch_is_returned_in_lenient_mode(
        self, translator: GeminiTranslator, mock_client: MagicMock
    ) -> None:
        """Default mode logs the mismatch and returns the records unchanged."""
        mock_client.generate_json.return_value = response_body("안녕")

        result = await translator.translate(["안녕하세요"])

        assert result[0].Korean == "안녕"

    @pytest.mark.asyncio
    async def test_echo_mismatch_raises_in_strict_mode(
        self, mock_client: MagicMock
    ) -> None:
        translator = GeminiTranslator(api_key="k", strict=True, client=mock_client)
        mock_client.generate_json.return_value = response_body("안녕")

        with pytest.raises(SourceEchoMismatchError) as exc_info:
            await translator.translate(["안녕하세요"])

        assert exc_info.value.expected == ["안녕하세요"]
        assert exc_info.value.actual == ["안녕"]
        assert mock_client.generate_json.await_count == 1

    @pytest.mark.asyncio
    async def test_count_mismatch_raises_in_strict_mode(
        self, mock_client: MagicMock
    ) -> None:
        translator = GeminiTranslator(api_key="k", strict=True, client=mock_client)
        mock_client.generate_json.return_value = response_body("하나")

        with pytest.raises(SourceEchoMismatchError) as exc_info:
            await translator.translate(["하나", "둘"])

        assert "Expected 2 records but got 1" in str(exc_info.value)


class TestRetrySchedule:
    """Tests for the exponential backoff state machine."""

    @pytest.mark.asyncio
    async def test_four_transient_failures_then_success(
        self, translator: GeminiTranslator, mock_client: MagicMock
    ) -> None:
        """Waits 3+6+12+24 seconds and makes exactly 5 calls."""
        mock_client.generate_json.side_effect = [
            FakeStatusError("rate limited", 429),
            FakeStatusError("overloaded", 503),
            FakeStatusError("rate limited", 429),
            FakeStatusError("rate limited", 429),
            response_body("안녕하세요"),
        ]

        with patch(SLEEP_TARGET, new_callable=AsyncMock) as mock_sleep:
            result = await translator.translate(["안녕하세요"])

        assert len(result) == 1
        assert mock_client.generate_json.await_count == 5
        delays = [c.args[0] for c in mock_sleep.await_args_list]
        assert delays == [3.0, 6.0, 12.0, 24.0]
        assert sum(delays) == 45.0

    @pytest.mark.asyncio
    async def test_rate_limit_exhaustion(
        self, translator: GeminiTranslator, mock_client: MagicMock
    ) -> None:
        """Five 429s fail after exactly 5 attempts, no wait after the last."""
        mock_client.generate_json.side_effect = [
            FakeStatusError("Too Many Requests", 429) for _ in range(5)
        ]

        with patch(SLEEP_TARGET, new_callable=AsyncMock) as mock_sleep:
            with pytest.raises(RateLimitedError) as exc_info:
                await translator.translate(["안녕하세요"])

        assert mock_client.generate_json.await_count == 5
        assert mock_sleep.await_count == 4
        assert str(exc_info.value) == RATE_LIMITED_MESSAGE
        assert exc_info.value.attempts == 5
        assert exc_info.value.status_code == 429
        assert isinstance(exc_info.value.__cause__, FakeStatusError)

    @pytest.mark.asyncio
    async def test_overload_exhaustion(
        self, translator: GeminiTranslator, mock_client: MagicMock
    ) -> None:
        mock_client.generate_json.side_effect = [
            FakeStatusError("Service Unavailable", 503) for _ in range(5)
        ]

        with patch(SLEEP_TARGET, new_callable=AsyncMock) as mock_sleep:
            with pytest.raises(ServiceOverloadedError) as exc_info:
                await translator.translate(["안녕하세요"])

        assert mock_client.generate_json.await_count == 5
        assert mock_sleep.await_count == 4
        assert str(exc_info.value) == SERVICE_OVERLOADED_MESSAGE

    @pytest.mark.asyncio
    async def test_message_fallback_classification(
        self, translator: GeminiTranslator, mock_client: MagicMock
    ) -> None:
        """Errors without a status code are classified from their text."""
        mock_client.generate_json.side_effect = [
            RuntimeError("HTTP 503 model is overloaded"),
            response_body("안녕하세요"),
        ]

        with patch(SLEEP_TARGET, new_callable=AsyncMock) as mock_sleep:
            result = await translator.translate(["안녕하세요"])

        assert len(result) == 1
        mock_sleep.assert_awaited_once_with(3.0)

    @pytest.mark.asyncio
    async def test_custom_policy(self, mock_client: MagicMock) -> None:
        translator = GeminiTranslator(
            api_key="k",
            retry_policy=RetryPolicy(max_attempts=2, base_delay=0.5),
            client=mock_client,
        )
        mock_client.generate_json.side_effect = [
            FakeStatusError("rate limited", 429),
            FakeStatusError("rate limited", 429),
        ]

        with patch(SLEEP_TARGET, new_callable=AsyncMock) as mock_sleep:
            with pytest.raises(RateLimitedError):
                await translator.translate(["안녕하세요"])

        assert mock_client.generate_json.await_count == 2
        mock_sleep.assert_awaited_once_with(0.5)


class TestTerminalFailures:
    """Tests for failures that are never retried."""

    @pytest.mark.asyncio
    async def test_unclassified_error_not_retried(
        self, translator: GeminiTranslator, mock_client: MagicMock
    ) -> None:
        """A terminal failure makes 1 call and surfaces the raw message."""
        mock_client.generate_json.side_effect = FakeStatusError("API key not valid", 400)

        with patch(SLEEP_TARGET, new_callable=AsyncMock) as mock_sleep:
            with pytest.raises(UnclassifiedServiceError) as exc_info:
                await translator.translate(["안녕하세요"])

        assert mock_client.generate_json.await_count == 1
        mock_sleep.assert_not_awaited()
        assert str(exc_info.value) == "API key not valid"
        assert exc_info.value.status_code == 400
        assert exc_info.value.attempts == 1

    @pytest.mark.asyncio
    async def test_status_code_takes_precedence_over_message(
        self, translator: GeminiTranslator, mock_client: MagicMock
    ) -> None:
        """A 500 mentioning "429" in its text is still terminal."""
        mock_client.generate_json.side_effect = FakeStatusError("upstream said 429", 500)

        with patch(SLEEP_TARGET, new_callable=AsyncMock) as mock_sleep:
            with pytest.raises(UnclassifiedServiceError):
                await translator.translate(["안녕하세요"])

        mock_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_terminal_after_transient(
        self, translator: GeminiTranslator, mock_client: MagicMock
    ) -> None:
        mock_client.generate_json.side_effect = [
            FakeStatusError("rate limited", 429),
            FakeStatusError("permission denied", 403),
        ]

        with patch(SLEEP_TARGET, new_callable=AsyncMock) as mock_sleep:
            with pytest.raises(UnclassifiedServiceError) as exc_info:
                await translator.translate(["안녕하세요"])

        assert mock_client.generate_json.await_count == 2
        assert mock_sleep.await_count == 1
        assert exc_info.value.attempts == 2
        assert str(exc_info.value) == "permission denied"
        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [None, "", "   "])
    async def test_empty_body_is_malformed(
        self, translator: GeminiTranslator, mock_client: MagicMock, body: str | None
    ) -> None:
        mock_client.generate_json.return_value = body

        with patch(SLEEP_TARGET, new_callable=AsyncMock) as mock_sleep:
            with pytest.raises(MalformedResponseError):
                await translator.translate(["안녕하세요"])

        assert mock_client.generate_json.await_count == 1
        mock_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_json_is_malformed(
        self, translator: GeminiTranslator, mock_client: MagicMock
    ) -> None:
        mock_client.generate_json.return_value = "Here are your translations: [{"

        with pytest.raises(MalformedResponseError) as exc_info:
            await translator.translate(["안녕하세요"])

        assert mock_client.generate_json.await_count == 1
        assert exc_info.value.attempts == 1

    @pytest.mark.asyncio
    async def test_missing_language_field_is_malformed(
        self, translator: GeminiTranslator, mock_client: MagicMock
    ) -> None:
        record = make_record("안녕하세요")
        del record["Thai"]
        mock_client.generate_json.return_value = json.dumps([record])

        with pytest.raises(MalformedResponseError):
            await translator.translate(["안녕하세요"])

    @pytest.mark.asyncio
    async def test_object_instead_of_list_is_malformed(
        self, translator: GeminiTranslator, mock_client: MagicMock
    ) -> None:
        mock_client.generate_json.return_value = json.dumps(make_record("안녕하세요"))

        with pytest.raises(MalformedResponseError):
            await translator.translate(["안녕하세요"])
