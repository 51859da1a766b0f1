# SPDX-License-Identifier: Apache-2.0
"""LLM client using LiteLLM for unified provider access."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, ClassVar

logger = logging.getLogger(__name__)


@dataclass
class LLMConfig:
    """Configuration for LLM integration via LiteLLM.

    Attributes:
        provider: LLM provider ("gemini", "openai", "anthropic", etc.).
        model: Model name within provider. If None, uses PROVIDER_DEFAULTS.
        api_key: API key passed to the provider on every request.
    """

    provider: str = "gemini"
    model: str | None = None  # None = use PROVIDER_DEFAULTS[provider]
    api_key: str | None = None

    # Supported providers and their default models
    PROVIDER_DEFAULTS: ClassVar[dict[str, str]] = {
        "gemini": "gemini-3-flash-preview",
        "openai": "gpt-5-mini",
        "anthropic": "claude-sonnet-4-5",
    }

    # Environment variable names for API keys
    API_KEY_ENV_VARS: ClassVar[dict[str, str]] = {
        "gemini": "GEMINI_API_KEY",
        "openai": "OPENAI_API_KEY",
        "anthropic": "ANTHROPIC_API_KEY",
    }

    @property
    def effective_model(self) -> str:
        """Get effective model name (resolves None to provider default)."""
        if self.model is not None:
            return self.model
        return self.PROVIDER_DEFAULTS.get(self.provider, "gemini-3-flash-preview")

    @property
    def litellm_model(self) -> str:
        """Get LiteLLM model string (provider/model format)."""
        return f"{self.provider}/{self.effective_model}"

    def get_api_key_env_var(self) -> str:
        """Get environment variable name for API key."""
        return self.API_KEY_ENV_VARS.get(
            self.provider, f"{self.provider.upper()}_API_KEY"
        )


class LLMClient:
    """Unified LLM client using LiteLLM.

    Issues one completion per call and returns the raw text body. Errors from
    the provider propagate unchanged so callers can classify them.
    """

    def __init__(self, config: LLMConfig) -> None:
        """Initialize LLMClient.

        Args:
            config: LLM configuration.
        """
        self._config = config

    @property
    def config(self) -> LLMConfig:
        """Return the client configuration."""
        return self._config

    async def generate_json(
        self,
        prompt: str,
        schema: dict[str, Any],
        system: str | None = None,
        schema_name: str = "response",
    ) -> str | None:
        """Generate a JSON document constrained by a response schema.

        Args:
            prompt: User prompt.
            schema: JSON schema the response must follow.
            system: Optional system instruction.
            schema_name: Schema identifier sent with the request.

        Returns:
            Response body text, or None if the provider returned no content.

        Raises:
            Exception: On LLM API errors (LiteLLM exception types).
        """
        from litellm import acompletion

        messages: list[dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        logger.debug(
            "Requesting %s (prompt: %d chars)", self._config.litellm_model, len(prompt)
        )
        response = await acompletion(
            model=self._config.litellm_model,
            messages=messages,
            api_key=self._config.api_key,
            # one HTTP request per call
            max_retries=0,
            num_retries=0,
            response_format={
                "type": "json_schema",
                "json_schema": {"name": schema_name, "schema": schema},
            },
        )

        if not response.choices:
            return None
        content: str | None = response.choices[0].message.content
        return content
