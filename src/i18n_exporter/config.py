# SPDX-License-Identifier: Apache-2.0
"""Configuration resolution.

Settings are resolved once at process start and injected into the
translation client; the client never reads the environment itself.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path

from dotenv import load_dotenv

from i18n_exporter.llm.client import LLMConfig

logger = logging.getLogger(__name__)

# Build-tool style names checked after the provider variable, in order
FALLBACK_API_KEY_ENV_VARS: tuple[str, ...] = (
    "VITE_API_KEY",
    "NEXT_PUBLIC_API_KEY",
    "REACT_APP_API_KEY",
    "API_KEY",
)


def load_environment(env_file: Path | None = None) -> bool:
    """Load variables from a .env file without overriding the environment.

    Args:
        env_file: Path to the .env file. If None, searches from the
            current directory upwards.

    Returns:
        True if a file was found and loaded.
    """
    if env_file is not None:
        if not env_file.exists():
            logger.warning("Env file not found: %s", env_file)
            return False
        return load_dotenv(env_file, override=False)
    return load_dotenv(override=False)


def resolve_setting(
    names: Sequence[str],
    environ: Mapping[str, str] | None = None,
) -> str | None:
    """Return the first populated value among named sources.

    Args:
        names: Source names in priority order.
        environ: Mapping to read from (default: ``os.environ``).

    Returns:
        The first non-blank value, or None if every source is empty.
    """
    env = os.environ if environ is None else environ
    for name in names:
        value = env.get(name)
        if value and value.strip():
            logger.debug("Using setting from %s", name)
            return value.strip()
    return None


def api_key_sources(provider: str = "gemini") -> tuple[str, ...]:
    """Environment variable names consulted for a provider's API key."""
    primary = LLMConfig(provider=provider).get_api_key_env_var()
    return (primary, *(name for name in FALLBACK_API_KEY_ENV_VARS if name != primary))


def resolve_api_key(
    provider: str = "gemini",
    explicit: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> str | None:
    """Resolve the API key: explicit value first, then environment sources."""
    if explicit and explicit.strip():
        return explicit.strip()
    return resolve_setting(api_key_sources(provider), environ)


def missing_api_key_message(provider: str = "gemini") -> str:
    """Guidance shown when no API key could be resolved."""
    sources = api_key_sources(provider)
    return (
        f"API key is missing. Set {sources[0]} (or one of "
        f"{', '.join(sources[1:])}) in the environment or a .env file, "
        "or pass --api-key."
    )
