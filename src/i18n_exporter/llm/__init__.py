# SPDX-License-Identifier: Apache-2.0
"""LLM access layer.

Thin wrapper over LiteLLM providing schema-constrained JSON completions.
"""

from i18n_exporter.llm.client import LLMClient, LLMConfig

__all__ = [
    "LLMConfig",
    "LLMClient",
]
