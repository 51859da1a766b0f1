# SPDX-License-Identifier: Apache-2.0
"""Supported language table.

The order of LANGUAGE_KEYS is the canonical column order used by the
response schema, the table view and the tab-separated export.
"""

from __future__ import annotations

SOURCE_LANGUAGE = "Korean"

LANGUAGE_KEYS: tuple[str, ...] = (
    "English",
    "Arabic",
    "Chinese_Simplified",
    "Chinese_Traditional",
    "French",
    "German",
    "Hindi",
    "Indonesian",
    "Italian",
    "Japanese",
    "Korean",
    "Malay",
    "Persian",
    "Polish",
    "Portuguese",
    "Russian",
    "Spanish",
    "Thai",
    "Turkish",
    "Ukrainian",
    "Vietnamese",
)


def display_name(language_key: str) -> str:
    """Human-readable language name ("Chinese_Simplified" -> "Chinese Simplified")."""
    return language_key.replace("_", " ")
