# SPDX-License-Identifier: Apache-2.0
"""Translation record model and the structured output schema.

The response schema is declarative metadata sent alongside the prompt; the
service is constrained to emit JSON matching it. It is built once, at import
time, from the static language table.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, TypeAdapter

from .languages import LANGUAGE_KEYS, SOURCE_LANGUAGE, display_name

KEY_DESCRIPTION = (
    "A unique, meaningful key for the translation item in snake_case format "
    "(e.g., 'hello_world', 'confirm_button'). Derived from the English meaning."
)


class TranslationRecord(BaseModel):
    """One translated item: a generated key plus one string per language.

    Field declaration order matches LANGUAGE_KEYS, so ``model_dump()`` yields
    the canonical export order.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    key: str
    English: str
    Arabic: str
    Chinese_Simplified: str
    Chinese_Traditional: str
    French: str
    German: str
    Hindi: str
    Indonesian: str
    Italian: str
    Japanese: str
    Korean: str
    Malay: str
    Persian: str
    Polish: str
    Portuguese: str
    Russian: str
    Spanish: str
    Thai: str
    Turkish: str
    Ukrainian: str
    Vietnamese: str

    @property
    def source_text(self) -> str:
        """Text in the source language."""
        return self.translation(SOURCE_LANGUAGE)

    def translation(self, language_key: str) -> str:
        """Get the string for a language key.

        Raises:
            KeyError: If the language is not supported.
        """
        if language_key not in LANGUAGE_KEYS:
            raise KeyError(language_key)
        value: str = getattr(self, language_key)
        return value

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary (key first, then canonical language order)."""
        return self.model_dump()


RECORD_LIST_ADAPTER: TypeAdapter[list[TranslationRecord]] = TypeAdapter(
    list[TranslationRecord]
)


def build_schema(language_keys: tuple[str, ...] | list[str]) -> dict[str, Any]:
    """Build the array-of-records JSON schema for a language table.

    Args:
        language_keys: Language field names in canonical order.

    Returns:
        JSON schema: an array of objects with a ``key`` field plus one
        string field per language, every field required.
    """
    properties: dict[str, Any] = {
        "key": {"type": "string", "description": KEY_DESCRIPTION},
    }
    for lang in language_keys:
        properties[lang] = {
            "type": "string",
            "description": f"The translation of the input text into {display_name(lang)}.",
        }

    return {
        "type": "array",
        "items": {
            "type": "object",
            "properties": properties,
            "required": ["key", *language_keys],
        },
    }


RESPONSE_SCHEMA: dict[str, Any] = build_schema(LANGUAGE_KEYS)
