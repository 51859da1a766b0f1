# SPDX-License-Identifier: Apache-2.0
"""Core data definitions: language table, records, and input batches."""

from .batch import MAX_ITEMS, BatchTooLargeError, collect_items, drop_blank, split_pasted_text
from .languages import LANGUAGE_KEYS, SOURCE_LANGUAGE, display_name
from .models import RESPONSE_SCHEMA, TranslationRecord, build_schema

__all__ = [
    "BatchTooLargeError",
    "LANGUAGE_KEYS",
    "MAX_ITEMS",
    "RESPONSE_SCHEMA",
    "SOURCE_LANGUAGE",
    "TranslationRecord",
    "build_schema",
    "collect_items",
    "display_name",
    "drop_blank",
    "split_pasted_text",
]
