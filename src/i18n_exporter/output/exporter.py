# SPDX-License-Identifier: Apache-2.0
"""Rendering and export of translation records.

All formats reflect the records verbatim, one row or object per record,
languages in canonical order.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from datetime import date
from pathlib import Path

from i18n_exporter.core.languages import LANGUAGE_KEYS, SOURCE_LANGUAGE, display_name
from i18n_exporter.core.models import TranslationRecord

logger = logging.getLogger(__name__)

EXPORT_FILENAME_PREFIX = "translated_export_"
KEY_COLUMN = "String Key"
INDEX_COLUMN = "#"


def _column_label(language_key: str) -> str:
    if language_key == SOURCE_LANGUAGE:
        return f"{display_name(language_key)} (source)"
    return display_name(language_key)


def table_header() -> list[str]:
    """Column labels: index, key, then one column per language."""
    return [INDEX_COLUMN, KEY_COLUMN, *(_column_label(lang) for lang in LANGUAGE_KEYS)]


def table_rows(records: Sequence[TranslationRecord]) -> list[list[str]]:
    """One row per record: 1-based index, key, then each language."""
    return [
        [str(index), record.key, *(record.translation(lang) for lang in LANGUAGE_KEYS)]
        for index, record in enumerate(records, 1)
    ]


def format_table(records: Sequence[TranslationRecord]) -> str:
    """Render records as a plain-text table with aligned columns."""
    rows = [table_header(), *table_rows(records)]
    widths = [max(len(row[col]) for row in rows) for col in range(len(rows[0]))]
    lines = []
    for i, row in enumerate(rows):
        lines.append(" | ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip())
        if i == 0:
            lines.append("-+-".join("-" * width for width in widths))
    return "\n".join(lines)


def to_json(records: Sequence[TranslationRecord], indent: int = 2) -> str:
    """Pretty-printed JSON list of records (non-ASCII kept as-is)."""
    return json.dumps([r.to_dict() for r in records], indent=indent, ensure_ascii=False)


def to_tsv(records: Sequence[TranslationRecord]) -> str:
    """Clipboard text: key then every language, tab-separated, one record per line."""
    return "\n".join(
        "\t".join([record.key, *(record.translation(lang) for lang in LANGUAGE_KEYS)])
        for record in records
    )


def export_filename(today: date | None = None) -> str:
    """File name for a JSON export, e.g. ``translated_export_2024-05-01.json``."""
    day = today or date.today()
    return f"{EXPORT_FILENAME_PREFIX}{day.isoformat()}.json"


def write_json_export(
    records: Sequence[TranslationRecord],
    output_dir: Path,
    today: date | None = None,
) -> Path:
    """Write records to a dated UTF-8 JSON file.

    Args:
        records: Records to export.
        output_dir: Destination directory (created if missing).
        today: Date used in the file name (default: today).

    Returns:
        Path of the written file.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / export_filename(today)
    path.write_text(to_json(records), encoding="utf-8")
    logger.info("Exported %d record(s) to %s", len(records), path)
    return path
