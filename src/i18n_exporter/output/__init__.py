# SPDX-License-Identifier: Apache-2.0
"""Output formats for translated records: table, JSON, TSV and file export."""

from i18n_exporter.output.exporter import (
    EXPORT_FILENAME_PREFIX,
    export_filename,
    format_table,
    table_header,
    table_rows,
    to_json,
    to_tsv,
    write_json_export,
)

__all__ = [
    "EXPORT_FILENAME_PREFIX",
    "export_filename",
    "format_table",
    "table_header",
    "table_rows",
    "to_json",
    "to_tsv",
    "write_json_export",
]
