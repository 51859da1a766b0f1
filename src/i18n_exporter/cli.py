# SPDX-License-Identifier: Apache-2.0
"""
i18n Exporter - CLI Tool

Translates up to 15 Korean strings into 21 languages with generated
snake_case keys, and prints or exports the result.

Usage:
    i18n-export <item> [<item> ...] [options]

Examples:
    i18n-export 안녕하세요 "저장하기"             # Table output
    i18n-export -f strings.txt --format json     # One item per line
    i18n-export -f - --format tsv < strings.txt  # Read from stdin
    i18n-export 확인 -o ./exports                # Write dated JSON file
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import NoReturn

from i18n_exporter.config import load_environment, resolve_api_key
from i18n_exporter.core.batch import MAX_ITEMS, BatchTooLargeError, collect_items, split_pasted_text
from i18n_exporter.core.models import TranslationRecord
from i18n_exporter.llm.client import LLMConfig
from i18n_exporter.output.exporter import format_table, to_json, to_tsv, write_json_export
from i18n_exporter.translators.base import ConfigurationError, TranslatorError, describe_error
from i18n_exporter.translators.gemini import GeminiTranslator

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("table", "json", "tsv")


def parse_args() -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument Namespace.
    """
    parser = argparse.ArgumentParser(
        prog="i18n-export",
        description="Translate Korean strings into 21 languages for i18n export",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  %(prog)s 안녕하세요 저장하기                 # Table output
  %(prog)s -f strings.txt --format json       # One item per line
  %(prog)s 확인 -o ./exports                  # Write translated_export_<date>.json

At most {MAX_ITEMS} non-blank items are translated per run.

Environment Variables:
  GEMINI_API_KEY   Gemini API key (VITE_API_KEY, NEXT_PUBLIC_API_KEY,
                   REACT_APP_API_KEY and API_KEY are also checked)
""",
    )

    parser.add_argument(
        "items",
        nargs="*",
        help="Korean strings to translate",
    )
    parser.add_argument(
        "-f",
        "--file",
        help="Read items from a file, one per line ('-' for stdin)",
    )

    # Output options
    parser.add_argument(
        "--format",
        default="table",
        choices=OUTPUT_FORMATS,
        help="Output format (default: table)",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        help="Also write translated_export_<date>.json into this directory",
    )

    # Service options
    service_group = parser.add_argument_group("Service options")
    service_group.add_argument(
        "--api-key",
        help="API key (or set GEMINI_API_KEY)",
    )
    service_group.add_argument(
        "--provider",
        default="gemini",
        help="LiteLLM provider (default: gemini)",
    )
    service_group.add_argument(
        "--model",
        help="Model name (default: provider default, gemini: "
        f"{LLMConfig.PROVIDER_DEFAULTS['gemini']})",
    )
    service_group.add_argument(
        "--env-file",
        type=Path,
        help="Load environment variables from this .env file",
    )
    service_group.add_argument(
        "--strict",
        action="store_true",
        help="Fail when the response does not echo the Korean input exactly",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    return parser.parse_args()


def read_items(args: argparse.Namespace) -> list[str]:
    """Collect raw items from positional arguments and --file.

    Args:
        args: Command line arguments.

    Returns:
        Non-blank items, positional arguments first.

    Raises:
        BatchTooLargeError: If more than MAX_ITEMS items remain.
        OSError: If the input file cannot be read.
    """
    raw: list[str] = list(args.items)
    if args.file == "-":
        raw.extend(split_pasted_text(sys.stdin.read()))
    elif args.file:
        raw.extend(split_pasted_text(Path(args.file).read_text(encoding="utf-8")))
    return collect_items(raw)


def render(records: list[TranslationRecord], output_format: str) -> str:
    """Render records in the requested output format."""
    if output_format == "json":
        return to_json(records)
    if output_format == "tsv":
        return to_tsv(records)
    return format_table(records)


async def run(args: argparse.Namespace) -> int:
    """Translate the requested items and print the result.

    Args:
        args: Command line arguments.

    Returns:
        Exit code (0: success, 1: failure).
    """
    try:
        items = read_items(args)
    except (BatchTooLargeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    translator = GeminiTranslator(
        api_key=resolve_api_key(args.provider, explicit=args.api_key),
        model=args.model,
        provider=args.provider,
        strict=args.strict,
    )
    logger.info("Translating %d item(s) with %s/%s", len(items), translator.name, translator.model)

    try:
        records = await translator.translate(items)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except TranslatorError as e:
        print(f"Error: Translation failed: {describe_error(e)}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1

    if not records:
        print("Nothing to translate.", file=sys.stderr)
        return 0

    print(render(records, args.format))

    if args.output_dir:
        path = write_json_export(records, args.output_dir)
        print(f"Exported: {path}", file=sys.stderr)

    return 0


def main() -> NoReturn:
    """Main entry point."""
    args = parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    load_environment(args.env_file)

    exit_code = asyncio.run(run(args))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
