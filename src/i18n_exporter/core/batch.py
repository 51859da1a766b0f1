# SPDX-License-Identifier: Apache-2.0
"""Input batch collection."""

from __future__ import annotations

import re
from collections.abc import Iterable

MAX_ITEMS = 15

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class BatchTooLargeError(ValueError):
    """More source strings than a single batch accepts."""

    def __init__(self, count: int, limit: int = MAX_ITEMS) -> None:
        super().__init__(f"At most {limit} items can be translated at once (got {count})")
        self.count = count
        self.limit = limit


def drop_blank(items: Iterable[str]) -> list[str]:
    """Remove whitespace-only entries, keeping order and original text."""
    return [item for item in items if item and item.strip()]


def split_pasted_text(text: str) -> list[str]:
    """Split pasted multi-line text into non-blank lines."""
    return drop_blank(_LINE_BREAK.split(text))


def collect_items(items: Iterable[str], max_items: int = MAX_ITEMS) -> list[str]:
    """Build a request batch from raw input.

    Args:
        items: Raw strings, possibly blank.
        max_items: Maximum batch size.

    Returns:
        Non-blank items in input order.

    Raises:
        BatchTooLargeError: If more than ``max_items`` non-blank items remain.
    """
    batch = drop_blank(items)
    if len(batch) > max_items:
        raise BatchTooLargeError(len(batch), max_items)
    return batch
