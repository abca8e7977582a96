"""
Line-break normalization for text coming out of the database.

The source tables store newlines as escaped text (`\\n` or `\\\\n`). Clients
expect real line breaks, so every string field is rewritten before it is
returned.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

# Double-escaped form first so `\\n` collapses to one break, not two.
_ESCAPED_NEWLINE = re.compile(r"\\\\n|\\n")


def normalize_line_breaks(text: Any) -> Any:
    if not text or not isinstance(text, str):
        return text
    return _ESCAPED_NEWLINE.sub("\n", text)


def normalize_row(row: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """
    Return a copy of `row` with every string value normalized.
    """
    if not row:
        return row
    return {key: normalize_line_breaks(value) for key, value in row.items()}
