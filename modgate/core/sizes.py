"""
Human readable byte sizes for `size.max`.

Both directions use binary (1024-based) units, so "1MB" and "1 MiB" both mean
1048576 bytes. Rendering rounds, so a rendered size may not parse back to the
exact byte count.
"""

from __future__ import annotations

import humanfriendly

from modgate.core.errors import CheckfileSchemaError


def parse_size(text: str) -> int:
    try:
        return int(humanfriendly.parse_size(text, binary=True))
    except humanfriendly.InvalidSize as e:
        raise CheckfileSchemaError(f"Invalid `size.max` value {text!r}: {e}") from e


def format_size(num_bytes: int) -> str:
    return humanfriendly.format_size(num_bytes, binary=True)
