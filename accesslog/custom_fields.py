"""
Decoder for the trailing custom-field blob of securepoint lines.

A blob looks like:

    proxy=10.0.0.1 rt=0.042 serial=ABC123 version="12.4.1 build 3" specs=H4sI...

Values are either a run of non-whitespace or a double-quoted string. There is
no escaping: a quoted value ends at the next quote, so `a="x "y" z"` yields
`x `. Consumers rely on that shape, keep it.

The `specs` value is base64 of a gzip (or zlib) compressed JSON document.
"""

import base64
import binascii
import json
import re
import zlib
from typing import Any

from .errors import FieldDecodeError

TOKEN_RE = re.compile(r'(?P<key>\w+)=(?P<value>"[^"]*"|\S+)')

# wbits for zlib.decompress that accepts both gzip and zlib headers
_AUTO_HEADER = zlib.MAX_WBITS | 32


def decode_custom_fields(blob: str) -> dict[str, str]:
    """Split a blob into {key: unquoted value}. Later duplicates win."""
    fields: dict[str, str] = {}
    for m in TOKEN_RE.finditer(blob or ""):
        value = m.group("value")
        if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
            value = value[1:-1]
        fields[m.group("key")] = value
    return fields


def decode_specs(value: str | None) -> Any:
    """
    Decode a specs payload: base64 -> gzip/zlib -> JSON.

    Raises FieldDecodeError naming the stage that failed.
    """
    if not value:
        return None
    try:
        compressed = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise FieldDecodeError("base64", str(e)) from e
    try:
        raw = zlib.decompress(compressed, _AUTO_HEADER)
    except zlib.error as e:
        raise FieldDecodeError("decompress", str(e)) from e
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
        raise FieldDecodeError("json", str(e)) from e
