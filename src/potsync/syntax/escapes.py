"""Escape tables for source literals and template strings.

Two different escape dialects meet in this project:

- Source literals (JavaScript-style quotes in scanned files) are decoded
  leniently: unknown escapes decode to the escaped character and malformed
  hex/unicode escapes are kept verbatim. Scanning never fails on escapes.
- Template strings (gettext POT) escape only backslash, double quote, tab,
  carriage return and newline, the same set polib and GNU gettext write.
  Other control characters are written raw.

Python 3.11+. Zero external dependencies.
"""

import re

__all__ = [
    "decode_literal",
    "escape_po_string",
]

# Simple single-character escapes in source literals.
_LITERAL_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    '"': '"',
    "'": "'",
    "`": "`",
    "0": "\0",
}

_LITERAL_ESCAPE_PATTERN = re.compile(
    r"\\(?:x(?P<hex>[0-9a-fA-F]{2})|u(?P<unicode>[0-9a-fA-F]{4})|(?P<char>[\s\S]))"
    r"|\\\Z"
)

_PO_ENCODE: dict[int, str] = str.maketrans(
    {"\\": "\\\\", '"': '\\"', "\t": "\\t", "\r": "\\r", "\n": "\\n"}
)


def _decode_match(match: re.Match[str]) -> str:
    if (hex_digits := match.group("hex")) is not None:
        return chr(int(hex_digits, 16))
    if (unicode_digits := match.group("unicode")) is not None:
        return chr(int(unicode_digits, 16))
    char = match.group("char")
    if char is None:
        # Trailing lone backslash
        return "\\"
    if char in "xu":
        # Incomplete \x / \u sequence: keep it, digits decode normally
        return f"\\{char}"
    return _LITERAL_ESCAPES.get(char, char)


def decode_literal(raw: str) -> str:
    """Decode the body of a quoted source literal.

    Args:
        raw: Literal text between the quotes, escapes still encoded

    Returns:
        Decoded message text

    Example:
        >>> decode_literal(r"Line\\nbreak")
        'Line\\nbreak'
        >>> decode_literal(r"caf\\u00e9")
        'café'
        >>> decode_literal(r"\\xZZ")
        '\\\\xZZ'
    """
    if "\\" not in raw:
        return raw
    return _LITERAL_ESCAPE_PATTERN.sub(_decode_match, raw)


def escape_po_string(value: str) -> str:
    """Escape text for a double-quoted PO string (quotes not included).

    Example:
        >>> escape_po_string('say "hi"\\n')
        'say \\\\"hi\\\\"\\\\n'
    """
    return value.translate(_PO_ENCODE)
