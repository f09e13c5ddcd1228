"""Source and template text helpers.

Decoding of quoted source literals, offset to line mapping for scanned
files, and the gettext template (POT) writer. Full PO catalogs are read
and written through polib in potsync.catalog.pofile.

Python 3.11+.
"""

from .escapes import decode_literal, escape_po_string
from .lines import LineOffsetCache
from .template import render_template

__all__ = [
    "LineOffsetCache",
    "decode_literal",
    "escape_po_string",
    "render_template",
]
