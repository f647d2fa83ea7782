"""String literal escaping shared by the reader and the printer.

The table follows the C escape set understood by parser-combinator libraries
such as mpc, so that a rendered String reads back to the same text.
"""

from __future__ import annotations

ESCAPES: dict[str, str] = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
    "\0": "\\0",
}

UNESCAPES: dict[str, str] = {v[1]: k for k, v in ESCAPES.items()}


def escape(text: str) -> str:
    """Replace special characters in `text` with their backslash sequences."""
    return "".join(ESCAPES.get(ch, ch) for ch in text)


def unescape(text: str) -> str:
    """Inverse of escape(); unknown sequences are kept verbatim."""
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\" and i + 1 < n and text[i + 1] in UNESCAPES:
            out.append(UNESCAPES[text[i + 1]])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)
